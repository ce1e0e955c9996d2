"""Typed wrapper around the literal patch engine."""

from __future__ import annotations

from typing import TypeAlias

from dataclasses import dataclass, field
from enum import StrEnum
import math

from jominisave.diagnostics import PATCH_TYPE_COERCION, Diagnostic, has_errors, make_diagnostic
from jominisave.lexer import Cursor, TokenFlags, TokenKind
from jominisave.patch.engine import PatchResult, apply_field_patch
from jominisave.query import PathLike, check_path, format_path, resolve
from jominisave.tree import (
    DateLike,
    ParsedDocument,
    is_quoted,
    parse_bool,
    parse_date_like,
    parse_int,
    parse_number,
)

TypedValue: TypeAlias = str | int | float | bool | DateLike


class ValueKind(StrEnum):
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    DATE = "date"
    STRING = "string"
    RAW = "raw"


@dataclass(frozen=True, slots=True)
class CoercionResult:
    literal: str | None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)


def coerce_literal(value: TypedValue, kind: ValueKind, *, quoted: bool = False) -> CoercionResult:
    """Render `value` as script literal text of the given kind.

    `quoted` only matters for dates, which the game writes both bare and quoted.
    """
    literal = _render(value, kind, quoted=quoted)
    if literal is None:
        return CoercionResult(
            literal=None,
            diagnostics=[make_diagnostic(PATCH_TYPE_COERCION, detail=f"{value!r} is not a valid {kind}")],
        )
    return CoercionResult(literal=literal)


def apply_typed_patch(
    document: ParsedDocument,
    path: PathLike,
    value: TypedValue,
    kind: ValueKind = ValueKind.RAW,
) -> PatchResult:
    """Validate `value` as `kind`, then patch it in as literal text."""
    checked = check_path(path)
    if checked.segments is None:
        return PatchResult(text=document.source_text, diagnostics=checked.diagnostics)

    segments = checked.segments
    resolved = resolve(document, segments)
    quoted = bool(resolved.node is not None and resolved.node.value and is_quoted(resolved.node.value))

    coerced = coerce_literal(value, kind, quoted=quoted)
    if coerced.literal is None:
        diagnostics = [
            Diagnostic(
                code=d.code,
                message=f"{d.message} (at `{format_path(segments)}`)",
                range=resolved.node.span if resolved.node is not None else d.range,
                severity=d.severity,
                hint=d.hint,
                category=d.category,
                path=segments,
            )
            for d in coerced.diagnostics
        ]
        return PatchResult(text=document.source_text, diagnostics=diagnostics)

    return apply_field_patch(document, segments, coerced.literal)


def _render(value: TypedValue, kind: ValueKind, *, quoted: bool) -> str | None:
    match kind:
        case ValueKind.INT:
            if isinstance(value, bool):
                return None
            if isinstance(value, int):
                return str(value)
            if isinstance(value, str):
                number = parse_int(value)
                return None if number is None else str(number)
            return None
        case ValueKind.FLOAT:
            if isinstance(value, bool):
                return None
            if isinstance(value, int):
                return f"{value}.000"
            if isinstance(value, float):
                if not math.isfinite(value):
                    return None
                text = f"{value:.3f}"
                # Saves store three decimals; refuse values that would not survive that.
                return text if float(text) == value else None
            if isinstance(value, str) and parse_number(value) is not None:
                return value.strip()
            return None
        case ValueKind.BOOL:
            if isinstance(value, bool):
                return "yes" if value else "no"
            if isinstance(value, str):
                flag = parse_bool(value)
                return None if flag is None else ("yes" if flag else "no")
            return None
        case ValueKind.DATE:
            date: DateLike | None = None
            if isinstance(value, tuple):
                date = value if parse_date_like(".".join(str(part) for part in value)) else None
            elif isinstance(value, str):
                date = parse_date_like(value)
            if date is None:
                return None
            text = f"{date[0]}.{date[1]:02d}.{date[2]:02d}"
            return f'"{text}"' if quoted else text
        case ValueKind.STRING:
            if not isinstance(value, str) or '"' in value or "\n" in value or "\r" in value:
                return None
            literal = f'"{value}"'
            # A trailing backslash would escape the closing quote.
            return literal if _is_single_scalar(literal) else None
        case ValueKind.RAW:
            if not isinstance(value, str):
                return None
            return value if _is_single_scalar(value) else None
    return None


def _is_single_scalar(text: str) -> bool:
    tokens = Cursor(text).lex()
    if len(tokens) != 2:
        return False
    token = tokens[0]
    return token.kind.is_scalar and not token.flags & TokenFlags.UNTERMINATED and tokens[1].kind == TokenKind.EOF


__all__ = ["CoercionResult", "TypedValue", "ValueKind", "apply_typed_patch", "coerce_literal"]
