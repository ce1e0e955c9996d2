"""Surgical value replacement over parsed gamestate text."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from jominisave.diagnostics import (
    PATCH_NOT_A_SCALAR,
    PATCH_OVERLAPPING_TARGETS,
    Diagnostic,
    has_errors,
    make_diagnostic,
)
from jominisave.query import PathLike, check_path, format_path, parse_path, resolve
from jominisave.text import TextRange, splice_text_range
from jominisave.tree import NodeView, ParsedDocument, ParserOptions, parse_document


@dataclass(frozen=True, slots=True)
class FieldPatch:
    """A structural path plus the literal text to write in place of its value."""

    path: tuple[str, ...]
    value: str

    @staticmethod
    def of(path: PathLike, value: str) -> "FieldPatch":
        return FieldPatch(path=parse_path(path), value=value)


@dataclass(frozen=True, slots=True)
class PatchResult:
    """New document text, or the untouched original text plus diagnostics."""

    text: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    ranges: tuple[TextRange, ...] = ()
    """Original value ranges that were replaced, in document order."""

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)

    @property
    def ok(self) -> bool:
        return not self.has_errors


def apply_field_patch(document: ParsedDocument, path: PathLike, new_value: str) -> PatchResult:
    """Replace the value of the scalar at `path` with `new_value`.

    Only the characters of the old value change; everything before and after it, comments
    and unmodelled constructs included, is carried over as-is. The returned text
    invalidates every span of `document`.
    """
    checked = check_path(path)
    if checked.segments is None:
        return PatchResult(text=document.source_text, diagnostics=checked.diagnostics)

    target = _resolve_target(document, checked.segments)
    if isinstance(target, list):
        return PatchResult(text=document.source_text, diagnostics=target)

    value_range = _value_range(target)
    return PatchResult(
        text=splice_text_range(document.source_text, value_range, new_value),
        ranges=(value_range,),
    )


def apply_field_patches(document: ParsedDocument, patches: Sequence[FieldPatch]) -> PatchResult:
    """Apply several patches against one parse.

    Targets are resolved up front and spliced from the rightmost value to the leftmost, so
    each splice leaves the offsets of the remaining (earlier) targets valid. If any patch
    fails to resolve, nothing is applied.
    """
    diagnostics: list[Diagnostic] = []
    targets: list[tuple[TextRange, FieldPatch]] = []
    for patch in patches:
        target = _resolve_target(document, patch.path)
        if isinstance(target, list):
            diagnostics.extend(target)
            continue
        targets.append((_value_range(target), patch))

    targets.sort(key=lambda item: item[0].start, reverse=True)
    for (later, later_patch), (earlier, _) in zip(targets, targets[1:]):
        if later.overlaps(earlier):
            diagnostics.append(
                make_diagnostic(
                    PATCH_OVERLAPPING_TARGETS,
                    range=later,
                    path=later_patch.path,
                    detail=f"`{format_path(later_patch.path)}`",
                )
            )

    if diagnostics:
        return PatchResult(text=document.source_text, diagnostics=diagnostics)

    text = document.source_text
    for value_range, patch in targets:
        text = splice_text_range(text, value_range, patch.value)
    return PatchResult(text=text, ranges=tuple(value_range for value_range, _ in reversed(targets)))


def patch_text(
    text: str,
    path: PathLike,
    new_value: str,
    options: ParserOptions | None = None,
) -> PatchResult:
    """Parse `text` and apply a single patch to the fresh parse."""
    return apply_field_patch(parse_document(text, options), path, new_value)


def _resolve_target(document: ParsedDocument, path: tuple[str, ...]) -> NodeView | list[Diagnostic]:
    if document.has_errors:
        return [d for d in document.diagnostics if d.severity == "error"]

    resolved = resolve(document, path)
    if resolved.node is None:
        return resolved.diagnostics

    node = resolved.node
    if node.value is None or node.value_range is None:
        return [
            make_diagnostic(
                PATCH_NOT_A_SCALAR,
                range=node.span,
                path=path,
                detail=f"`{format_path(path)}`",
            )
        ]
    return node


def _value_range(node: NodeView) -> TextRange:
    value_range = node.value_range
    if value_range is None:
        raise ValueError(f"{node!r} has no value")
    return value_range


__all__ = [
    "FieldPatch",
    "PatchResult",
    "apply_field_patch",
    "apply_field_patches",
    "patch_text",
]
