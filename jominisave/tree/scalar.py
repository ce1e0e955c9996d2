"""Scalar interpretation helpers for raw node values."""

from __future__ import annotations

from typing import TypeAlias

import re

DateLike: TypeAlias = tuple[int, int, int]

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(?:\d+\.\d+|\d+\.\d*|\.\d+)$")
_DATE_RE = re.compile(r"^([+-]?\d+)\.(\d+)\.(\d+)$")


def is_quoted(text: str) -> bool:
    return len(text) >= 2 and text[0] == '"' and text[-1] == '"'


def unquote(text: str) -> str:
    """Strip one pair of surrounding double quotes, if present. Escapes are left alone."""
    if is_quoted(text):
        return text[1:-1]
    return text


def parse_bool(text: str) -> bool | None:
    normalized = unquote(text.strip()).lower()
    if normalized in {"yes", "true"}:
        return True
    if normalized in {"no", "false"}:
        return False
    return None


def parse_int(text: str) -> int | None:
    normalized = unquote(text.strip())
    if _INTEGER_RE.fullmatch(normalized):
        return int(normalized)
    return None


def parse_number(text: str) -> int | float | None:
    normalized = unquote(text.strip())
    if not normalized:
        return None

    if normalized.count(".") > 1:
        return None

    if _INTEGER_RE.fullmatch(normalized):
        return int(normalized)

    if _FLOAT_RE.fullmatch(normalized):
        return float(normalized)

    return None


def parse_date_like(text: str) -> DateLike | None:
    """Parse `2200.01.01` style dates (quoted or bare)."""
    match = _DATE_RE.fullmatch(unquote(text.strip()))
    if match is None:
        return None

    year = int(match.group(1))
    month = int(match.group(2))
    day = int(match.group(3))
    if not (1 <= month <= 12 and 1 <= day <= 31):
        return None
    return (year, month, day)


__all__ = [
    "DateLike",
    "is_quoted",
    "parse_bool",
    "parse_date_like",
    "parse_int",
    "parse_number",
    "unquote",
]
