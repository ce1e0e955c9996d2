"""Diagnostics core types."""

from dataclasses import dataclass
from typing import Literal

from jominisave.text import ZERO, TextRange

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic emitted by the parser, resolver, patch engine, and archive codec."""

    code: str
    message: str
    range: TextRange = TextRange.empty(ZERO)
    severity: Severity = "error"
    hint: str | None = None
    category: str | None = None
    path: tuple[str, ...] | None = None
