"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from jominisave.diagnostics.codes import DiagnosticSpec
from jominisave.diagnostics.diagnostic import Diagnostic
from jominisave.text import ZERO, TextRange


def collect_diagnostics(*groups: Iterable[Diagnostic]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for group in groups:
        diagnostics.extend(group)
    return diagnostics


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.severity == "error" for d in diagnostics)


def first_error(diagnostics: Iterable[Diagnostic]) -> Diagnostic | None:
    return next((d for d in diagnostics if d.severity == "error"), None)


def make_diagnostic(
    spec: DiagnosticSpec,
    *,
    range: TextRange | None = None,
    path: tuple[str, ...] | None = None,
    detail: str | None = None,
) -> Diagnostic:
    """Build a Diagnostic from a `DiagnosticSpec`, optionally appending detail to the message."""
    message = spec.message if detail is None else f"{spec.message} {detail}"
    return Diagnostic(
        code=spec.code,
        message=message,
        range=range if range is not None else TextRange.empty(ZERO),
        severity=spec.severity,
        hint=spec.hint,
        category=spec.category,
        path=path,
    )
