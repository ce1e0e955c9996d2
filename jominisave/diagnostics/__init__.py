"""Diagnostics."""

from jominisave.diagnostics.codes import (
    ARCHIVE_ENTRY_DECODE,
    ARCHIVE_ENTRY_NOT_FOUND,
    ARCHIVE_FORMAT,
    PARSER_STRAY_RBRACE,
    PARSER_UNTERMINATED_BLOCK,
    PARSER_UNTERMINATED_STRING,
    PATCH_NOT_A_SCALAR,
    PATCH_OVERLAPPING_TARGETS,
    PATCH_TYPE_COERCION,
    QUERY_INVALID_PATH,
    QUERY_PATH_NOT_FOUND,
    STATE_NO_SAVE,
    DiagnosticSpec,
)
from jominisave.diagnostics.diagnostic import Diagnostic, Severity
from jominisave.diagnostics.report import (
    collect_diagnostics,
    first_error,
    has_errors,
    make_diagnostic,
)

__all__ = [
    "ARCHIVE_ENTRY_DECODE",
    "ARCHIVE_ENTRY_NOT_FOUND",
    "ARCHIVE_FORMAT",
    "PARSER_STRAY_RBRACE",
    "PARSER_UNTERMINATED_BLOCK",
    "PARSER_UNTERMINATED_STRING",
    "PATCH_NOT_A_SCALAR",
    "PATCH_OVERLAPPING_TARGETS",
    "PATCH_TYPE_COERCION",
    "QUERY_INVALID_PATH",
    "QUERY_PATH_NOT_FOUND",
    "STATE_NO_SAVE",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "collect_diagnostics",
    "first_error",
    "has_errors",
    "make_diagnostic",
]
