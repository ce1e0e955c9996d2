"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final, Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None


PARSER_UNTERMINATED_BLOCK: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNTERMINATED_BLOCK",
    message="Block opened with `{` is never closed before end of input.",
    hint="The gamestate entry is probably truncated.",
    severity="error",
    category="parser",
)

PARSER_UNTERMINATED_STRING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_UNTERMINATED_STRING",
    message="Quoted string runs to end of input.",
    severity="warning",
    category="parser",
)

PARSER_STRAY_RBRACE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_STRAY_RBRACE",
    message="Closing brace without a matching `{` kept as an opaque node.",
    severity="warning",
    category="parser",
)

QUERY_PATH_NOT_FOUND: Final[DiagnosticSpec] = DiagnosticSpec(
    code="QUERY_PATH_NOT_FOUND",
    message="Path not found:",
    hint="Segments match child names exactly; array indices are numeric names like `0`.",
    severity="error",
    category="query",
)

QUERY_INVALID_PATH: Final[DiagnosticSpec] = DiagnosticSpec(
    code="QUERY_INVALID_PATH",
    message="Malformed path:",
    hint="Separate non-empty segments with `.`, or with `/` when a key contains dots.",
    severity="error",
    category="query",
)

PATCH_NOT_A_SCALAR: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PATCH_NOT_A_SCALAR",
    message="Target node has no scalar value:",
    hint="Address a `key=value` field, not a `key={ ... }` block.",
    severity="error",
    category="patch",
)

PATCH_TYPE_COERCION: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PATCH_TYPE_COERCION",
    message="Value does not parse as the requested type:",
    severity="error",
    category="patch",
)

PATCH_OVERLAPPING_TARGETS: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PATCH_OVERLAPPING_TARGETS",
    message="Two patches in one batch address the same value:",
    hint="Apply the patches one at a time instead.",
    severity="error",
    category="patch",
)

ARCHIVE_FORMAT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="ARCHIVE_FORMAT",
    message="Not a readable zip archive:",
    severity="error",
    category="archive",
)

ARCHIVE_ENTRY_NOT_FOUND: Final[DiagnosticSpec] = DiagnosticSpec(
    code="ARCHIVE_ENTRY_NOT_FOUND",
    message="Archive has no gamestate entry:",
    hint="Upload the `.sav` file produced by the game, not an extracted folder.",
    severity="error",
    category="archive",
)

ARCHIVE_ENTRY_DECODE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="ARCHIVE_ENTRY_DECODE",
    message="Gamestate entry is not valid text:",
    hint="Binary (ironman-compressed) gamestates are not supported.",
    severity="error",
    category="archive",
)

STATE_NO_SAVE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="STATE_NO_SAVE",
    message="No save file is loaded.",
    severity="error",
    category="state",
)
