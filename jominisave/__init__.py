"""Span-preserving editor core for Clausewitz-engine save games."""

from jominisave.archive import SaveArchive, SaveEntry, extract_text, load_archive, rebuild
from jominisave.diagnostics import Diagnostic, has_errors
from jominisave.patch import (
    FieldPatch,
    PatchResult,
    ValueKind,
    apply_field_patch,
    apply_field_patches,
    apply_typed_patch,
    patch_text,
)
from jominisave.query import parse_path, resolve, resolve_all
from jominisave.state import SaveStateStore, SaveSummary
from jominisave.tree import NodeView, ParsedDocument, parse_document

__all__ = [
    "Diagnostic",
    "FieldPatch",
    "NodeView",
    "ParsedDocument",
    "PatchResult",
    "SaveArchive",
    "SaveEntry",
    "SaveStateStore",
    "SaveSummary",
    "ValueKind",
    "apply_field_patch",
    "apply_field_patches",
    "apply_typed_patch",
    "extract_text",
    "has_errors",
    "load_archive",
    "parse_document",
    "parse_path",
    "patch_text",
    "rebuild",
    "resolve",
    "resolve_all",
]
