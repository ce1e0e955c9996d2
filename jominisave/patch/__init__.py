"""Patch engine: single-value rewrites that leave the rest of the text untouched."""

from jominisave.patch.engine import (
    FieldPatch,
    PatchResult,
    apply_field_patch,
    apply_field_patches,
    patch_text,
)
from jominisave.patch.typed import (
    CoercionResult,
    TypedValue,
    ValueKind,
    apply_typed_patch,
    coerce_literal,
)

__all__ = [
    "CoercionResult",
    "FieldPatch",
    "PatchResult",
    "TypedValue",
    "ValueKind",
    "apply_field_patch",
    "apply_field_patches",
    "apply_typed_patch",
    "coerce_literal",
    "patch_text",
]
