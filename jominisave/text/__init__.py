"""Text offsets and ranges."""

from jominisave.text.text import ZERO, TextRange, TextSize, slice_text_range, splice_text_range

__all__ = [
    "ZERO",
    "TextRange",
    "TextSize",
    "slice_text_range",
    "splice_text_range",
]
