"""Save archive (zip) codec."""

from jominisave.archive.codec import (
    ArchiveResult,
    TextResult,
    edited_filename,
    extract_text,
    find_gamestate_entry,
    load_archive,
    rebuild,
    rebuild_text,
    replace_entry,
)
from jominisave.archive.model import ArchiveOptions, SaveArchive, SaveEntry

__all__ = [
    "ArchiveOptions",
    "ArchiveResult",
    "SaveArchive",
    "SaveEntry",
    "TextResult",
    "edited_filename",
    "extract_text",
    "find_gamestate_entry",
    "load_archive",
    "rebuild",
    "rebuild_text",
    "replace_entry",
]
