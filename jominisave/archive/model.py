"""Save archive model."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import zipfile


@dataclass(frozen=True, slots=True)
class ArchiveOptions:
    entry_name: str = "gamestate"
    """Entry holding the script text; matched exactly first, then as a name suffix."""
    encoding: str = "utf-8"
    edited_suffix: str = "_edited"
    """Inserted before the extension of the filename offered on export."""


@dataclass(frozen=True, slots=True)
class SaveEntry:
    """One zip member: its decompressed bytes plus the metadata needed to write it back."""

    name: str
    data: bytes
    compress_type: int
    info: zipfile.ZipInfo = field(repr=False, compare=False)


@dataclass(frozen=True, slots=True)
class SaveArchive:
    """Ordered zip entries of one uploaded save.

    Only the gamestate entry is ever replaced; every other entry is copied through as-is.
    """

    entries: tuple[SaveEntry, ...]
    filename: str
    gamestate_name: str
    comment: bytes = b""

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self.entries]

    @property
    def gamestate(self) -> SaveEntry:
        found = self.entry(self.gamestate_name)
        if found is None:
            raise ValueError(f"Archive lost its gamestate entry {self.gamestate_name!r}")
        return found

    def entry(self, name: str) -> SaveEntry | None:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def with_entry_data(self, name: str, data: bytes) -> SaveArchive:
        """Return a new archive model with the bytes of `name` replaced."""
        if self.entry(name) is None:
            raise ValueError(f"Archive has no entry {name!r}")
        entries = tuple(replace(entry, data=data) if entry.name == name else entry for entry in self.entries)
        return replace(self, entries=entries)


__all__ = ["ArchiveOptions", "SaveArchive", "SaveEntry"]
