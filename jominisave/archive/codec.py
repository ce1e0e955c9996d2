"""Zip container codec for save files."""

from __future__ import annotations

from dataclasses import dataclass, field
import io
import logging
import lzma
import os
import zipfile
import zlib

from jominisave.archive.model import ArchiveOptions, SaveArchive, SaveEntry
from jominisave.diagnostics import (
    ARCHIVE_ENTRY_DECODE,
    ARCHIVE_ENTRY_NOT_FOUND,
    ARCHIVE_FORMAT,
    Diagnostic,
    has_errors,
    make_diagnostic,
)

log = logging.getLogger(__name__)

# What zipfile raises for truncated, corrupt, encrypted or exotically compressed members.
_READ_ERRORS = (
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    NotImplementedError,
    RuntimeError,
    EOFError,
    OSError,
    zlib.error,
    lzma.LZMAError,
)


@dataclass(frozen=True, slots=True)
class ArchiveResult:
    archive: SaveArchive | None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)

    @property
    def ok(self) -> bool:
        return self.archive is not None and not self.has_errors


@dataclass(frozen=True, slots=True)
class TextResult:
    text: str | None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)

    @property
    def ok(self) -> bool:
        return self.text is not None and not self.has_errors


def load_archive(data: bytes, filename: str = "", options: ArchiveOptions | None = None) -> ArchiveResult:
    """Read every entry of a save archive and locate its gamestate entry.

    `data` is only read; the returned model holds its own copies of the entry bytes.
    """
    opts = options or ArchiveOptions()
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            entries = tuple(
                SaveEntry(
                    name=info.filename,
                    data=zf.read(info),
                    compress_type=info.compress_type,
                    info=info,
                )
                for info in zf.infolist()
            )
            comment = zf.comment
    except _READ_ERRORS as exc:
        log.warning("Rejected %r: %s", filename, exc)
        return ArchiveResult(archive=None, diagnostics=[make_diagnostic(ARCHIVE_FORMAT, detail=str(exc))])

    gamestate_name = find_gamestate_entry([entry.name for entry in entries], opts.entry_name)
    if gamestate_name is None:
        log.warning("Rejected %r: no %r entry among %d entries", filename, opts.entry_name, len(entries))
        return ArchiveResult(
            archive=None,
            diagnostics=[make_diagnostic(ARCHIVE_ENTRY_NOT_FOUND, detail=f"expected `{opts.entry_name}` in {filename or 'upload'}")],
        )

    log.info("Opened %r (%d entries, %d bytes, gamestate entry %r)", filename, len(entries), len(data), gamestate_name)
    return ArchiveResult(
        archive=SaveArchive(
            entries=entries,
            filename=filename,
            gamestate_name=gamestate_name,
            comment=comment,
        )
    )


def find_gamestate_entry(names: list[str], entry_name: str = "gamestate") -> str | None:
    """Exact name first, then a `dir/gamestate` member, then any name ending in `entry_name`."""
    if entry_name in names:
        return entry_name
    for name in names:
        if name.rsplit("/", 1)[-1] == entry_name:
            return name
    for name in names:
        if name.endswith(entry_name):
            return name
    return None


def extract_text(archive: SaveArchive, options: ArchiveOptions | None = None) -> TextResult:
    """Decode the gamestate entry as text."""
    opts = options or ArchiveOptions()
    try:
        return TextResult(text=archive.gamestate.data.decode(opts.encoding))
    except UnicodeDecodeError as exc:
        return TextResult(text=None, diagnostics=[make_diagnostic(ARCHIVE_ENTRY_DECODE, detail=str(exc))])


def replace_entry(archive: SaveArchive, name: str, data: bytes) -> SaveArchive:
    return archive.with_entry_data(name, data)


def rebuild(archive: SaveArchive, entry_name: str, data: bytes) -> bytes:
    """Write a fresh zip buffer with `entry_name` replaced by `data`.

    Entries keep their order, compression method, timestamp, attributes, comment and extra
    field. The archive model itself is left untouched.
    """
    if archive.entry(entry_name) is None:
        raise ValueError(f"Archive has no entry {entry_name!r}")

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zout:
        for entry in archive.entries:
            payload = data if entry.name == entry_name else entry.data
            zout.writestr(_copy_info(entry.info), payload, compress_type=entry.compress_type)
        zout.comment = archive.comment
    rebuilt = buffer.getvalue()
    log.debug("Rebuilt %r: %d entries, %d bytes", archive.filename, len(archive.entries), len(rebuilt))
    return rebuilt


def rebuild_text(archive: SaveArchive, text: str, options: ArchiveOptions | None = None) -> bytes:
    """Rebuild with new gamestate text encoded the same way it was decoded."""
    opts = options or ArchiveOptions()
    return rebuild(archive, archive.gamestate_name, text.encode(opts.encoding))


def edited_filename(filename: str, suffix: str = "_edited") -> str:
    """`save.sav` -> `save_edited.sav`."""
    stem, ext = os.path.splitext(filename or "save.sav")
    return f"{stem}{suffix}{ext}"


def _copy_info(info: zipfile.ZipInfo) -> zipfile.ZipInfo:
    # writestr() fills in sizes, CRC and offsets on the ZipInfo it is given, so never reuse
    # the one read from the source archive.
    copied = zipfile.ZipInfo(info.filename, date_time=info.date_time)
    copied.compress_type = info.compress_type
    copied.comment = info.comment
    copied.extra = info.extra
    copied.create_system = info.create_system
    copied.create_version = info.create_version
    copied.extract_version = info.extract_version
    copied.internal_attr = info.internal_attr
    copied.external_attr = info.external_attr
    return copied


__all__ = [
    "ArchiveResult",
    "TextResult",
    "edited_filename",
    "extract_text",
    "find_gamestate_entry",
    "load_archive",
    "rebuild",
    "rebuild_text",
    "replace_entry",
]
