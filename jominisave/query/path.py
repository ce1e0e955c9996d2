"""Structural path syntax."""

from __future__ import annotations

from typing import TypeAlias

from collections.abc import Sequence
from dataclasses import dataclass, field

from jominisave.diagnostics import QUERY_INVALID_PATH, Diagnostic, has_errors, make_diagnostic

PathLike: TypeAlias = str | Sequence[str]


@dataclass(frozen=True, slots=True)
class PathResult:
    segments: tuple[str, ...] | None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)


def parse_path(path: PathLike) -> tuple[str, ...]:
    """Split an external path into segments.

    `planets.0.planet_size` and `planets/0/planet_size` both address the `planet_size`
    field inside the block keyed `0` inside the block keyed `planets`. Use `/` when a key
    itself contains dots (dated keys); pass a sequence to keep segments verbatim.
    """
    if isinstance(path, str):
        separator = "/" if "/" in path else "."
        segments = tuple(segment.strip() for segment in path.split(separator))
    else:
        segments = tuple(path)

    if not segments:
        raise ValueError("Path must have at least one segment")
    for segment in segments:
        if not isinstance(segment, str) or not segment:
            raise ValueError(f"Invalid path segment {segment!r} in {path!r}")
    return segments


def check_path(path: PathLike) -> PathResult:
    """`parse_path` for paths that arrive from outside: malformed input becomes a diagnostic."""
    try:
        return PathResult(segments=parse_path(path))
    except ValueError:
        return PathResult(segments=None, diagnostics=[make_diagnostic(QUERY_INVALID_PATH, detail=repr(path))])


def format_path(segments: Sequence[str]) -> str:
    if any("." in segment for segment in segments):
        return "/".join(segments)
    return ".".join(segments)


def describe_path(path: PathLike) -> str:
    """Printable form of a path that may not parse."""
    result = check_path(path)
    if result.segments is None:
        return repr(path)
    return format_path(result.segments)


__all__ = ["PathLike", "PathResult", "check_path", "describe_path", "format_path", "parse_path"]
