"""Path-addressable queries over parsed documents."""

from jominisave.query.path import PathLike, PathResult, check_path, describe_path, format_path, parse_path
from jominisave.query.resolve import ResolveResult, find_first, resolve, resolve_all, resolve_from

__all__ = [
    "PathLike",
    "PathResult",
    "ResolveResult",
    "check_path",
    "describe_path",
    "find_first",
    "format_path",
    "parse_path",
    "resolve",
    "resolve_all",
    "resolve_from",
]
