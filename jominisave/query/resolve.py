"""Path resolution over parsed documents."""

from __future__ import annotations

from dataclasses import dataclass, field

from jominisave.diagnostics import QUERY_PATH_NOT_FOUND, Diagnostic, has_errors, make_diagnostic
from jominisave.query.path import PathLike, format_path, parse_path
from jominisave.tree import NodeView, ParsedDocument


@dataclass(frozen=True, slots=True)
class ResolveResult:
    """Outcome of resolving one path: a node, or diagnostics naming the missing prefix."""

    path: tuple[str, ...]
    node: NodeView | None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)

    @property
    def ok(self) -> bool:
        return self.node is not None and not self.has_errors


def resolve(document: ParsedDocument, path: PathLike) -> ResolveResult:
    """Resolve `path` from the document root, taking the first matching child at each level.

    Duplicate sibling names are legal in gamestate text; the earliest one in document
    order wins and no ambiguity is reported.
    """
    segments = parse_path(path)
    return resolve_from(document.root, segments)


def resolve_from(start: NodeView, path: PathLike) -> ResolveResult:
    segments = parse_path(path)
    current = start
    for depth, segment in enumerate(segments):
        found = current.child(segment)
        if found is None:
            prefix = segments[: depth + 1]
            return ResolveResult(
                path=segments,
                node=None,
                diagnostics=[
                    make_diagnostic(
                        QUERY_PATH_NOT_FOUND,
                        range=current.span,
                        path=prefix,
                        detail=f"`{format_path(prefix)}`",
                    )
                ],
            )
        current = found
    return ResolveResult(path=segments, node=current)


def resolve_all(document: ParsedDocument, path: PathLike) -> list[NodeView]:
    """Every node matching `path`, following all duplicate siblings, in document order."""
    segments = parse_path(path)
    frontier = [document.root]
    for segment in segments:
        frontier = [match for node in frontier for match in node.children_named(segment)]
        if not frontier:
            break
    return frontier


def find_first(document: ParsedDocument, name: str, *, start: NodeView | None = None) -> NodeView | None:
    """Depth-first search for the first node named `name` below `start` (default: root)."""
    origin = start if start is not None else document.root
    for node in origin.descendants():
        if node.name == name:
            return node
    return None


__all__ = ["ResolveResult", "find_first", "resolve", "resolve_all", "resolve_from"]
