"""Node arena and views for parsed gamestate documents."""

from __future__ import annotations

from typing import TypeAlias

from collections.abc import Iterator
from dataclasses import dataclass, field

from jominisave.diagnostics import Diagnostic, has_errors
from jominisave.text import TextRange, slice_text_range
from jominisave.tree.options import ParserOptions

NodeId: TypeAlias = int

ROOT_ID: NodeId = 0


class NodeArena:
    """Flat storage for every node of one document.

    Nodes are addressed by integer id. Each node is owned by exactly one parent's
    children list; `parents` is a separate upward index and owns nothing.
    """

    __slots__ = (
        "names",
        "operators",
        "values",
        "value_ranges",
        "starts",
        "ends",
        "children",
        "parents",
        "blocks",
    )

    def __init__(self) -> None:
        self.names: list[str | None] = []
        self.operators: list[str | None] = []
        self.values: list[str | None] = []
        self.value_ranges: list[TextRange | None] = []
        self.starts: list[int] = []
        self.ends: list[int] = []
        self.children: list[list[NodeId]] = []
        self.parents: list[NodeId | None] = []
        self.blocks: list[bool] = []

    def __len__(self) -> int:
        return len(self.names)

    def add(self, parent: NodeId | None, start: int) -> NodeId:
        node_id = len(self.names)
        self.names.append(None)
        self.operators.append(None)
        self.values.append(None)
        self.value_ranges.append(None)
        self.starts.append(start)
        self.ends.append(start)
        self.children.append([])
        self.parents.append(parent)
        self.blocks.append(False)
        if parent is not None:
            self.children[parent].append(node_id)
        return node_id

    def set_value(self, node_id: NodeId, value: str, value_range: TextRange) -> None:
        self.values[node_id] = value
        self.value_ranges[node_id] = value_range

    def open_block(self, node_id: NodeId) -> None:
        self.blocks[node_id] = True

    def finish(self, node_id: NodeId, end: int) -> None:
        self.ends[node_id] = end


@dataclass(frozen=True, slots=True)
class NodeView:
    """Read-only handle on one node of a `ParsedDocument`."""

    document: ParsedDocument
    id: NodeId

    @property
    def _arena(self) -> NodeArena:
        return self.document.arena

    @property
    def name(self) -> str | None:
        return self._arena.names[self.id]

    @property
    def operator(self) -> str | None:
        return self._arena.operators[self.id]

    @property
    def value(self) -> str | None:
        """Raw scalar text, quotes included for quoted values."""
        return self._arena.values[self.id]

    @property
    def value_range(self) -> TextRange | None:
        return self._arena.value_ranges[self.id]

    @property
    def span(self) -> TextRange:
        return TextRange.from_offsets(self._arena.starts[self.id], self._arena.ends[self.id])

    @property
    def parent(self) -> NodeView | None:
        parent_id = self._arena.parents[self.id]
        if parent_id is None:
            return None
        return NodeView(self.document, parent_id)

    @property
    def children(self) -> tuple[NodeView, ...]:
        return tuple(NodeView(self.document, child_id) for child_id in self._arena.children[self.id])

    @property
    def is_root(self) -> bool:
        return self.id == ROOT_ID

    @property
    def is_scalar(self) -> bool:
        return self.value is not None

    @property
    def has_block(self) -> bool:
        return self._arena.blocks[self.id]

    def text(self) -> str:
        """Exact source text covered by this node."""
        return slice_text_range(self.document.source_text, self.span)

    def child(self, name: str) -> NodeView | None:
        """First child with the given name, in document order."""
        arena = self._arena
        for child_id in arena.children[self.id]:
            if arena.names[child_id] == name:
                return NodeView(self.document, child_id)
        return None

    def children_named(self, name: str) -> list[NodeView]:
        arena = self._arena
        return [NodeView(self.document, child_id) for child_id in arena.children[self.id] if arena.names[child_id] == name]

    def child_value(self, name: str) -> str | None:
        found = self.child(name)
        return found.value if found is not None else None

    def ancestors(self) -> Iterator[NodeView]:
        current = self.parent
        while current is not None:
            yield current
            current = current.parent

    def path(self) -> tuple[str, ...]:
        """Names from the root down to this node. Anonymous nodes contribute an empty segment."""
        if self.is_root:
            return ()
        names = [self.name or ""]
        names.extend(node.name or "" for node in self.ancestors() if not node.is_root)
        return tuple(reversed(names))

    def descendants(self) -> Iterator[NodeView]:
        """Depth-first, pre-order walk below this node (excluding itself)."""
        arena = self._arena
        stack = list(reversed(arena.children[self.id]))
        while stack:
            node_id = stack.pop()
            yield NodeView(self.document, node_id)
            stack.extend(reversed(arena.children[node_id]))

    def __repr__(self) -> str:
        return f"NodeView(id={self.id}, name={self.name!r}, value={self.value!r}, span={self.span!r})"


@dataclass(frozen=True, slots=True, eq=False)
class ParsedDocument:
    """Root node plus the exact text it was parsed from.

    Spans index into `source_text` and are only valid for that exact string; any edit
    yields new text that must be parsed again before further lookups.
    """

    source_text: str
    arena: NodeArena = field(repr=False)
    diagnostics: list[Diagnostic]
    options: ParserOptions = ParserOptions()

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)

    @property
    def root(self) -> NodeView:
        return NodeView(self, ROOT_ID)

    @property
    def node_count(self) -> int:
        return len(self.arena)

    def node(self, node_id: NodeId) -> NodeView:
        if node_id < 0 or node_id >= len(self.arena):
            raise ValueError(f"Unknown node id {node_id}")
        return NodeView(self, node_id)


__all__ = ["ROOT_ID", "NodeArena", "NodeId", "NodeView", "ParsedDocument"]
