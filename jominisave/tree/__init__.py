"""Span-annotated node tree over gamestate script text."""

from jominisave.tree.model import ROOT_ID, NodeArena, NodeId, NodeView, ParsedDocument
from jominisave.tree.options import ParserOptions
from jominisave.tree.parser import TreeParser, parse_document
from jominisave.tree.scalar import (
    DateLike,
    is_quoted,
    parse_bool,
    parse_date_like,
    parse_int,
    parse_number,
    unquote,
)

__all__ = [
    "ROOT_ID",
    "DateLike",
    "NodeArena",
    "NodeId",
    "NodeView",
    "ParsedDocument",
    "ParserOptions",
    "TreeParser",
    "is_quoted",
    "parse_bool",
    "parse_date_like",
    "parse_int",
    "parse_number",
    "parse_document",
    "unquote",
]
