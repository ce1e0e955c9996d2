"""Tree parser for gamestate script text.

Grammar handled here (informal):

    document := node*
    node     := key [op [value]] [block] | quoted-string [block] | op [value] [block] | block
    block    := '{' node* '}'

A block after `key op` may start on a later line (`planets=\\n{`). A block after a bare key
or a value only attaches when `{` is on the same line (`color = rgb { 1 2 3 }`), so that a
list like `{ a b {c} }` does not swallow a sibling into `b`.

Nothing is ever rejected as unknown syntax: any token sequence becomes some node, and the
spans recorded for those nodes always cover the exact characters consumed.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from jominisave.diagnostics import (
    PARSER_STRAY_RBRACE,
    PARSER_UNTERMINATED_BLOCK,
    PARSER_UNTERMINATED_STRING,
    Diagnostic,
    DiagnosticSpec,
    make_diagnostic,
)
from jominisave.lexer import Cursor, Token, TokenFlags, TokenKind, token_text
from jominisave.text import TextRange
from jominisave.tree.model import ROOT_ID, NodeArena, NodeId, ParsedDocument
from jominisave.tree.options import ParserOptions


@dataclass(frozen=True, slots=True)
class _OpenBlock:
    node: NodeId
    brace: TextRange


class TreeParser:
    """Single-pass builder of the node arena.

    Blocks are tracked on an explicit stack rather than the Python call stack, so nesting
    depth in a save is never bounded by the interpreter recursion limit.
    """

    def __init__(self, source: str, options: ParserOptions | None = None) -> None:
        self._source = source
        self._options = options or ParserOptions()
        self._cursor = Cursor(source)
        self._arena = NodeArena()
        self._diagnostics: list[Diagnostic] = []
        self._open: list[_OpenBlock] = []

    def parse(self) -> ParsedDocument:
        root = self._arena.add(None, 0)
        self._arena.open_block(root)

        while True:
            self._cursor.skip_whitespace()
            kind = self._cursor.peek()

            if kind == TokenKind.EOF:
                break

            if kind == TokenKind.RBRACE:
                self._close_block()
                continue

            self._parse_node(self._current_parent())

        for block in reversed(self._open):
            self._arena.finish(block.node, len(self._source))
            self._report(PARSER_UNTERMINATED_BLOCK, block.brace)
        self._open.clear()

        self._arena.finish(root, len(self._source))
        return ParsedDocument(
            source_text=self._source,
            arena=self._arena,
            diagnostics=self._diagnostics,
            options=self._options,
        )

    def _current_parent(self) -> NodeId:
        return self._open[-1].node if self._open else ROOT_ID

    def _parse_node(self, parent: NodeId) -> None:
        cursor = self._cursor
        arena = self._arena
        node = arena.add(parent, cursor.position)
        end = cursor.position
        kind = cursor.peek()

        if kind == TokenKind.LBRACE:
            self._open_block(node)
            return

        if kind == TokenKind.BAREWORD:
            key = cursor.advance()
            arena.names[node] = self._text(key)
            end = key.range.end.value
            same_line = not cursor.skip_whitespace()
            kind = cursor.peek()
            if kind != TokenKind.OPERATOR:
                if kind == TokenKind.LBRACE and same_line:
                    self._open_block(node)
                    return
                arena.finish(node, end)
                return
        elif kind == TokenKind.STRING:
            end = self._take_value(node)
            self._finish_after_value(node, end)
            return

        # At an operator, with or without a key in front of it.
        operator = cursor.advance()
        arena.operators[node] = self._text(operator)
        end = operator.range.end.value
        cursor.skip_whitespace()
        kind = cursor.peek()

        if kind == TokenKind.LBRACE:
            self._open_block(node)
            return

        if kind.is_scalar:
            end = self._take_value(node)
            self._finish_after_value(node, end)
            return

        # `key =` followed by `}`, another operator, or end of input: no value.
        arena.finish(node, end)

    def _take_value(self, node: NodeId) -> int:
        token = self._cursor.advance()
        if token.flags & TokenFlags.UNTERMINATED:
            self._report(PARSER_UNTERMINATED_STRING, token.range)
        self._arena.set_value(node, self._text(token), token.range)
        return token.range.end.value

    def _finish_after_value(self, node: NodeId, end: int) -> None:
        same_line = not self._cursor.skip_whitespace()
        if same_line and self._cursor.peek() == TokenKind.LBRACE:
            self._open_block(node)
            return
        self._arena.finish(node, end)

    def _open_block(self, node: NodeId) -> None:
        brace = self._cursor.advance()
        self._arena.open_block(node)
        self._open.append(_OpenBlock(node=node, brace=brace.range))

    def _close_block(self) -> None:
        brace = self._cursor.advance()
        if self._open:
            block = self._open.pop()
            self._arena.finish(block.node, brace.range.end.value)
            return

        # Stray `}` at top level: keep it as an anonymous node so its bytes stay addressable.
        stray = self._arena.add(ROOT_ID, brace.range.start.value)
        self._arena.finish(stray, brace.range.end.value)
        diagnostic = make_diagnostic(PARSER_STRAY_RBRACE, range=brace.range)
        if self._options.strict_braces:
            diagnostic = replace(diagnostic, severity="error")
        self._diagnostics.append(diagnostic)

    def _report(self, spec: DiagnosticSpec, range: TextRange) -> None:
        self._diagnostics.append(make_diagnostic(spec, range=range))

    def _text(self, token: Token) -> str:
        return token_text(self._source, token)


def parse_document(text: str, options: ParserOptions | None = None) -> ParsedDocument:
    """Parse gamestate script text into a span-annotated node tree."""
    return TreeParser(text, options).parse()


__all__ = ["TreeParser", "parse_document"]
