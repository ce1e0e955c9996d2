"""Lexer tokens."""

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Final

from jominisave.text import TextRange, TextSize


class TokenKind(IntEnum):
    # -------------------------
    # Special / sentinels
    # -------------------------
    EOF = 1

    # -------------------------
    # Trivia
    # -------------------------
    WHITESPACE = 10  # spaces, tabs and line breaks
    COMMENT = 11  # `#` up to (not including) the line break

    # -------------------------
    # Scalars
    # -------------------------
    BAREWORD = 20
    STRING = 21  # quoted string, quotes included in the range

    # -------------------------
    # Operators / punctuation
    # -------------------------
    OPERATOR = 30  # = == != < <= > >= ?=
    LBRACE = 40
    RBRACE = 41

    @property
    def is_trivia(self) -> bool:
        return self in (TokenKind.WHITESPACE, TokenKind.COMMENT)

    @property
    def is_scalar(self) -> bool:
        return self in (TokenKind.BAREWORD, TokenKind.STRING)


class TokenFlags(IntFlag):
    """Token metadata flags."""

    NONE = 0
    HAS_LINE_BREAK = 1 << 0  # trivia token spans a line break
    WAS_QUOTED = 1 << 1
    HAS_ESCAPE = 1 << 2
    UNTERMINATED = 1 << 3  # string reached end of input without a closing quote


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexed token (trivia or non-trivia)."""

    kind: TokenKind
    range: TextRange
    flags: TokenFlags = TokenFlags.NONE

    def has_line_break(self) -> bool:
        return bool(self.flags & TokenFlags.HAS_LINE_BREAK)


OPERATORS: Final[frozenset[str]] = frozenset({"=", "==", "!=", "<", "<=", ">", ">=", "?="})
"""Assignment and comparison operators recognised between a key and its value."""

EOF_TOKEN: Final[Token] = Token(TokenKind.EOF, TextRange.empty(TextSize.from_int(0)))
