"""Character cursor and tokens for Clausewitz script text."""

from jominisave.lexer.cursor import Cursor, dump_tokens, token_text
from jominisave.lexer.tokens import OPERATORS, Token, TokenFlags, TokenKind

__all__ = [
    "OPERATORS",
    "Cursor",
    "Token",
    "TokenFlags",
    "TokenKind",
    "dump_tokens",
    "token_text",
]
