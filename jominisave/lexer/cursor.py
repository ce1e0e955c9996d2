"""Character cursor over gamestate script text."""

from jominisave.lexer.tokens import Token, TokenFlags, TokenKind
from jominisave.text import TextRange, slice_text_range

_BYTE_ORDER_MARK = "\ufeff"
_BAREWORD_STOP = frozenset('={}"#<>')


def is_whitespace(ch: str) -> bool:
    return ch.isspace() or ch == _BYTE_ORDER_MARK


class Cursor:
    """Scans script text one token at a time.

    The cursor only ever moves its own position; the source string is never touched.
    Every token range is a slice of the source, so concatenating the tokens returned by
    `lex` reproduces the input exactly.
    """

    def __init__(self, source: str, position: int = 0) -> None:
        if position < 0 or position > len(source):
            raise ValueError(f"Cursor position {position} outside source of length {len(source)}")
        self._source = source
        self._position = position

    @property
    def source(self) -> str:
        return self._source

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    def skip_whitespace(self) -> bool:
        """Skip whitespace and comments. Returns True if a line break was crossed."""
        saw_line_break = False
        while not self.is_eof:
            kind = self.peek()
            if not kind.is_trivia:
                break
            token = self.advance()
            if token.has_line_break():
                saw_line_break = True
        return saw_line_break

    def peek(self) -> TokenKind:
        """Classify the token starting at the current position without consuming it."""
        if self.is_eof:
            return TokenKind.EOF

        ch = self._source[self._position]
        if is_whitespace(ch):
            return TokenKind.WHITESPACE
        if ch == "#":
            return TokenKind.COMMENT
        if ch == '"':
            return TokenKind.STRING
        if ch == "{":
            return TokenKind.LBRACE
        if ch == "}":
            return TokenKind.RBRACE
        if self._operator_length() > 0:
            return TokenKind.OPERATOR
        return TokenKind.BAREWORD

    def advance(self) -> Token:
        """Consume and return the token starting at the current position."""
        start = self._position
        kind = self.peek()
        flags = TokenFlags.NONE

        match kind:
            case TokenKind.EOF:
                return Token(TokenKind.EOF, TextRange.from_offsets(start, start))
            case TokenKind.WHITESPACE:
                if self._consume_whitespace():
                    flags |= TokenFlags.HAS_LINE_BREAK
            case TokenKind.COMMENT:
                self._consume_comment()
            case TokenKind.STRING:
                flags |= self._consume_string()
            case TokenKind.LBRACE | TokenKind.RBRACE:
                self._position += 1
            case TokenKind.OPERATOR:
                self._position += self._operator_length()
            case TokenKind.BAREWORD:
                self._consume_bareword()

        return Token(kind, TextRange.from_offsets(start, self._position), flags)

    def lex(self) -> list[Token]:
        """Tokenize the remaining input, trivia included, ending with an EOF token."""
        tokens: list[Token] = []
        while True:
            token = self.advance()
            tokens.append(token)
            if token.kind == TokenKind.EOF:
                break
        return tokens

    def _consume_whitespace(self) -> bool:
        saw_line_break = False
        source = self._source
        while self._position < len(source) and is_whitespace(source[self._position]):
            if source[self._position] in "\r\n":
                saw_line_break = True
            self._position += 1
        return saw_line_break

    def _consume_comment(self) -> None:
        end = len(self._source)
        for line_break in ("\n", "\r"):
            index = self._source.find(line_break, self._position)
            if index != -1:
                end = min(end, index)
        self._position = end

    def _consume_string(self) -> TokenFlags:
        # Contents are opaque. A backslash only stops the next character from closing the string.
        flags = TokenFlags.WAS_QUOTED
        source = self._source
        self._position += 1
        while self._position < len(source):
            ch = source[self._position]
            if ch == '"':
                self._position += 1
                return flags
            if ch == "\\":
                flags |= TokenFlags.HAS_ESCAPE
                self._position = min(self._position + 2, len(source))
                continue
            self._position += 1
        return flags | TokenFlags.UNTERMINATED

    def _consume_bareword(self) -> None:
        source = self._source
        # The first character is never a stop character, otherwise peek() would have said so.
        self._position += 1
        while self._position < len(source):
            ch = source[self._position]
            if is_whitespace(ch) or ch in _BAREWORD_STOP or self._operator_length() > 0:
                break
            self._position += 1

    def _operator_length(self) -> int:
        source = self._source
        ch = source[self._position]
        follows_equal = self._position + 1 < len(source) and source[self._position + 1] == "="
        if ch in "=<>":
            return 2 if follows_equal else 1
        if ch in "!?" and follows_equal:
            return 2
        return 0


def token_text(source: str, token: Token) -> str:
    """Get the text of a token from the source string based on its range."""
    if token.kind == TokenKind.EOF:
        return ""
    return slice_text_range(source, token.range)


def dump_tokens(tokens: list[Token], source: str) -> None:
    """Print token list with kind, range, flags, and text for debugging."""
    for i, tok in enumerate(tokens):
        text = token_text(source, tok)
        print(f"{i:03d} {tok.kind.name:<12} range={tok.range.as_tuple()} flags={tok.flags} text={text!r}")
