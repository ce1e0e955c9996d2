"""Parser configuration options."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Feature flags controlling how tolerant the tree parser is."""

    strict_braces: bool = False
    """Report a stray `}` at top level as an error; the brace is still kept as an opaque node."""
