#!/usr/bin/env python
"""Dump the cursor's token stream for a gamestate (or any script) file."""

from __future__ import annotations

import argparse
from pathlib import Path

from jominisave.lexer import Cursor, Token, TokenKind, token_text


def format_token(idx: int, token: Token, source: str) -> str:
    text = token_text(source, token)
    if len(text) > 60:
        text = text[:57] + "..."
    return f"[{idx}] kind={token.kind.name} span=({token.range.start.value},{token.range.end.value}) flags={token.flags!r} text={text!r}"


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump gamestate tokens")
    parser.add_argument("input", type=Path, help="Script file (an extracted gamestate)")
    parser.add_argument("--output", type=Path, default=None, help="Write here instead of stdout")
    parser.add_argument("--skip-trivia", action="store_true", help="Omit whitespace and comment tokens")
    args = parser.parse_args()

    source = args.input.read_text(encoding="utf-8")
    tokens = [
        token
        for token in Cursor(source).lex()
        if not (args.skip_trivia and token.kind.is_trivia) and token.kind != TokenKind.EOF
    ]
    lines = [format_token(idx, token, source) for idx, token in enumerate(tokens)]

    if args.output is None:
        print("\n".join(lines))
        return 0

    args.output.parent.mkdir(parents=True, exist_ok=True)
    with args.output.open("w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")
    print(f"Wrote {len(tokens)} tokens to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
