"""Lexical front end for the Lox scripting language."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from loxscan.tokens import Token

__version__ = "0.1.0"


def scan(source: bytes | str, *, skip_trivia: bool = True) -> list[Token]:
    """Tokenize Lox source, dropping trivia by default; raises the first LexError."""
    from loxscan.scanner import tokenize

    return tokenize(source, skip_trivia=skip_trivia)
