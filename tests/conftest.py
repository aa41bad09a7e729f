"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from loxscan.errors import LexError
from loxscan.scanner import Scanner, tokenize
from loxscan.tokens import Token, TokenKind


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns every token, trivia included."""

    def _lex(source: bytes | str) -> list[Token]:
        return tokenize(source)

    return _lex


@pytest.fixture
def scan():
    """Return a helper that drives a recovering Scanner and returns its raw items."""

    def _scan(source: bytes | str) -> list[Token | LexError]:
        return list(Scanner(source))

    return _scan


def assert_kinds(tokens: list[Token], expected: list[TokenKind]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = [t.kind for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_lexemes(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token lexemes match the expected list."""
    actual = [t.lexeme for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def significant(tokens: list[Token]) -> list[Token]:
    """Drop whitespace, newline, and comment tokens."""
    return [t for t in tokens if not t.kind.is_trivia]
