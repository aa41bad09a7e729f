"""Token kinds, data structures, and byte classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(Enum):
    # Single-character punctuation
    LEFT_PAREN = "LeftParen"  # (
    RIGHT_PAREN = "RightParen"  # )
    LEFT_BRACE = "LeftBrace"  # {
    RIGHT_BRACE = "RightBrace"  # }
    COMMA = "Comma"  # ,
    DOT = "Dot"  # .
    MINUS = "Minus"  # -
    PLUS = "Plus"  # +
    SEMICOLON = "Semicolon"  # ;
    SLASH = "Slash"  # /
    STAR = "Star"  # *

    # One or two character operators
    BANG = "Bang"  # !
    BANG_EQUAL = "BangEqual"  # !=
    EQUAL = "Equal"  # =
    EQUAL_EQUAL = "EqualEqual"  # ==
    GREATER = "Greater"  # >
    GREATER_EQUAL = "GreaterEqual"  # >=
    LESS = "Less"  # <
    LESS_EQUAL = "LessEqual"  # <=

    # Literals
    IDENTIFIER = "Identifier"
    STRING = "String"
    NUMBER = "Number"

    # Reserved words
    AND = "And"
    CLASS = "Class"
    ELSE = "Else"
    FALSE = "False"
    FUNC = "Func"
    FOR = "For"
    IF = "If"
    NIL = "Nil"
    OR = "Or"
    PRINT = "Print"
    RETURN = "Return"
    SUPER = "Super"
    THIS = "This"
    TRUE = "True"
    VAR = "Var"
    WHILE = "While"

    # Trivia, filtered out before parsing
    COMMENT = "Comment"  # // to end of line
    NEWLINE = "NewLine"  # \n
    WHITESPACE = "WhiteSpace"  # runs of space, \t, \r

    def __str__(self) -> str:
        return self.value

    @property
    def is_trivia(self) -> bool:
        return self in _TRIVIA


_TRIVIA = frozenset({TokenKind.COMMENT, TokenKind.NEWLINE, TokenKind.WHITESPACE})


KEYWORDS: dict[str, TokenKind] = {
    "and": TokenKind.AND,
    "class": TokenKind.CLASS,
    "else": TokenKind.ELSE,
    "false": TokenKind.FALSE,
    "func": TokenKind.FUNC,
    "for": TokenKind.FOR,
    "if": TokenKind.IF,
    "nil": TokenKind.NIL,
    "or": TokenKind.OR,
    "print": TokenKind.PRINT,
    "return": TokenKind.RETURN,
    "super": TokenKind.SUPER,
    "this": TokenKind.THIS,
    "true": TokenKind.TRUE,
    "var": TokenKind.VAR,
    "while": TokenKind.WHILE,
}


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based byte offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A single scanned token with its exact source text.

    ``line`` follows the scanner's post-advance convention: it is the line on
    which the token ends, so a multi-line string reports its last line and a
    newline token reports the line it opens.
    """

    kind: TokenKind
    lexeme: str
    literal: str
    span: Span

    @property
    def line(self) -> int:
        return self.span.end.line

    def __str__(self) -> str:
        return f"{self.kind} `{self.lexeme}` {self.literal}"


# Whitespace bytes folded into a single WHITESPACE token (newline is separate)
WHITESPACE_BYTES = frozenset(b" \t\r")


def is_digit(byte: int) -> bool:
    """Return True if byte is an ASCII digit."""
    return 0x30 <= byte <= 0x39


def is_alpha(byte: int) -> bool:
    """Return True if byte is an ASCII letter or underscore."""
    return 0x61 <= byte <= 0x7A or 0x41 <= byte <= 0x5A or byte == 0x5F


def is_alphanumeric(byte: int) -> bool:
    """Return True if byte may continue an identifier."""
    return is_alpha(byte) or is_digit(byte)


def decode_literal(kind: TokenKind, lexeme: str) -> str:
    """Return the decoded literal text for STRING and NUMBER lexemes.

    Strings lose their surrounding quotes; numbers are normalized through
    float (``"12"`` becomes ``"12.0"``). Every other kind has no literal.
    """
    if kind is TokenKind.STRING:
        return lexeme[1:-1]
    if kind is TokenKind.NUMBER:
        return repr(float(lexeme))
    return ""
