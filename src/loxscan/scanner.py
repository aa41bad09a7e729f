"""Lox scanner — converts source bytes into a lazy stream of tokens."""

from __future__ import annotations

from collections.abc import Iterator

from loxscan.config import ScanOptions
from loxscan.errors import LexError, LexErrorKind, UnexpectedCharacter, UnterminatedString
from loxscan.log import get_logger
from loxscan.tokens import (
    KEYWORDS,
    WHITESPACE_BYTES,
    Position,
    Span,
    Token,
    TokenKind,
    decode_literal,
    is_alpha,
    is_alphanumeric,
    is_digit,
)

logger = get_logger(__name__)

_NEWLINE = ord("\n")
_SLASH = ord("/")
_QUOTE = ord('"')
_DOT = ord(".")
_EQUALS = ord("=")

_SINGLE: dict[int, TokenKind] = {
    ord("("): TokenKind.LEFT_PAREN,
    ord(")"): TokenKind.RIGHT_PAREN,
    ord("{"): TokenKind.LEFT_BRACE,
    ord("}"): TokenKind.RIGHT_BRACE,
    ord(","): TokenKind.COMMA,
    ord("."): TokenKind.DOT,
    ord("-"): TokenKind.MINUS,
    ord("+"): TokenKind.PLUS,
    ord(";"): TokenKind.SEMICOLON,
    ord("*"): TokenKind.STAR,
}

# (kind alone, kind when followed by '=')
_COMPOUND: dict[int, tuple[TokenKind, TokenKind]] = {
    ord("="): (TokenKind.EQUAL, TokenKind.EQUAL_EQUAL),
    ord(">"): (TokenKind.GREATER, TokenKind.GREATER_EQUAL),
    ord("<"): (TokenKind.LESS, TokenKind.LESS_EQUAL),
    ord("!"): (TokenKind.BANG, TokenKind.BANG_EQUAL),
}


def classify(content: bytes, pos: int = 0) -> tuple[TokenKind, int]:
    """Classify the longest token starting at ``content[pos]``.

    Returns the token kind and its length in bytes. Raises a LexErrorKind
    when no token can begin at ``pos``. ``pos`` must point at an unread byte.
    """
    end = len(content)
    byte = content[pos]

    if byte in WHITESPACE_BYTES:
        i = pos + 1
        while i < end and content[i] in WHITESPACE_BYTES:
            i += 1
        return TokenKind.WHITESPACE, i - pos

    if byte == _NEWLINE:
        return TokenKind.NEWLINE, 1

    single = _SINGLE.get(byte)
    if single is not None:
        return single, 1

    compound = _COMPOUND.get(byte)
    if compound is not None:
        alone, with_equals = compound
        if pos + 1 < end and content[pos + 1] == _EQUALS:
            return with_equals, 2
        return alone, 1

    if byte == _SLASH:
        if pos + 1 < end and content[pos + 1] == _SLASH:
            newline = content.find(b"\n", pos + 2)
            if newline == -1:
                newline = end
            return TokenKind.COMMENT, newline - pos
        return TokenKind.SLASH, 1

    if byte == _QUOTE:
        closing = content.find(b'"', pos + 1)
        if closing == -1:
            raise UnterminatedString()
        return TokenKind.STRING, closing - pos + 1

    if is_digit(byte):
        return TokenKind.NUMBER, _number_length(content, pos)

    if is_alpha(byte):
        i = pos + 1
        while i < end and is_alphanumeric(content[i]):
            i += 1
        text = content[pos:i].decode("ascii")
        return KEYWORDS.get(text, TokenKind.IDENTIFIER), i - pos

    raise _unexpected_at(content, pos)


def _number_length(content: bytes, pos: int) -> int:
    """Length of a digit run holding at most one '.'; a second dot ends it."""
    end = len(content)
    seen_dot = False
    i = pos + 1
    while i < end:
        byte = content[i]
        if byte == _DOT:
            if seen_dot:
                break
            seen_dot = True
        elif not is_digit(byte):
            break
        i += 1
    return i - pos


def _unexpected_at(content: bytes, pos: int) -> UnexpectedCharacter:
    """Error for the UTF-8 character at ``pos``; an invalid byte stands alone."""
    lead = content[pos]
    if lead >= 0xF0:
        width = 4
    elif lead >= 0xE0:
        width = 3
    elif lead >= 0xC0:
        width = 2
    else:
        width = 1
    try:
        return UnexpectedCharacter(content[pos : pos + width].decode("utf-8"), width)
    except UnicodeDecodeError:
        return UnexpectedCharacter(f"\\x{lead:02x}", 1)


class Scanner:
    """Iterate over the tokens of a Lox source buffer.

    Each step yields either a Token or a LexError. Errors do not end the
    sequence unless the options say so; the scanner steps over the bad input
    (one character, or the rest of the buffer for an unterminated string) and
    carries on. Once exhausted, a Scanner stays exhausted.
    """

    def __init__(self, content: bytes | str, options: ScanOptions | None = None) -> None:
        if isinstance(content, str):
            content = content.encode("utf-8")
        self.content = content
        self.options = options if options is not None else ScanOptions()
        self.current = 0
        self.start = 0
        self.line = 1
        self.column = 1
        self._exhausted = False

    def __iter__(self) -> Iterator[Token | LexError]:
        return self

    def __next__(self) -> Token | LexError:
        while True:
            if self._exhausted or self.current >= len(self.content):
                self._exhausted = True
                raise StopIteration
            item = self._step()
            if (
                self.options.skip_trivia
                and isinstance(item, Token)
                and item.kind.is_trivia
            ):
                continue
            return item

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self.line, self.column, self.current)

    def _advance(self, length: int) -> bytes:
        raw = self.content[self.current : self.current + length]
        self.current += len(raw)
        newlines = raw.count(b"\n")
        if newlines:
            self.line += newlines
            self.column = len(raw) - raw.rfind(b"\n")
        else:
            self.column += len(raw)
        return raw

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    def _step(self) -> Token | LexError:
        self.start = self.current
        start = self._current_pos()
        try:
            kind, length = classify(self.content, self.current)
        except LexErrorKind as exc:
            return self._recover(exc, start)

        raw = self._advance(length)
        lexeme = raw.decode("utf-8", errors="surrogateescape")
        return Token(kind, lexeme, decode_literal(kind, lexeme), Span(start, self._current_pos()))

    def _recover(self, kind: LexErrorKind, start: Position) -> LexError:
        if self.options.on_error == "stop":
            self._exhausted = True
            logger.debug("stopping at %d:%d after %s", start.line, start.column, kind.message)
            return LexError(kind, start, b"", self.content)

        if isinstance(kind, UnexpectedCharacter):
            width = kind.width
        else:
            # No closing quote exists, so the rest of the buffer is the string body
            width = len(self.content) - self.current
        skipped = self._advance(width)
        logger.debug(
            "skipped %d byte(s) at %d:%d after %s",
            len(skipped),
            start.line,
            start.column,
            kind.message,
        )
        return LexError(kind, start, skipped, self.content)


def scan_all(
    source: bytes | str, options: ScanOptions | None = None
) -> tuple[list[Token], list[LexError]]:
    """Scan the whole source, collecting tokens and errors separately."""
    tokens: list[Token] = []
    errors: list[LexError] = []
    for item in Scanner(source, options):
        if isinstance(item, LexError):
            errors.append(item)
        else:
            tokens.append(item)
    return tokens, errors


def tokenize(source: bytes | str, *, skip_trivia: bool = False) -> list[Token]:
    """Convenience function: scan source and return tokens, raising the first error."""
    tokens: list[Token] = []
    for item in Scanner(source, ScanOptions(on_error="stop", skip_trivia=skip_trivia)):
        if isinstance(item, LexError):
            raise item
        tokens.append(item)
    return tokens
