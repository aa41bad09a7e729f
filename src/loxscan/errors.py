"""Error types with formatted source context."""

from __future__ import annotations

from loxscan.tokens import Position


class LexErrorKind(Exception):
    """Base class for the ways a single classification step can fail."""

    message: str

    def __str__(self) -> str:
        return self.message


class UnexpectedCharacter(LexErrorKind):
    """No token can begin with this character.

    ``char`` is always printable text: an invalid UTF-8 byte is shown as a
    ``\\xNN`` escape. ``width`` is the number of source bytes it covers.
    """

    def __init__(self, char: str, width: int | None = None) -> None:
        self.char = char
        self.width = width if width is not None else len(char.encode("utf-8"))
        self.message = f"Unexpected character `{char}`."
        super().__init__(char)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, UnexpectedCharacter) and other.char == self.char

    def __hash__(self) -> int:
        return hash((UnexpectedCharacter, self.char))


class UnterminatedString(LexErrorKind):
    """A string literal reached the end of input without a closing quote."""

    message = "String was not terminated."

    def __eq__(self, other: object) -> bool:
        return isinstance(other, UnterminatedString)

    def __hash__(self) -> int:
        return hash(UnterminatedString)


class LexError(Exception):
    """One malformed-token event, attached to the position where it was found.

    The scanner yields these in place of tokens rather than raising them, so
    a single bad character does not end the scan. ``skipped`` holds the bytes
    the scanner stepped over to resynchronize.
    """

    def __init__(
        self,
        kind: LexErrorKind,
        position: Position,
        skipped: bytes = b"",
        source: bytes = b"",
    ) -> None:
        self.kind = kind
        self.position = position
        self.skipped = skipped
        self.source = source
        super().__init__(str(self))

    @property
    def line(self) -> int:
        return self.position.line

    @property
    def message(self) -> str:
        return self.kind.message

    def __str__(self) -> str:
        return f"[line {self.position.line}] Error: {self.kind.message}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LexError):
            return NotImplemented
        return (
            self.kind == other.kind
            and self.position == other.position
            and self.skipped == other.skipped
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.position, self.skipped))

    def format(self, filename: str = "input.lox") -> str:
        lines = self.source.split(b"\n")
        line_idx = self.position.line - 1
        col = self.position.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip(b"\r")
        else:
            source_line = b""

        # Columns count bytes; pad by decoded width so carets line up
        prefix = source_line[: col - 1].decode("utf-8", errors="replace")
        flagged = self.skipped.split(b"\n", 1)[0].decode("utf-8", errors="replace")
        underline_len = max(1, len(flagged))

        pad = " " * len(prefix)
        carets = "^" * underline_len

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line.decode('utf-8', errors='replace')}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class ConfigError(Exception):
    """Raised when a loxscan.toml value cannot be turned into scan options."""

    def __init__(self, message: str, key: str) -> None:
        self.message = message
        self.key = key
        super().__init__(f"{key}: {message}")
