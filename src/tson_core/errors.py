"""Exception hierarchy raised by the TSON parser."""

from __future__ import annotations


class TSONError(ValueError):
    """Base class for every TSON parse failure.

    ``position`` is a character offset into the source text.  When the
    source is attached, ``lineno`` and ``colno`` (both 1-based) are filled
    in and appended to the message.
    """

    def __init__(self, message: str, position: int, text: str | None = None) -> None:
        self.msg = message
        self.position = position
        self.text = text
        self.lineno: int | None = None
        self.colno: int | None = None
        if text is not None:
            self.lineno, self.colno = line_col(text, position)
            message = f"{message} at line {self.lineno}, column {self.colno} (char {position})"
        else:
            message = f"{message} (char {position})"
        super().__init__(message)


class UnexpectedEndOfInput(TSONError):
    def __init__(self, position: int, expected: str | None = None, text: str | None = None) -> None:
        self.expected = expected
        message = "unexpected end of input"
        if expected:
            message += f", expected {expected}"
        super().__init__(message, position, text)


class UnexpectedChar(TSONError):
    def __init__(
        self,
        position: int,
        char: str,
        expected: str | None = None,
        text: str | None = None,
    ) -> None:
        self.char = char
        self.expected = expected
        message = f"unexpected character {char!r}"
        if expected:
            message += f", expected {expected}"
        super().__init__(message, position, text)


class InvalidNumber(TSONError):
    def __init__(self, position: int, literal: str, text: str | None = None) -> None:
        self.literal = literal
        super().__init__(f"invalid number {literal!r}", position, text)


class InvalidEscape(TSONError):
    def __init__(self, position: int, sequence: str, text: str | None = None) -> None:
        self.sequence = sequence
        super().__init__(f"invalid escape sequence {sequence!r}", position, text)


class UnterminatedLiteral(TSONError):
    """A string or char literal is missing its closing delimiter.

    ``position`` points at the opening delimiter.
    """

    def __init__(self, position: int, delimiter: str, text: str | None = None) -> None:
        self.delimiter = delimiter
        kind = "string" if delimiter == '"' else "char"
        super().__init__(f"unterminated {kind} literal", position, text)


class TrailingInput(TSONError):
    def __init__(self, position: int, text: str | None = None) -> None:
        super().__init__("extra data after value", position, text)


class DuplicateKey(TSONError):
    def __init__(self, position: int, key: str, text: str | None = None) -> None:
        self.key = key
        super().__init__(f"duplicate object key {key!r}", position, text)


class NestingTooDeep(TSONError):
    def __init__(self, position: int, limit: int, text: str | None = None) -> None:
        self.limit = limit
        super().__init__(f"nesting deeper than {limit} levels", position, text)


def line_col(text: str, position: int) -> tuple[int, int]:
    """Return the 1-based (line, column) of *position* in *text*."""
    lineno = text.count("\n", 0, position) + 1
    colno = position - text.rfind("\n", 0, position)
    return lineno, colno
