"""Scanner: positional cursor over an immutable TSON source text."""

from __future__ import annotations

from typing import Callable

from .errors import UnexpectedChar, UnexpectedEndOfInput

WHITESPACE = frozenset(" \t\r\n")


class Scanner:
    """Cursor over *text* offering the primitives the grammar rules compose.

    The only state is ``pos``; the text itself is never modified.
    """

    def __init__(self, text: str, pos: int = 0) -> None:
        self.text = text
        self.pos = pos
        self._length = len(text)

    def at_end(self) -> bool:
        return self.pos >= self._length

    def peek(self) -> str | None:
        """Return the next character without consuming it, or ``None`` at end."""
        if self.pos >= self._length:
            return None
        return self.text[self.pos]

    def advance(self) -> str:
        """Consume and return the next character."""
        if self.pos >= self._length:
            raise UnexpectedEndOfInput(self.pos, text=self.text)
        ch = self.text[self.pos]
        self.pos += 1
        return ch

    def skip_whitespace(self) -> None:
        text = self.text
        pos = self.pos
        while pos < self._length and text[pos] in WHITESPACE:
            pos += 1
        self.pos = pos

    def match_literal(self, literal: str) -> bool:
        """Consume *literal* if it starts at the current position.

        On mismatch the position is left unchanged.
        """
        if self.text.startswith(literal, self.pos):
            self.pos += len(literal)
            return True
        return False

    def expect(self, ch: str, expected: str | None = None) -> None:
        """Consume *ch* or raise a positioned error."""
        nxt = self.peek()
        if nxt is None:
            raise UnexpectedEndOfInput(self.pos, expected or repr(ch), self.text)
        if nxt != ch:
            raise UnexpectedChar(self.pos, nxt, expected or repr(ch), self.text)
        self.pos += 1

    def take_while(self, predicate: Callable[[str], bool]) -> str:
        """Consume and return the maximal run of characters matching *predicate*."""
        start = self.pos
        text = self.text
        pos = start
        while pos < self._length and predicate(text[pos]):
            pos += 1
        self.pos = pos
        return text[start:pos]

    def slice(self, start: int, end: int | None = None) -> str:
        return self.text[start:self.pos if end is None else end]

    def __repr__(self) -> str:
        return f"Scanner(pos={self.pos}, length={self._length})"
