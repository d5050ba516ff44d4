"""Recursive-descent parser: TSON source text to a tree of Values.

Grammar (one method per production)::

    value    := object | list | optional | string | char | boolean | float
    object   := '{' ws (member (',' ws member)*)? ws '}'
    member   := string ws ':' ws value
    list     := '[' ws (value (',' ws value)*)? ws ']'
    optional := 'Some(' ws value ws ')' | 'None'
    string   := '"' char* '"'
    char     := "'" (one character | one escape) "'"
    boolean  := 'true' | 'false'
    float    := '-'? digit+ ('.' digit+)? (('e'|'E') ('+'|'-')? digit+)?
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import (
    DuplicateKey,
    InvalidEscape,
    InvalidNumber,
    NestingTooDeep,
    TrailingInput,
    TSONError,
    UnexpectedChar,
    UnexpectedEndOfInput,
    UnterminatedLiteral,
)
from .scanner import Scanner
from .values import NONE, Value, VBool, VChar, VFloat, VList, VObject, VOptional, VString

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256

_DIGITS = frozenset("0123456789")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

_ESCAPES = {
    '"': '"',
    "'": "'",
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}


def _is_digit(ch: str) -> bool:
    return ch in _DIGITS


@dataclass(frozen=True)
class ParseOptions:
    """Per-call parser settings."""

    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class Parser:
    """Parses one TSON value out of *text*, starting at offset *start*.

    A Parser is single-use: it owns its Scanner and nesting counter.
    """

    def __init__(self, text: str, options: ParseOptions | None = None, start: int = 0) -> None:
        if not isinstance(text, str):
            raise TypeError(f"TSON source must be str, not {type(text).__name__}")
        if not 0 <= start <= len(text):
            raise ValueError(f"start offset {start} outside source of length {len(text)}")
        self.scanner = Scanner(text, start)
        self.options = options or ParseOptions()
        self._depth = 0

    @property
    def text(self) -> str:
        return self.scanner.text

    # -- Entry points ---------------------------------------------------

    def parse(self) -> Value:
        """Parse a complete document: one value, then only whitespace."""
        return self._run(self._parse_document)

    def parse_prefix(self) -> tuple[Value, int]:
        """Parse one value and return it with the offset just past it."""
        value = self._run(self.parse_value)
        return value, self.scanner.pos

    def _parse_document(self) -> Value:
        value = self.parse_value()
        self.scanner.skip_whitespace()
        if not self.scanner.at_end():
            raise TrailingInput(self.scanner.pos, self.text)
        return value

    def _run(self, production):
        try:
            try:
                return production()
            except RecursionError:
                # max_depth was set above what the interpreter stack allows
                raise NestingTooDeep(self.scanner.pos, self._depth, self.text) from None
        except TSONError as exc:
            logger.debug("TSON parse failed: %s: %s", type(exc).__name__, exc)
            raise

    # -- Productions ----------------------------------------------------

    def parse_value(self) -> Value:
        s = self.scanner
        s.skip_whitespace()
        ch = s.peek()
        if ch is None:
            raise UnexpectedEndOfInput(s.pos, "a value", self.text)
        if ch == "{":
            return self.parse_object()
        if ch == "[":
            return self.parse_list()
        if ch == '"':
            return self.parse_string()
        if ch == "'":
            return self.parse_char()
        if ch == "S" or ch == "N":
            return self.parse_optional()
        if ch == "t" or ch == "f":
            return self.parse_boolean()
        if ch == "-" or ch in _DIGITS:
            return self.parse_float()
        raise UnexpectedChar(s.pos, ch, "a value", self.text)

    def parse_object(self) -> VObject:
        s = self.scanner
        start = s.pos
        s.expect("{")
        self._descend(start)
        entries: dict[str, Value] = {}

        s.skip_whitespace()
        if s.match_literal("}"):
            self._depth -= 1
            return VObject(entries)

        while True:
            s.skip_whitespace()
            key_pos = s.pos
            if s.peek() != '"':
                self._unexpected("a string key")
            key = self.parse_string().value
            if key in entries:
                raise DuplicateKey(key_pos, key, self.text)

            s.skip_whitespace()
            s.expect(":")
            entries[key] = self.parse_value()

            s.skip_whitespace()
            if s.match_literal(","):
                continue
            if s.match_literal("}"):
                break
            self._unexpected("',' or '}'")

        self._depth -= 1
        return VObject(entries)

    def parse_list(self) -> VList:
        s = self.scanner
        start = s.pos
        s.expect("[")
        self._descend(start)
        items: list[Value] = []

        s.skip_whitespace()
        if s.match_literal("]"):
            self._depth -= 1
            return VList(items)

        while True:
            items.append(self.parse_value())
            s.skip_whitespace()
            if s.match_literal(","):
                continue
            if s.match_literal("]"):
                break
            self._unexpected("',' or ']'")

        self._depth -= 1
        return VList(items)

    def parse_optional(self) -> VOptional:
        s = self.scanner
        start = s.pos
        if s.match_literal("None"):
            return NONE
        if not s.match_literal("Some("):
            self._literal_mismatch("Some(", "None")

        self._descend(start)
        value = self.parse_value()
        s.skip_whitespace()
        s.expect(")")
        self._depth -= 1
        return VOptional.some(value)

    def parse_string(self) -> VString:
        s = self.scanner
        text = self.text
        start = s.pos
        s.expect('"')
        content_start = s.pos

        quote = text.find('"', content_start)
        if quote == -1:
            raise UnterminatedLiteral(start, '"', text)
        # No escapes: the value is the source slice itself.
        if text.find("\\", content_start, quote) == -1:
            s.pos = quote + 1
            return VString(text[content_start:quote], (content_start, quote))

        chunks: list[str] = []
        while True:
            ch = s.peek()
            if ch is None:
                raise UnterminatedLiteral(start, '"', text)
            if ch == '"':
                break
            if ch == "\\":
                chunks.append(self._parse_escape(start, '"'))
            else:
                chunks.append(s.take_while(lambda c: c != '"' and c != "\\"))
        end = s.pos
        s.advance()
        return VString("".join(chunks), (content_start, end))

    def parse_char(self) -> VChar:
        s = self.scanner
        start = s.pos
        s.expect("'")
        ch = s.peek()
        if ch is None:
            raise UnterminatedLiteral(start, "'", self.text)
        if ch == "'":
            raise UnexpectedChar(s.pos, ch, "a character", self.text)
        if ch == "\\":
            value = self._parse_escape(start, "'")
        else:
            value = s.advance()
        if s.peek() != "'":
            raise UnterminatedLiteral(start, "'", self.text)
        s.advance()
        return VChar(value)

    def parse_boolean(self) -> VBool:
        s = self.scanner
        if s.match_literal("true"):
            return VBool(True)
        if s.match_literal("false"):
            return VBool(False)
        self._literal_mismatch("true", "false")

    def parse_float(self) -> VFloat:
        s = self.scanner
        start = s.pos
        s.match_literal("-")
        if not s.take_while(_is_digit):
            raise InvalidNumber(start, s.slice(start), self.text)
        if s.match_literal("."):
            if not s.take_while(_is_digit):
                raise InvalidNumber(start, s.slice(start), self.text)
        if s.peek() in ("e", "E"):
            s.advance()
            if s.peek() in ("+", "-"):
                s.advance()
            if not s.take_while(_is_digit):
                raise InvalidNumber(start, s.slice(start), self.text)
        return VFloat(float(s.slice(start)))

    # -- Escapes --------------------------------------------------------

    def _parse_escape(self, literal_start: int, delimiter: str) -> str:
        """Decode one backslash escape; the scanner sits on the backslash."""
        s = self.scanner
        esc_pos = s.pos
        s.advance()
        code = s.peek()
        if code is None:
            raise UnterminatedLiteral(literal_start, delimiter, self.text)
        s.advance()
        if code in _ESCAPES:
            return _ESCAPES[code]
        if code == "u":
            return self._parse_unicode_escape(esc_pos)
        raise InvalidEscape(esc_pos, "\\" + code, self.text)

    def _parse_unicode_escape(self, esc_pos: int) -> str:
        s = self.scanner
        code = self._hex4(esc_pos)
        if 0xD800 <= code <= 0xDBFF:
            # High surrogate: only valid as the first half of a pair.
            if s.match_literal("\\u"):
                low = self._hex4(esc_pos)
                if 0xDC00 <= low <= 0xDFFF:
                    return chr(0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00))
            raise InvalidEscape(esc_pos, s.slice(esc_pos), self.text)
        if 0xDC00 <= code <= 0xDFFF:
            raise InvalidEscape(esc_pos, s.slice(esc_pos), self.text)
        return chr(code)

    def _hex4(self, esc_pos: int) -> int:
        s = self.scanner
        digits = self.text[s.pos:s.pos + 4]
        if len(digits) != 4 or not all(c in _HEX_DIGITS for c in digits):
            raise InvalidEscape(esc_pos, self.text[esc_pos:s.pos + len(digits)], self.text)
        s.pos += 4
        return int(digits, 16)

    # -- Helpers --------------------------------------------------------

    def _descend(self, start: int) -> None:
        self._depth += 1
        if self._depth > self.options.max_depth:
            raise NestingTooDeep(start, self.options.max_depth, self.text)

    def _unexpected(self, expected: str):
        s = self.scanner
        ch = s.peek()
        if ch is None:
            raise UnexpectedEndOfInput(s.pos, expected, self.text)
        raise UnexpectedChar(s.pos, ch, expected, self.text)

    def _literal_mismatch(self, *literals: str):
        """Raise for a keyword that matched none of *literals*.

        The error points at the first character that diverges from the
        closest literal, or at the end of input when the text stops short.
        """
        s = self.scanner
        longest = max(len(lit) for lit in literals)
        window = self.text[s.pos:s.pos + longest]
        matched = max(_common_prefix(window, lit) for lit in literals)
        position = s.pos + matched
        expected = " or ".join(repr(lit) for lit in literals)
        if position >= len(self.text):
            raise UnexpectedEndOfInput(position, expected, self.text)
        raise UnexpectedChar(position, self.text[position], expected, self.text)


def _common_prefix(a: str, b: str) -> int:
    n = 0
    for x, y in zip(a, b):
        if x != y:
            break
        n += 1
    return n


# ---------------------------------------------------------------------------
# Module-level API
# ---------------------------------------------------------------------------

def parse_value(text: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Value:
    """Parse *text* as exactly one TSON value.

    Leading and trailing whitespace is allowed; anything else after the
    value raises TrailingInput.  Every failure raises a TSONError subclass
    carrying the character offset of the problem.
    """
    return Parser(text, ParseOptions(max_depth=max_depth)).parse()


def parse_prefix(
    text: str, start: int = 0, *, max_depth: int = DEFAULT_MAX_DEPTH
) -> tuple[Value, int]:
    """Parse one TSON value beginning at *start*.

    Returns ``(value, end)`` where *end* is the offset just past the value;
    whatever follows is left for the caller.
    """
    return Parser(text, ParseOptions(max_depth=max_depth), start).parse_prefix()
