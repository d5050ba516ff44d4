"""Value types produced by the TSON parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Union


@dataclass(frozen=True, slots=True)
class VFloat:
    value: float

    def __str__(self) -> str:
        v = self.value
        if float(v).is_integer():
            return str(int(v))
        return str(v)


@dataclass(frozen=True, slots=True)
class VBool:
    value: bool

    def __str__(self) -> str:
        return str(self.value).lower()


@dataclass(frozen=True, slots=True)
class VString:
    value: str
    # (start, end) of the literal's contents in the source text
    span: tuple[int, int] | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class VChar:
    value: str

    def __post_init__(self) -> None:
        if len(self.value) != 1:
            raise ValueError(f"VChar holds exactly one character, got {self.value!r}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class VList:
    items: tuple["Value", ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        return "[" + ", ".join(inline_str(v) for v in self.items) + "]"


@dataclass(frozen=True, slots=True)
class VOptional:
    """``Some(value)`` when *value* is set, ``None`` when it is ``None``."""

    value: "Value | None" = None

    @classmethod
    def some(cls, value: "Value") -> "VOptional":
        return cls(value)

    @property
    def is_some(self) -> bool:
        return self.value is not None

    def __str__(self) -> str:
        if self.value is None:
            return "None"
        return f"Some({inline_str(self.value)})"


@dataclass(frozen=True, slots=True)
class VObject:
    """Mapping of string keys to values.  Member order carries no meaning."""

    entries: Mapping[str, "Value"]

    def __post_init__(self) -> None:
        object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def __hash__(self) -> int:
        return hash(frozenset(self.entries.items()))

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __getitem__(self, key: str) -> "Value":
        return self.entries[key]

    def __str__(self) -> str:
        members = ", ".join(quote(k, '"') + ": " + inline_str(v) for k, v in self.entries.items())
        return "{" + members + "}"


NONE = VOptional()

_QUOTE_TABLE = str.maketrans({"\\": "\\\\", "\n": "\\n", "\r": "\\r", "\t": "\\t"})

Value = Union[VFloat, VBool, VString, VChar, VList, VOptional, VObject]


def quote(text: str, delimiter: str) -> str:
    """Wrap *text* in *delimiter*, escaping it the way the parser reads it back."""
    escaped = text.translate(_QUOTE_TABLE).replace(delimiter, "\\" + delimiter)
    return delimiter + escaped + delimiter


def inline_str(value: Value) -> str:
    """One-line display of *value*, with string and char contents quoted."""
    if isinstance(value, VString):
        return quote(value.value, '"')
    if isinstance(value, VChar):
        return quote(value.value, "'")
    return str(value)
