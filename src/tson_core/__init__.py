"""TSON Core — parser for TSON, JSON with Some/None optionals and char literals."""

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
from .parser import DEFAULT_MAX_DEPTH, ParseOptions, Parser, parse_prefix, parse_value
from .repl import TSONRepl
from .scanner import Scanner
from .values import (
    NONE,
    Value,
    VBool,
    VChar,
    VFloat,
    VList,
    VObject,
    VOptional,
    VString,
)

__all__ = [
    "parse_value",
    "parse_prefix",
    "Parser",
    "ParseOptions",
    "DEFAULT_MAX_DEPTH",
    "Scanner",
    "TSONRepl",
    "Value",
    "VBool",
    "VChar",
    "VFloat",
    "VList",
    "VObject",
    "VOptional",
    "VString",
    "NONE",
    "TSONError",
    "UnexpectedEndOfInput",
    "UnexpectedChar",
    "InvalidNumber",
    "InvalidEscape",
    "UnterminatedLiteral",
    "TrailingInput",
    "DuplicateKey",
    "NestingTooDeep",
]
