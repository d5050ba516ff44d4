"""TSONRepl — interactive checker for TSON values.

Also provides the ``tson-repl`` CLI entry point via ``main()``.
"""

from __future__ import annotations

import logging
import sys
from typing import IO

from .errors import TSONError
from .parser import parse_value
from .values import Value, VList, VObject, VOptional, inline_str

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# TSONRepl class (notebook / programmatic use)
# ---------------------------------------------------------------------------

class TSONRepl:
    """Parses one TSON value per call and remembers the last good one.

    Usage::

        repl = TSONRepl()
        repl.eval('{ "body": Some("hi") }')   # → VObject(...)
        repl.last                               # same value
        repl.reset()
    """

    def __init__(self) -> None:
        self.last: Value | None = None

    def eval(self, text: str) -> Value:
        """Parse *text*; raises TSONError and keeps the previous value on failure."""
        value = parse_value(text)
        self.last = value
        return value

    def reset(self) -> None:
        self.last = None


# ---------------------------------------------------------------------------
# CLI helpers
# ---------------------------------------------------------------------------

def _fmt_inline(value: Value) -> str:
    """Format a single value for compact one-line display."""
    return inline_str(value)


def _fmt_inspect(value: Value, indent: int = 0) -> str:
    """Pretty-print a value tree with its variant names, one node per line."""
    pad = "  " * indent

    if isinstance(value, VObject):
        if not value.entries:
            return f"{pad}VObject {{}}"
        lines = [f"{pad}VObject {{"]
        width = max(len(k) for k in value.entries)
        for k, v in sorted(value.entries.items()):
            nested = _fmt_inspect(v, indent + 1).lstrip()
            lines.append(f"{pad}  {k:<{width}}: {nested}")
        lines.append(f"{pad}}}")
        return "\n".join(lines)

    if isinstance(value, VList):
        if not value.items:
            return f"{pad}VList []"
        lines = [f"{pad}VList ["]
        for i, v in enumerate(value.items, 1):
            nested = _fmt_inspect(v, indent + 1).lstrip()
            lines.append(f"{pad}  {i}: {nested}")
        lines.append(f"{pad}]")
        return "\n".join(lines)

    if isinstance(value, VOptional):
        if value.value is None:
            return f"{pad}None"
        return f"{pad}Some(" + _fmt_inspect(value.value, indent).lstrip() + ")"

    return f"{pad}{type(value).__name__}({_fmt_inline(value)})"


def _eval_expr(repl: TSONRepl, expr: str, dest: IO[str]) -> None:
    """Parse *expr* and print the value, or the error, to *dest*."""
    try:
        result = repl.eval(expr)
    except TSONError as exc:
        print(f"error: {exc}", file=dest)
        return
    print(_fmt_inline(result), file=dest)


def _inspect_expr(repl: TSONRepl, expr: str, dest: IO[str]) -> None:
    """Parse *expr* and pretty-print it to *dest*."""
    try:
        result = repl.eval(expr)
    except TSONError as exc:
        print(f"error: {exc}", file=dest)
        return
    print(_fmt_inspect(result), file=dest)


def _load_file(repl: TSONRepl, filepath: str, dest: IO[str]) -> None:
    """Parse the whole of *filepath* as one value."""
    try:
        with open(filepath, encoding="utf-8") as fh:
            text = fh.read()
    except OSError as exc:
        print(f"Error reading '{filepath}': {exc}", file=sys.stderr)
        return
    logger.debug("parsing %s (%d chars)", filepath, len(text))
    _inspect_expr(repl, text, dest)


def _process_line(repl: TSONRepl, line: str, dest: IO[str]) -> bool:
    """Process one input line.  Returns False when the session should end."""
    line = line.strip()
    if not line:
        return True

    # ── Exit ──────────────────────────────────────────────────────────────
    if line in (":q", ":quit"):
        return False

    # ── Control commands ──────────────────────────────────────────────────
    if line == ":last":
        if repl.last is None:
            print("  (no value parsed yet)", file=dest)
        else:
            print(_fmt_inspect(repl.last), file=dest)
        return True

    if line == ":reset":
        repl.reset()
        return True

    # ── inspect() / i() ───────────────────────────────────────────────────
    for prefix in ("inspect(", "i("):
        if line.startswith(prefix) and line.endswith(")"):
            _inspect_expr(repl, line[len(prefix):-1].strip(), dest)
            return True

    # ── Whole file ────────────────────────────────────────────────────────
    if line.startswith("?<< "):
        _load_file(repl, line[4:].strip(), dest)
        return True

    # ── Regular TSON input ────────────────────────────────────────────────
    _eval_expr(repl, line, dest)
    return True


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Interactive TSON shell (``tson-repl`` / ``python -m tson_core.repl``).

    With file arguments, parses each file and exits non-zero if any fails.
    ``-v`` / ``--verbose`` turns on debug logging.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    if "-v" in args or "--verbose" in args:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
        args = [a for a in args if a not in ("-v", "--verbose")]

    repl = TSONRepl()

    if args:
        status = 0
        for filepath in args:
            try:
                with open(filepath, encoding="utf-8") as fh:
                    repl.eval(fh.read())
            except OSError as exc:
                print(f"Error reading '{filepath}': {exc}", file=sys.stderr)
                status = 1
            except TSONError as exc:
                print(f"{filepath}: {exc}", file=sys.stderr)
                status = 1
            else:
                print(f"{filepath}: ok")
        return status

    print("TSON REPL  (:q to quit  |  :last  :reset  |  i(<tson>)  ?<< <file>)")

    while True:
        try:
            line = input("TSON> ")
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print()
            continue

        if not _process_line(repl, line, sys.stdout):
            break

    return 0


if __name__ == "__main__":
    sys.exit(main())
