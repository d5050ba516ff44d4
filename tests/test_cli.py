"""Tests for CLI helpers: _fmt_inline, _fmt_inspect, _process_line, main."""

import io

import pytest

from tson_core import NONE, TSONRepl, VBool, VChar, VFloat, VList, VObject, VOptional, VString
from tson_core.repl import _fmt_inline, _fmt_inspect, _process_line, main


# ---------------------------------------------------------------------------
# _fmt_inline
# ---------------------------------------------------------------------------

def test_fmt_inline_string():
    assert _fmt_inline(VString("hello")) == '"hello"'

def test_fmt_inline_char():
    assert _fmt_inline(VChar("a")) == "'a'"

def test_fmt_inline_number_int():
    assert _fmt_inline(VFloat(42.0)) == "42"

def test_fmt_inline_number_float():
    assert _fmt_inline(VFloat(3.14)) == "3.14"

def test_fmt_inline_optional():
    assert _fmt_inline(VOptional(VString("x"))) == 'Some("x")'
    assert _fmt_inline(NONE) == "None"

def test_fmt_inline_object():
    assert _fmt_inline(VObject({"a": VBool(True)})) == '{"a": true}'

def test_fmt_inline_escapes_delimiters():
    assert _fmt_inline(VString('a"b')) == r'"a\"b"'
    assert _fmt_inline(VChar("'")) == r"'\''"

def test_process_line_echo_reparses():
    repl = TSONRepl()
    buf = io.StringIO()
    _process_line(repl, r'''["a\"b", '\'', "c\\d"]''', buf)
    assert repl.eval(buf.getvalue()) == VList([VString('a"b'), VChar("'"), VString("c\\d")])


# ---------------------------------------------------------------------------
# _fmt_inspect
# ---------------------------------------------------------------------------

def test_fmt_inspect_scalar():
    assert _fmt_inspect(VFloat(7.0)) == "VFloat(7)"
    assert _fmt_inspect(VString("hi")) == 'VString("hi")'

def test_fmt_inspect_optional():
    assert _fmt_inspect(NONE) == "None"
    assert _fmt_inspect(VOptional(VFloat(400.0))) == "Some(VFloat(400))"

def test_fmt_inspect_empty_containers():
    assert _fmt_inspect(VList([])) == "VList []"
    assert _fmt_inspect(VObject({})) == "VObject {}"

def test_fmt_inspect_object():
    out = _fmt_inspect(VObject({"bb": NONE, "a": VFloat(1.0)}))
    assert out.splitlines() == [
        "VObject {",
        "  a : VFloat(1)",
        "  bb: None",
        "}",
    ]

def test_fmt_inspect_nested():
    value = VObject({"body": VOptional(VObject({"response": VString("ok")}))})
    assert _fmt_inspect(value).splitlines() == [
        "VObject {",
        "  body: Some(VObject {",
        '    response: VString("ok")',
        "  })",
        "}",
    ]

def test_fmt_inspect_list():
    out = _fmt_inspect(VList([VChar("z"), VFloat(5.0)]))
    assert out.splitlines() == [
        "VList [",
        "  1: VChar('z')",
        "  2: VFloat(5)",
        "]",
    ]


# ---------------------------------------------------------------------------
# _process_line
# ---------------------------------------------------------------------------

def test_process_line_echoes_value():
    repl = TSONRepl()
    buf = io.StringIO()
    assert _process_line(repl, "Some(400)", buf)
    assert buf.getvalue() == "Some(400)\n"

def test_process_line_reports_error():
    repl = TSONRepl()
    buf = io.StringIO()
    assert _process_line(repl, "[1,", buf)
    assert buf.getvalue().startswith("error: unexpected end of input")

def test_process_line_inspect():
    repl = TSONRepl()
    buf = io.StringIO()
    _process_line(repl, "i(Some(1))", buf)
    assert buf.getvalue() == "Some(VFloat(1))\n"

def test_process_line_inspect_long_form():
    repl = TSONRepl()
    buf = io.StringIO()
    _process_line(repl, "inspect([])", buf)
    assert buf.getvalue() == "VList []\n"

def test_process_line_last():
    repl = TSONRepl()
    buf = io.StringIO()
    _process_line(repl, ":last", buf)
    assert "no value parsed yet" in buf.getvalue()
    _process_line(repl, "true", buf)
    _process_line(repl, ":last", buf)
    assert buf.getvalue().endswith("VBool(true)\n")

def test_process_line_reset():
    repl = TSONRepl()
    _process_line(repl, "true", io.StringIO())
    _process_line(repl, ":reset", io.StringIO())
    assert repl.last is None

def test_process_line_blank():
    buf = io.StringIO()
    assert _process_line(TSONRepl(), "   ", buf)
    assert buf.getvalue() == ""

def test_process_line_quit():
    assert not _process_line(TSONRepl(), ":q", io.StringIO())
    assert not _process_line(TSONRepl(), ":quit", io.StringIO())

def test_process_line_file(tmp_path):
    path = tmp_path / "doc.tson"
    path.write_text('{\n  "error_code": None\n}\n', encoding="utf-8")
    buf = io.StringIO()
    _process_line(TSONRepl(), f"?<< {path}", buf)
    assert buf.getvalue().splitlines() == ["VObject {", "  error_code: None", "}"]

def test_process_line_missing_file(tmp_path, capsys):
    _process_line(TSONRepl(), f"?<< {tmp_path / 'missing.tson'}", io.StringIO())
    assert "Error reading" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# main() with file arguments
# ---------------------------------------------------------------------------

def test_main_files_ok(tmp_path, capsys):
    path = tmp_path / "ok.tson"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert main([str(path)]) == 0
    assert f"{path}: ok" in capsys.readouterr().out

def test_main_files_bad(tmp_path, capsys):
    good = tmp_path / "good.tson"
    bad = tmp_path / "bad.tson"
    good.write_text("None", encoding="utf-8")
    bad.write_text("Some(400", encoding="utf-8")
    assert main([str(good), str(bad)]) == 1
    err = capsys.readouterr().err
    assert f"{bad}: unexpected end of input" in err

def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.tson")]) == 1
    assert "Error reading" in capsys.readouterr().err

def test_main_interactive_quits_on_eof(monkeypatch, capsys):
    lines = iter(["Some('a')"])

    def fake_input(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", fake_input)
    assert main([]) == 0
    assert "Some('a')" in capsys.readouterr().out
