# topmark:header:start
#
#   project      : RiverCheck
#   file         : test_diagnostic_model.py
#   file_relpath : tests/diagnostic/test_diagnostic_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for turning positioned errors into ranged diagnostics."""

from __future__ import annotations

from rivercheck.constants import DIAGNOSTIC_SOURCE
from rivercheck.diagnostic.model import (
    Diagnostic,
    DiagnosticLevel,
    Position,
    PositionedError,
    Range,
    diagnostics_from_errors,
)

TEXT = "logging {\n  level = \"info\"\n}\n"


def test_range_extends_to_end_of_line() -> None:
    d = Diagnostic.from_error(PositionedError(1, 2, "bad"), TEXT)
    assert d.range == Range(Position(1, 2), Position(1, len('  level = "info"')))
    assert d.message == "bad"
    assert d.level is DiagnosticLevel.ERROR
    assert d.source == DIAGNOSTIC_SOURCE
    assert (d.line, d.column) == (1, 2)


def test_line_past_end_clamps_to_last_line() -> None:
    text = "a = 1\nbb = 22"
    d = Diagnostic.from_error(PositionedError(10, 0, "eof"), text)
    assert d.range.start == Position(10, 0)
    # The end falls before the start, so the range collapses to the start.
    assert d.range.end == d.range.start


def test_column_past_end_of_line_collapses() -> None:
    d = Diagnostic.from_error(PositionedError(0, 40, "far"), "short")
    assert d.range == Range(Position(0, 40), Position(0, 40))


def test_crlf_is_not_counted_in_line_length() -> None:
    d = Diagnostic.from_error(PositionedError(0, 0, "x"), "abc\r\ndef\r\n")
    assert d.range.end == Position(0, 3)


def test_empty_text() -> None:
    d = Diagnostic.from_error(PositionedError(0, 0, "empty"), "")
    assert d.range == Range(Position(0, 0), Position(0, 0))


def test_diagnostics_preserve_order() -> None:
    errors = [PositionedError(2, 0, "second"), PositionedError(0, 0, "first")]
    assert [d.message for d in diagnostics_from_errors(errors, TEXT)] == ["second", "first"]


def test_whole_text_range() -> None:
    assert Range.of_whole_text(TEXT) == Range(Position(0, 0), Position(3, 0))
    assert Range.of_whole_text("abc") == Range(Position(0, 0), Position(0, 3))


def test_level_colors_wrap_text() -> None:
    for level in DiagnosticLevel:
        assert "msg" in level.color("msg")
