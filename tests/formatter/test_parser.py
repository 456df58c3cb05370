# topmark:header:start
#
#   project      : RiverCheck
#   file         : test_parser.py
#   file_relpath : tests/formatter/test_parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for parsing `alloy fmt` stderr into positioned errors."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from rivercheck.diagnostic.model import PositionedError
from rivercheck.formatter.parser import has_positions, normalize_whitespace, parse
from tests.conftest import parametrize


def test_single_record_is_zero_based() -> None:
    assert parse("<stdin>:360:37: missing ',' in expression list") == [
        PositionedError(line=359, column=36, message="missing ',' in expression list")
    ]


def test_two_records_on_one_line() -> None:
    stderr = "<stdin>:1:1: a <stdin>:2:5: b"
    assert parse(stderr) == [
        PositionedError(0, 0, "a"),
        PositionedError(1, 4, "b"),
    ]


def test_records_separated_by_newlines() -> None:
    stderr = "<stdin>:3:7: expected }\n<stdin>:9:1: unexpected EOF\n"
    errors = parse(stderr)
    assert [(e.line, e.column) for e in errors] == [(2, 6), (8, 0)]
    assert [e.message for e in errors] == ["expected }", "unexpected EOF"]


def test_wrapped_message_is_joined() -> None:
    stderr = "<stdin>:4:2: this message\n   wraps over\tseveral   lines\n"
    assert parse(stderr) == [PositionedError(3, 1, "this message wraps over several lines")]


def test_message_keeps_angle_brackets() -> None:
    assert parse("<stdin>:1:2: expected <ident>, got 5") == [
        PositionedError(0, 1, "expected <ident>, got 5")
    ]


def test_zero_positions_are_clamped() -> None:
    assert parse("<stdin>:0:0: odd") == [PositionedError(0, 0, "odd")]


@parametrize(
    "stderr",
    [
        "",
        "   \n\t",
        "error: flag provided but not defined: -x",
        "panic: runtime error",
        "<stdin>:x:1: not numeric",
        "stdin:1:1: missing angle brackets",
    ],
)
def test_unrecognized_input_yields_no_records(stderr: str) -> None:
    assert parse(stderr) == []
    assert not has_positions(stderr)


def test_leading_noise_is_ignored() -> None:
    stderr = "Error: failed to format\n<stdin>:2:3: missing '='"
    assert parse(stderr) == [PositionedError(1, 2, "missing '='")]
    assert has_positions(stderr)


def test_empty_message() -> None:
    assert parse("<stdin>:5:6:") == [PositionedError(4, 5, "")]


def test_normalize_whitespace() -> None:
    assert normalize_whitespace("  a\n\n b\t c  ") == "a b c"


_message = st.text(
    alphabet=st.characters(blacklist_categories=("Cs",), blacklist_characters="<"),
    max_size=40,
).map(normalize_whitespace)


@given(
    records=st.lists(
        st.tuples(st.integers(1, 10_000), st.integers(1, 500), _message),
        max_size=8,
    ),
    separator=st.sampled_from([" ", "\n", "\r\n", "\n\n  "]),
)
def test_parse_recovers_every_record(
    records: list[tuple[int, int, str]],
    separator: str,
) -> None:
    stderr = separator.join(f"<stdin>:{line}:{col}: {msg}" for line, col, msg in records)
    assert parse(stderr) == [PositionedError(line - 1, col - 1, msg) for line, col, msg in records]


@given(st.text(max_size=200))
def test_parse_is_total(stderr: str) -> None:
    errors = parse(stderr)
    assert all(e.line >= 0 and e.column >= 0 for e in errors)
    assert bool(errors) == has_positions(normalize_whitespace(stderr))
