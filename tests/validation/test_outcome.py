# topmark:header:start
#
#   project      : RiverCheck
#   file         : test_outcome.py
#   file_relpath : tests/validation/test_outcome.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for classifying formatter results."""

from __future__ import annotations

from rivercheck.diagnostic.model import PositionedError
from rivercheck.formatter.models import Failed, Formatted, SpawnError
from rivercheck.validation.outcome import OutcomeKind, classify


def test_formatted_is_clean() -> None:
    outcome = classify(Formatted("x"))
    assert outcome.kind is OutcomeKind.CLEAN
    assert not outcome.has_errors


def test_failed_with_positions() -> None:
    outcome = classify(Failed("<stdin>:2:4: nope", 1))
    assert outcome.kind is OutcomeKind.ERRORS
    assert outcome.errors == (PositionedError(1, 3, "nope"),)
    assert outcome.has_errors


def test_failed_without_positions() -> None:
    outcome = classify(Failed("segmentation fault", 139))
    assert outcome.kind is OutcomeKind.UNKNOWN_FAILURE
    assert outcome.errors == ()
    assert outcome.detail == "segmentation fault"


def test_spawn_error_is_never_parsed() -> None:
    outcome = classify(SpawnError("Failed to start formatter: <stdin>:1:1: looks positional"))
    assert outcome.kind is OutcomeKind.SPAWN_ERROR
    assert outcome.errors == ()
