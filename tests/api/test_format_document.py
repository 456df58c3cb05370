# topmark:header:start
#
#   project      : RiverCheck
#   file         : test_format_document.py
#   file_relpath : tests/api/test_format_document.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the explicit, user-initiated format action."""

from __future__ import annotations

import asyncio
from pathlib import Path

from rivercheck.api.formatting import failure_message, format_document, format_edits
from rivercheck.api.types import TextEdit
from rivercheck.constants import REMEDIATION_HINT
from rivercheck.diagnostic.model import Position, Range
from rivercheck.formatter.models import Failed, Formatted, SpawnError
from tests.conftest import STRIP_TRAILING_SPACES, FakeAlloyFactory
from tests.doubles import RecordingNotifier, ScriptedInvoker


def _format(invoker: ScriptedInvoker, text: str, notifier: RecordingNotifier) -> str:
    return asyncio.run(format_document(text, notifier=notifier, invoker=invoker))


def test_success_returns_formatted_text_without_notifying() -> None:
    notifier = RecordingNotifier()
    invoker = ScriptedInvoker(lambda text: Formatted(text.upper()))
    assert _format(invoker, "a = 1\n", notifier) == "A = 1\n"
    assert notifier.errors == []


def test_spawn_error_notifies_exactly_once_with_hint() -> None:
    notifier = RecordingNotifier()
    invoker = ScriptedInvoker(lambda text: SpawnError("Failed to start formatter: ENOENT"))
    assert _format(invoker, "a = 1\n", notifier) == ""
    assert notifier.errors == [
        f"River format failed: Failed to start formatter: ENOENT {REMEDIATION_HINT}"
    ]


def test_positional_failure_does_not_notify() -> None:
    notifier = RecordingNotifier()
    invoker = ScriptedInvoker(lambda text: Failed("<stdin>:1:3: missing '='\n", 1))
    assert _format(invoker, "a 1\n", notifier) == ""
    assert notifier.errors == []


def test_unknown_failure_notifies_with_raw_message() -> None:
    notifier = RecordingNotifier()
    invoker = ScriptedInvoker(lambda text: Failed("  panic: boom\n", 2))
    assert _format(invoker, "x", notifier) == ""
    assert notifier.errors == [f"River format failed: panic: boom {REMEDIATION_HINT}"]


def test_failure_without_notifier_returns_empty_text() -> None:
    invoker = ScriptedInvoker(lambda text: SpawnError("nope"))
    assert asyncio.run(format_document("x", invoker=invoker)) == ""


def test_failure_message_for_success_is_none() -> None:
    assert failure_message(Formatted("x")) is None


def test_runs_next_to_the_document() -> None:
    invoker = ScriptedInvoker()
    asyncio.run(format_document("x", Path("/srv/alloy/main.alloy"), invoker=invoker))
    assert invoker.requests[0].working_directory == Path("/srv/alloy")


def test_with_real_process(fake_alloy: FakeAlloyFactory) -> None:
    alloy = fake_alloy(STRIP_TRAILING_SPACES)
    result = asyncio.run(format_document("a = 1   \nb = 2\t\n", alloy_path=str(alloy)))
    assert result == "a = 1\nb = 2\n"


def test_edits_replace_the_whole_document() -> None:
    original = "a = 1   \nb = 2\n"
    assert format_edits(original, "a = 1\nb = 2\n") == [
        TextEdit(range=Range(Position(0, 0), Position(2, 0)), new_text="a = 1\nb = 2\n")
    ]


def test_no_edits_when_unchanged_or_failed() -> None:
    assert format_edits("a = 1\n", "a = 1\n") == []
    assert format_edits("a = 1\n", "") == []


def test_empty_formatter_output_produces_no_edit() -> None:
    notifier = RecordingNotifier()
    invoker = ScriptedInvoker(lambda text: Formatted(""))
    formatted = _format(invoker, "   \n\n", notifier)
    assert formatted == ""
    assert format_edits("   \n\n", formatted) == []
    assert notifier.errors == []
