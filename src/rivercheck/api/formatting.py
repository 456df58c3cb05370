# topmark:header:start
#
#   project      : RiverCheck
#   file         : formatting.py
#   file_relpath : src/rivercheck/api/formatting.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""On-demand formatting of a River document.

Formatting as an explicit user action is never debounced and runs independently of
background validation. Failures are surfaced to the user at most once per request:

- the formatter could not start: an error message with a remediation hint;
- the formatter failed with positional errors: no message, since background
  validation renders those positions as diagnostics;
- the formatter failed with unrecognized output: an error message with the raw
  output and the remediation hint.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rivercheck.api.types import TextEdit
from rivercheck.config.logging import get_logger
from rivercheck.constants import DEFAULT_ALLOY_PATH, REMEDIATION_HINT
from rivercheck.diagnostic.model import Range
from rivercheck.formatter.invoker import invoke
from rivercheck.formatter.models import Failed, Formatted, FormatRequest, SpawnError
from rivercheck.formatter.parser import has_positions

if TYPE_CHECKING:
    from pathlib import Path

    from rivercheck.api.types import Notifier
    from rivercheck.config.logging import RivercheckLogger
    from rivercheck.formatter.invoker import Invoker
    from rivercheck.formatter.models import FormatResult

logger: RivercheckLogger = get_logger(__name__)


def failure_message(result: FormatResult) -> str | None:
    """Return the user-facing message for a failed explicit format, or None.

    Args:
        result (FormatResult): The invoker's result.

    Returns:
        str | None: The message to show, or None when nothing should be shown
            (success, or a failure whose positions are rendered as diagnostics).
    """
    match result:
        case Formatted():
            return None
        case Failed(stderr=stderr):
            if has_positions(stderr):
                return None
            return f"River format failed: {stderr.strip()} {REMEDIATION_HINT}"
        case SpawnError(reason=reason):
            return f"River format failed: {reason} {REMEDIATION_HINT}"


async def format_document(
    text: str,
    location: Path | None = None,
    *,
    alloy_path: str = DEFAULT_ALLOY_PATH,
    notifier: Notifier | None = None,
    invoker: Invoker = invoke,
) -> str:
    """Format a document with the external formatter.

    Args:
        text (str): Current document text.
        location (Path | None): Document location hint; the formatter runs in its
            parent directory.
        alloy_path (str): Formatter binary.
        notifier (Notifier | None): Receives at most one error message per call.
        invoker (Invoker): Coroutine function running the formatter.

    Returns:
        str: The formatted text, or ``""`` if formatting failed. An empty formatter
            output is indistinguishable from a failure and yields ``""`` too.
    """
    result: FormatResult = await invoker(FormatRequest.for_location(text, location), alloy_path)
    if isinstance(result, Formatted):
        return result.text

    message: str | None = failure_message(result)
    if message is None:
        logger.info("Formatting failed with positional errors; leaving them to diagnostics")
    else:
        logger.warning("%s", message)
        if notifier is not None:
            notifier.error(message)
    return ""


def format_edits(original: str, formatted: str) -> list[TextEdit]:
    """Return the edits turning ``original`` into ``formatted``.

    Args:
        original (str): Document text that was formatted.
        formatted (str): Result of `format_document`.

    Returns:
        list[TextEdit]: Empty when formatting failed (``formatted == ""``) or changed
            nothing; otherwise a single full-document replacement.

    Note:
        ``""`` always means "no result", so a document the formatter would reduce to
        nothing (for example whitespace only) is left as it is.
    """
    if not formatted or formatted == original:
        return []
    return [TextEdit(range=Range.of_whole_text(original), new_text=formatted)]
