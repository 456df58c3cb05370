# topmark:header:start
#
#   project      : RiverCheck
#   file         : parser.py
#   file_relpath : src/rivercheck/formatter/parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Parse `alloy fmt` stderr into positioned error records.

The formatter reports errors as::

    <stdin>:360:37: missing ',' in expression list

Line and column are 1-based. Several records may be separated by spaces or newlines,
and a long message may wrap across lines. All whitespace runs are therefore collapsed
to a single space before scanning, and each message runs until the next record
marker or the end of input.
"""

from __future__ import annotations

import re
from typing import Final

from rivercheck.config.logging import RivercheckLogger, get_logger
from rivercheck.diagnostic.model import PositionedError

logger: RivercheckLogger = get_logger(__name__)

_WHITESPACE_RE: Final[re.Pattern[str]] = re.compile(r"\s+")

_MARKER: Final[str] = r"<stdin>:(\d+):(\d+):"
_MARKER_RE: Final[re.Pattern[str]] = re.compile(_MARKER)
_RECORD_RE: Final[re.Pattern[str]] = re.compile(
    _MARKER + r"\s*(.*?)(?=<stdin>:\d+:\d+:|$)",
)


def normalize_whitespace(text: str) -> str:
    """Collapse every whitespace run (newlines included) to one space and strip the ends."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def parse(stderr: str) -> list[PositionedError]:
    """Extract positioned error records from formatter stderr.

    This function is total: input without any record yields an empty list. Callers
    must not read an empty result for a failed run as "no errors".

    Args:
        stderr (str): Raw stderr text.

    Returns:
        list[PositionedError]: One record per marker, in input order, with 0-based
            line and column.
    """
    if not stderr:
        return []

    normalized: str = normalize_whitespace(stderr)
    errors: list[PositionedError] = []
    for m in _RECORD_RE.finditer(normalized):
        errors.append(
            PositionedError(
                line=max(0, int(m.group(1)) - 1),
                column=max(0, int(m.group(2)) - 1),
                message=m.group(3).strip(),
            )
        )
    logger.trace("Parsed %d error record(s) from %d byte(s) of stderr", len(errors), len(stderr))
    return errors


def has_positions(text: str) -> bool:
    """Return True if ``text`` contains at least one positional record marker."""
    return _MARKER_RE.search(text) is not None
