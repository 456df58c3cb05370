# topmark:header:start
#
#   project      : RiverCheck
#   file         : model.py
#   file_relpath : src/rivercheck/diagnostic/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Positioned diagnostic types for River documents.

Sections:
    * DiagnosticLevel: severity levels with associated terminal colors.
    * PositionedError: a single error record parsed from formatter stderr (0-based).
    * Position / Range: zero-based document coordinates.
    * Diagnostic: the rendered form of a `PositionedError`, with a range that extends
      to the end of the reported line in the validated text snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, cast

from yachalk import chalk

from rivercheck.constants import DIAGNOSTIC_SOURCE

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


class DiagnosticLevel(Enum):
    """Severity levels for diagnostics.

    Levels map to terminal colors and are ordered by importance: ERROR > WARNING > INFO.
    """

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level.

        Intended for human-readable output only; machine formats should not use colors.

        Returns:
            Callable[[str], str]: The `yachalk` color function associated with this severity level.
        """
        return cast(
            "Callable[[str], str]",
            {
                DiagnosticLevel.INFO: chalk.blue,
                DiagnosticLevel.WARNING: chalk.yellow,
                DiagnosticLevel.ERROR: chalk.red_bright,
            }[self],
        )


@dataclass(frozen=True, slots=True)
class PositionedError:
    """An error record reported by the formatter.

    Attributes:
        line (int): Zero-based line number.
        column (int): Zero-based column number.
        message (str): Error message, stripped of surrounding whitespace.
    """

    line: int
    column: int
    message: str


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Zero-based ``(line, character)`` document coordinate."""

    line: int
    character: int


@dataclass(frozen=True, slots=True)
class Range:
    """Half-open document range between two positions."""

    start: Position
    end: Position

    @classmethod
    def of_whole_text(cls, text: str) -> Range:
        """Return the range covering all of ``text``.

        Args:
            text (str): Document text.

        Returns:
            Range: From ``(0, 0)`` to the end of the last line.
        """
        lines: list[str] = _split_lines(text)
        last: int = len(lines) - 1
        return cls(Position(0, 0), Position(last, len(lines[last])))


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A positioned diagnostic ready to be rendered by a sink.

    Note:
        Instances are built from a `PositionedError` and the text snapshot that was
        validated, not the live document: the document may have changed since.
    """

    range: Range
    message: str
    level: DiagnosticLevel = DiagnosticLevel.ERROR
    source: str = DIAGNOSTIC_SOURCE

    @classmethod
    def from_error(cls, error: PositionedError, text: str) -> Diagnostic:
        """Build a diagnostic spanning from the error position to the end of its line.

        If the reported line is past the end of ``text``, the end of the last line is
        used. If that end lies before the start, the range collapses to the start.

        Args:
            error (PositionedError): The parsed error record.
            text (str): The text snapshot the formatter validated.

        Returns:
            Diagnostic: The rendered diagnostic.
        """
        start = Position(error.line, error.column)
        lines: list[str] = _split_lines(text)
        end_line: int = min(error.line, len(lines) - 1)
        end = Position(end_line, len(lines[end_line]))
        if end < start:
            end = start
        return cls(range=Range(start, end), message=error.message)

    @property
    def line(self) -> int:
        """Zero-based line of the diagnostic start."""
        return self.range.start.line

    @property
    def column(self) -> int:
        """Zero-based column of the diagnostic start."""
        return self.range.start.character


def diagnostics_from_errors(errors: Iterable[PositionedError], text: str) -> list[Diagnostic]:
    """Render parsed errors against the validated text snapshot, preserving order."""
    return [Diagnostic.from_error(e, text) for e in errors]


def _split_lines(text: str) -> list[str]:
    # A trailing newline opens a final empty line, as in editor buffers.
    lines: list[str] = text.split("\n")
    return [line.removesuffix("\r") for line in lines]
