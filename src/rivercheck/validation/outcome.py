# topmark:header:start
#
#   project      : RiverCheck
#   file         : outcome.py
#   file_relpath : src/rivercheck/validation/outcome.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pure classification of a formatter result for validation purposes.

This module maps a `FormatResult` to a `ValidationOutcome` with a stable kind:

- ``CLEAN``: exit code 0, nothing to report.
- ``ERRORS``: non-zero exit and at least one positional record in stderr.
- ``UNKNOWN_FAILURE``: non-zero exit but stderr has no recognizable record; the error
  locations cannot be determined.
- ``SPAWN_ERROR``: the formatter could not run at all.

Presentation-free: no console logic and no store mutation. The scheduler and the CLI
decide what to do with each kind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from rivercheck.formatter.models import Failed, Formatted, SpawnError
from rivercheck.formatter.parser import parse

if TYPE_CHECKING:
    from rivercheck.diagnostic.model import PositionedError
    from rivercheck.formatter.models import FormatResult


class OutcomeKind(Enum):
    """Validation outcome buckets."""

    CLEAN = "clean"
    ERRORS = "errors"
    UNKNOWN_FAILURE = "unknown_failure"
    SPAWN_ERROR = "spawn_error"


@dataclass(frozen=True)
class ValidationOutcome:
    """Classified result of one background validation.

    Attributes:
        kind (OutcomeKind): Outcome bucket.
        errors (tuple[PositionedError, ...]): Parsed records; non-empty only for ``ERRORS``.
        detail (str): Raw stderr for failures, the reason for spawn errors, else ``""``.
    """

    kind: OutcomeKind
    errors: tuple[PositionedError, ...] = field(default=())
    detail: str = ""

    @property
    def has_errors(self) -> bool:
        """Return True if positional errors were found."""
        return self.kind == OutcomeKind.ERRORS


def classify(result: FormatResult) -> ValidationOutcome:
    """Classify a formatter result.

    Args:
        result (FormatResult): The invoker's result.

    Returns:
        ValidationOutcome: The classified outcome. Spawn errors are never parsed.
    """
    match result:
        case Formatted():
            return ValidationOutcome(OutcomeKind.CLEAN)
        case Failed(stderr=stderr):
            errors: list[PositionedError] = parse(stderr)
            if errors:
                return ValidationOutcome(OutcomeKind.ERRORS, tuple(errors), stderr)
            return ValidationOutcome(OutcomeKind.UNKNOWN_FAILURE, (), stderr)
        case SpawnError(reason=reason):
            return ValidationOutcome(OutcomeKind.SPAWN_ERROR, (), reason)
