# topmark:header:start
#
#   project      : RiverCheck
#   file         : log.py
#   file_relpath : src/rivercheck/diagnostic/log.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unpositioned notices collected while loading configuration.

These are the messages a user should see about *their setup* (unknown keys, wrong
value types, unreadable config files), as opposed to positioned diagnostics about a
River document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rivercheck.config.logging import get_logger
from rivercheck.diagnostic.model import DiagnosticLevel

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from rivercheck.config.logging import RivercheckLogger


logger: RivercheckLogger = get_logger(__name__)


@dataclass(frozen=True)
class Notice:
    """Structured notice with a severity level and message."""

    level: DiagnosticLevel
    message: str


@dataclass(frozen=True)
class NoticeStats:
    """Aggregated counts for notices by severity level."""

    n_info: int
    n_warning: int
    n_error: int

    @property
    def total(self) -> int:
        """Return the total count of notices."""
        return self.n_info + self.n_warning + self.n_error


@dataclass
class NoticeLog:
    """Mutable collection of notices.

    Provides convenience helpers for adding notices at a given level and simple
    aggregation (`stats`) for reporting.
    """

    items: list[Notice] = field(default_factory=lambda: [])

    @classmethod
    def from_iterable(cls, notices: Iterable[Notice]) -> NoticeLog:
        """Create a NoticeLog from an iterable of notices.

        Args:
            notices: Existing notices (e.g., from a frozen config).

        Returns:
            A new NoticeLog containing the provided notices.
        """
        return cls(items=list(notices))

    def _add(self, notice: Notice) -> None:
        self.items.append(notice)
        logger.trace("Adding [%s]: %r", notice.level.value, notice.message)

    def add_info(self, message: str) -> None:
        """Add an ``info`` notice."""
        self._add(Notice(DiagnosticLevel.INFO, message))

    def add_warning(self, message: str) -> None:
        """Add a ``warning`` notice."""
        self._add(Notice(DiagnosticLevel.WARNING, message))

    def add_error(self, message: str) -> None:
        """Add an ``error`` notice."""
        self._add(Notice(DiagnosticLevel.ERROR, message))

    def extend(self, notices: Iterable[Notice]) -> None:
        """Append notices from another source, preserving order."""
        self.items.extend(notices)

    def stats(self) -> NoticeStats:
        """Return per-level counts for notices in this log."""
        return NoticeStats(
            n_info=sum(1 for n in self.items if n.level == DiagnosticLevel.INFO),
            n_warning=sum(1 for n in self.items if n.level == DiagnosticLevel.WARNING),
            n_error=sum(1 for n in self.items if n.level == DiagnosticLevel.ERROR),
        )

    def has_error(self) -> bool:
        """Return True if the log contains error notices."""
        return any(n.level == DiagnosticLevel.ERROR for n in self.items)

    def __iter__(self) -> Iterator[Notice]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
