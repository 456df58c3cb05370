# topmark:header:start
#
#   project      : RiverCheck
#   file         : store.py
#   file_relpath : src/rivercheck/diagnostic/store.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-document published diagnostic sets.

`DiagnosticStore` is keyed by document identity. Every write replaces the document's
set (last write wins, no merging) and is forwarded to an optional `DiagnosticSink`,
the collaborator that renders diagnostics (an editor, a console, a test recorder).

The store never reads document text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from rivercheck.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from rivercheck.config.logging import RivercheckLogger
    from rivercheck.diagnostic.model import Diagnostic

logger: RivercheckLogger = get_logger(__name__)


class DiagnosticSink(Protocol):
    """Rendering collaborator notified of every store mutation."""

    def publish(self, document_id: str, diagnostics: tuple[Diagnostic, ...]) -> None:
        """Show ``diagnostics`` for the document, replacing what was shown before."""
        ...

    def retract(self, document_id: str) -> None:
        """Forget the document entirely (it was closed)."""
        ...


class DiagnosticStore:
    """Published diagnostics per document.

    Args:
        sink (DiagnosticSink | None): Optional rendering collaborator.
    """

    def __init__(self, sink: DiagnosticSink | None = None) -> None:
        self._sink: DiagnosticSink | None = sink
        self._items: dict[str, tuple[Diagnostic, ...]] = {}

    def set(self, document_id: str, diagnostics: Iterable[Diagnostic]) -> None:
        """Replace the diagnostics of a document.

        Args:
            document_id (str): Document identity.
            diagnostics (Iterable[Diagnostic]): The new, ordered diagnostic set.
        """
        items: tuple[Diagnostic, ...] = tuple(diagnostics)
        self._items[document_id] = items
        logger.debug("Publishing %d diagnostic(s) for %s", len(items), document_id)
        if self._sink is not None:
            self._sink.publish(document_id, items)

    def clear(self, document_id: str) -> None:
        """Publish an empty diagnostic set for a document."""
        self.set(document_id, ())

    def delete(self, document_id: str) -> None:
        """Remove all state for a document and retract it from the sink."""
        self._items.pop(document_id, None)
        logger.debug("Retracting diagnostics for %s", document_id)
        if self._sink is not None:
            self._sink.retract(document_id)

    def get(self, document_id: str) -> tuple[Diagnostic, ...]:
        """Return the current diagnostics of a document (empty if unknown)."""
        return self._items.get(document_id, ())

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)
