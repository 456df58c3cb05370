# topmark:header:start
#
#   project      : RiverCheck
#   file         : scheduler.py
#   file_relpath : src/rivercheck/validation/scheduler.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Debounced background validation of open River documents.

Each open document cycles through ``IDLE -> SCHEDULED -> VALIDATING -> IDLE``:

1. A lifecycle event (open, change, save, activate) calls `schedule_validate`, which
   replaces any pending debounce timer for that document.
2. When the timer fires, the document's *current* text is snapshotted and the
   formatter runs in the background. Its stdout is ignored.
3. On completion the outcome is classified and the `DiagnosticStore` is updated:
   positional errors replace the document's diagnostics; a clean run, a failure of
   unknown shape and a spawn failure all clear them.

Ordering:
    A slow validation of stale text can finish after a newer one. With
    ``strict_ordering`` (the default), every fired validation gets a per-document
    sequence number and a result older than the newest applied one is discarded.
    Without it, the last *completed* validation wins.

Superseded processes are never terminated; their results are simply discarded when
they are stale, or when the document has been closed in the meantime.

All methods must be called from the thread running the asyncio event loop.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from rivercheck.config.logging import get_logger
from rivercheck.constants import (
    CHANGE_DELAY_MS,
    DEFAULT_ALLOY_PATH,
    DEFAULT_DELAY_MS,
    QUICK_DELAY_MS,
)
from rivercheck.diagnostic.model import diagnostics_from_errors
from rivercheck.formatter.invoker import invoke
from rivercheck.formatter.models import FormatRequest, SpawnError
from rivercheck.validation.documents import is_river_document
from rivercheck.validation.outcome import OutcomeKind, classify

if TYPE_CHECKING:
    from pathlib import Path

    from rivercheck.config.logging import RivercheckLogger
    from rivercheck.config.model import Config
    from rivercheck.diagnostic.store import DiagnosticStore
    from rivercheck.formatter.invoker import Invoker
    from rivercheck.formatter.models import FormatResult
    from rivercheck.validation.documents import TextDocument
    from rivercheck.validation.outcome import ValidationOutcome

logger: RivercheckLogger = get_logger(__name__)

# Polling step used by `wait_idle` while only timers are pending.
_IDLE_POLL_SECONDS: float = 0.005


class ValidationState(Enum):
    """Per-document validation state."""

    IDLE = "idle"
    SCHEDULED = "scheduled"
    VALIDATING = "validating"


@dataclass(eq=False)
class DocumentValidationState:
    """Scheduler bookkeeping for one open document.

    Attributes:
        document_id (str): Document identity.
        pending_timer (asyncio.TimerHandle | None): Debounce timer, if one is pending.
        in_flight (set[asyncio.Task[None]]): Validations still running. More than one
            only when a superseded process outlives the start of its successor.
        issued (int): Sequence number of the most recently fired validation.
        applied (int): Sequence number of the most recently applied result.
    """

    document_id: str
    pending_timer: asyncio.TimerHandle | None = None
    in_flight: set[asyncio.Task[None]] = field(default_factory=lambda: set())
    issued: int = 0
    applied: int = 0

    @property
    def state(self) -> ValidationState:
        """Current state machine state."""
        if self.pending_timer is not None:
            return ValidationState.SCHEDULED
        if self.in_flight:
            return ValidationState.VALIDATING
        return ValidationState.IDLE

    def cancel_timer(self) -> None:
        """Cancel the pending debounce timer, if any."""
        if self.pending_timer is not None:
            self.pending_timer.cancel()
            self.pending_timer = None


class ValidationScheduler:
    """Schedules background formatter runs and publishes their diagnostics.

    Args:
        store (DiagnosticStore): Destination of validation results.
        alloy_path (str): Formatter binary (path or command name).
        invoker (Invoker): Coroutine function running the formatter.
        quick_delay_ms (int): Debounce delay for open, save and activate events.
        change_delay_ms (int): Debounce delay for document changes.
        strict_ordering (bool): Discard results older than the newest applied one.
        enabled (bool): If False, lifecycle hooks only perform close cleanup.
    """

    def __init__(
        self,
        store: DiagnosticStore,
        *,
        alloy_path: str = DEFAULT_ALLOY_PATH,
        invoker: Invoker = invoke,
        quick_delay_ms: int = QUICK_DELAY_MS,
        change_delay_ms: int = CHANGE_DELAY_MS,
        strict_ordering: bool = True,
        enabled: bool = True,
    ) -> None:
        self.store: DiagnosticStore = store
        self.alloy_path: str = alloy_path
        self.quick_delay_ms: int = quick_delay_ms
        self.change_delay_ms: int = change_delay_ms
        self.strict_ordering: bool = strict_ordering
        self.enabled: bool = enabled
        self._invoker: Invoker = invoker
        self._states: dict[str, DocumentValidationState] = {}
        # Strong references to every running validation, including those of closed documents.
        self._tasks: set[asyncio.Task[None]] = set()

    @classmethod
    def from_config(
        cls,
        config: Config,
        store: DiagnosticStore,
        *,
        invoker: Invoker = invoke,
    ) -> ValidationScheduler:
        """Create a scheduler from a frozen configuration."""
        return cls(
            store,
            alloy_path=config.alloy_path,
            invoker=invoker,
            quick_delay_ms=config.quick_delay_ms,
            change_delay_ms=config.change_delay_ms,
            strict_ordering=config.strict_ordering,
            enabled=config.validation_enabled,
        )

    # --------------------------- Lifecycle hooks ---------------------------

    def on_open(self, document: TextDocument) -> None:
        """A document was opened."""
        self.schedule_validate(document, self.quick_delay_ms)

    def on_change(self, document: TextDocument) -> None:
        """A document's text changed."""
        self.schedule_validate(document, self.change_delay_ms)

    def on_save(self, document: TextDocument) -> None:
        """A document was saved."""
        self.schedule_validate(document, self.quick_delay_ms)

    def on_activate(self, document: TextDocument | None) -> None:
        """The active editor changed; ``None`` when no editor is active."""
        if document is not None:
            self.schedule_validate(document, self.quick_delay_ms)

    def on_close(self, document: TextDocument) -> None:
        """A document was closed: cancel its timer and drop all its state.

        Validations still running for the document keep running; their results are
        discarded on arrival.
        """
        document_id: str = document.document_id
        state: DocumentValidationState | None = self._states.pop(document_id, None)
        if state is not None:
            state.cancel_timer()
            logger.debug(
                "Closed %s (%d validation(s) still running)", document_id, len(state.in_flight)
            )
        self.store.delete(document_id)

    # ----------------------------- Scheduling -----------------------------

    def schedule_validate(self, document: TextDocument, delay_ms: int = DEFAULT_DELAY_MS) -> None:
        """(Re)start the debounce timer of a document.

        Args:
            document (TextDocument): The document to validate.
            delay_ms (int): Debounce delay in milliseconds.
        """
        if not self.enabled:
            return
        if not is_river_document(document):
            logger.trace("Ignoring non-River document %s", document.document_id)
            return

        loop: asyncio.AbstractEventLoop = asyncio.get_running_loop()
        state: DocumentValidationState = self._state_for(document.document_id)
        state.cancel_timer()
        state.pending_timer = loop.call_later(
            max(0, delay_ms) / 1000.0, self._fire, document, state
        )
        logger.trace("Scheduled validation of %s in %d ms", document.document_id, delay_ms)

    def state_of(self, document_id: str) -> ValidationState:
        """Return the state machine state of a document (IDLE if unknown)."""
        state: DocumentValidationState | None = self._states.get(document_id)
        return state.state if state is not None else ValidationState.IDLE

    def is_tracked(self, document_id: str) -> bool:
        """Return True if the scheduler holds state for the document."""
        return document_id in self._states

    async def wait_idle(self) -> None:
        """Wait until no timer is pending and no validation is running."""
        while True:
            tasks: set[asyncio.Task[None]] = set(self._tasks)
            if tasks:
                await asyncio.gather(*tasks)
                continue
            if any(s.pending_timer is not None for s in self._states.values()):
                await asyncio.sleep(_IDLE_POLL_SECONDS)
                continue
            return

    def shutdown(self) -> None:
        """Cancel every pending timer and forget all documents.

        Published diagnostics are left in the store.
        """
        for state in self._states.values():
            state.cancel_timer()
        self._states.clear()

    # ------------------------------ Internals ------------------------------

    def _state_for(self, document_id: str) -> DocumentValidationState:
        state: DocumentValidationState | None = self._states.get(document_id)
        if state is None:
            state = DocumentValidationState(document_id=document_id)
            self._states[document_id] = state
        return state

    def _fire(self, document: TextDocument, state: DocumentValidationState) -> None:
        state.pending_timer = None
        if self._states.get(state.document_id) is not state:
            return

        text: str = document.get_text()
        state.issued += 1
        seq: int = state.issued
        task: asyncio.Task[None] = asyncio.get_running_loop().create_task(
            self._validate(state, seq, text, document.location)
        )
        state.in_flight.add(task)
        self._tasks.add(task)
        task.add_done_callback(state.in_flight.discard)
        task.add_done_callback(self._tasks.discard)
        logger.debug("Validating %s (#%d, %d chars)", state.document_id, seq, len(text))

    async def _validate(
        self,
        state: DocumentValidationState,
        seq: int,
        text: str,
        location: Path | None,
    ) -> None:
        request: FormatRequest = FormatRequest.for_location(text, location)
        try:
            result: FormatResult = await self._invoker(request, self.alloy_path)
        except Exception as exc:
            logger.exception("Formatter invocation for %s failed", state.document_id)
            result = SpawnError(reason=f"Formatter invocation failed: {exc}")
        self._apply(state, seq, text, classify(result))

    def _apply(
        self,
        state: DocumentValidationState,
        seq: int,
        text: str,
        outcome: ValidationOutcome,
    ) -> None:
        document_id: str = state.document_id
        if self._states.get(document_id) is not state:
            logger.debug("Discarding validation #%d of closed document %s", seq, document_id)
            return
        if self.strict_ordering and seq < state.applied:
            logger.debug(
                "Discarding stale validation #%d of %s (#%d already applied)",
                seq,
                document_id,
                state.applied,
            )
            return
        state.applied = max(state.applied, seq)

        match outcome.kind:
            case OutcomeKind.ERRORS:
                self.store.set(document_id, diagnostics_from_errors(outcome.errors, text))
            case OutcomeKind.UNKNOWN_FAILURE:
                logger.debug(
                    "Unrecognized formatter output for %s: %r", document_id, outcome.detail
                )
                self.store.clear(document_id)
            case OutcomeKind.SPAWN_ERROR:
                logger.info("Background validation of %s skipped: %s", document_id, outcome.detail)
                self.store.clear(document_id)
            case OutcomeKind.CLEAN:
                self.store.clear(document_id)
