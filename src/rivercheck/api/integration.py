# topmark:header:start
#
#   project      : RiverCheck
#   file         : integration.py
#   file_relpath : src/rivercheck/api/integration.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Single entry point for a host (editor, watcher, test harness).

`RiverIntegration` owns one `DiagnosticStore` and one `ValidationScheduler` built
from a frozen `Config`, forwards lifecycle events to the scheduler, and exposes
on-demand formatting with the same formatter settings.

Example:
    ```python
    integration = RiverIntegration(config, sink=my_sink, notifier=console)
    integration.on_open(document)
    edits = await integration.provide_formatting_edits(document)
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rivercheck.api.formatting import format_document, format_edits
from rivercheck.config.model import Config
from rivercheck.diagnostic.store import DiagnosticStore
from rivercheck.formatter.invoker import BoundedInvoker
from rivercheck.validation.scheduler import ValidationScheduler

if TYPE_CHECKING:
    from pathlib import Path

    from rivercheck.api.types import Notifier, TextEdit
    from rivercheck.diagnostic.store import DiagnosticSink
    from rivercheck.formatter.invoker import Invoker
    from rivercheck.validation.documents import TextDocument


class RiverIntegration:
    """Wires store, scheduler and formatting to one configuration.

    Args:
        config (Config | None): Frozen configuration; defaults when None.
        sink (DiagnosticSink | None): Renders published diagnostics.
        notifier (Notifier | None): Shows errors of explicit format actions.
        invoker (Invoker | None): Coroutine function running the formatter; a
            `BoundedInvoker` around `invoke` when None.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        sink: DiagnosticSink | None = None,
        notifier: Notifier | None = None,
        invoker: Invoker | None = None,
    ) -> None:
        if invoker is None:
            invoker = BoundedInvoker()
        self.config: Config = config or Config()
        self.notifier: Notifier | None = notifier
        self.store = DiagnosticStore(sink)
        self.scheduler: ValidationScheduler = ValidationScheduler.from_config(
            self.config, self.store, invoker=invoker
        )
        self._invoker: Invoker = invoker

    # Lifecycle hooks

    def on_open(self, document: TextDocument) -> None:
        self.scheduler.on_open(document)

    def on_change(self, document: TextDocument) -> None:
        self.scheduler.on_change(document)

    def on_save(self, document: TextDocument) -> None:
        self.scheduler.on_save(document)

    def on_activate(self, document: TextDocument | None) -> None:
        self.scheduler.on_activate(document)

    def on_close(self, document: TextDocument) -> None:
        self.scheduler.on_close(document)

    # Explicit formatting

    async def format_document(self, text: str, location: Path | None = None) -> str:
        """Format ``text``; returns ``""`` on failure (see `format_document`)."""
        return await format_document(
            text,
            location,
            alloy_path=self.config.alloy_path,
            notifier=self.notifier,
            invoker=self._invoker,
        )

    async def provide_formatting_edits(self, document: TextDocument) -> list[TextEdit]:
        """Return the edits formatting ``document``, empty if nothing changes or it failed."""
        original: str = document.get_text()
        formatted: str = await self.format_document(original, document.location)
        return format_edits(original, formatted)

    async def aclose(self) -> None:
        """Stop scheduling and wait for running validations to finish."""
        self.scheduler.shutdown()
        await self.scheduler.wait_idle()
