# topmark:header:start
#
#   project      : RiverCheck
#   file         : lint.py
#   file_relpath : src/rivercheck/cli/commands/lint.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RiverCheck `lint` command.

One-shot background-style validation: every input is opened in a `RiverIntegration`
exactly like an editor would open it, the scheduler runs the formatter, and the
diagnostics it publishes are printed as ``path:line:col: message`` (1-based).

The formatter's output is never written back. Background validation clears
diagnostics when the formatter cannot be started; the command additionally records
those failures so that it can abort with exit code 69 instead of reporting success.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import TYPE_CHECKING

import click

from rivercheck.api.formatting import failure_message
from rivercheck.api.integration import RiverIntegration
from rivercheck.cli.cmd_common import (
    expand_inputs,
    format_diagnostic,
    get_config,
    get_console,
    is_quiet,
    is_verbose,
    read_source,
)
from rivercheck.cli.errors import RivercheckFormatterUnavailableError, RivercheckUsageError
from rivercheck.cli.exit_codes import ExitCode
from rivercheck.cli.options import CONTEXT_SETTINGS
from rivercheck.config.logging import get_logger
from rivercheck.formatter.invoker import BoundedInvoker, invoke
from rivercheck.formatter.models import Failed, SpawnError
from rivercheck.formatter.parser import has_positions
from rivercheck.validation.documents import InMemoryDocument, is_river_document

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rivercheck.config.logging import RivercheckLogger
    from rivercheck.config.model import Config
    from rivercheck.diagnostic.model import Diagnostic
    from rivercheck.formatter.models import FormatRequest, FormatResult

logger: RivercheckLogger = get_logger(__name__)


class RecordingInvoker:
    """Invoker that runs the real formatter and remembers failures without positions.

    Runs go through a `BoundedInvoker`, so at most ``MAX_CONCURRENT_RUNS`` formatter
    processes are alive at once however many files are linted.
    """

    def __init__(self) -> None:
        self._run: BoundedInvoker = BoundedInvoker(invoke)
        self.spawn_errors: list[SpawnError] = []
        self.unknown_failures: list[Failed] = []

    async def __call__(self, request: FormatRequest, binary_path: str) -> FormatResult:
        result: FormatResult = await self._run(request, binary_path)
        if isinstance(result, SpawnError):
            self.spawn_errors.append(result)
        elif isinstance(result, Failed) and not has_positions(result.stderr):
            self.unknown_failures.append(result)
        return result


async def lint_documents(
    documents: Sequence[InMemoryDocument],
    config: Config,
    invoker: RecordingInvoker,
) -> dict[str, tuple[Diagnostic, ...]]:
    """Validate documents through the scheduler and return their published diagnostics.

    Background validation is forced on regardless of ``validation.enabled``.
    """
    integration = RiverIntegration(replace(config, validation_enabled=True), invoker=invoker)
    for document in documents:
        integration.on_open(document)
    await integration.scheduler.wait_idle()
    return {d.document_id: integration.store.get(d.document_id) for d in documents}


@click.command(
    name="lint",
    help="Report `alloy fmt` errors in River files without modifying them.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("paths", nargs=-1, type=str)
def lint_command(*, paths: tuple[str, ...]) -> None:
    """Validate River documents and print their diagnostics.

    Args:
        paths (tuple[str, ...]): Files and directories to validate.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    config = get_config(ctx)
    color: bool = bool(ctx.obj.get("color_enabled", False))

    if not paths:
        raise RivercheckUsageError("No input paths given.")

    documents: list[InMemoryDocument] = []
    labels: dict[str, str] = {}
    for path in expand_inputs(paths):
        document = InMemoryDocument.from_path(path, read_source(path))
        if not is_river_document(document):
            if not is_quiet(ctx):
                console.warn(f"Skipping non-River file: {path}")
            continue
        documents.append(document)
        labels[document.document_id] = str(path)

    invoker = RecordingInvoker()
    published = asyncio.run(lint_documents(documents, config, invoker))

    if invoker.spawn_errors:
        message: str | None = failure_message(invoker.spawn_errors[0])
        raise RivercheckFormatterUnavailableError(message or invoker.spawn_errors[0].reason)

    n_problems = 0
    n_files_with_problems = 0
    for document in documents:
        diagnostics = published.get(document.document_id, ())
        if diagnostics:
            n_files_with_problems += 1
        elif is_verbose(ctx):
            console.print(f"ok {labels[document.document_id]}")
        for diagnostic in diagnostics:
            n_problems += 1
            console.print(format_diagnostic(labels[document.document_id], diagnostic, color=color))

    for failure in invoker.unknown_failures:
        console.error(failure_message(failure) or failure.stderr)

    if n_problems and not is_quiet(ctx):
        console.print(f"{n_problems} problem(s) in {n_files_with_problems} file(s)")

    if n_problems:
        ctx.exit(ExitCode.SYNTAX_ERROR)
    if invoker.unknown_failures:
        ctx.exit(ExitCode.FAILURE)

