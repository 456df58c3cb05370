# topmark:header:start
#
#   project      : RiverCheck
#   file         : watch.py
#   file_relpath : src/rivercheck/cli/commands/watch.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RiverCheck `watch` command.

Watches the given paths with watchdog and feeds a `RiverIntegration` with open,
change and close events, printing diagnostics every time the scheduler publishes
them. Runs until interrupted, or for a single scan with ``--once``.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Callable

import click

from rivercheck.api.integration import RiverIntegration
from rivercheck.cli.cmd_common import format_diagnostic, get_config, get_console, is_quiet
from rivercheck.cli.errors import RivercheckUsageError
from rivercheck.cli.exit_codes import ExitCode
from rivercheck.cli.options import CONTEXT_SETTINGS
from rivercheck.config.logging import get_logger
from rivercheck.watch import FileWatcher

if TYPE_CHECKING:
    from rivercheck.cli.console import ConsoleLike
    from rivercheck.config.logging import RivercheckLogger
    from rivercheck.config.model import Config
    from rivercheck.diagnostic.model import Diagnostic

logger: RivercheckLogger = get_logger(__name__)


class ConsoleDiagnosticSink:
    """`DiagnosticSink` printing every published set to the console.

    Args:
        console (ConsoleLike): Program-output console.
        color (bool): Colorize diagnostics by severity.
        quiet (bool): Only print documents that have diagnostics.

    Attributes:
        label_for (Callable[[str], str]): Maps a document id to a display path.
        n_problems (int): Diagnostics printed so far.
    """

    def __init__(self, console: ConsoleLike, *, color: bool = False, quiet: bool = False) -> None:
        self.console: ConsoleLike = console
        self.color: bool = color
        self.quiet: bool = quiet
        self.label_for: Callable[[str], str] = str
        self.n_problems: int = 0

    def publish(self, document_id: str, diagnostics: tuple[Diagnostic, ...]) -> None:
        label: str = self.label_for(document_id)
        if not diagnostics:
            if not self.quiet:
                self.console.print(f"ok {label}")
            return
        self.n_problems += len(diagnostics)
        for diagnostic in diagnostics:
            self.console.print(format_diagnostic(label, diagnostic, color=self.color))

    def retract(self, document_id: str) -> None:
        if not self.quiet:
            self.console.print(f"closed {self.label_for(document_id)}")


async def watch_paths(
    roots: list[Path],
    config: Config,
    sink: ConsoleDiagnosticSink,
    *,
    once: bool = False,
) -> None:
    """Watch ``roots``, publishing diagnostics to ``sink``.

    Args:
        roots (list[Path]): Files and directories to watch.
        config (Config): Effective configuration.
        sink (ConsoleDiagnosticSink): Receives published diagnostics.
        once (bool): Scan a single time and wait for the resulting validations.
    """
    integration = RiverIntegration(config, sink=sink)
    watcher = FileWatcher(roots, integration)
    sink.label_for = watcher.label_for
    try:
        if once:
            watcher.scan()
            await integration.scheduler.wait_idle()
        else:
            await watcher.run()
    finally:
        integration.scheduler.shutdown()


@click.command(
    name="watch",
    help="Watch River files and report `alloy fmt` errors as they change.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("paths", nargs=-1, type=str)
@click.option(
    "--once",
    is_flag=True,
    help="Scan once, report, and exit (65 if any problem was found).",
)
def watch_command(*, paths: tuple[str, ...], once: bool) -> None:
    """Watch River documents and print their diagnostics as they are published."""
    ctx = click.get_current_context()
    console = get_console(ctx)
    config = get_config(ctx)

    if not paths:
        raise RivercheckUsageError("No input paths given.")
    if not config.validation_enabled:
        console.warn("validation.enabled is false: nothing will be reported.")

    sink = ConsoleDiagnosticSink(
        console,
        color=bool(ctx.obj.get("color_enabled", False)),
        quiet=is_quiet(ctx),
    )
    roots: list[Path] = [Path(p) for p in paths]
    try:
        asyncio.run(watch_paths(roots, config, sink, once=once))
    except KeyboardInterrupt:
        logger.debug("Watch interrupted")

    if once and sink.n_problems:
        ctx.exit(ExitCode.SYNTAX_ERROR)
