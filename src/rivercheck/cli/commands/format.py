# topmark:header:start
#
#   project      : RiverCheck
#   file         : format.py
#   file_relpath : src/rivercheck/cli/commands/format.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RiverCheck `format` command.

Runs the formatter on each input as an explicit user action (never debounced).

Input modes:
  * PATHS: files and directories (searched for ``*.alloy`` / ``*.river``); changed
    files are rewritten in place.
  * ``-``: the document is read from STDIN and the formatted text written to STDOUT.
    ``--stdin-filename`` sets the location the formatter runs next to.

Reporting modes:
  * ``--check``: report files that would change, write nothing, exit 2 if any.
  * ``--diff``: print a unified diff of the changes, write nothing.

Positional formatter errors are printed as ``path:line:col: message`` on stderr
(exit 65). If the formatter cannot be started the command aborts (exit 69).
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import click

from rivercheck.api.formatting import failure_message
from rivercheck.cli.cmd_common import (
    expand_inputs,
    format_diagnostic,
    get_config,
    get_console,
    is_quiet,
    is_verbose,
    read_source,
    write_source,
)
from rivercheck.cli.errors import RivercheckFormatterUnavailableError, RivercheckUsageError
from rivercheck.cli.exit_codes import ExitCode
from rivercheck.cli.options import CONTEXT_SETTINGS
from rivercheck.config.logging import get_logger
from rivercheck.diagnostic.model import diagnostics_from_errors
from rivercheck.formatter.invoker import BoundedInvoker
from rivercheck.formatter.models import Failed, Formatted, FormatRequest, SpawnError
from rivercheck.formatter.parser import parse
from rivercheck.utils.diff import render_patch, unified_diff

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rivercheck.config.logging import RivercheckLogger
    from rivercheck.formatter.models import FormatResult

logger: RivercheckLogger = get_logger(__name__)

STDIN_LABEL = "<stdin>"


@dataclass(frozen=True)
class _Source:
    label: str
    location: Path | None
    text: str


async def _format_all(sources: Sequence[_Source], alloy_path: str) -> list[FormatResult]:
    run = BoundedInvoker()
    return list(
        await asyncio.gather(
            *(run(FormatRequest.for_location(s.text, s.location), alloy_path) for s in sources)
        )
    )


@click.command(
    name="format",
    help="Format River files with `alloy fmt` (use '-' to format STDIN to STDOUT).",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("paths", nargs=-1, type=str)
@click.option(
    "--check",
    is_flag=True,
    help="Do not write files; exit with 2 if any file would be reformatted.",
)
@click.option(
    "--diff",
    "show_diff",
    is_flag=True,
    help="Do not write files; print a unified diff of the changes.",
)
@click.option(
    "--stdin-filename",
    "stdin_filename",
    default=None,
    help="Assumed filename when formatting STDIN via '-'.",
)
def format_command(
    *,
    paths: tuple[str, ...],
    check: bool,
    show_diff: bool,
    stdin_filename: str | None,
) -> None:
    """Format River documents.

    Args:
        paths (tuple[str, ...]): Files, directories, or ``-`` for STDIN.
        check (bool): Report instead of writing; exit 2 when something would change.
        show_diff (bool): Print a unified diff instead of writing.
        stdin_filename (str | None): Location hint for STDIN content.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    config = get_config(ctx)
    color: bool = bool(ctx.obj.get("color_enabled", False))

    if not paths:
        raise RivercheckUsageError("No input paths given (use '-' to read from STDIN).")
    stdin_mode: bool = "-" in paths
    if stdin_mode and len(paths) > 1:
        raise RivercheckUsageError("'-' (STDIN) cannot be combined with other paths.")

    if stdin_mode:
        text: str = click.get_text_stream("stdin").read()
        location: Path | None = Path(stdin_filename) if stdin_filename else None
        sources: list[_Source] = [_Source(stdin_filename or STDIN_LABEL, location, text)]
    else:
        sources = [_Source(str(p), p, read_source(p)) for p in expand_inputs(paths)]

    if not sources:
        if not is_quiet(ctx):
            console.warn("No River files found.")
        return

    results: list[FormatResult] = asyncio.run(_format_all(sources, config.alloy_path))

    for result in results:
        if isinstance(result, SpawnError):
            raise RivercheckFormatterUnavailableError(failure_message(result) or result.reason)

    reformatted = unchanged = would_change = syntax_errors = failures = 0
    write: bool = not (check or show_diff)

    for source, result in zip(sources, results):
        match result:
            case Formatted(text=formatted):
                changed: bool = formatted != source.text
                if stdin_mode and write:
                    console.print(formatted, nl=False)
                    continue
                if not changed:
                    unchanged += 1
                    if is_verbose(ctx):
                        console.print(f"unchanged {source.label}")
                    continue
                if show_diff:
                    patch: list[str] = unified_diff(source.text, formatted, source.label)
                    console.print(render_patch(patch, color=color), nl=False)
                if check:
                    would_change += 1
                    if not is_quiet(ctx):
                        console.print(f"would reformat {source.label}")
                elif write and source.location is not None:
                    write_source(source.location, formatted)
                    reformatted += 1
                    if not is_quiet(ctx):
                        console.print(f"reformatted {source.label}")
            case Failed(stderr=stderr):
                errors = parse(stderr)
                if errors:
                    syntax_errors += 1
                    for diagnostic in diagnostics_from_errors(errors, source.text):
                        console.error(format_diagnostic(source.label, diagnostic))
                else:
                    failures += 1
                    console.error(f"{source.label}: {failure_message(result)}")
            case SpawnError():
                pass

    logger.info(
        "format: %d reformatted, %d unchanged, %d would change, %d with errors, %d failed",
        reformatted,
        unchanged,
        would_change,
        syntax_errors,
        failures,
    )

    if syntax_errors:
        ctx.exit(ExitCode.SYNTAX_ERROR)
    if failures:
        ctx.exit(ExitCode.FAILURE)
    if check and would_change:
        ctx.exit(ExitCode.WOULD_CHANGE)
