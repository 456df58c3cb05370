# topmark:header:start
#
#   project      : RiverCheck
#   file         : main.py
#   file_relpath : src/rivercheck/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""RiverCheck command line entry point.

Group-level options are resolved once and placed into ``ctx.obj``:

- ``console``: the `ClickConsole` used for program output;
- ``verbosity_level``: program-output verbosity from ``-v`` / ``-q``;
- ``color_enabled``: resolved color mode;
- ``config``: the frozen `Config` (defaults, discovered files, ``--config`` files,
  then ``--alloy-path``).

Internal logging is configured from ``RIVERCHECK_LOG_LEVEL`` and goes to stderr.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from rivercheck.cli.commands.config import config_command
from rivercheck.cli.commands.format import format_command
from rivercheck.cli.commands.lint import lint_command
from rivercheck.cli.commands.version import version_command
from rivercheck.cli.commands.watch import watch_command
from rivercheck.cli.console import ClickConsole
from rivercheck.cli.errors import RivercheckConfigError
from rivercheck.cli.options import (
    CONTEXT_SETTINGS,
    ColorMode,
    common_color_options,
    common_config_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from rivercheck.config.logging import get_logger, resolve_env_log_level, setup_logging
from rivercheck.config.model import MutableConfig
from rivercheck.diagnostic.model import DiagnosticLevel

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rivercheck.cli.console import ConsoleLike
    from rivercheck.config.logging import RivercheckLogger
    from rivercheck.config.model import Config

logger: RivercheckLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging, color, console) on the Click context."""
    ctx.ensure_object(dict)

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    override: ColorMode | None = ColorMode(color_mode) if color_mode else None
    if no_color:
        override = ColorMode.NEVER
    enable_color: bool = resolve_color_mode(color_mode_override=override)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


def build_config(
    console: ConsoleLike,
    *,
    config_paths: Sequence[str],
    alloy_path: str | None,
    quiet: bool,
) -> Config:
    """Resolve the effective configuration, reporting loader notices on the console.

    Raises:
        RivercheckConfigError: If an explicit config file is missing or the merged
            values are invalid.
    """
    draft: MutableConfig = MutableConfig.load_merged(
        extra_config_files=[Path(p) for p in config_paths]
    ).apply_overrides(alloy_path=alloy_path)

    errors: list[str] = []
    for notice in draft.notices:
        if notice.level == DiagnosticLevel.ERROR:
            errors.append(notice.message)
        elif notice.level == DiagnosticLevel.WARNING and not quiet:
            console.warn(f"config: {notice.message}")
    if draft.notices.has_error():
        raise RivercheckConfigError("; ".join(errors))

    try:
        return draft.freeze()
    except ValueError as exc:
        raise RivercheckConfigError(f"Invalid configuration: {exc}") from exc


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="Validate and format River (Grafana Alloy) configuration files with `alloy fmt`.",
)
@common_verbose_options
@common_color_options
@common_config_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
    config_paths: tuple[str, ...],
    alloy_path: str | None,
) -> None:
    """Entry point for the RiverCheck CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'rivercheck lint [PATHS...]' to validate River files.")
        console.print()
        console.print(ctx.get_help())
        return

    ctx.obj["config"] = build_config(
        console,
        config_paths=config_paths,
        alloy_path=alloy_path,
        quiet=quiet > 0,
    )
    logger.debug("Effective configuration: %s", ctx.obj["config"])


cli.add_command(version_command)

cli.add_command(config_command)

cli.add_command(format_command)

cli.add_command(lint_command)

cli.add_command(watch_command)

if __name__ == "__main__":
    cli()
