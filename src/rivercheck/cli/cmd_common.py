# topmark:header:start
#
#   project      : RiverCheck
#   file         : cmd_common.py
#   file_relpath : src/rivercheck/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

Small helpers shared by several commands: context access, input expansion, file
I/O mapped to CLI errors, and diagnostic rendering.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click

from rivercheck.cli.errors import RivercheckFileNotFoundError, RivercheckIOError
from rivercheck.config.logging import get_logger
from rivercheck.utils.files import collect_river_files

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rivercheck.cli.console import ConsoleLike
    from rivercheck.config.logging import RivercheckLogger
    from rivercheck.config.model import Config
    from rivercheck.diagnostic.model import Diagnostic

logger: RivercheckLogger = get_logger(__name__)


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the console stored on the group context."""
    console: ConsoleLike = ctx.obj["console"]
    return console


def get_config(ctx: click.Context) -> Config:
    """Return the frozen configuration stored on the group context."""
    config: Config = ctx.obj["config"]
    return config


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity as a logging level (WARNING by default)."""
    return int(ctx.obj.get("verbosity_level", logging.WARNING))


def is_verbose(ctx: click.Context) -> bool:
    """Return True if ``-v`` (or more) was given."""
    return get_effective_verbosity(ctx) <= logging.INFO


def is_quiet(ctx: click.Context) -> bool:
    """Return True if ``-q`` was given."""
    return get_effective_verbosity(ctx) >= logging.ERROR


def expand_inputs(paths: Iterable[str]) -> list[Path]:
    """Expand PATH arguments into files.

    Raises:
        RivercheckFileNotFoundError: If a path does not exist.
    """
    try:
        return collect_river_files(Path(p) for p in paths)
    except FileNotFoundError as exc:
        raise RivercheckFileNotFoundError(f"No such file or directory: {exc.args[0]}") from exc


def read_source(path: Path) -> str:
    """Read a document, preserving its line endings.

    Raises:
        RivercheckIOError: If the file cannot be read or is not UTF-8.
    """
    try:
        with path.open(encoding="utf-8", newline="") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise RivercheckIOError(f"Cannot read {path}: {exc}") from exc


def write_source(path: Path, text: str) -> None:
    """Write a document without translating line endings.

    Raises:
        RivercheckIOError: If the file cannot be written.
    """
    try:
        with path.open("w", encoding="utf-8", newline="") as fh:
            fh.write(text)
    except OSError as exc:
        raise RivercheckIOError(f"Cannot write {path}: {exc}") from exc


def format_diagnostic(label: str, diagnostic: Diagnostic, *, color: bool = False) -> str:
    """Render a diagnostic as ``label:line:column: message`` with 1-based positions."""
    text: str = f"{label}:{diagnostic.line + 1}:{diagnostic.column + 1}: {diagnostic.message}"
    return diagnostic.level.color(text) if color else text
