# topmark:header:start
#
#   project      : RiverCheck
#   file         : errors.py
#   file_relpath : src/rivercheck/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the RiverCheck CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from rivercheck.cli.exit_codes import ExitCode


class RivercheckError(click.ClickException):
    """Base class for all RiverCheck CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorized in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(self.format_message())
                return
        super().show(file)


class RivercheckUsageError(RivercheckError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class RivercheckConfigError(RivercheckError):
    """Error for configuration errors (invalid values after merging)."""

    exit_code = ExitCode.CONFIG_ERROR


class RivercheckFileNotFoundError(RivercheckError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class RivercheckIOError(RivercheckError):
    """Error for I/O errors reading/writing files."""

    exit_code = ExitCode.IO_ERROR


class RivercheckFormatterUnavailableError(RivercheckError):
    """Error when the formatter binary cannot be started."""

    exit_code = ExitCode.FORMATTER_UNAVAILABLE
