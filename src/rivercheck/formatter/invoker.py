# topmark:header:start
#
#   project      : RiverCheck
#   file         : invoker.py
#   file_relpath : src/rivercheck/formatter/invoker.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run the external formatter as an asyncio subprocess.

The formatter reads the document from stdin (``fmt -``) and writes the formatted
document to stdout. Errors go to stderr.

`invoke` never raises for process-level problems; every outcome is a `FormatResult`.
Cancelling the task awaiting `invoke` only drops interest in the result: the child
process is not killed and runs to completion on its own.

`BoundedInvoker` wraps an invoker to cap how many formatter processes run at once.
"""

from __future__ import annotations

import asyncio
import os
from typing import TYPE_CHECKING, Protocol

from rivercheck.config.logging import get_logger
from rivercheck.constants import FORMAT_ARGS, MAX_CONCURRENT_RUNS
from rivercheck.formatter.models import Failed, Formatted, SpawnError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rivercheck.config.logging import RivercheckLogger
    from rivercheck.formatter.models import FormatRequest, FormatResult

logger: RivercheckLogger = get_logger(__name__)


class Invoker(Protocol):
    """Callable signature shared by `invoke` and test doubles."""

    async def __call__(self, request: FormatRequest, binary_path: str) -> FormatResult:
        """Run the formatter for ``request`` using ``binary_path``."""
        ...


def expand_binary_path(binary_path: str) -> str:
    """Expand ``~`` and environment variables in a configured binary path.

    A bare command name (``"alloy"``) is returned unchanged and resolved through
    ``PATH`` at spawn time.
    """
    return os.path.expandvars(os.path.expanduser(binary_path))


async def invoke(
    request: FormatRequest,
    binary_path: str,
    *,
    args: Sequence[str] = FORMAT_ARGS,
) -> FormatResult:
    """Run the formatter on ``request.text``.

    Args:
        request (FormatRequest): Document text and working directory.
        binary_path (str): Formatter executable, either a path or a command name
            resolved through ``PATH``.
        args (Sequence[str]): Arguments instructing the formatter to read stdin.

    Returns:
        FormatResult: `Formatted` on exit code 0, `Failed` on a non-zero exit code,
            `SpawnError` if the process could not be started or fed its input.
    """
    executable: str = expand_binary_path(binary_path)
    logger.debug(
        "Spawning %s %s (cwd=%s)", executable, " ".join(args), request.working_directory
    )
    try:
        process = await asyncio.create_subprocess_exec(
            executable,
            *args,
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=request.working_directory,
        )
    except OSError as exc:
        # Missing binary, permission denied, missing working directory
        logger.debug("Cannot start %s: %s", executable, exc)
        return SpawnError(reason=f"Failed to start formatter: {exc}")

    try:
        # Lone surrogates cannot be encoded; they reach the formatter as "?".
        stdin_b: bytes = request.text.encode("utf-8", errors="replace")
        stdout_b, stderr_b = await process.communicate(stdin_b)
    except OSError as exc:
        logger.debug("Cannot write to %s: %s", executable, exc)
        return SpawnError(reason=f"Failed to write to formatter: {exc}")

    stdout: str = stdout_b.decode("utf-8", errors="replace")
    stderr: str = stderr_b.decode("utf-8", errors="replace")
    code: int | None = process.returncode
    logger.trace(
        "%s exited with code %s (%d stdout / %d stderr chars)",
        executable,
        code,
        len(stdout),
        len(stderr),
    )

    if code == 0:
        return Formatted(text=stdout)

    exit_code: int = code if code is not None else -1
    command: str = " ".join([binary_path, *args[:1]])
    return Failed(
        stderr=stderr or f"{command} exited with code {exit_code}",
        exit_code=exit_code,
    )


class BoundedInvoker:
    """Invoker letting at most ``limit`` formatter processes run at the same time.

    Calls beyond the limit wait for a slot instead of spawning, so validating or
    formatting many files never exhausts process or file-descriptor limits.

    Args:
        invoker (Invoker): Invoker doing the actual work.
        limit (int | None): Maximum concurrent runs; ``MAX_CONCURRENT_RUNS`` when None.
    """

    def __init__(self, invoker: Invoker = invoke, *, limit: int | None = None) -> None:
        self.invoker: Invoker = invoker
        self.limit: int = limit if limit is not None else MAX_CONCURRENT_RUNS
        if self.limit < 1:
            raise ValueError(f"limit must be at least 1, got {self.limit}")
        # Created on first use so it binds to the running loop.
        self._semaphore: asyncio.Semaphore | None = None

    async def __call__(self, request: FormatRequest, binary_path: str) -> FormatResult:
        if self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self.limit)
        async with self._semaphore:
            return await self.invoker(request, binary_path)
