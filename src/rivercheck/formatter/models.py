# topmark:header:start
#
#   project      : RiverCheck
#   file         : models.py
#   file_relpath : src/rivercheck/formatter/models.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Request and result types for a single formatter invocation.

`FormatResult` is a closed union of three variants:

- `Formatted`: the formatter exited with code 0; ``text`` is its stdout.
- `Failed`: the formatter ran and exited non-zero; ``stderr`` may carry positions.
- `SpawnError`: the formatter could not be started or fed its input. It never
  carries positional information and must not be parsed for diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from pathlib import Path


@dataclass(frozen=True, slots=True)
class FormatRequest:
    """Input for one formatter run.

    Attributes:
        text (str): Full document text fed to the formatter's stdin.
        working_directory (Path | None): Directory to run the formatter in, or None to
            inherit the current working directory.
    """

    text: str
    working_directory: Path | None = None

    @classmethod
    def for_location(cls, text: str, location: Path | None) -> FormatRequest:
        """Build a request that runs next to the document on disk.

        Args:
            text (str): Document text.
            location (Path | None): Filesystem location of the document, if any.

        Returns:
            FormatRequest: Request whose working directory is the document's parent
                directory, or None for documents without a location.
        """
        return cls(text=text, working_directory=location.parent if location else None)


@dataclass(frozen=True, slots=True)
class Formatted:
    """Successful run (exit code 0)."""

    text: str


@dataclass(frozen=True, slots=True)
class Failed:
    """The formatter ran and exited with a non-zero code.

    Attributes:
        stderr (str): Raw stderr text, or a fallback message when stderr was empty.
        exit_code (int): The process exit code.
    """

    stderr: str
    exit_code: int


@dataclass(frozen=True, slots=True)
class SpawnError:
    """The formatter could not be started or fed its input."""

    reason: str


FormatResult: TypeAlias = Formatted | Failed | SpawnError
