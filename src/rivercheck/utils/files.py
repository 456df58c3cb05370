# topmark:header:start
#
#   project      : RiverCheck
#   file         : files.py
#   file_relpath : src/rivercheck/utils/files.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Expansion of command-line paths into River files."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rivercheck.config.logging import get_logger
from rivercheck.constants import RIVER_FILE_SUFFIXES

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rivercheck.config.logging import RivercheckLogger

logger: RivercheckLogger = get_logger(__name__)


def collect_river_files(paths: Iterable[Path], *, strict: bool = True) -> list[Path]:
    """Expand files and directories into a sorted, de-duplicated list of files.

    Files given explicitly are kept whatever their suffix. Directories are searched
    recursively for ``*.alloy`` and ``*.river`` files; hidden directories are skipped.

    Args:
        paths (Iterable[Path]): Files and directories.
        strict (bool): Raise for missing paths instead of skipping them.

    Returns:
        list[Path]: The files to process.

    Raises:
        FileNotFoundError: If ``strict`` and a path does not exist.
    """
    found: dict[Path, None] = {}
    for path in paths:
        if path.is_file():
            found[path] = None
        elif path.is_dir():
            for candidate in sorted(path.rglob("*")):
                rel_parts = candidate.relative_to(path).parts
                if any(part.startswith(".") for part in rel_parts[:-1]):
                    continue
                if candidate.is_file() and candidate.suffix in RIVER_FILE_SUFFIXES:
                    found[candidate] = None
        elif strict:
            raise FileNotFoundError(path)
        else:
            logger.debug("Skipping missing path: %s", path)
    return list(found)
