# topmark:header:start
#
#   project      : RiverCheck
#   file         : diff.py
#   file_relpath : src/rivercheck/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unified diff generation and colorized preview for ``rivercheck format --diff``."""

from __future__ import annotations

import difflib
from typing import Sequence

from yachalk import chalk


def unified_diff(original: str, formatted: str, label: str) -> list[str]:
    """Return the unified diff turning ``original`` into ``formatted``.

    Args:
        original (str): Text before formatting.
        formatted (str): Text after formatting.
        label (str): File label used in the ``---`` / ``+++`` headers.

    Returns:
        list[str]: Diff lines without trailing newlines; empty if the texts are equal.
    """
    return list(
        difflib.unified_diff(
            original.splitlines(keepends=True),
            formatted.splitlines(keepends=True),
            fromfile=f"{label} (original)",
            tofile=f"{label} (formatted)",
            lineterm="",
        )
    )


def render_patch(patch: Sequence[str] | str, *, color: bool = True) -> str:
    """Render a unified diff, colorized unless ``color`` is False.

    Args:
        patch (Sequence[str] | str): A unified diff as a sequence of lines or a single
            multiline string.
        color (bool): Whether to emit ANSI colors.

    Returns:
        str: The rendered diff, one line per diff line.
    """
    if isinstance(patch, str):
        lines: list[str] = patch.splitlines(keepends=False)
    else:
        lines = [line.rstrip("\n") for line in patch]

    def process_line(line: str) -> str:
        # Show stray carriage returns explicitly.
        content: str = line.replace("\r", "\\r")
        if not color:
            return content
        match line[:1]:
            case "@":
                return chalk.cyan(content)
            case "-":
                return chalk.bold.red(content)
            case "+":
                return chalk.bold.green(content)
            case _:
                return content

    return "".join(f"{process_line(line)}\n" for line in lines)
