# topmark:header:start
#
#   project      : RiverCheck
#   file         : documents.py
#   file_relpath : src/rivercheck/validation/documents.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Minimal document interface the validation core depends on.

Any event source (an editor API, a filesystem watcher, a test harness) hands the
scheduler objects satisfying `TextDocument`. The scheduler reads the text only when a
debounce timer fires, so the snapshot is always the freshest one available.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from rivercheck.constants import RIVER_FILE_SUFFIXES, RIVER_LANGUAGE_ID


class TextDocument(Protocol):
    """A live, possibly unsaved document."""

    @property
    def document_id(self) -> str:
        """Stable identity of the document (e.g. a URI)."""
        ...

    @property
    def location(self) -> Path | None:
        """Filesystem location, or None for untitled documents."""
        ...

    @property
    def language_id(self) -> str:
        """Language of the document (``"river"`` for River files)."""
        ...

    def get_text(self) -> str:
        """Return the current full text."""
        ...


def is_river_document(document: TextDocument) -> bool:
    """Return True if the document is a River document."""
    return document.language_id == RIVER_LANGUAGE_ID


def language_for_path(path: Path) -> str:
    """Return the language id for a file path based on its suffix."""
    return RIVER_LANGUAGE_ID if path.suffix in RIVER_FILE_SUFFIXES else "plaintext"


@dataclass
class InMemoryDocument:
    """Mutable document held in memory.

    Used by the file watcher and by tests. ``version`` increases on every edit.
    """

    document_id: str
    text: str = ""
    location: Path | None = None
    language_id: str = RIVER_LANGUAGE_ID
    version: int = 0

    @classmethod
    def from_path(cls, path: Path, text: str) -> InMemoryDocument:
        """Create a document for a file on disk."""
        resolved: Path = path.resolve()
        return cls(
            document_id=resolved.as_uri(),
            text=text,
            location=resolved,
            language_id=language_for_path(resolved),
        )

    def get_text(self) -> str:
        return self.text

    def replace_text(self, text: str) -> None:
        """Replace the full text and bump the version."""
        self.text = text
        self.version += 1
