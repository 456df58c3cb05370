# topmark:header:start
#
#   project      : RiverCheck
#   file         : watch.py
#   file_relpath : src/rivercheck/watch.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""File system watcher that drives the validation lifecycle hooks.

A watchdog `Observer` reports file system events on its own thread. `RiverEventHandler`
hands every event over to the event loop with ``call_soon_threadsafe`` and
`FileWatcher.handle` turns it into a lifecycle call on the `RiverIntegration`:

- a River file seen for the first time is *opened*;
- a watched file whose content changed is *changed*;
- a watched file that was deleted or moved away is *closed*.

Only the events are produced here; debouncing, ordering and publishing are the job of
the `ValidationScheduler` behind the `RiverIntegration`.
"""

from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from rivercheck.config.logging import get_logger
from rivercheck.constants import RIVER_FILE_SUFFIXES
from rivercheck.utils.files import collect_river_files
from rivercheck.validation.documents import InMemoryDocument

if TYPE_CHECKING:
    from collections.abc import Iterable

    from watchdog.observers.api import BaseObserver

    from rivercheck.api.integration import RiverIntegration
    from rivercheck.config.logging import RivercheckLogger

logger: RivercheckLogger = get_logger(__name__)


class WatchEventKind(Enum):
    """Lifecycle event produced for a watched file."""

    OPEN = "open"
    CHANGE = "change"
    CLOSE = "close"


@dataclass(frozen=True)
class WatchEvent:
    """A lifecycle event for one watched file."""

    kind: WatchEventKind
    document: InMemoryDocument


@dataclass
class _Watched:
    document: InMemoryDocument
    label: str


class RiverEventHandler(FileSystemEventHandler):
    """Forwards watchdog events from the observer thread to `FileWatcher.handle`.

    Args:
        watcher (FileWatcher): Receives the events on the loop thread.
        loop (asyncio.AbstractEventLoop): Loop the watcher lives on.
    """

    def __init__(self, watcher: FileWatcher, loop: asyncio.AbstractEventLoop) -> None:
        super().__init__()
        self.watcher: FileWatcher = watcher
        self.loop: asyncio.AbstractEventLoop = loop

    def _push(self, kind: WatchEventKind, raw_path: bytes | str) -> None:
        path = Path(os.fsdecode(raw_path))
        self.loop.call_soon_threadsafe(self.watcher.handle, kind, path)

    def on_created(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._push(WatchEventKind.OPEN, event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if not event.is_directory:
            self._push(WatchEventKind.CHANGE, event.src_path)

    def on_deleted(self, event: FileSystemEvent) -> None:
        # Directories too: everything watched below them goes away.
        self._push(WatchEventKind.CLOSE, event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        self._push(WatchEventKind.CLOSE, event.src_path)
        if not event.is_directory:
            self._push(WatchEventKind.OPEN, event.dest_path)


class FileWatcher:
    """Turns file system changes under ``roots`` into lifecycle events.

    Directories are watched recursively for ``*.alloy`` and ``*.river`` files outside
    hidden directories; files given explicitly are watched whatever their suffix.

    Args:
        roots (Iterable[Path]): Files and directories to watch.
        integration (RiverIntegration): Receives the lifecycle events.
    """

    def __init__(self, roots: Iterable[Path], integration: RiverIntegration) -> None:
        self.roots: list[Path] = [Path(r).resolve() for r in roots]
        self.integration: RiverIntegration = integration
        self._watched: dict[Path, _Watched] = {}
        self._observer: BaseObserver | None = None

    @property
    def documents(self) -> list[InMemoryDocument]:
        """Documents currently open."""
        return [w.document for w in self._watched.values()]

    def label_for(self, document_id: str) -> str:
        """Return a display path for a document id (the id itself if unknown)."""
        for watched in self._watched.values():
            if watched.document.document_id == document_id:
                return watched.label
        return document_id

    def wants(self, path: Path) -> bool:
        """Return True if ``path`` is a file this watcher should track."""
        for root in self.roots:
            if path == root:
                return True
            if path.suffix not in RIVER_FILE_SUFFIXES:
                continue
            try:
                rel_parts = path.relative_to(root).parts
            except ValueError:
                continue
            if not any(part.startswith(".") for part in rel_parts[:-1]):
                return True
        return False

    def scan(self) -> list[WatchEvent]:
        """Bring the watched set in line with the files currently under the roots.

        Returns:
            list[WatchEvent]: The dispatched events, in dispatch order.
        """
        events: list[WatchEvent] = []
        present: set[Path] = set()
        for path in collect_river_files(self.roots, strict=False):
            present.add(path)
            events.extend(self.handle(WatchEventKind.OPEN, path))
        for path in [p for p in self._watched if p not in present]:
            events.extend(self._close(path))
        if events:
            logger.debug("Scan dispatched %d event(s)", len(events))
        return events

    def handle(self, kind: WatchEventKind, path: Path) -> list[WatchEvent]:
        """Apply one file system event. Must run on the event loop thread.

        Opening an already watched file or changing an unknown one is resolved by
        looking at the file: events are idempotent and may arrive more than once.

        Args:
            kind (WatchEventKind): What the file system reported.
            path (Path): Absolute path of the file (or directory, for closes).

        Returns:
            list[WatchEvent]: The lifecycle events dispatched to the integration.
        """
        if kind is WatchEventKind.CLOSE:
            gone: list[Path] = [p for p in self._watched if p == path or path in p.parents]
            return [event for p in gone for event in self._close(p)]

        if not self.wants(path):
            return []
        text: str | None = _read_text(path)
        watched: _Watched | None = self._watched.get(path)
        if text is None:
            # Vanished between the event and now.
            return self._close(path) if watched is not None else []

        if watched is None:
            document = InMemoryDocument.from_path(path, text)
            self._watched[path] = _Watched(document=document, label=_label(path))
            self.integration.on_open(document)
            return [WatchEvent(WatchEventKind.OPEN, document)]

        if text == watched.document.text:
            return []
        watched.document.replace_text(text)
        self.integration.on_change(watched.document)
        return [WatchEvent(WatchEventKind.CHANGE, watched.document)]

    def start(self) -> None:
        """Start the watchdog observer. Must be called from the event loop thread."""
        if self._observer is not None:
            return
        handler = RiverEventHandler(self, asyncio.get_running_loop())
        targets: dict[Path, bool] = {}
        for root in self.roots:
            if root.is_dir():
                targets[root] = True
            elif root.parent.is_dir():
                targets.setdefault(root.parent, False)
            else:
                logger.warning("Cannot watch %s: no such file or directory", root)
        observer = Observer()
        for directory, recursive in targets.items():
            observer.schedule(handler, str(directory), recursive=recursive)
        observer.start()
        self._observer = observer
        logger.debug("Watching %d location(s)", len(targets))

    def stop(self) -> None:
        """Stop the observer and wait for its thread to finish."""
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join()
        self._observer = None

    async def run(self, *, stop: asyncio.Event | None = None) -> None:
        """Watch until ``stop`` is set or the task is cancelled."""
        stop = stop or asyncio.Event()
        self.start()
        try:
            self.scan()
            await stop.wait()
        finally:
            self.stop()

    def close(self) -> None:
        """Close every open document."""
        for path in list(self._watched):
            self._close(path)

    def _close(self, path: Path) -> list[WatchEvent]:
        watched: _Watched = self._watched[path]
        self.integration.on_close(watched.document)
        del self._watched[path]
        return [WatchEvent(WatchEventKind.CLOSE, watched.document)]


def _label(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd().resolve()))
    except ValueError:
        return str(path)


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Cannot read %s: %s", path, exc)
        return None
