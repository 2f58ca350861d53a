from __future__ import annotations

"""
Watch primitives.

`WatchdogBackend` adapts a `watchdog` observer to the per-directory watch
model used by `DirectoryWatcher`: one non-recursive watch per directory, each
with its own handler that translates watchdog events into `WatchEvent`
values scoped to that directory.

`NullWatchBackend` validates directories but never delivers events; it backs
one-shot runs where no observer thread is needed.
"""

import errno
import logging
import os
from pathlib import Path
from typing import Any, List, Optional

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from filemerge.core.interfaces.watch import EventSink, WatchBackendProtocol
from filemerge.core.models import EventKind, WatchEvent
from filemerge.logging.helpers import get_logger
from filemerge.utils.paths import canonical_path


def _ensure_directory(directory: Path) -> None:
    if not Path(directory).is_dir():
        raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), str(directory))


class DirectoryEventHandler(FileSystemEventHandler):
    """Translate watchdog events for one watched directory."""

    def __init__(self, directory: Path, sink: EventSink) -> None:
        super().__init__()
        self._directory = canonical_path(directory)
        self._sink = sink

    @property
    def directory(self) -> Path:
        return self._directory

    def _scoped(self, kind: EventKind, raw_path: Any) -> WatchEvent:
        path = canonical_path(os.fsdecode(raw_path))
        if path == self._directory:
            return WatchEvent(kind, self._directory, '')
        return WatchEvent(kind, path.parent, path.name)

    def translate(self, event: FileSystemEvent) -> List[WatchEvent]:
        etype = event.event_type
        if etype == EVENT_TYPE_CREATED:
            return [self._scoped(EventKind.CREATE, event.src_path)]
        if etype == EVENT_TYPE_MODIFIED:
            scoped = self._scoped(EventKind.MODIFY, event.src_path)
            # Entry changes also touch the directory itself.
            return [] if not scoped.name else [scoped]
        if etype == EVENT_TYPE_DELETED:
            return [self._scoped(EventKind.DELETE, event.src_path)]
        if etype == EVENT_TYPE_MOVED:
            return [
                self._scoped(EventKind.DELETE, event.src_path),
                self._scoped(EventKind.CREATE, event.dest_path),
            ]
        return []

    def on_any_event(self, event: FileSystemEvent) -> None:
        for item in self.translate(event):
            self._sink(item)


class WatchdogBackend(WatchBackendProtocol):
    def __init__(self, *, observer: Optional[Any] = None, join_timeout: float = 2.0,
                 logger: Optional[logging.Logger] = None) -> None:
        self._observer = observer if observer is not None else Observer()
        self._join_timeout = join_timeout
        self._log = logger or get_logger('watching.backend')
        self._started = False

    def start(self) -> None:
        if self._started:
            return
        self._observer.start()
        self._started = True

    def stop(self) -> None:
        if not self._started:
            return
        self._observer.stop()
        self._observer.join(self._join_timeout)
        self._started = False

    def schedule(self, directory: Path, sink: EventSink) -> Any:
        _ensure_directory(directory)
        handler = DirectoryEventHandler(directory, sink)
        return self._observer.schedule(handler, str(directory), recursive=False)

    def unschedule(self, handle: Any) -> None:
        try:
            self._observer.unschedule(handle)
        except KeyError:
            self._log.debug('watch already gone: %s', getattr(handle, 'path', handle))


class NullWatchBackend(WatchBackendProtocol):
    def start(self) -> None:
        return None

    def stop(self) -> None:
        return None

    def schedule(self, directory: Path, sink: EventSink) -> Any:
        _ensure_directory(directory)
        return canonical_path(directory)

    def unschedule(self, handle: Any) -> None:
        return None
