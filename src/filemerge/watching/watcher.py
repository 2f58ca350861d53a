from __future__ import annotations

"""
DirectoryWatcher – recursive, dynamically extended directory watch.

Every directory is registered individually with the watch backend. Trees are
registered on startup and again whenever the orchestrator sees a directory
being created, so files created later inside new subdirectories are observed
too. Events are funneled through a single queue and consumed by exactly one
caller of `next_event()`.
"""

import logging
import queue
from pathlib import Path
from typing import Any, Dict, List, Optional

from filemerge.core.errors import WatchRegistrationError
from filemerge.core.interfaces.watch import WatchBackendProtocol
from filemerge.core.models import EventKind, WatchEvent
from filemerge.io.walker import TreeWalker
from filemerge.logging.helpers import get_logger, trace_io
from filemerge.utils.paths import PathLike, canonical_path, is_within_dir
from filemerge.watching.backend import WatchdogBackend


class DirectoryWatcher:
    def __init__(
        self,
        *,
        backend: Optional[WatchBackendProtocol] = None,
        walker: Optional[TreeWalker] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._backend = backend if backend is not None else WatchdogBackend()
        self._log = logger or get_logger('watching.watcher')
        self._walker = walker or TreeWalker(logger=self._log)
        self._queue: "queue.Queue[Optional[WatchEvent]]" = queue.Queue()
        self._watches: Dict[Path, Any] = {}
        self._cancelled = False

    def __enter__(self) -> 'DirectoryWatcher':
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def start(self) -> None:
        self._backend.start()

    def close(self) -> None:
        self.cancel()
        for handle in list(self._watches.values()):
            self._backend.unschedule(handle)
        self._watches.clear()
        self._backend.stop()

    def cancel(self) -> None:
        """Wake a blocked `next_event()`; safe to call from any thread."""
        self._cancelled = True
        self._queue.put(None)

    def watched_directories(self) -> List[Path]:
        return sorted(self._watches, key=str)

    def is_watched(self, directory: PathLike) -> bool:
        return canonical_path(directory) in self._watches

    def register(self, directory: PathLike) -> bool:
        """Register a single directory; False when it is already watched.

        Raises:
            WatchRegistrationError: the backend refused the directory.
        """
        d = canonical_path(directory)
        if d in self._watches:
            trace_io(self._log, 'already watched', directory=str(d))
            return False
        try:
            handle = self._backend.schedule(d, self._queue.put)
        except OSError as exc:
            raise WatchRegistrationError(d, exc) from exc
        self._watches[d] = handle
        self._log.info('register: %s', d)
        return True

    def register_tree(self, root: PathLike) -> List[Path]:
        """Register `root` and every subdirectory below it.

        Returns the directories that were newly registered, parents first.
        Subdirectories that cannot be registered are logged and their subtree
        is skipped.

        Raises:
            WatchRegistrationError: `root` itself cannot be listed or registered.
        """
        top = canonical_path(root)
        if not top.is_dir():
            raise WatchRegistrationError(top, 'not a directory')

        registered: List[Path] = []
        failed: List[Path] = []

        def _skip(err: WatchRegistrationError) -> None:
            if canonical_path(err.directory) == top:
                raise err
            failed.append(err.directory)
            self._log.warning('⚠  %s – subtree skipped', err)

        for d in self._walker.iter_directories(top, on_error=_skip):
            if any(is_within_dir(d, f) for f in failed):
                continue
            try:
                if self.register(d):
                    registered.append(d)
            except WatchRegistrationError as exc:
                if d == top:
                    raise
                _skip(exc)
        return registered

    def _invalidate(self, directory: Path) -> None:
        for d in [w for w in self._watches if is_within_dir(w, directory)]:
            if d != directory and d.is_dir():
                continue
            self._backend.unschedule(self._watches.pop(d))
            self._log.info('unregister: %s', d)

    def next_event(self) -> Optional[WatchEvent]:
        """Block until the next relevant event.

        Returns None when the watcher was cancelled or when no directory is
        left to watch.
        """
        while True:
            if self._cancelled:
                return None
            if not self._watches:
                self._log.info('no directories left to watch')
                return None

            item = self._queue.get()
            if item is None:
                return None
            if item.kind is EventKind.OVERFLOW:
                self._log.debug('overflow in %s – some events may have been lost', item.directory)
                continue

            key = item.directory
            if key not in self._watches:
                if item.kind is EventKind.DELETE and not item.name:
                    trace_io(self._log, 'stale self-delete', directory=str(key))
                else:
                    self._log.warning('⚠  watch key not recognized: %s', key)
                continue

            target = item.path
            if item.kind is EventKind.DELETE and target in self._watches and not target.is_dir():
                self._invalidate(target)
                if not item.name:
                    item = WatchEvent(EventKind.DELETE, target.parent, target.name)
            return item
