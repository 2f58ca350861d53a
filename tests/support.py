"""Shared helpers for the filemerge test-suite."""
from __future__ import annotations

import os
import sys
import textwrap
from pathlib import Path
from typing import Any, Dict, Optional

# Dynamically ensure the src layout is importable without installation
PROJECT_SRC = Path(__file__).resolve().parents[1] / "src"
if str(PROJECT_SRC) not in sys.path:
    sys.path.insert(0, str(PROJECT_SRC))

from filemerge.core.models import EventKind, WatchEvent  # noqa: E402
from filemerge.utils.paths import canonical_path  # noqa: E402


def write(path: Path, body: str) -> Path:
    """Write dedented *body* to *path*, creating parents."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


class FakeBackend:
    """In-memory watch backend: records schedules and lets tests emit events."""

    def __init__(self) -> None:
        self.scheduled: Dict[Path, Any] = {}
        self.refuse: set = set()
        self.started = False
        self.stopped = False
        self._sink = None

    def start(self) -> None:
        self.started = True

    def stop(self) -> None:
        self.stopped = True

    def schedule(self, directory: Path, sink) -> Any:
        d = canonical_path(directory)
        if d in self.refuse or not d.is_dir():
            raise PermissionError(13, "refused", str(d))
        self.scheduled[d] = sink
        self._sink = sink
        return d

    def unschedule(self, handle: Any) -> None:
        self.scheduled.pop(handle, None)

    def emit(self, kind: EventKind, path: Path, *, directory: Optional[Path] = None) -> None:
        """Queue an event for *path*, scoped to its parent unless *directory* is given."""
        p = canonical_path(path)
        if directory is not None:
            d = canonical_path(directory)
            event = WatchEvent(kind, d, "" if d == p else os.path.relpath(p, d))
        else:
            event = WatchEvent(kind, p.parent, p.name)
        assert self._sink is not None, "nothing scheduled yet"
        self._sink(event)

    def overflow(self, directory: Path) -> None:
        assert self._sink is not None
        self._sink(WatchEvent(EventKind.OVERFLOW, canonical_path(directory)))
