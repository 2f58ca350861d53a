from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Protocol, runtime_checkable

from filemerge.core.models import WatchEvent

EventSink = Callable[[WatchEvent], None]


@runtime_checkable
class WatchBackendProtocol(Protocol):
    """Platform watch primitive: one non-recursive watch per directory.

    `schedule` must raise OSError when the directory cannot be watched. Events
    are pushed to `sink` from any thread, scoped to the scheduled directory.
    """

    def start(self) -> None:
        ...

    def stop(self) -> None:
        ...

    def schedule(self, directory: Path, sink: EventSink) -> Any:
        ...

    def unschedule(self, handle: Any) -> None:
        ...
