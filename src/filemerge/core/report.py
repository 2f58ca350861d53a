from __future__ import annotations

"""
Runtime statistics for a scan/watch session.

The orchestrator owns one `WatchReport` and bumps its counters as events are
handled; the CLI logs a summary when the session terminates.
"""

import json
import time
from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class WatchReport:
    started_at: float = field(default_factory=time.perf_counter)
    finished_at: float | None = None
    duration_s: float | None = None

    directories_registered: int = 0
    events_total: int = 0
    events_by_kind: Dict[str, int] = field(
        default_factory=lambda: {"create": 0, "modify": 0, "delete": 0}
    )
    events_ignored: int = 0

    files_read: int = 0
    read_errors: int = 0
    merges: int = 0
    write_errors: int = 0
    last_output_bytes: int = 0

    errors: List[str] = field(default_factory=list)

    def add_event(self, kind: str) -> None:
        self.events_total += 1
        self.events_by_kind[kind] = self.events_by_kind.get(kind, 0) + 1

    def add_error(self, message: str) -> None:
        self.errors.append(message)

    def finish(self) -> None:
        self.finished_at = time.perf_counter()
        self.duration_s = self.finished_at - self.started_at

    def to_json(self, *, indent: int = 2) -> str:
        return json.dumps(
            {
                "started_at": self.started_at,
                "finished_at": self.finished_at,
                "duration_s": self.duration_s,
                "directories_registered": self.directories_registered,
                "events_total": self.events_total,
                "events_by_kind": self.events_by_kind,
                "events_ignored": self.events_ignored,
                "files_read": self.files_read,
                "read_errors": self.read_errors,
                "merges": self.merges,
                "write_errors": self.write_errors,
                "last_output_bytes": self.last_output_bytes,
                "errors": self.errors,
            },
            indent=indent,
        )
