from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple


class EventKind(enum.Enum):
    """Kinds of filesystem events delivered by the watch primitive."""
    CREATE = 'create'
    MODIFY = 'modify'
    DELETE = 'delete'
    OVERFLOW = 'overflow'


class RunMode(enum.Enum):
    WATCH = 'watch'
    ONCE = 'once'


class MergeOrder(enum.Enum):
    """How the merger orders imports and file bodies.

    ENCOUNTER keeps registry order and first-seen import order; SORTED imposes
    a lexicographic order on both for byte-reproducible output.
    """
    ENCOUNTER = 'encounter'
    SORTED = 'sorted'


class RewriteMode(enum.Enum):
    PREFIX = 'prefix'
    TOKENIZED = 'tokenized'


@dataclass(frozen=True)
class CodeFile:
    """One transformed source file, fully consistent with a single read."""
    path: Path
    declared_package: str = ''
    imports: Tuple[str, ...] = ()
    content: str = ''


@dataclass(frozen=True)
class WatchEvent:
    """A single event scoped to a watched directory.

    `name` is the affected entry relative to `directory`; it is empty for
    OVERFLOW events.
    """
    kind: EventKind
    directory: Path
    name: str = ''

    @property
    def path(self) -> Path:
        return self.directory / self.name if self.name else self.directory
