from __future__ import annotations

"""Error taxonomy for filemerge.

Only `StartupError` is fatal; every other error is recovered from by the
component that observes it and reported through logging.
"""

from pathlib import Path
from typing import Optional


class FileMergeError(Exception):
    """Base class for all filemerge errors."""


class StartupError(FileMergeError):
    """A configured root is missing, not a directory or cannot be traversed."""


class WatchRegistrationError(FileMergeError, OSError):
    """A directory could not be registered with the watch primitive."""

    def __init__(self, directory: Path, reason: object = None) -> None:
        self.directory = Path(directory)
        self.reason = reason
        super().__init__(f'could not watch {directory}: {reason}')


class ReadError(FileMergeError, OSError):
    """A relevant source file could not be opened or decoded."""

    def __init__(self, path: Path, reason: Optional[BaseException] = None) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f'could not read {path}: {reason}')


class WriteError(FileMergeError, OSError):
    """The merged output could not be written."""

    def __init__(self, path: Path, reason: Optional[BaseException] = None) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f'could not write {path}: {reason}')
