from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Set

from filemerge.core.errors import WatchRegistrationError
from filemerge.logging.helpers import get_logger
from filemerge.utils.paths import canonical_path


class TreeWalker:
    """Directory and file discovery for the startup scan.

    Symlinked directories are not followed. Unreadable subdirectories are
    reported through `on_error` (or logged) and skipped.
    """

    def __init__(self, *, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or get_logger('io.walker')

    def iter_directories(
        self,
        root: Path,
        *,
        on_error: Optional[Callable[[WatchRegistrationError], None]] = None,
    ) -> Iterator[Path]:
        """Yield `root` and every directory below it, parents before children."""

        def _onerror(exc: OSError) -> None:
            err = WatchRegistrationError(canonical_path(exc.filename or root), exc.strerror or exc)
            if on_error is not None:
                on_error(err)
            else:
                self._log.warning('⚠  %s – subtree skipped', err)

        for dirpath, dirnames, _ in os.walk(root, onerror=_onerror):
            dirnames.sort()
            yield canonical_path(dirpath)

    def gather_files(self, directories: Iterable[Path], extension: str, *, exclude: Iterable[Path] = ()) -> List[Path]:
        """Collect relevant files directly inside each directory, sorted by path."""
        collected: Set[Path] = set()
        skip = {canonical_path(p) for p in exclude}
        for directory in directories:
            try:
                entries = list(os.scandir(directory))
            except OSError as exc:
                self._log.warning('⚠  could not list %s (%s)', directory, exc)
                continue
            for entry in entries:
                if not entry.name.endswith(extension):
                    continue
                try:
                    if not entry.is_file():
                        continue
                except OSError:
                    continue
                fp = canonical_path(entry.path)
                if fp not in skip:
                    collected.add(fp)
        return sorted(collected, key=str)
