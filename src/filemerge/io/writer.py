from __future__ import annotations

"""Atomic text writer for the merged output.

The text is written to a temporary sibling of the destination, flushed and
fsynced, then moved over the destination with `os.replace`. On any failure the
temporary file is removed and the previous destination is left untouched.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from filemerge.core.errors import WriteError
from filemerge.logging.helpers import get_logger, trace_io

TEMP_SUFFIX = '.tmp'
DEFAULT_MODE = 0o666


def temp_prefix_for(path: Path) -> str:
    return f'.{Path(path).name}.'


def _process_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def output_mode(path: Path) -> int:
    """Permission bits the replaced output should carry.

    An existing destination keeps its mode; a new one gets the mode a plain
    `open(path, 'w')` would have produced.
    """
    try:
        return os.stat(path).st_mode & 0o7777
    except FileNotFoundError:
        return DEFAULT_MODE & ~_process_umask()


class AtomicWriter:
    def __init__(self, *, encoding: str = 'utf-8', logger: Optional[logging.Logger] = None) -> None:
        self._encoding = encoding
        self._log = logger or get_logger('io.writer')

    def write(self, path: Path, text: str) -> int:
        """Atomically replace `path` with `text` and return the byte count.

        Raises:
            WriteError: the text cannot be encoded, or the destination or its
                temporary sibling could not be created, written or renamed.
        """
        target = Path(path)
        tmp_name: Optional[str] = None
        try:
            data = text.encode(self._encoding)
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(target.parent), prefix=temp_prefix_for(target), suffix=TEMP_SUFFIX
            )
            with os.fdopen(fd, 'wb') as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.chmod(tmp_name, output_mode(target))
            os.replace(tmp_name, target)
            tmp_name = None
        except (OSError, UnicodeError) as exc:
            raise WriteError(target, exc) from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError as exc:
                    self._log.warning('⚠  could not remove temporary file %s: %s', tmp_name, exc)
        trace_io(self._log, 'wrote', path=str(target), bytes=len(data))
        return len(data)
