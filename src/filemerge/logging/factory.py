from __future__ import annotations

import logging
from typing import Optional, TextIO

from filemerge.logging.helpers import get_logger, setup_base_logger


class DefaultLoggerFactory:
    """Hand out 'filemerge.*' loggers, configuring the base logger on first use."""

    def __init__(
        self,
        *,
        json_logs: bool = False,
        level: int = logging.INFO,
        stream: Optional[TextIO] = None,
        timestamps: bool = False,
    ) -> None:
        self._options = dict(json_logs=bool(json_logs), level=int(level), stream=stream, timestamps=timestamps)
        self._base: Optional[logging.Logger] = None

    @classmethod
    def for_run(cls, *, json_logs: bool, verbose: bool, watching: bool) -> 'DefaultLoggerFactory':
        """Factory for a command-line run; watch sessions get timestamped lines."""
        return cls(
            json_logs=json_logs,
            level=logging.DEBUG if verbose else logging.INFO,
            timestamps=watching,
        )

    def get_logger(self, name: str) -> logging.Logger:
        if self._base is None:
            self._base = setup_base_logger(**self._options)
        return get_logger(name)
