from __future__ import annotations

"""Logging helpers shared by every filemerge module.

    - JsonLogFormatter: one JSON object per record, for log shippers.
    - setup_base_logger: installs the single handler on the 'filemerge' logger.
    - get_logger: returns loggers below the 'filemerge' namespace.
    - trace_io: per-file and per-watch tracing, enabled by FILEMERGE_TRACE_IO=1.

Watch backends deliver events on observer threads, so both formats carry the
thread name when it is not the main thread.
"""

import json
import logging
import os
import sys
import threading
from datetime import datetime, timezone
from typing import Optional, TextIO

BASE_LOGGER = "filemerge"
TRACE_ENV = "FILEMERGE_TRACE_IO"

PLAIN_FORMAT = "%(levelname)s: %(message)s"
TIMESTAMPED_FORMAT = "%(asctime)s %(levelname)s: %(message)s"


class JsonLogFormatter(logging.Formatter):
    """Render records as compact JSON.

    Keys: ts (UTC, millisecond precision), level, module (logger name), msg,
    version, plus `thread` for records emitted off the main thread, `ctx` for
    records carrying a `context` dict and `exc` when exception info is set.
    """

    def __init__(self) -> None:
        super().__init__()
        self._version = _package_version()

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload = {
            "ts": ts.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
            "version": self._version,
        }
        if record.threadName and record.threadName != threading.main_thread().name:
            payload["thread"] = record.threadName

        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict) and ctx:
            payload["ctx"] = ctx
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def _package_version() -> str:
    try:
        # The package root imports this module; resolve lazily.
        from filemerge import __version__
    except ImportError:
        return os.getenv("FILEMERGE_VERSION", "unknown")
    return str(__version__)


def setup_base_logger(
    *,
    json_logs: bool = False,
    level: int = logging.INFO,
    stream: Optional[TextIO] = None,
    timestamps: bool = False,
) -> logging.Logger:
    """Configure the 'filemerge' logger on first use and return it.

    Later calls only adjust the level, so library callers and the CLI end up
    sharing one handler.

    Args:
        json_logs: Use `JsonLogFormatter` instead of the plain text format.
        level: Level applied to the base logger.
        stream: Destination stream, stderr when omitted.
        timestamps: Prefix plain records with their time (long-running watches).
    """
    base = logging.getLogger(BASE_LOGGER)
    base.setLevel(level)
    if base.handlers:
        return base

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_logs:
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(TIMESTAMPED_FORMAT if timestamps else PLAIN_FORMAT))
    base.addHandler(handler)
    base.propagate = False
    return base


def get_logger(name: str | None = None) -> logging.Logger:
    """Return `name` as a child of the 'filemerge' logger."""
    if not name or name == BASE_LOGGER or name.startswith(BASE_LOGGER + "."):
        return logging.getLogger(name or BASE_LOGGER)
    return logging.getLogger(f"{BASE_LOGGER}.{name}")


def is_trace_io_enabled() -> bool:
    return os.getenv(TRACE_ENV) == "1"


def trace_io(logger: logging.Logger, message: str, **ctx) -> None:
    """Debug-level trace of file reads, registrations and merges.

    Silent unless FILEMERGE_TRACE_IO=1. Keyword arguments are attached as the
    record's `context`, which the JSON formatter emits under `ctx`.
    """
    if not is_trace_io_enabled():
        return
    if ctx:
        logger.debug("%s | %s", message, ", ".join(f"{k}={v}" for k, v in ctx.items()),
                     extra={"context": ctx})
    else:
        logger.debug("%s", message)
