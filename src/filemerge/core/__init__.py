from __future__ import annotations

"""Public surface for filemerge.core.

Data types, protocols and the error taxonomy shared by every component:

    from filemerge.core import CodeFile, WatchEvent, ReadError, ...
"""

from filemerge.core.errors import (
    FileMergeError,
    ReadError,
    StartupError,
    WatchRegistrationError,
    WriteError,
)
from filemerge.core.interfaces import LanguageProfileProtocol, WatchBackendProtocol
from filemerge.core.models import (
    CodeFile,
    EventKind,
    MergeOrder,
    RewriteMode,
    RunMode,
    WatchEvent,
)
from filemerge.core.report import WatchReport

__all__ = [
    # Models
    "CodeFile",
    "EventKind",
    "MergeOrder",
    "RewriteMode",
    "RunMode",
    "WatchEvent",
    "WatchReport",
    # Protocols
    "LanguageProfileProtocol",
    "WatchBackendProtocol",
    # Errors
    "FileMergeError",
    "ReadError",
    "StartupError",
    "WatchRegistrationError",
    "WriteError",
]
