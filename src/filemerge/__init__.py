from __future__ import annotations

from filemerge.cli import FileMerge, main, run
from filemerge.core.errors import (
    FileMergeError,
    ReadError,
    StartupError,
    WatchRegistrationError,
    WriteError,
)
from filemerge.core.models import CodeFile, EventKind, MergeOrder, RewriteMode, RunMode, WatchEvent
from filemerge.languages import JAVA, KOTLIN, get_profile, register_profile
from filemerge.processing.transformer import SourceTransformer
from filemerge.registry import FileRegistry
from filemerge.rendering.merger import Merger
from filemerge.runtime.config import WatchConfig
from filemerge.runtime.orchestrator import Orchestrator, OrchestratorState
from filemerge.watching.watcher import DirectoryWatcher

__version__ = '1.0.0'

__all__ = [
    'CodeFile',
    'DirectoryWatcher',
    'EventKind',
    'FileMerge',
    'FileMergeError',
    'FileRegistry',
    'JAVA',
    'KOTLIN',
    'MergeOrder',
    'Merger',
    'Orchestrator',
    'OrchestratorState',
    'ReadError',
    'RewriteMode',
    'RunMode',
    'SourceTransformer',
    'StartupError',
    'WatchConfig',
    'WatchEvent',
    'WatchRegistrationError',
    'WriteError',
    'get_profile',
    'main',
    'register_profile',
    'run',
]
