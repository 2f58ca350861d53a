# src/filemerge/utils/paths.py
"""
paths – Small, centralized path helpers for filemerge.

Provides:
  • canonical_path(path)         – the single key form used by the registry
  • is_within_dir(path, parent)  – containment check on canonical paths
  • is_real_directory(path)      – directory test that does not follow symlinks
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


def canonical_path(path: PathLike) -> Path:
    """Return an absolute, normalized path without touching the filesystem.

    Symlinks are not resolved, so a key computed while a file exists equals
    the key computed after it has been deleted.
    """
    return Path(os.path.normpath(os.path.abspath(os.fspath(path))))


def is_within_dir(path: PathLike, parent: PathLike) -> bool:
    """Return True if *path* equals *parent* or is located below it."""
    p = canonical_path(path)
    d = canonical_path(parent)
    return p == d or d in p.parents


def is_real_directory(path: PathLike) -> bool:
    """Return True for directories, False for symlinks and everything else."""
    p = Path(path)
    return p.is_dir() and not p.is_symlink()
