from __future__ import annotations

"""
FileRegistry – in-memory mapping from canonical path to `CodeFile`.

The orchestrator is the single writer. Every operation canonicalizes its key
with `canonical_path`, so insert, update and delete always agree on the key
regardless of how the caller spelled the path. `values()` and `snapshot()`
return copies; no live reference to the internal mapping escapes.
"""

from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from filemerge.core.models import CodeFile
from filemerge.utils.paths import PathLike, canonical_path, is_within_dir


class FileRegistry:
    def __init__(self) -> None:
        self._files: Dict[Path, CodeFile] = {}

    def put(self, path: PathLike, file: CodeFile) -> None:
        """Insert or replace in place; a replaced entry keeps its position."""
        self._files[canonical_path(path)] = file

    def remove(self, path: PathLike) -> Optional[CodeFile]:
        return self._files.pop(canonical_path(path), None)

    def remove_under(self, directory: PathLike) -> List[CodeFile]:
        """Remove every entry located inside `directory`."""
        doomed = [p for p in self._files if is_within_dir(p, directory)]
        return [self._files.pop(p) for p in doomed]

    def get(self, path: PathLike) -> Optional[CodeFile]:
        return self._files.get(canonical_path(path))

    def values(self) -> List[CodeFile]:
        return list(self._files.values())

    def paths(self) -> List[Path]:
        return list(self._files)

    def snapshot(self) -> Mapping[Path, CodeFile]:
        return MappingProxyType(dict(self._files))

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return canonical_path(path) in self._files

    def __len__(self) -> int:
        return len(self._files)
