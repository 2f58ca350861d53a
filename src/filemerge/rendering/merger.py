from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from filemerge.core.models import CodeFile, MergeOrder
from filemerge.io.writer import AtomicWriter
from filemerge.logging.helpers import get_logger


class Merger:
    """Combine registered files into one text artifact.

    Output layout: the deduplicated import lines (one per line), followed by
    every file's transformed content, back to back. No header, footer or
    separator is emitted.
    """

    def __init__(
        self,
        *,
        order: MergeOrder = MergeOrder.ENCOUNTER,
        writer: Optional[AtomicWriter] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._order = order
        self._writer = writer or AtomicWriter()
        self._log = logger or get_logger('render.merger')

    @property
    def order(self) -> MergeOrder:
        return self._order

    def ordered_files(self, files: Iterable[CodeFile]) -> List[CodeFile]:
        seq = list(files)
        if self._order is MergeOrder.SORTED:
            seq.sort(key=lambda f: str(f.path))
        return seq

    def collect_imports(self, files: Sequence[CodeFile]) -> List[str]:
        seen: Dict[str, None] = {}
        for f in files:
            for line in f.imports:
                seen.setdefault(line, None)
        imports = list(seen)
        if self._order is MergeOrder.SORTED:
            imports.sort()
        return imports

    def merge(self, files: Iterable[CodeFile]) -> str:
        seq = self.ordered_files(files)
        parts: List[str] = [f'{line}\n' for line in self.collect_imports(seq)]
        parts.extend(f.content for f in seq)
        return ''.join(parts)

    def write_output(self, path: Path, text: str) -> int:
        """Write `text` to `path` atomically; raises WriteError on failure."""
        return self._writer.write(path, text)
