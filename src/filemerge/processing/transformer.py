from __future__ import annotations

"""
SourceTransformer – turn one source file into a `CodeFile`.

Each line of the file is classified in order:

    1. package/namespace declaration → sets `declared_package`, dropped;
    2. import line (per language profile) → collected, dropped;
    3. anything else → visibility rewrite, kept.

Kept lines are re-joined with a single '\\n' each. Imports are rebuilt from
scratch on every call and deduplicated in first-seen order.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from filemerge.core.errors import ReadError
from filemerge.core.interfaces.language import LanguageProfileProtocol
from filemerge.core.models import CodeFile, RewriteMode
from filemerge.logging.helpers import get_logger, trace_io
from filemerge.processing.visibility import make_rewriter


def split_lines(text: str) -> List[str]:
    """Split on '\\n', '\\r\\n' and '\\r' only, dropping the final empty tail."""
    normalized = text.replace('\r\n', '\n').replace('\r', '\n')
    lines = normalized.split('\n')
    if lines and lines[-1] == '':
        lines.pop()
    return lines


class SourceTransformer:
    def __init__(
        self,
        profile: LanguageProfileProtocol,
        *,
        rewrite_mode: RewriteMode = RewriteMode.PREFIX,
        encoding: str = 'utf-8',
        errors: str = 'replace',
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._profile = profile
        self._mode = rewrite_mode
        self._encoding = encoding
        self._errors = errors
        self._log = logger or get_logger('processing.transformer')

    @property
    def profile(self) -> LanguageProfileProtocol:
        return self._profile

    def transform(self, path: Path) -> CodeFile:
        """Read `path` from disk and transform it.

        Raises:
            ReadError: the file cannot be opened, read or decoded.
        """
        trace_io(self._log, 'reading', path=str(path))
        try:
            text = Path(path).read_text(encoding=self._encoding, errors=self._errors)
        except (OSError, UnicodeError) as exc:
            raise ReadError(path, exc) from exc
        return self.transform_text(path, text)

    def transform_text(self, path: Path, text: str) -> CodeFile:
        profile = self._profile
        keyword = profile.package_keyword
        terminator = profile.statement_terminator
        rewriter = make_rewriter(self._mode, profile.visibility_rewrites)

        package = ''
        imports: Dict[str, None] = {}
        kept: List[str] = []

        for line in split_lines(text):
            if rewriter.at_code():
                if keyword and line.startswith(keyword):
                    package = self._parse_package(line[len(keyword):], terminator)
                    rewriter.advance(line)
                    continue
                if profile.is_import_line(line):
                    imports.setdefault(line, None)
                    rewriter.advance(line)
                    continue
            rewritten = rewriter.rewrite(line)
            if rewritten != line:
                self._log.debug('rewrote %s: %s', path, rewritten)
            rewriter.advance(line)
            kept.append(rewritten + '\n')

        return CodeFile(
            path=Path(path),
            declared_package=package,
            imports=tuple(imports),
            content=''.join(kept),
        )

    @staticmethod
    def _parse_package(rest: str, terminator: str) -> str:
        value = rest.strip()
        if terminator and value.endswith(terminator):
            value = value[:-len(terminator)].rstrip()
        return value
