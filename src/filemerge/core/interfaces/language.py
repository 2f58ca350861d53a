from __future__ import annotations

from typing import Protocol, Sequence, Tuple, runtime_checkable


@runtime_checkable
class LanguageProfileProtocol(Protocol):
    """Per-language knowledge the transformer and the orchestrator rely on.

    `relevant_extension` and `is_import_line` are the polymorphic seam; the
    attributes carry the fixed text rules used by the transformer.
    """

    name: str
    package_keyword: str
    statement_terminator: str
    visibility_rewrites: Sequence[Tuple[str, str]]

    def relevant_extension(self) -> str:
        ...

    def is_import_line(self, line: str) -> bool:
        ...
