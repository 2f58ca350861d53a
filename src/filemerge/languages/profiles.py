from __future__ import annotations

"""Built-in language profiles.

A profile knows which files are relevant, which lines are imports, how the
package/namespace declaration starts and which top-level qualified
declarations must lose their visibility qualifier once merged.
"""

import re
from dataclasses import dataclass
from typing import Pattern, Tuple

from filemerge.core.interfaces.language import LanguageProfileProtocol


@dataclass(frozen=True)
class LanguageProfile(LanguageProfileProtocol):
    name: str
    extension: str
    package_keyword: str
    statement_terminator: str
    import_pattern: Pattern[str]
    visibility_rewrites: Tuple[Tuple[str, str], ...] = ()

    def relevant_extension(self) -> str:
        return self.extension

    def is_import_line(self, line: str) -> bool:
        return bool(self.import_pattern.match(line))


# Longest prefixes first; matching is plain `str.startswith`.
JAVA_VISIBILITY_REWRITES: Tuple[Tuple[str, str], ...] = (
    ("public final class", "final class"),
    ("public abstract class", "abstract class"),
    ("public class", "class"),
    ("public interface", "interface"),
    ("public enum", "enum"),
    ("public record", "record"),
)

JAVA = LanguageProfile(
    name="java",
    extension=".java",
    package_keyword="package ",
    statement_terminator=";",
    import_pattern=re.compile(r"^\s*import\s"),
    visibility_rewrites=JAVA_VISIBILITY_REWRITES,
)

KOTLIN = LanguageProfile(
    name="kotlin",
    extension=".kt",
    package_keyword="package ",
    statement_terminator="",
    import_pattern=re.compile(r"^\s*import\s"),
)
