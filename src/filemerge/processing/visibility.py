from __future__ import annotations
"""Visibility-qualifier rewriting.

Two strategies share one interface:

    - `PrefixRewriter` (default): plain `str.startswith` on the raw line. It
      does not look at context, so a qualified sequence at column 0 inside a
      block comment or a text block is rewritten as well.
    - `TokenizedRewriter`: keeps a small C-like lexical state across the lines
      of one file (block comments, text blocks, string and char literals) and
      only rewrites lines that start in plain code.

A rewriter instance is stateful per file; the transformer creates a new one
for every read.
"""

from typing import Optional, Sequence, Tuple

from filemerge.core.models import RewriteMode

Rewrites = Sequence[Tuple[str, str]]


def rewrite_prefix(line: str, rewrites: Rewrites) -> str:
    """Replace the first matching qualified prefix of `line`, if any."""
    for qualified, bare in rewrites:
        if line.startswith(qualified):
            return bare + line[len(qualified):]
    return line


class CLikeLineScanner:
    """Track whether each new line starts inside a comment or literal.

    Handles '//' and '/* */' comments, triple-quote text blocks, and single/double
    quoted literals with backslash escapes. Single-line literals are closed at
    the end of their line.
    """

    def __init__(self) -> None:
        self._in_block = False
        self._in_text_block = False

    @property
    def at_code(self) -> bool:
        """True when the next fed line starts outside comments and literals."""
        return not (self._in_block or self._in_text_block)

    def feed(self, line: str) -> None:
        i = 0
        n = len(line)
        quote = ''
        escape = False

        while i < n:
            ch = line[i]
            nxt = line[i + 1] if i + 1 < n else ''

            if self._in_block:
                if ch == '*' and nxt == '/':
                    self._in_block = False
                    i += 2
                else:
                    i += 1
                continue

            if self._in_text_block:
                if escape:
                    escape = False
                elif ch == '\\':
                    escape = True
                elif line.startswith('"""', i):
                    self._in_text_block = False
                    i += 3
                    continue
                i += 1
                continue

            if quote:
                if escape:
                    escape = False
                elif ch == '\\':
                    escape = True
                elif ch == quote:
                    quote = ''
                i += 1
                continue

            if ch == '/' and nxt == '/':
                return
            if ch == '/' and nxt == '*':
                self._in_block = True
                i += 2
                continue
            if line.startswith('"""', i):
                self._in_text_block = True
                i += 3
                continue
            if ch in ('"', "'"):
                quote = ch
            i += 1


class PrefixRewriter:
    def __init__(self, rewrites: Rewrites) -> None:
        self._rewrites = tuple(rewrites)

    def at_code(self) -> bool:
        return True

    def rewrite(self, line: str) -> str:
        return rewrite_prefix(line, self._rewrites)

    def advance(self, line: str) -> None:
        return None


class TokenizedRewriter:
    def __init__(self, rewrites: Rewrites, scanner: Optional[CLikeLineScanner] = None) -> None:
        self._rewrites = tuple(rewrites)
        self._scanner = scanner or CLikeLineScanner()

    def at_code(self) -> bool:
        return self._scanner.at_code

    def rewrite(self, line: str) -> str:
        if not self._scanner.at_code:
            return line
        return rewrite_prefix(line, self._rewrites)

    def advance(self, line: str) -> None:
        self._scanner.feed(line)


def make_rewriter(mode: RewriteMode, rewrites: Rewrites):
    if mode is RewriteMode.TOKENIZED:
        return TokenizedRewriter(rewrites)
    return PrefixRewriter(rewrites)
