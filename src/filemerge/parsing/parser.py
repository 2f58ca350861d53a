# filemerge/parsing/parser.py
from __future__ import annotations

import argparse

from filemerge.core.models import RunMode


def _build_parser() -> argparse.ArgumentParser:
    """
    Build the CLI argument parser.

    Notes:
        - The positional form `SOURCES OUTPUT [once]` is kept so existing build
          scripts calling `filemerge 'src|lib' Main.java once` keep working.
        - Environment defaults are applied later by `build_config`; flags win.
    """
    p = argparse.ArgumentParser(
        prog="filemerge",
        formatter_class=argparse.RawTextHelpFormatter,
        usage="%(prog)s SOURCES OUTPUT [watch|once] [OPTIONS]",
        description=(
            "filemerge – watch source trees and keep a single merged source file up to date\n"
            "Package lines are dropped, imports are deduplicated and top-level public\n"
            "qualifiers are removed so every declaration fits in one compilation unit."
        ),
    )

    g_src = p.add_argument_group("Sources & output")
    g_lang = p.add_argument_group("Language & merging")
    g_misc = p.add_argument_group("Miscellaneous")

    g_src.add_argument(
        "sources",
        metavar="SOURCES",
        help=(
            "Directory to scan and watch recursively. Several roots may be given "
            "in one token separated by '|' (e.g. 'src/main/java|src/gen')."
        ),
    )
    g_src.add_argument(
        "output",
        metavar="OUTPUT",
        help="File rewritten on every merge. Parent directories are created.",
    )
    g_src.add_argument(
        "mode",
        nargs="?",
        choices=[m.value for m in RunMode],
        default=RunMode.WATCH.value,
        help="'watch' (default) keeps running; 'once' merges a single time and exits.",
    )
    g_src.add_argument(
        "-a",
        "--add-root",
        metavar="DIR",
        action="append",
        dest="add_roots",
        help="Additional root directory. Repeatable; '|' separators are honored too.",
    )

    g_lang.add_argument(
        "-l",
        "--language",
        metavar="NAME",
        dest="language",
        default=None,
        help="Language profile (default: $FILEMERGE_LANGUAGE or 'java').",
    )
    g_lang.add_argument(
        "--sort",
        action="store_true",
        dest="sort",
        help=(
            "Sort imports and files lexicographically for byte-reproducible output.\n"
            "Without it, files keep discovery order and imports first-seen order\n"
            "(or $FILEMERGE_ORDER=sorted)."
        ),
    )
    g_lang.add_argument(
        "--tokenized",
        action="store_true",
        dest="tokenized",
        help=(
            "Only rewrite declarations that start in plain code, never inside\n"
            "block comments, text blocks or string literals."
        ),
    )
    g_lang.add_argument(
        "--encoding",
        metavar="ENC",
        dest="encoding",
        default="utf-8",
        help="Encoding used to read sources and write the output (default: utf-8).",
    )

    g_misc.add_argument(
        "-j",
        "--scan-workers",
        metavar="N",
        type=int,
        dest="scan_workers",
        default=1,
        help="Threads used to read files during the initial scan (default: 1).",
    )
    g_misc.add_argument(
        "--json-logs",
        action="store_true",
        dest="json_logs",
        help="Emit logs as JSON lines (or $FILEMERGE_JSON_LOGS=1).",
    )
    g_misc.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        dest="verbose",
        help="Debug logging; combine with FILEMERGE_TRACE_IO=1 for per-file traces.",
    )
    return p
