from __future__ import annotations

import argparse
import codecs
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Tuple

from filemerge.core.errors import StartupError
from filemerge.core.models import MergeOrder, RewriteMode, RunMode
from filemerge.languages.registry import DEFAULT_LANGUAGE, available_profiles, get_profile

ROOT_SEPARATOR = '|'


@dataclass(frozen=True)
class WatchConfig:
    """Immutable run configuration resolved from CLI flags and environment."""
    roots: Tuple[Path, ...]
    output: Path
    mode: RunMode = RunMode.WATCH
    language: str = DEFAULT_LANGUAGE
    order: MergeOrder = MergeOrder.ENCOUNTER
    rewrite_mode: RewriteMode = RewriteMode.PREFIX
    encoding: str = 'utf-8'
    scan_workers: int = 1
    json_logs: bool = False
    verbose: bool = False


def split_roots(tokens: Sequence[str] | None) -> List[Path]:
    """Expand root tokens, each possibly holding several '|'-separated paths."""
    roots: List[Path] = []
    for tok in tokens or ():
        for part in (tok or '').split(ROOT_SEPARATOR):
            part = part.strip()
            if part:
                roots.append(Path(part))
    return roots


def check_encoding(name: str) -> str:
    """Return the codec's canonical name.

    Raises:
        StartupError: no codec is registered under `name`.
    """
    try:
        return codecs.lookup(name).name
    except LookupError:
        raise StartupError(f'unknown encoding {name!r}') from None


def _env_flag(env: Mapping[str, str], name: str) -> bool:
    return env.get(name, '') == '1'


def build_config(ns: argparse.Namespace, env: Optional[Mapping[str, str]] = None) -> WatchConfig:
    """Resolve a parsed namespace (and environment defaults) into a WatchConfig.

    Raises:
        StartupError: no root was given or the language is unknown.
    """
    env = os.environ if env is None else env

    roots = split_roots([ns.sources, *(ns.add_roots or [])])
    if not roots:
        raise StartupError('at least one source directory is required')

    language = (ns.language or env.get('FILEMERGE_LANGUAGE') or DEFAULT_LANGUAGE).strip().lower()
    if get_profile(language) is None:
        raise StartupError(
            f'unknown language {language!r} (available: {", ".join(available_profiles())})'
        )

    if ns.sort:
        order = MergeOrder.SORTED
    else:
        raw_order = (env.get('FILEMERGE_ORDER') or MergeOrder.ENCOUNTER.value).strip().lower()
        try:
            order = MergeOrder(raw_order)
        except ValueError:
            raise StartupError(f'invalid FILEMERGE_ORDER {raw_order!r}') from None

    return WatchConfig(
        roots=tuple(roots),
        output=Path(ns.output),
        mode=RunMode(ns.mode),
        language=language,
        order=order,
        rewrite_mode=RewriteMode.TOKENIZED if ns.tokenized else RewriteMode.PREFIX,
        encoding=check_encoding(ns.encoding),
        scan_workers=max(1, int(ns.scan_workers or 1)),
        json_logs=bool(ns.json_logs) or _env_flag(env, 'FILEMERGE_JSON_LOGS'),
        verbose=bool(ns.verbose),
    )
