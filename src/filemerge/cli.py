from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import NoReturn, Optional, Sequence

from filemerge.core.errors import StartupError
from filemerge.core.interfaces.watch import WatchBackendProtocol
from filemerge.core.models import RunMode
from filemerge.logging.factory import DefaultLoggerFactory
from filemerge.logging.helpers import get_logger
from filemerge.parsing.parser import _build_parser
from filemerge.runtime.config import WatchConfig, build_config
from filemerge.runtime.orchestrator import Orchestrator


logger = get_logger('filemerge')


def _configure_logging(enable_json: bool, verbose: bool = False, watching: bool = False) -> None:
    """Configure process-wide logging once, either JSON or plain text."""
    global logger
    factory = DefaultLoggerFactory.for_run(json_logs=enable_json, verbose=verbose, watching=watching)
    logger = factory.get_logger('filemerge')


def run(
    source_roots: Sequence[str | Path],
    output_path: str | Path,
    mode: RunMode | str = RunMode.WATCH,
    *,
    backend: Optional[WatchBackendProtocol] = None,
    **options,
) -> Orchestrator:
    """Programmatic entry point: scan, merge and (in watch mode) keep watching.

    Extra keyword options map onto `WatchConfig` fields (language, order,
    rewrite_mode, encoding, scan_workers).

    Raises:
        StartupError: a root is missing or the configuration is invalid.
    """
    if not source_roots:
        raise StartupError('at least one source directory is required')
    cfg = WatchConfig(
        roots=tuple(Path(r) for r in source_roots),
        output=Path(output_path),
        mode=RunMode(mode),
        **options,
    )
    orchestrator = Orchestrator.from_config(cfg, backend=backend)
    orchestrator.run()
    return orchestrator


class FileMerge:
    """Top-level façade for command-style execution."""

    @staticmethod
    def run(argv: Sequence[str]) -> Orchestrator:
        """Parse argv-like tokens, configure logging and run to completion."""
        ns = _build_parser().parse_args(list(argv))
        json_logs = bool(ns.json_logs) or os.getenv('FILEMERGE_JSON_LOGS') == '1'
        _configure_logging(json_logs, bool(ns.verbose), ns.mode == RunMode.WATCH.value)
        cfg = build_config(ns)
        orchestrator = Orchestrator.from_config(cfg)
        orchestrator.run()
        report = orchestrator.report
        logger.info(
            'stopped: %d merge(s), %d event(s), %d read error(s), %d write error(s)',
            report.merges, report.events_total, report.read_errors, report.write_errors,
        )
        return orchestrator


def main() -> NoReturn:
    """Entry point for `filemerge` and `python -m filemerge`."""
    try:
        FileMerge.run(sys.argv[1:])
        raise SystemExit(0)
    except StartupError as exc:
        logger.error('%s', exc)
        raise SystemExit(1)
    except KeyboardInterrupt:
        raise SystemExit(0)
    except BrokenPipeError:
        raise SystemExit(0)
    except Exception as exc:
        if os.getenv('DEBUG') == '1':
            raise
        logger.error('Unexpected error: %s', exc)
        raise SystemExit(1)


if __name__ == '__main__':
    main()
