from __future__ import annotations

"""
Orchestrator – the single-threaded control loop.

    INITIALIZING → SCANNING → WATCHING → DRAINING → TERMINATED

SCANNING registers every configured root with the watcher, loads every
relevant file into the registry and performs the first merge. WATCHING then
consumes watcher events one at a time; each relevant registry mutation is
followed by one synchronous, full merge before the next event is taken.

The orchestrator is the only writer of the registry. Collaborators that need
to look at its contents go through `registry_snapshot()`.
"""

import enum
import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from filemerge.core.errors import ReadError, StartupError, WatchRegistrationError, WriteError
from filemerge.core.interfaces.language import LanguageProfileProtocol
from filemerge.core.interfaces.watch import WatchBackendProtocol
from filemerge.core.models import CodeFile, EventKind, RunMode, WatchEvent
from filemerge.core.report import WatchReport
from filemerge.io.walker import TreeWalker
from filemerge.io.writer import AtomicWriter
from filemerge.languages.registry import get_profile
from filemerge.logging.helpers import get_logger, trace_io
from filemerge.processing.transformer import SourceTransformer
from filemerge.registry import FileRegistry
from filemerge.rendering.merger import Merger
from filemerge.runtime.config import WatchConfig, check_encoding
from filemerge.utils.paths import PathLike, canonical_path, is_real_directory
from filemerge.watching.backend import NullWatchBackend, WatchdogBackend
from filemerge.watching.watcher import DirectoryWatcher


class OrchestratorState(enum.Enum):
    INITIALIZING = 'initializing'
    SCANNING = 'scanning'
    WATCHING = 'watching'
    DRAINING = 'draining'
    TERMINATED = 'terminated'


class Orchestrator:
    def __init__(
        self,
        *,
        roots: Sequence[PathLike],
        output: PathLike,
        profile: LanguageProfileProtocol,
        mode: RunMode = RunMode.WATCH,
        transformer: Optional[SourceTransformer] = None,
        merger: Optional[Merger] = None,
        watcher: Optional[DirectoryWatcher] = None,
        registry: Optional[FileRegistry] = None,
        walker: Optional[TreeWalker] = None,
        scan_workers: int = 1,
        report: Optional[WatchReport] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if not roots:
            raise StartupError('at least one source directory is required')
        self._log = logger or get_logger('runtime.orchestrator')
        self._roots: List[Path] = [canonical_path(r) for r in roots]
        self._output = canonical_path(output)
        self._profile = profile
        self._extension = profile.relevant_extension()
        self._mode = mode
        self._transformer = transformer or SourceTransformer(profile)
        self._merger = merger or Merger()
        self._walker = walker or TreeWalker()
        self._watcher = watcher or DirectoryWatcher(
            backend=NullWatchBackend() if mode is RunMode.ONCE else WatchdogBackend(),
            walker=self._walker,
        )
        self._registry = registry if registry is not None else FileRegistry()
        self._scan_workers = max(1, int(scan_workers))
        self.report = report or WatchReport()
        self._state = OrchestratorState.INITIALIZING

    @classmethod
    def from_config(
        cls,
        cfg: WatchConfig,
        *,
        backend: Optional[WatchBackendProtocol] = None,
        logger: Optional[logging.Logger] = None,
    ) -> 'Orchestrator':
        profile = get_profile(cfg.language)
        if profile is None:
            raise StartupError(f'unknown language {cfg.language!r}')
        encoding = check_encoding(cfg.encoding)
        if backend is None:
            backend = NullWatchBackend() if cfg.mode is RunMode.ONCE else WatchdogBackend()
        walker = TreeWalker()
        return cls(
            roots=cfg.roots,
            output=cfg.output,
            profile=profile,
            mode=cfg.mode,
            transformer=SourceTransformer(profile, rewrite_mode=cfg.rewrite_mode, encoding=encoding),
            merger=Merger(order=cfg.order, writer=AtomicWriter(encoding=encoding)),
            watcher=DirectoryWatcher(backend=backend, walker=walker),
            walker=walker,
            scan_workers=cfg.scan_workers,
            logger=logger,
        )

    # ------------------------------------------------------------------ #
    #  Accessors                                                          #
    # ------------------------------------------------------------------ #
    @property
    def state(self) -> OrchestratorState:
        return self._state

    @property
    def output(self) -> Path:
        return self._output

    @property
    def watcher(self) -> DirectoryWatcher:
        return self._watcher

    def registry_snapshot(self):
        return self._registry.snapshot()

    # ------------------------------------------------------------------ #
    #  Lifecycle                                                          #
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        """Scan, merge once, then watch until the watch set empties or the
        loop is stopped. In ONCE mode return right after the first merge."""
        try:
            self.start()
        except BaseException:
            self._terminate()
            raise
        if self._mode is RunMode.ONCE:
            self._terminate()
            return
        self.watch()

    def start(self) -> None:
        """Register every root, load every relevant file and merge once.

        Raises:
            StartupError: a root is missing or cannot be registered.
        """
        self._state = OrchestratorState.SCANNING
        self._watcher.start()
        self._log.info('scanning %s ...', ', '.join(str(r) for r in self._roots))

        per_root: List[List[Path]] = []
        for root in self._roots:
            if not root.is_dir():
                raise StartupError(f'source directory {root} does not exist or is not a directory')
            try:
                per_root.append(self._watcher.register_tree(root))
            except WatchRegistrationError as exc:
                raise StartupError(f'cannot watch {root}: {exc.reason}') from exc
        self.report.directories_registered = len(self._watcher.watched_directories())

        files: List[Path] = []
        seen = set()
        for dirs in per_root:
            for fp in self._walker.gather_files(dirs, self._extension, exclude=[self._output]):
                if fp not in seen:
                    seen.add(fp)
                    files.append(fp)
        self._load(files)
        self._log.info('done, %d file(s) registered.', len(self._registry))
        self.merge_now()

    def watch(self) -> None:
        self._state = OrchestratorState.WATCHING
        try:
            while True:
                event = self._watcher.next_event()
                if event is None:
                    break
                self.handle_event(event)
        except KeyboardInterrupt:
            self._log.info('interrupted, stopping watch loop.')
        finally:
            self._terminate()

    def stop(self) -> None:
        """Ask a running watch loop to return; safe from any thread."""
        self._watcher.cancel()

    def _terminate(self) -> None:
        self._state = OrchestratorState.DRAINING
        self._watcher.close()
        self.report.finish()
        self._state = OrchestratorState.TERMINATED
        self._log.debug('report: %s', self.report.to_json(indent=0))

    # ------------------------------------------------------------------ #
    #  Event handling                                                     #
    # ------------------------------------------------------------------ #
    def is_relevant(self, path: PathLike) -> bool:
        return Path(path).name.endswith(self._extension)

    def handle_event(self, event: WatchEvent) -> bool:
        """Apply one event to the registry; return True when a merge ran."""
        path = canonical_path(event.path)
        if path == self._output:
            return False
        self.report.add_event(event.kind.value)

        if event.kind is EventKind.CREATE and is_real_directory(path):
            return self._on_directory_created(path)
        if event.kind is EventKind.DELETE:
            return self._on_deleted(path)
        if event.kind in (EventKind.CREATE, EventKind.MODIFY):
            return self._on_file_changed(event.kind, path)

        self.report.events_ignored += 1
        return False

    def _on_directory_created(self, path: Path) -> bool:
        try:
            new_dirs = self._watcher.register_tree(path)
        except WatchRegistrationError as exc:
            self._log.warning('⚠  %s – skipped', exc)
            self.report.add_error(str(exc))
            return False
        self.report.directories_registered = len(self._watcher.watched_directories())
        files = self._walker.gather_files(new_dirs, self._extension, exclude=[self._output])
        loaded = self._load(f for f in files if f not in self._registry)
        if not loaded:
            return False
        return self.merge_now()

    def _on_deleted(self, path: Path) -> bool:
        removed = self._registry.remove_under(path)
        if not removed and not self.is_relevant(path):
            self.report.events_ignored += 1
            return False
        self._log.info('DELETE: %s', path)
        for cf in removed:
            if cf.path != path:
                self._log.info('  removed %s', cf.path)
        return self.merge_now()

    def _on_file_changed(self, kind: EventKind, path: Path) -> bool:
        if not self.is_relevant(path) or path.is_dir():
            self.report.events_ignored += 1
            return False
        if kind is EventKind.MODIFY and path not in self._registry:
            kind = EventKind.CREATE
        self._log.info('%s: %s', kind.name, path)
        cf = self._read(path)
        if cf is None:
            return False
        self._registry.put(path, cf)
        return self.merge_now()

    # ------------------------------------------------------------------ #
    #  Reading and merging                                                #
    # ------------------------------------------------------------------ #
    def _read(self, path: Path) -> Optional[CodeFile]:
        return self._record(path, self._try_transform(path))

    def _try_transform(self, path: Path) -> Union[CodeFile, ReadError]:
        try:
            return self._transformer.transform(path)
        except ReadError as exc:
            return exc

    def _record(self, path: Path, result: Union[CodeFile, ReadError]) -> Optional[CodeFile]:
        if isinstance(result, ReadError):
            self._log.error('✘ %s', result)
            self.report.read_errors += 1
            self.report.add_error(str(result))
            return None
        self.report.files_read += 1
        return result

    def _load(self, files: Iterable[Path]) -> int:
        """Transform and insert `files`, in order; return how many were loaded."""
        paths = list(files)
        if self._scan_workers > 1 and len(paths) > 1:
            with ThreadPoolExecutor(max_workers=self._scan_workers) as pool:
                results = list(pool.map(self._try_transform, paths))
        else:
            results = [self._try_transform(p) for p in paths]

        loaded = 0
        for path, result in zip(paths, results):
            cf = self._record(path, result)
            if cf is not None:
                self._registry.put(path, cf)
                loaded += 1
        return loaded

    def merge_now(self) -> bool:
        """Regenerate the output from the current registry contents."""
        files = self._registry.values()
        text = self._merger.merge(files)
        try:
            size = self._merger.write_output(self._output, text)
        except WriteError as exc:
            self._log.error('✘ %s – previous output kept', exc)
            self.report.write_errors += 1
            self.report.add_error(str(exc))
            return False
        self.report.merges += 1
        self.report.last_output_bytes = size
        self._log.info('merged %d file(s) → %s', len(files), self._output)
        trace_io(self._log, 'registry', paths=[str(p) for p in self._registry.paths()])
        return True
