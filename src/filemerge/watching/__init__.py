from filemerge.watching.backend import NullWatchBackend, WatchdogBackend
from filemerge.watching.watcher import DirectoryWatcher

__all__ = ['DirectoryWatcher', 'NullWatchBackend', 'WatchdogBackend']
