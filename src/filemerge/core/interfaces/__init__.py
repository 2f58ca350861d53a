from .language import LanguageProfileProtocol
from .watch import EventSink, WatchBackendProtocol

__all__ = [
    'EventSink',
    'LanguageProfileProtocol',
    'WatchBackendProtocol',
]
