from __future__ import annotations

"""
Minimal language profile registry.

- `register_profile(name, factory)`
- `get_profile(name)`
- `available_profiles()`

Built-in profiles are registered at import time; third parties may register
their own factories before the CLI resolves its configuration.
"""

from typing import Callable, Dict, List, Optional

from filemerge.core.interfaces.language import LanguageProfileProtocol
from filemerge.languages.profiles import JAVA, KOTLIN

DEFAULT_LANGUAGE = 'java'

_PROFILE_FACTORIES: Dict[str, Callable[[], LanguageProfileProtocol]] = {}


def _key(name: Optional[str]) -> str:
    return (name or '').strip().lower()


def register_profile(name: str, factory: Callable[[], LanguageProfileProtocol]) -> None:
    key = _key(name)
    if not key:
        raise ValueError('language profile name must be non-empty')
    _PROFILE_FACTORIES[key] = factory


def get_profile(name: str) -> Optional[LanguageProfileProtocol]:
    factory = _PROFILE_FACTORIES.get(_key(name))
    return factory() if factory is not None else None


def available_profiles() -> List[str]:
    return sorted(_PROFILE_FACTORIES)


register_profile('java', lambda: JAVA)
register_profile('kotlin', lambda: KOTLIN)
register_profile('kt', lambda: KOTLIN)
