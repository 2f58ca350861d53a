from filemerge.languages.profiles import JAVA, KOTLIN, LanguageProfile
from filemerge.languages.registry import (
    DEFAULT_LANGUAGE,
    available_profiles,
    get_profile,
    register_profile,
)

__all__ = [
    'DEFAULT_LANGUAGE',
    'JAVA',
    'KOTLIN',
    'LanguageProfile',
    'available_profiles',
    'get_profile',
    'register_profile',
]
