"""Runtime: translation table, content provider and provider chain.

Python 3.13+.
"""

from .provider import ContentXmlLocalizationProvider, LoadResult
from .rwlock import RWLock
from .service import LocalizationProvider, LocalizationService, StaticLocalizationProvider
from .table import TranslationTable

__all__ = [
    "ContentXmlLocalizationProvider",
    "LoadResult",
    "LocalizationProvider",
    "LocalizationService",
    "RWLock",
    "StaticLocalizationProvider",
    "TranslationTable",
]
