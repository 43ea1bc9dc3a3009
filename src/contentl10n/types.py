"""Type aliases for the content localization domain.

Provides semantic type aliases used throughout the package and by user
code when annotating provider call sites.

Python 3.13+. Zero external dependencies.
"""

from typing import TypeAlias

__all__ = [
    "ContentId",
    "LanguageCode",
    "LookupKey",
    "OriginatorId",
    "SiteId",
]

ContentId: TypeAlias = int
"""Identifier of a node in the content tree."""

LanguageCode: TypeAlias = str
"""Culture code as stored on a language variant (e.g., 'en', 'fr-CA')."""

LookupKey: TypeAlias = str
"""Slash-separated translation key (e.g., '/common/hello')."""

SiteId: TypeAlias = str
"""Identifier of a site definition."""

OriginatorId: TypeAlias = str
"""Opaque identifier of the process raising a distributed signal."""
