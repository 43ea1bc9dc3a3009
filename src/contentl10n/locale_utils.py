"""Locale utilities for culture codes, display names and fallback chains.

Centralizes culture-code normalization used throughout the codebase so
that document ids, table keys and lookup requests agree on one form.

Python 3.13+.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import TYPE_CHECKING

from babel.core import UnknownLocaleError

if TYPE_CHECKING:
    from babel import Locale

    from contentl10n.types import LanguageCode

__all__ = [
    "Language",
    "fallback_chain",
    "get_babel_locale",
    "get_display_name",
    "locale_key",
    "normalize_locale",
]


@dataclass(frozen=True, slots=True)
class Language:
    """A language a deployment serves translations in.

    Attributes:
        code: Culture code as stored on the content variant (e.g., 'fr-CA')
        name: English display name (e.g., 'French (Canada)'); empty when
            CLDR does not know the culture
    """

    code: LanguageCode
    name: str

    @classmethod
    def from_code(cls, code: LanguageCode) -> Language:
        """Build a Language with its CLDR English display name."""
        return cls(code=code, name=get_display_name(code) or "")

    @property
    def is_complete(self) -> bool:
        """True when both code and display name are present."""
        return bool(self.code) and bool(self.name)

    @property
    def key(self) -> str:
        """Normalized lookup form of the code."""
        return locale_key(self.code)


def normalize_locale(locale_code: str) -> str:
    """Convert BCP-47 culture code to POSIX format for Babel.

    Example:
        >>> normalize_locale("fr-CA")
        'fr_CA'
        >>> normalize_locale("en")
        'en'
    """
    return locale_code.strip().replace("-", "_")


def locale_key(locale_code: str) -> str:
    """Normalize a culture code for use as a table key.

    Case-insensitive and separator-insensitive: 'fr-CA', 'fr_ca' and
    'FR-ca' all map to 'fr_ca'.
    """
    return normalize_locale(locale_code).lower()


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_locale(locale_code))


def get_display_name(locale_code: str) -> str | None:
    """Return the English display name of a culture, or None if unknown.

    Example:
        >>> get_display_name("fr")
        'French'
        >>> get_display_name("xx-invalid") is None
        True
    """
    if not locale_code or not locale_code.strip():
        return None
    try:
        locale = get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError, TypeError):
        return None
    return locale.english_name or None


def fallback_chain(
    locale_code: str, master_language: str | None = None
) -> tuple[str, ...]:
    """Build the resource-bundle fallback chain for a culture.

    The chain runs from the most specific culture through its parents to
    the master language. All entries are in locale_key() form and unique.

    Example:
        >>> fallback_chain("zh-Hant-TW", "en")
        ('zh_hant_tw', 'zh_hant', 'zh', 'en')
        >>> fallback_chain("fr", "fr")
        ('fr',)
    """
    chain: list[str] = []
    key = locale_key(locale_code) if locale_code else ""
    if key:
        parts = key.split("_")
        chain.extend("_".join(parts[:end]) for end in range(len(parts), 0, -1))
    if master_language:
        chain.append(locale_key(master_language))
    return tuple(dict.fromkeys(part for part in chain if part))
