"""Localization service: an ordered chain of providers.

get_string() asks each provider in order and returns the first hit. The
content provider is appended (consulted after the host's own
translations) or inserted first when configured as primary provider.

Thread Safety:
    The chain is guarded by an RWLock: lookups share it, registration
    takes it exclusively. Provider lookups run on a snapshot of the chain,
    outside the lock.

Python 3.13+.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from contentl10n.diagnostics import Diagnostic, DiagnosticCode, ProviderRegistrationError
from contentl10n.locale_utils import fallback_chain, locale_key
from contentl10n.naming import normalize_lookup_key
from contentl10n.runtime.rwlock import RWLock

if TYPE_CHECKING:
    from collections.abc import Mapping

    from contentl10n.types import LanguageCode, LookupKey

__all__ = ["LocalizationProvider", "LocalizationService", "StaticLocalizationProvider"]

logger = logging.getLogger(__name__)


@runtime_checkable
class LocalizationProvider(Protocol):
    """Anything that can answer a translation lookup."""

    @property
    def name(self) -> str:
        """Unique registration name."""
        ...

    def translate(self, key: str, language: LanguageCode | None = None) -> str | None:
        """Translation for key in language, or None."""
        ...


class StaticLocalizationProvider:
    """Provider over a fixed mapping, for host-default translations.

    Example:
        >>> defaults = StaticLocalizationProvider(
        ...     "defaults", {"en": {"/common/hello": "Hello"}}, master_language="en"
        ... )
        >>> defaults.translate("common/hello", "en-GB")
        'Hello'
    """

    __slots__ = ("_master_language", "_name", "_strings")

    def __init__(
        self,
        name: str,
        strings: Mapping[LanguageCode, Mapping[str, str]],
        *,
        master_language: LanguageCode | None = None,
    ) -> None:
        if not name:
            msg = "Provider name must be non-empty"
            raise ValueError(msg)
        self._name = name
        self._master_language = master_language
        self._strings = MappingProxyType(
            {
                locale_key(language): MappingProxyType(
                    {normalize_lookup_key(key): value for key, value in entries.items()}
                )
                for language, entries in strings.items()
            }
        )

    @property
    def name(self) -> str:
        return self._name

    def translate(self, key: str, language: LanguageCode | None = None) -> str | None:
        normalized = normalize_lookup_key(key)
        for candidate in fallback_chain(language or "", self._master_language):
            strings = self._strings.get(candidate)
            if strings is not None and normalized in strings:
                return strings[normalized]
        return None


class LocalizationService:
    """Ordered provider chain with first-hit lookup.

    Example:
        >>> service = LocalizationService([defaults])
        >>> service.insert_provider(content_provider)
        >>> service.get_string("/common/hello", "fr")
        'Salut'
    """

    __slots__ = ("_lock", "_providers")

    def __init__(self, providers: list[LocalizationProvider] | None = None) -> None:
        """Initialize service.

        Raises:
            ProviderRegistrationError: If two providers share a name
        """
        self._lock = RWLock()
        self._providers: list[LocalizationProvider] = []
        for provider in providers or ():
            self.add_provider(provider)

    @property
    def providers(self) -> tuple[LocalizationProvider, ...]:
        """Snapshot of the chain in lookup order."""
        with self._lock.read():
            return tuple(self._providers)

    @property
    def provider_names(self) -> tuple[str, ...]:
        """Names of the chain in lookup order."""
        return tuple(provider.name for provider in self.providers)

    def add_provider(self, provider: LocalizationProvider) -> None:
        """Append a provider (consulted last).

        Raises:
            ProviderRegistrationError: If a provider with that name exists
        """
        with self._lock.write():
            self._check_unique(provider.name)
            self._providers.append(provider)
        logger.info("Localization provider '%s' added", provider.name)

    def insert_provider(self, provider: LocalizationProvider, index: int = 0) -> None:
        """Insert a provider at a position (default: first).

        Raises:
            ProviderRegistrationError: If a provider with that name exists
        """
        with self._lock.write():
            self._check_unique(provider.name)
            self._providers.insert(index, provider)
        logger.info("Localization provider '%s' inserted at %d", provider.name, index)

    def remove_provider(self, name: str) -> bool:
        """Remove a provider by name.

        Returns:
            True if a provider was removed
        """
        with self._lock.write():
            for position, provider in enumerate(self._providers):
                if provider.name == name:
                    del self._providers[position]
                    break
            else:
                return False
        logger.info("Localization provider '%s' removed", name)
        return True

    def get_provider(self, name: str) -> LocalizationProvider | None:
        """Registered provider with that name, or None."""
        with self._lock.read():
            return next((p for p in self._providers if p.name == name), None)

    def get_string(self, key: str, language: LanguageCode | None = None) -> str | None:
        """First translation any provider has for key in language."""
        for provider in self.providers:
            value = provider.translate(key, language)
            if value is not None:
                return value
        logger.debug("No provider has '%s' for '%s'", key, language)
        return None

    def get_string_or_default(
        self, key: LookupKey, language: LanguageCode | None = None, default: str = ""
    ) -> str:
        """Like get_string() but returns default on a miss."""
        value = self.get_string(key, language)
        return default if value is None else value

    def _check_unique(self, name: str) -> None:
        if any(provider.name == name for provider in self._providers):
            raise ProviderRegistrationError(
                Diagnostic(
                    code=DiagnosticCode.PROVIDER_ALREADY_REGISTERED,
                    message=f"A localization provider named '{name}' is already registered",
                )
            )
