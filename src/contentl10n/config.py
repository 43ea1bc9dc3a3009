"""Provider configuration.

Provides a single frozen dataclass holding the feature flags and defaults
that control whether and how the content provider is registered.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from contentl10n.constants import (
    DEFAULT_MASTER_LANGUAGE,
    ENABLED_CONFIG_KEY,
    IS_PRIMARY_PROVIDER_CONFIG_KEY,
    MASTER_LANGUAGE_CONFIG_KEY,
    SITE_ID_CONFIG_KEY,
)

__all__ = ["ProviderConfig", "parse_bool"]


def parse_bool(value: object) -> bool:
    """Parse a settings flag leniently.

    Only 'true' (any case, surrounding whitespace ignored) and True are
    true; anything else, including unparseable text, is false.

    Example:
        >>> parse_bool(" True ")
        True
        >>> parse_bool("yes")
        False
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Immutable configuration for the content localization provider.

    Constructing ``ProviderConfig()`` with no arguments produces a disabled
    configuration: the host application's own translations are used
    untouched.

    Attributes:
        enabled: Register the provider and subscribe to content events
            (default: False).
        is_primary_provider: Consult this provider before all others
            (default: False, consulted last as fallback).
        master_language: Language used when no other language resolves
            (default: 'en').
        site_id: Site whose translation root is used; None selects the
            default site.

    Example:
        >>> config = ProviderConfig.from_settings({
        ...     "ContentTranslationProvider:Enabled": "true",
        ...     "ContentTranslationProvider:IsPrimaryProvider": "true",
        ... })
        >>> config.enabled, config.is_primary_provider
        (True, True)
    """

    enabled: bool = False
    is_primary_provider: bool = False
    master_language: str = DEFAULT_MASTER_LANGUAGE
    site_id: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If master_language is empty or site_id is blank
        """
        if not self.master_language or not self.master_language.strip():
            msg = "master_language must be a non-empty culture code"
            raise ValueError(msg)
        if self.site_id is not None and not self.site_id.strip():
            msg = "site_id must be None or non-blank"
            raise ValueError(msg)

    @classmethod
    def from_settings(cls, settings: Mapping[str, object]) -> ProviderConfig:
        """Build configuration from application settings.

        Reads the ``ContentTranslationProvider:*`` keys; missing keys keep
        their defaults.
        """
        master = settings.get(MASTER_LANGUAGE_CONFIG_KEY)
        site_id = settings.get(SITE_ID_CONFIG_KEY)
        return cls(
            enabled=parse_bool(settings.get(ENABLED_CONFIG_KEY)),
            is_primary_provider=parse_bool(settings.get(IS_PRIMARY_PROVIDER_CONFIG_KEY)),
            master_language=str(master).strip() if master else DEFAULT_MASTER_LANGUAGE,
            site_id=str(site_id).strip() if site_id else None,
        )

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> ProviderConfig:
        """Build configuration from environment variables.

        Settings keys map to variable names with ':' replaced by '__',
        e.g. ``ContentTranslationProvider__Enabled=true``.
        """
        source = os.environ if environ is None else environ
        keys = (
            ENABLED_CONFIG_KEY,
            IS_PRIMARY_PROVIDER_CONFIG_KEY,
            MASTER_LANGUAGE_CONFIG_KEY,
            SITE_ID_CONFIG_KEY,
        )
        settings = {
            key: source[env_name]
            for key in keys
            if (env_name := key.replace(":", "__")) in source
        }
        return cls.from_settings(settings)
