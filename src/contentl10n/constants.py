"""Shared constants for contentl10n.

Constants are grouped by domain:
- Document format: wire-level names of the translation document
- Provider registration: names and settings keys
- Distributed signaling: event identifier
- Depth limits: recursion protection for the tree walk

Python 3.13+. Zero external dependencies.
"""

from uuid import UUID

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Document format
    "ROOT_ELEMENT",
    "LANGUAGE_ELEMENT",
    "LANGUAGE_NAME_ATTRIBUTE",
    "LANGUAGE_ID_ATTRIBUTE",
    "BACKUP_XML",
    "KEY_SEPARATOR",
    # Provider registration
    "PROVIDER_NAME",
    "CONFIG_KEY_PREFIX",
    "ENABLED_CONFIG_KEY",
    "IS_PRIMARY_PROVIDER_CONFIG_KEY",
    "MASTER_LANGUAGE_CONFIG_KEY",
    "SITE_ID_CONFIG_KEY",
    "DEFAULT_MASTER_LANGUAGE",
    # Distributed signaling
    "TRANSLATIONS_UPDATED_EVENT_ID",
    # Depth limits
    "MAX_DEPTH",
]

# ============================================================================
# DOCUMENT FORMAT
# ============================================================================

ROOT_ELEMENT: str = "languages"
LANGUAGE_ELEMENT: str = "language"
LANGUAGE_NAME_ATTRIBUTE: str = "name"
LANGUAGE_ID_ATTRIBUTE: str = "id"

# Served when the tree walk fails. Must always parse.
BACKUP_XML: bytes = b"<languages></languages>"

KEY_SEPARATOR: str = "/"

# ============================================================================
# PROVIDER REGISTRATION
# ============================================================================

PROVIDER_NAME: str = "ContentXmlLocalizationProvider"

CONFIG_KEY_PREFIX: str = "ContentTranslationProvider:"
ENABLED_CONFIG_KEY: str = CONFIG_KEY_PREFIX + "Enabled"
IS_PRIMARY_PROVIDER_CONFIG_KEY: str = CONFIG_KEY_PREFIX + "IsPrimaryProvider"
MASTER_LANGUAGE_CONFIG_KEY: str = CONFIG_KEY_PREFIX + "MasterLanguage"
SITE_ID_CONFIG_KEY: str = CONFIG_KEY_PREFIX + "SiteId"

DEFAULT_MASTER_LANGUAGE: str = "en"

# ============================================================================
# DISTRIBUTED SIGNALING
# ============================================================================

# Shared by every process of a deployment; the originator id, not this
# value, distinguishes the raiser.
TRANSLATIONS_UPDATED_EVENT_ID: UUID = UUID("9674113d-5135-49ff-8d2b-80ee6ae8f9e9")

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum container nesting walked by the serializer.
# Translation trees are rarely deeper than 5 levels; anything beyond 100
# is a cycle in the store or malformed content.
MAX_DEPTH: int = 100
