"""contentl10n - content-managed translations with cluster-wide invalidation.

Editors maintain UI translations as ordinary content: a translation root
holding containers (sections) and items (strings), one language branch
per culture. The content provider serializes that subtree to an XML
translation document, serves lookups from an immutable table, and
reloads it on every node when translation content changes.

Public API:
    ContentXmlLocalizationProvider - Lookups over translation content
    LocalizationService - Ordered provider chain
    InvalidationCoordinator - Event-driven, cluster-wide reloads
    TranslationTreeSerializer - Translation subtree to XML document
    ProviderConfig - Feature flags and defaults
    derive_key / lookup_key - Key derivation

Exceptions:
    LocalizationError - Base exception class
    TransientStoreError, MalformedDataError, ConfigurationError

Submodules:
    contentl10n.content - Node model, store protocol, in-memory tree, events, importer
    contentl10n.serialization - Document writer and value types
    contentl10n.runtime - Translation table, provider, service
    contentl10n.sync - Signal channel and invalidation coordinator
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .config import ProviderConfig
from .diagnostics import (
    ConfigurationError,
    LocalizationError,
    MalformedDataError,
    NamingCollisionWarning,
    TransientStoreError,
)
from .naming import derive_key, lookup_key
from .runtime import ContentXmlLocalizationProvider, LocalizationService
from .serialization import TranslationTreeSerializer
from .sync import InvalidationCoordinator

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("contentl10n")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ConfigurationError",
    "ContentXmlLocalizationProvider",
    "InvalidationCoordinator",
    "LocalizationError",
    "LocalizationService",
    "MalformedDataError",
    "NamingCollisionWarning",
    "ProviderConfig",
    "TransientStoreError",
    "TranslationTreeSerializer",
    "__version__",
    "derive_key",
    "lookup_key",
]
