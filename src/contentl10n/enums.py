"""Enumerations for contentl10n type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.

Python 3.13+.
"""

from enum import StrEnum


class NodeKind(StrEnum):
    """Type tag of a content node.

    StrEnum provides automatic string conversion: str(NodeKind.GENERIC) == "generic"
    """

    GENERIC = "generic"
    """Any content the localization subsystem does not interpret."""

    TRANSLATION_CONTAINER = "translation_container"
    """Namespace level; becomes a nested element in the document."""

    TRANSLATION_ITEM = "translation_item"
    """Leaf key/value pair; becomes a text element in the document."""

    SETTINGS = "settings"
    """Settings holder pointing at the translation root (e.g., a start page)."""


class ChildOrder(StrEnum):
    """Ordering rule a parent applies to its children."""

    ALPHABETICAL = "alphabetical"
    CREATION = "creation"


class ContentEventKind(StrEnum):
    """Local content mutation events."""

    PUBLISHED = "published"
    MOVED = "moved"
    DELETED = "deleted"
    DELETED_LANGUAGE = "deleted_language"


class ProviderState(StrEnum):
    """Lifecycle state of the invalidation coordinator."""

    UNINITIALIZED = "uninitialized"
    DISABLED = "disabled"
    LOADING = "loading"
    LOADED = "loaded"
    RELOADING = "reloading"


class LoadStatus(StrEnum):
    """Outcome of a provider load."""

    SUCCESS = "success"
    """Tree walked and parsed; the new table is live."""

    EMPTY = "empty"
    """No translation root configured; an empty table is live."""

    FAILED = "failed"
    """Walk or parse failed; the previous table (or an empty one) is live."""


__all__ = [
    "ChildOrder",
    "ContentEventKind",
    "LoadStatus",
    "NodeKind",
    "ProviderState",
]
