"""Content tree model, access protocol, events and importer.

Python 3.13+.
"""

from .accessor import ContentTreeAccessor
from .events import ContentEvent, ContentEventHandler, ContentEventHub, ContentEventSource
from .importer import ImportSummary, TranslationImporter
from .memory import InMemoryContentTree
from .model import (
    ContentNode,
    is_localization_content,
    make_container,
    make_item,
    make_settings,
)

__all__ = [
    "ContentEvent",
    "ContentEventHandler",
    "ContentEventHub",
    "ContentEventSource",
    "ContentNode",
    "ContentTreeAccessor",
    "ImportSummary",
    "InMemoryContentTree",
    "TranslationImporter",
    "is_localization_content",
    "make_container",
    "make_item",
    "make_settings",
]
