"""Translation key derivation.

Keys are the element names of the translation document and the segments
of lookup keys. They are derived from a node's original text by
lowercasing and dropping everything outside [A-Za-z0-9].

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from contentl10n.constants import KEY_SEPARATOR
from contentl10n.enums import NodeKind

if TYPE_CHECKING:
    from contentl10n.content.accessor import ContentTreeAccessor
    from contentl10n.content.model import ContentNode
    from contentl10n.types import LookupKey

__all__ = [
    "derive_key",
    "lookup_key",
    "node_name",
    "normalize_lookup_key",
]

_NON_KEY_CHARS = re.compile(r"[^A-Za-z0-9]+")


def derive_key(text: str) -> str:
    """Derive a translation key from a label.

    Example:
        >>> derive_key("Jeroen Stemerdink!")
        'jeroenstemerdink'
        >>> derive_key("Text-One_2")
        'textone2'
        >>> derive_key("")
        ''
    """
    return _NON_KEY_CHARS.sub("", text.lower())


def node_name(node: ContentNode) -> str:
    """Key of a container or item, falling back to its name without original text."""
    text = node.original_text if node.original_text is not None else node.name
    return derive_key(text)


def lookup_key(node: ContentNode, accessor: ContentTreeAccessor) -> LookupKey:
    """Compute the key under which a node's translation is looked up.

    Joins the keys of all translation containers above the node, skipping
    the topmost one (the translation root), then the node's own key.

    Example:
        >>> lookup_key(hello_item, tree)  # root > Common > Hello
        '/common/hello'
    """
    ancestors = reversed(tuple(accessor.get_ancestors(node.content_id)))
    containers = [
        node_name(ancestor)
        for ancestor in ancestors
        if ancestor.kind is NodeKind.TRANSLATION_CONTAINER
    ]
    parts = [*containers[1:], node_name(node)]
    return KEY_SEPARATOR + KEY_SEPARATOR.join(parts)


def normalize_lookup_key(key: str) -> LookupKey:
    """Normalize a requested key to table form.

    Lookups are case-insensitive, the leading slash is optional and
    trailing or doubled slashes are ignored.

    Example:
        >>> normalize_lookup_key("Common/Hello/")
        '/common/hello'
        >>> normalize_lookup_key("greeting")
        '/greeting'
    """
    segments = [segment for segment in key.strip().lower().split(KEY_SEPARATOR) if segment]
    return KEY_SEPARATOR + KEY_SEPARATOR.join(segments)
