"""Content node model.

A ContentNode is one language variant of a node in the hierarchical
content tree. Node subtypes are a tagged variant over NodeKind rather than
a class hierarchy, so tree walks can dispatch with an exhaustive match.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from contentl10n.enums import ChildOrder, NodeKind
from contentl10n.types import ContentId, LanguageCode

__all__ = [
    "ContentNode",
    "is_localization_content",
    "make_container",
    "make_item",
    "make_settings",
]


@dataclass(frozen=True, slots=True)
class ContentNode:
    """Read-only view of a content node in one language.

    Attributes:
        content_id: Identifier within the content tree
        parent_id: Parent identifier, None for the tree root
        kind: Type tag driving serialization
        name: Display name of the node
        language: Language of this variant, None for language-neutral content
        master_language: Language the node was created in
        original_text: Raw label the lookup key is derived from
            (containers and items)
        translation: Translated text for this variant (items only)
        translations_root: Root of the translation hierarchy
            (settings holders only)
        child_order: Ordering rule applied to this node's children
        visible_in_menu: Whether the node shows up in navigation
    """

    content_id: ContentId
    parent_id: ContentId | None
    kind: NodeKind
    name: str
    language: LanguageCode | None = None
    master_language: LanguageCode | None = None
    original_text: str | None = None
    translation: str | None = None
    translations_root: ContentId | None = None
    child_order: ChildOrder = ChildOrder.CREATION
    visible_in_menu: bool = True

    def in_language(self, language: LanguageCode | None) -> ContentNode:
        """Return a copy tagged as the given language variant."""
        return replace(self, language=language)


def is_localization_content(node: ContentNode | None) -> bool:
    """True if a change to this node can affect the translation table."""
    if node is None:
        return False
    match node.kind:
        case NodeKind.TRANSLATION_CONTAINER | NodeKind.TRANSLATION_ITEM | NodeKind.SETTINGS:
            return True
        case _:
            return False


def make_container(
    content_id: ContentId,
    parent_id: ContentId | None,
    name: str,
    *,
    original_text: str | None = None,
    language: LanguageCode | None = None,
) -> ContentNode:
    """Create a translation container with its default values.

    Containers take their name as original text, sort children
    alphabetically and stay out of navigation.
    """
    return ContentNode(
        content_id=content_id,
        parent_id=parent_id,
        kind=NodeKind.TRANSLATION_CONTAINER,
        name=name,
        language=language,
        master_language=language,
        original_text=name if original_text is None else original_text,
        child_order=ChildOrder.ALPHABETICAL,
        visible_in_menu=False,
    )


def make_item(
    content_id: ContentId,
    parent_id: ContentId | None,
    name: str,
    *,
    original_text: str | None = None,
    translation: str = "",
    language: LanguageCode | None = None,
) -> ContentNode:
    """Create a translation item hidden from navigation."""
    return ContentNode(
        content_id=content_id,
        parent_id=parent_id,
        kind=NodeKind.TRANSLATION_ITEM,
        name=name,
        language=language,
        master_language=language,
        original_text=name if original_text is None else original_text,
        translation=translation,
        visible_in_menu=False,
    )


def make_settings(
    content_id: ContentId,
    parent_id: ContentId | None,
    name: str,
    *,
    translations_root: ContentId | None,
    language: LanguageCode | None = None,
) -> ContentNode:
    """Create a settings holder (typically a site start page)."""
    return ContentNode(
        content_id=content_id,
        parent_id=parent_id,
        kind=NodeKind.SETTINGS,
        name=name,
        language=language,
        master_language=language,
        translations_root=translations_root,
    )
