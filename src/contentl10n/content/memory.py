"""In-memory content tree.

Implements ContentTreeAccessor over plain dictionaries, plus the small
write surface (add, variants, move, delete) needed to drive it from tests,
importers and embedding applications without a live content store.

Thread Safety:
    All methods are thread-safe via an internal RLock. Reads return frozen
    ContentNode snapshots, so a tree walk never observes a half-applied
    mutation of a single node.

Python 3.13+.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from contentl10n.diagnostics import ContentNotFoundError, Diagnostic, DiagnosticCode
from contentl10n.enums import ChildOrder
from contentl10n.locale_utils import fallback_chain, locale_key

if TYPE_CHECKING:
    from contentl10n.content.model import ContentNode
    from contentl10n.types import ContentId, LanguageCode

__all__ = ["InMemoryContentTree"]


@dataclass(slots=True)
class _Variant:
    """Culture-specific fields of one language branch."""

    language: LanguageCode
    name: str
    translation: str | None


@dataclass(slots=True)
class _StoredNode:
    """Language-neutral node plus its language branches (master first)."""

    node: ContentNode
    variants: dict[str, _Variant] = field(default_factory=dict)

    def resolve(self, language: LanguageCode | None) -> ContentNode | None:
        """Pick the variant for a language, walking the fallback chain."""
        if not self.variants:
            return self.node
        master = self.node.master_language
        chain = fallback_chain(language, master) if language else ()
        if not chain and master:
            chain = (locale_key(master),)
        for key in chain:
            variant = self.variants.get(key)
            if variant is not None:
                return replace(
                    self.node,
                    language=variant.language,
                    name=variant.name,
                    translation=variant.translation,
                )
        return None


class InMemoryContentTree:
    """Dictionary-backed content tree satisfying ContentTreeAccessor.

    Nodes added with a language become language-specific: that language is
    their master language and further branches are added with
    add_language_variant(). Nodes added without a language stay
    language-neutral and resolve in every language.

    Example:
        >>> tree = InMemoryContentTree()
        >>> root = tree.add(make_container(tree.next_id(), None, "Translations", language="en"))
        >>> common = tree.add(make_container(tree.next_id(), root.content_id, "Common",
        ...                                  language="en"))
        >>> hello = tree.add(make_item(tree.next_id(), common.content_id, "Hello",
        ...                            translation="Hi", language="en"))
        >>> tree.add_language_variant(hello.content_id, "fr", translation="Salut")
        >>> [child.translation for child in tree.get_children(common.content_id, "fr")]
        ['Salut']
    """

    __slots__ = ("_children", "_ids", "_lock", "_nodes")

    def __init__(self) -> None:
        """Initialize an empty tree."""
        self._nodes: dict[ContentId, _StoredNode] = {}
        self._children: dict[ContentId | None, list[ContentId]] = {}
        self._lock = threading.RLock()
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        """Number of nodes in the tree."""
        with self._lock:
            return len(self._nodes)

    def __contains__(self, content_id: object) -> bool:
        """Check if a node exists."""
        with self._lock:
            return content_id in self._nodes

    def next_id(self) -> ContentId:
        """Allocate an unused content id."""
        with self._lock:
            while True:
                candidate = next(self._ids)
                if candidate not in self._nodes:
                    return candidate

    # ------------------------------------------------------------------
    # Write surface
    # ------------------------------------------------------------------

    def add(self, node: ContentNode) -> ContentNode:
        """Add a node under its parent.

        The node's language (if any) becomes its master language and its
        first language branch.

        Args:
            node: Node to add; content_id must be unused

        Returns:
            The stored node

        Raises:
            ValueError: If the id is taken or the node is its own parent
            ContentNotFoundError: If the parent does not exist
        """
        with self._lock:
            if node.content_id in self._nodes:
                msg = f"Content id {node.content_id} already exists"
                raise ValueError(msg)
            if node.parent_id == node.content_id:
                msg = f"Content {node.content_id} cannot be its own parent"
                raise ValueError(msg)
            if node.parent_id is not None and node.parent_id not in self._nodes:
                raise self._not_found(node.parent_id)

            stored = _StoredNode(
                node=replace(node, master_language=node.language or node.master_language)
            )
            if node.language:
                stored.variants[locale_key(node.language)] = _Variant(
                    language=node.language, name=node.name, translation=node.translation
                )
            self._nodes[node.content_id] = stored
            self._children.setdefault(node.parent_id, []).append(node.content_id)
            return stored.resolve(node.language) or stored.node

    def add_language_variant(
        self,
        content_id: ContentId,
        language: LanguageCode,
        *,
        translation: str | None = None,
        name: str | None = None,
    ) -> ContentNode:
        """Create or replace a language branch of a node.

        Args:
            content_id: Node to add the branch to
            language: Language of the branch
            translation: Translated text (items)
            name: Localized name; defaults to the master name

        Returns:
            The new variant

        Raises:
            ContentNotFoundError: If the node does not exist
        """
        with self._lock:
            stored = self._stored(content_id)
            variant = _Variant(
                language=language,
                name=stored.node.name if name is None else name,
                translation=translation,
            )
            stored.variants[locale_key(language)] = variant
            if stored.node.master_language is None:
                stored.node = replace(stored.node, master_language=language)
            return replace(
                stored.node,
                language=variant.language,
                name=variant.name,
                translation=variant.translation,
            )

    def update(self, content_id: ContentId, **changes: object) -> ContentNode:
        """Replace language-neutral fields of a node (e.g., original_text).

        Raises:
            ContentNotFoundError: If the node does not exist
            ValueError: If changes touch identity or placement fields
        """
        forbidden = {"content_id", "parent_id", "language", "translation"} & changes.keys()
        if forbidden:
            msg = (
                f"Cannot update {sorted(forbidden)} via update(); "
                "use move() or add_language_variant() instead"
            )
            raise ValueError(msg)
        with self._lock:
            stored = self._stored(content_id)
            stored.node = replace(stored.node, **changes)  # type: ignore[arg-type]
            return stored.node

    def move(self, content_id: ContentId, new_parent_id: ContentId | None) -> ContentNode:
        """Move a node (and its subtree) under a new parent.

        Raises:
            ContentNotFoundError: If either node does not exist
            ValueError: If the move would create a cycle
        """
        with self._lock:
            stored = self._stored(content_id)
            if new_parent_id is not None:
                self._stored(new_parent_id)
                if new_parent_id == content_id or content_id in self._ancestor_ids(
                    new_parent_id
                ):
                    msg = f"Cannot move {content_id} below its own descendant {new_parent_id}"
                    raise ValueError(msg)
            self._children[stored.node.parent_id].remove(content_id)
            self._children.setdefault(new_parent_id, []).append(content_id)
            stored.node = replace(stored.node, parent_id=new_parent_id)
            return stored.node

    def delete(self, content_id: ContentId) -> ContentNode:
        """Delete a node and its whole subtree.

        Returns:
            The deleted node (master variant)

        Raises:
            ContentNotFoundError: If the node does not exist
        """
        with self._lock:
            stored = self._stored(content_id)
            self._children[stored.node.parent_id].remove(content_id)
            pending = [content_id]
            while pending:
                current = pending.pop()
                pending.extend(self._children.pop(current, ()))
                del self._nodes[current]
            return stored.resolve(None) or stored.node

    def delete_language(self, content_id: ContentId, language: LanguageCode) -> ContentNode:
        """Delete one language branch of a node.

        Raises:
            ContentNotFoundError: If the node does not exist
            ValueError: If the branch is the master language or missing
        """
        with self._lock:
            stored = self._stored(content_id)
            key = locale_key(language)
            if key not in stored.variants:
                msg = f"Content {content_id} has no '{language}' branch"
                raise ValueError(msg)
            if stored.node.master_language and key == locale_key(stored.node.master_language):
                msg = f"Cannot delete master language branch of content {content_id}"
                raise ValueError(msg)
            variant = stored.variants.pop(key)
            return replace(
                stored.node,
                language=variant.language,
                name=variant.name,
                translation=variant.translation,
            )

    # ------------------------------------------------------------------
    # ContentTreeAccessor
    # ------------------------------------------------------------------

    def get(
        self, content_id: ContentId, language: LanguageCode | None = None
    ) -> ContentNode:
        """Load one node in a language, falling back to its master language."""
        with self._lock:
            stored = self._stored(content_id)
            return stored.resolve(language) or stored.resolve(None) or stored.node

    def get_children(
        self, content_id: ContentId, language: LanguageCode
    ) -> tuple[ContentNode, ...]:
        """Load the children of a node in the parent's child order."""
        with self._lock:
            parent = self._stored(content_id)
            children = [
                resolved
                for child_id in self._children.get(content_id, ())
                if (resolved := self._nodes[child_id].resolve(language)) is not None
            ]
        if parent.node.child_order is ChildOrder.ALPHABETICAL:
            children.sort(key=lambda child: (child.name.casefold(), child.content_id))
        return tuple(children)

    def get_language_variants(self, content_id: ContentId) -> tuple[LanguageCode, ...]:
        """List the languages a node exists in, master language first."""
        with self._lock:
            stored = self._stored(content_id)
            return tuple(variant.language for variant in stored.variants.values())

    def get_ancestors(self, content_id: ContentId) -> tuple[ContentNode, ...]:
        """List the ancestors of a node, nearest parent first."""
        with self._lock:
            self._stored(content_id)
            return tuple(self.get(ancestor) for ancestor in self._ancestor_ids(content_id))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _stored(self, content_id: ContentId) -> _StoredNode:
        stored = self._nodes.get(content_id)
        if stored is None:
            raise self._not_found(content_id)
        return stored

    def _ancestor_ids(self, content_id: ContentId) -> list[ContentId]:
        ancestors: list[ContentId] = []
        parent_id = self._nodes[content_id].node.parent_id
        while parent_id is not None:
            ancestors.append(parent_id)
            parent_id = self._nodes[parent_id].node.parent_id
        return ancestors

    @staticmethod
    def _not_found(content_id: ContentId) -> ContentNotFoundError:
        return ContentNotFoundError(
            Diagnostic(
                code=DiagnosticCode.CONTENT_NOT_FOUND,
                message=f"Content {content_id} not found",
                content_id=content_id,
            )
        )
