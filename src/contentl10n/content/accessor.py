"""Read-only access to the hierarchical content store.

ContentTreeAccessor is a Protocol (structural typing) rather than an ABC
so that adapters over any content repository can satisfy it without
inheriting from this package.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contentl10n.content.model import ContentNode
    from contentl10n.types import ContentId, LanguageCode

__all__ = ["ContentTreeAccessor"]


class ContentTreeAccessor(Protocol):
    """Protocol for reading content nodes.

    Implementations may raise TransientStoreError (or any exception) when
    the store is unavailable; callers in this package contain such errors.

    Example:
        >>> class RepositoryAccessor:
        ...     def get(self, content_id, language=None): ...
        ...     def get_children(self, content_id, language): ...
        ...     def get_language_variants(self, content_id): ...
        ...     def get_ancestors(self, content_id): ...
    """

    def get(
        self, content_id: ContentId, language: LanguageCode | None = None
    ) -> ContentNode:
        """Load one node, resolving the requested language with fallback.

        Args:
            content_id: Node identifier
            language: Preferred language; None loads the master variant

        Returns:
            The resolved language variant

        Raises:
            ContentNotFoundError: If the node does not exist
        """
        ...

    def get_children(
        self, content_id: ContentId, language: LanguageCode
    ) -> Sequence[ContentNode]:
        """Load the children of a node in their native order.

        Each child is resolved to the requested language, falling back to
        broader cultures and then to the child's master language. Children
        without any variant on that chain are omitted.

        Args:
            content_id: Parent node identifier
            language: Requested language

        Returns:
            Ordered sequence of child variants
        """
        ...

    def get_language_variants(self, content_id: ContentId) -> Sequence[LanguageCode]:
        """List the languages a node exists in, master language first."""
        ...

    def get_ancestors(self, content_id: ContentId) -> Sequence[ContentNode]:
        """List the ancestors of a node, nearest parent first."""
        ...
