"""Translation document value types.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from contentl10n.constants import BACKUP_XML
from contentl10n.diagnostics import NamingCollisionWarning

if TYPE_CHECKING:
    from contentl10n.locale_utils import Language
    from contentl10n.types import ContentId

__all__ = ["KeyCollision", "TranslationDocument"]


@dataclass(frozen=True, slots=True)
class KeyCollision:
    """Two or more siblings that derive the same key.

    The sibling with the lowest content id keeps the key; the others are
    left out of the document.

    Attributes:
        language: Language being serialized when the collision was found
        parent_id: Common parent of the colliding nodes
        key: The contested key
        kept_id: Content id written to the document
        skipped_ids: Content ids left out
    """

    language: str
    parent_id: ContentId
    key: str
    kept_id: ContentId
    skipped_ids: tuple[ContentId, ...]

    def to_warning(self) -> NamingCollisionWarning:
        """Collision as a NamingCollisionWarning (for logs and reports)."""
        return NamingCollisionWarning(
            f"Key '{self.key}' derived by several children of {self.parent_id} "
            f"in '{self.language}'; kept {self.kept_id}, skipped {list(self.skipped_ids)}"
        )


@dataclass(frozen=True, slots=True)
class TranslationDocument:
    """Serialized translations for every available language.

    Attributes:
        content: UTF-8 XML, ``<languages>`` root, always well-formed
        languages: Languages written to the document
        is_fallback: True when the walk failed and content is the backup
        error: Exception that triggered the fallback
        collisions: Key collisions resolved during the walk
    """

    content: bytes
    languages: tuple[Language, ...] = ()
    is_fallback: bool = False
    error: Exception | None = None
    collisions: tuple[KeyCollision, ...] = ()

    @classmethod
    def empty(cls) -> TranslationDocument:
        """A valid document without languages (nothing configured)."""
        return cls(content=BACKUP_XML)

    @classmethod
    def backup(cls, error: Exception) -> TranslationDocument:
        """The empty-but-valid document served when the walk fails."""
        return cls(content=BACKUP_XML, is_fallback=True, error=error)

    @property
    def is_empty(self) -> bool:
        """True if the document holds no language elements."""
        return not self.languages

    def to_string(self) -> str:
        """Document as text."""
        return self.content.decode("utf-8")
