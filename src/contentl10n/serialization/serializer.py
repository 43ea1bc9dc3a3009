"""Translation tree serializer.

Walks the translation subtree once per available language and writes a
TranslationDocument:

    <languages>
      <language name="English" id="en">
        <common><hello>Hi</hello></common>
      </language>
    </languages>

(shown indented; the actual output has no whitespace and no XML
declaration). Containers become nested elements, items become text
elements, other content is skipped. Element names are derived keys.

Failure Policy:
    serialize() never raises. Any exception during the walk is logged and
    the backup document ``<languages></languages>`` is returned with
    is_fallback=True, so a failed refresh can never crash a lookup or
    leave it with a half-written table.

Python 3.13+. External dependency: lxml.
"""

from __future__ import annotations

import io
import logging
from collections import defaultdict
from typing import TYPE_CHECKING

from lxml import etree

from contentl10n.constants import (
    LANGUAGE_ELEMENT,
    LANGUAGE_ID_ATTRIBUTE,
    LANGUAGE_NAME_ATTRIBUTE,
    MAX_DEPTH,
    ROOT_ELEMENT,
)
from contentl10n.diagnostics import Diagnostic, DiagnosticCode, MalformedDataError
from contentl10n.enums import NodeKind
from contentl10n.naming import node_name
from contentl10n.serialization.depth_guard import DepthGuard
from contentl10n.serialization.document import KeyCollision, TranslationDocument

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contentl10n.content.accessor import ContentTreeAccessor
    from contentl10n.content.model import ContentNode
    from contentl10n.locale_utils import Language
    from contentl10n.types import ContentId

__all__ = ["TranslationTreeSerializer", "create_parser"]

logger = logging.getLogger(__name__)


def create_parser() -> etree.XMLParser:
    """XML parser hardened for translation documents.

    No entity expansion, no network access, no DTD loading.
    """
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        remove_comments=True,
        remove_pis=True,
        huge_tree=False,
    )


class TranslationTreeSerializer:
    """Serialize a translation subtree into a TranslationDocument.

    Example:
        >>> serializer = TranslationTreeSerializer(tree)
        >>> document = serializer.serialize(root, [Language("en", "English")])
        >>> document.to_string()
        '<languages><language name="English" id="en"><common>...</common></language></languages>'
    """

    __slots__ = ("_accessor", "_max_depth")

    def __init__(self, accessor: ContentTreeAccessor, *, max_depth: int = MAX_DEPTH) -> None:
        """Initialize serializer.

        Args:
            accessor: Content store to walk
            max_depth: Maximum container nesting (default: MAX_DEPTH)
        """
        self._accessor = accessor
        self._max_depth = max_depth

    def serialize(
        self, root: ContentNode, languages: Sequence[Language]
    ) -> TranslationDocument:
        """Serialize the subtree below root for every language.

        Args:
            root: Translation root (itself not written)
            languages: Languages to write, in document order

        Returns:
            The document, or the backup document if anything failed
        """
        collisions: list[KeyCollision] = []
        buffer = io.BytesIO()
        try:
            with etree.xmlfile(buffer, encoding="utf-8") as xf, xf.element(ROOT_ELEMENT):
                for language in languages:
                    attrib = {
                        LANGUAGE_NAME_ATTRIBUTE: language.name,
                        LANGUAGE_ID_ATTRIBUTE: language.code,
                    }
                    with xf.element(LANGUAGE_ELEMENT, attrib=attrib):
                        self._write_children(
                            xf, root.content_id, language, DepthGuard(self._max_depth), collisions
                        )
            content = buffer.getvalue()
            # Round-trip through the parser: never hand out a document we cannot read.
            etree.fromstring(content, create_parser())
        except Exception as e:  # noqa: BLE001 - the fallback document is the contract
            logger.error(
                "Error occurred while creating the translation document for root %s. "
                "Falling back to backup xml",
                root.content_id,
                exc_info=True,
            )
            return TranslationDocument.backup(e)

        for collision in collisions:
            logger.warning("%s", collision.to_warning())
        logger.debug(
            "Serialized %d language(s) from root %s (%d bytes)",
            len(languages),
            root.content_id,
            len(content),
        )
        return TranslationDocument(
            content=content,
            languages=tuple(languages),
            collisions=tuple(collisions),
        )

    def _write_children(
        self,
        xf: etree.xmlfile,
        content_id: ContentId,
        language: Language,
        guard: DepthGuard,
        collisions: list[KeyCollision],
    ) -> None:
        """Write the children of one node, recursing into containers."""
        with guard:
            children = self._accessor.get_children(content_id, language.code)
            winners = self._resolve_keys(content_id, children, language, collisions)
            for child in children:
                key = winners.get(child.content_id)
                if key is None:
                    continue
                match child.kind:
                    case NodeKind.TRANSLATION_CONTAINER:
                        with xf.element(key):
                            self._write_children(xf, child.content_id, language, guard, collisions)
                    case NodeKind.TRANSLATION_ITEM:
                        with xf.element(key):
                            if child.translation:
                                xf.write(child.translation)
                    case NodeKind.GENERIC | NodeKind.SETTINGS:
                        continue

    @staticmethod
    def _resolve_keys(
        parent_id: ContentId,
        children: Sequence[ContentNode],
        language: Language,
        collisions: list[KeyCollision],
    ) -> dict[ContentId, str]:
        """Map each writable child to its key; lowest content id wins a collision.

        Raises:
            MalformedDataError: If a derived key is not a valid element name
        """
        claims: defaultdict[str, list[ContentId]] = defaultdict(list)
        for child in children:
            if child.kind not in (NodeKind.TRANSLATION_CONTAINER, NodeKind.TRANSLATION_ITEM):
                continue
            key = node_name(child)
            if not key or not key[0].isalpha():
                raise MalformedDataError(
                    Diagnostic(
                        code=DiagnosticCode.INVALID_ELEMENT_NAME,
                        message=f"Derived key {key!r} of content {child.content_id} "
                        "is not a valid element name",
                        hint="Original text must contain a letter before any digit",
                        content_id=child.content_id,
                        language=language.code,
                    )
                )
            claims[key].append(child.content_id)

        winners: dict[ContentId, str] = {}
        for key, ids in claims.items():
            kept = min(ids)
            winners[kept] = key
            if len(ids) > 1:
                collisions.append(
                    KeyCollision(
                        language=language.code,
                        parent_id=parent_id,
                        key=key,
                        kept_id=kept,
                        skipped_ids=tuple(sorted(i for i in ids if i != kept)),
                    )
                )
        return winners
