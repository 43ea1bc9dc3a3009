"""Import existing XML translation resources into a content tree.

Sites moving to content-managed translations usually start from an XML
resource file. The importer turns such a file into containers and items:

- an element with child elements becomes a container named after its tag
- a leaf element becomes an item; its name is the ``name`` attribute (or
  the tag), its translation the element text (or the ``description``
  attribute)

The ``name`` attribute only sets the display name. The tag is always
kept as original text, so imported nodes derive the keys the resource
used and a later branch that omits the attribute still finds its node.
A ``<languages>`` document imports every ``<language id="..">`` branch;
nodes already present (same key under the same parent) receive a new
language branch instead of a duplicate.

Python 3.13+. External dependency: lxml.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from lxml import etree

from contentl10n.constants import LANGUAGE_ELEMENT, LANGUAGE_ID_ATTRIBUTE, ROOT_ELEMENT
from contentl10n.content.model import make_container, make_item
from contentl10n.diagnostics import Diagnostic, DiagnosticCode, MalformedDataError
from contentl10n.enums import NodeKind
from contentl10n.naming import derive_key, node_name
from contentl10n.serialization.depth_guard import DepthGuard
from contentl10n.serialization.serializer import create_parser

if TYPE_CHECKING:
    from contentl10n.content.memory import InMemoryContentTree
    from contentl10n.content.model import ContentNode
    from contentl10n.types import ContentId, LanguageCode

__all__ = ["ImportSummary", "TranslationImporter"]

logger = logging.getLogger(__name__)

_NAME_ATTRIBUTE = "name"
_DESCRIPTION_ATTRIBUTE = "description"


@dataclass(slots=True)
class ImportSummary:
    """Counts of what an import created.

    Attributes:
        containers_created: New container nodes
        items_created: New item nodes
        variants_added: Language branches added to existing nodes
        languages: Languages found in the resource, in order
    """

    containers_created: int = 0
    items_created: int = 0
    variants_added: int = 0
    languages: list[LanguageCode] = field(default_factory=list)


class TranslationImporter:
    """Create translation content from an XML resource.

    Example:
        >>> importer = TranslationImporter(tree, default_language="en")
        >>> summary = importer.import_bytes(b"<languages><language id='en'>"
        ...                                 b"<common><hello>Hi</hello></common>"
        ...                                 b"</language></languages>", root.content_id)
        >>> summary.containers_created, summary.items_created
        (1, 1)
    """

    __slots__ = ("_default_language", "_tree")

    def __init__(self, tree: InMemoryContentTree, *, default_language: LanguageCode = "en") -> None:
        self._tree = tree
        self._default_language = default_language

    def import_file(self, path: str | Path, parent_id: ContentId) -> ImportSummary:
        """Import a resource file below parent_id (see import_bytes).

        Raises:
            OSError: If the file cannot be read
        """
        return self.import_bytes(Path(path).read_bytes(), parent_id)

    def import_bytes(self, content: bytes | str, parent_id: ContentId) -> ImportSummary:
        """Import a resource below parent_id.

        Raises:
            MalformedDataError: If the resource is not well-formed XML or a
                language branch has no id
            ContentNotFoundError: If parent_id does not exist
        """
        if isinstance(content, str):
            content = content.encode("utf-8")
        try:
            root = etree.fromstring(content, create_parser())
        except etree.XMLSyntaxError as e:
            raise MalformedDataError(
                Diagnostic(
                    code=DiagnosticCode.DOCUMENT_INVALID,
                    message=f"Translation resource is not well-formed: {e}",
                )
            ) from e

        summary = ImportSummary()
        if root.tag == ROOT_ELEMENT:
            for language_element in root.iterchildren(LANGUAGE_ELEMENT):
                language = language_element.get(LANGUAGE_ID_ATTRIBUTE)
                if not language:
                    raise MalformedDataError(
                        Diagnostic(
                            code=DiagnosticCode.DOCUMENT_INVALID,
                            message=f"<{LANGUAGE_ELEMENT}> without '{LANGUAGE_ID_ATTRIBUTE}'",
                        )
                    )
                summary.languages.append(language)
                self._import_children(language_element, parent_id, language, summary, DepthGuard())
        else:
            summary.languages.append(self._default_language)
            self._import_children(root, parent_id, self._default_language, summary, DepthGuard())

        logger.info(
            "Imported %d container(s), %d item(s), %d language branch(es) below %s",
            summary.containers_created,
            summary.items_created,
            summary.variants_added,
            parent_id,
        )
        return summary

    def _import_children(
        self,
        element: etree._Element,
        parent_id: ContentId,
        language: LanguageCode,
        summary: ImportSummary,
        guard: DepthGuard,
    ) -> None:
        with guard:
            existing = {
                node_name(child): child
                for child in self._tree.get_children(parent_id, language)
                if child.kind in (NodeKind.TRANSLATION_CONTAINER, NodeKind.TRANSLATION_ITEM)
            }
            for child in element:
                if not isinstance(child.tag, str):
                    continue
                is_container = any(isinstance(grandchild.tag, str) for grandchild in child)
                node = existing.get(derive_key(child.tag))
                if is_container:
                    content_id = self._container(child, parent_id, language, node, summary)
                    self._import_children(child, content_id, language, summary, guard)
                else:
                    self._item(child, parent_id, language, node, summary)

    def _container(
        self,
        element: etree._Element,
        parent_id: ContentId,
        language: LanguageCode,
        node: ContentNode | None,
        summary: ImportSummary,
    ) -> ContentId:
        if node is not None:
            if node.kind is NodeKind.TRANSLATION_CONTAINER:
                if node.language != language:
                    self._tree.add_language_variant(node.content_id, language)
                    summary.variants_added += 1
                return node.content_id
            logger.warning(
                "Element <%s> below %s is an item in the tree; importing as a new container",
                element.tag,
                parent_id,
            )
        created = self._tree.add(
            make_container(self._tree.next_id(), parent_id, element.tag, language=language)
        )
        summary.containers_created += 1
        return created.content_id

    def _item(
        self,
        element: etree._Element,
        parent_id: ContentId,
        language: LanguageCode,
        node: ContentNode | None,
        summary: ImportSummary,
    ) -> None:
        name = element.get(_NAME_ATTRIBUTE) or element.tag
        text = element.text.strip() if element.text and element.text.strip() else None
        translation = text if text is not None else element.get(_DESCRIPTION_ATTRIBUTE, "")
        if node is not None and node.kind is NodeKind.TRANSLATION_ITEM:
            self._tree.add_language_variant(
                node.content_id, language, translation=translation, name=name
            )
            summary.variants_added += 1
            return
        self._tree.add(
            make_item(
                self._tree.next_id(),
                parent_id,
                name,
                original_text=element.tag,
                translation=translation,
                language=language,
            )
        )
        summary.items_created += 1
