"""Immutable translation lookup table.

A TranslationTable is parsed once from a TranslationDocument and then only
read. Providers publish a new table by replacing their reference to it,
so a lookup always sees one complete load.

Every element without element children inside a ``<language>`` element
becomes an entry; its lookup key is the path of element names below the
language element (``/common/hello``).

Python 3.13+. External dependency: lxml.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from lxml import etree

from contentl10n.constants import (
    KEY_SEPARATOR,
    LANGUAGE_ELEMENT,
    LANGUAGE_ID_ATTRIBUTE,
    LANGUAGE_NAME_ATTRIBUTE,
    ROOT_ELEMENT,
)
from contentl10n.diagnostics import Diagnostic, DiagnosticCode, MalformedDataError
from contentl10n.locale_utils import Language, locale_key
from contentl10n.serialization.serializer import create_parser

if TYPE_CHECKING:
    from collections.abc import Mapping

    from contentl10n.serialization.document import TranslationDocument
    from contentl10n.types import LookupKey

__all__ = ["TranslationTable"]

_EMPTY: Mapping[str, Mapping[LookupKey, str]] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class TranslationTable:
    """Translations of one load, keyed by language then lookup key.

    Attributes:
        languages: Languages of the load, in document order
        entries: ``locale_key(code) -> {"/a/b": text}``
    """

    languages: tuple[Language, ...] = ()
    entries: Mapping[str, Mapping[LookupKey, str]] = field(default_factory=lambda: _EMPTY)

    @classmethod
    def empty(cls) -> TranslationTable:
        """Table without languages or entries."""
        return cls()

    @classmethod
    def from_document(
        cls,
        document: TranslationDocument,
        languages: tuple[Language, ...] | None = None,
    ) -> TranslationTable:
        """Parse a document into a table.

        Args:
            document: Serialized translations
            languages: Languages to expose; defaults to the document's
                language elements

        Raises:
            MalformedDataError: If the document is not a translation document
            lxml.etree.XMLSyntaxError: If the document is not well-formed
        """
        return cls.from_bytes(document.content, languages)

    @classmethod
    def from_bytes(
        cls,
        content: bytes,
        languages: tuple[Language, ...] | None = None,
    ) -> TranslationTable:
        """Parse raw document bytes into a table (see from_document)."""
        root = etree.fromstring(content, create_parser())
        if root.tag != ROOT_ELEMENT:
            raise MalformedDataError(
                Diagnostic(
                    code=DiagnosticCode.DOCUMENT_INVALID,
                    message=f"Expected <{ROOT_ELEMENT}> root element, got <{root.tag}>",
                )
            )

        found: list[Language] = []
        entries: dict[str, dict[LookupKey, str]] = {}
        for language_element in root.iterchildren(LANGUAGE_ELEMENT):
            code = language_element.get(LANGUAGE_ID_ATTRIBUTE)
            if not code:
                raise MalformedDataError(
                    Diagnostic(
                        code=DiagnosticCode.DOCUMENT_INVALID,
                        message=f"<{LANGUAGE_ELEMENT}> element without '{LANGUAGE_ID_ATTRIBUTE}'",
                    )
                )
            found.append(
                Language(code=code, name=language_element.get(LANGUAGE_NAME_ATTRIBUTE, ""))
            )
            # A language appearing twice merges; later entries win.
            strings = entries.setdefault(locale_key(code), {})
            _collect(language_element, "", strings)

        return cls(
            languages=tuple(found) if languages is None else languages,
            entries=MappingProxyType(
                {key: MappingProxyType(strings) for key, strings in entries.items()}
            ),
        )

    @property
    def entry_count(self) -> int:
        """Total number of entries over all languages."""
        return sum(len(strings) for strings in self.entries.values())

    def lookup(self, language: str, key: LookupKey) -> str | None:
        """Exact lookup in one language.

        Args:
            language: Language in locale_key() form
            key: Lookup key in normalized form
        """
        strings = self.entries.get(language)
        if strings is None:
            return None
        return strings.get(key)

    def strings(self, language: str) -> Mapping[LookupKey, str]:
        """All entries of one language (locale_key() form)."""
        return self.entries.get(language, MappingProxyType({}))


def _collect(element: etree._Element, prefix: str, strings: dict[LookupKey, str]) -> None:
    """Flatten the leaves below element into strings."""
    stack = [(child, prefix) for child in reversed(element)]
    while stack:
        node, path = stack.pop()
        if not isinstance(node.tag, str):
            continue
        key = f"{path}{KEY_SEPARATOR}{node.tag.lower()}"
        children = [child for child in node if isinstance(child.tag, str)]
        if children:
            stack.extend((child, key) for child in reversed(children))
        else:
            strings[key] = node.text or ""
