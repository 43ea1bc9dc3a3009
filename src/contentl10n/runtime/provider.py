"""Content-backed localization provider.

ContentXmlLocalizationProvider serves translations that editors maintain
as ordinary content: a translation root with containers (sections) and
items (strings), one language branch per culture. Each load walks that
subtree, serializes it to a translation document and parses the document
into an immutable TranslationTable.

Thread Safety:
    Lookups read the current table through a single attribute read and
    never take a lock; reload() builds the next table off to the side and
    publishes it with one assignment. Concurrent reload() calls must be
    serialized by the caller (see InvalidationCoordinator).

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lxml import etree

from contentl10n.constants import MAX_DEPTH, PROVIDER_NAME
from contentl10n.diagnostics import (
    ConfigurationError,
    Diagnostic,
    DiagnosticCode,
    LocalizationError,
)
from contentl10n.enums import LoadStatus
from contentl10n.locale_utils import fallback_chain
from contentl10n.naming import normalize_lookup_key
from contentl10n.runtime.table import TranslationTable
from contentl10n.serialization.languages import resolve_available_languages
from contentl10n.serialization.serializer import TranslationTreeSerializer

if TYPE_CHECKING:
    from contentl10n.config import ProviderConfig
    from contentl10n.content.accessor import ContentTreeAccessor
    from contentl10n.locale_utils import Language
    from contentl10n.serialization.document import KeyCollision, TranslationDocument
    from contentl10n.settings import SettingsResolver
    from contentl10n.types import LanguageCode, LookupKey

__all__ = ["ContentXmlLocalizationProvider", "LoadResult"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Outcome of one provider load.

    Attributes:
        status: SUCCESS, EMPTY (no translation root) or FAILED
        error: Exception behind an EMPTY or FAILED status
        languages: Languages of the table now being served
        entry_count: Entries of the table now being served
        collisions: Key collisions resolved while serializing
    """

    status: LoadStatus
    error: Exception | None = None
    languages: tuple[Language, ...] = ()
    entry_count: int = 0
    collisions: tuple[KeyCollision, ...] = ()

    @property
    def succeeded(self) -> bool:
        """True unless the load failed."""
        return self.status is not LoadStatus.FAILED


class ContentXmlLocalizationProvider:
    """Localization provider backed by translation content.

    Example:
        >>> provider = ContentXmlLocalizationProvider(tree, resolver, ProviderConfig(enabled=True))
        >>> provider.reload().status
        <LoadStatus.SUCCESS: 'success'>
        >>> provider.translate("/common/hello", "fr")
        'Salut'
    """

    __slots__ = ("_accessor", "_config", "_last_result", "_serializer", "_settings", "_table")

    def __init__(
        self,
        accessor: ContentTreeAccessor,
        settings: SettingsResolver,
        config: ProviderConfig,
        *,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        """Initialize provider without loading.

        Args:
            accessor: Content store holding the translation tree
            settings: Resolves the translation root of the configured site
            config: Provider configuration (master language, site)
            max_depth: Maximum container nesting accepted while serializing
        """
        self._accessor = accessor
        self._settings = settings
        self._config = config
        self._serializer = TranslationTreeSerializer(accessor, max_depth=max_depth)
        self._table: TranslationTable | None = None
        self._last_result: LoadResult | None = None

    @property
    def name(self) -> str:
        """Registration name in the localization service."""
        return PROVIDER_NAME

    @property
    def config(self) -> ProviderConfig:
        """Provider configuration."""
        return self._config

    @property
    def is_loaded(self) -> bool:
        """True once a table is being served."""
        return self._table is not None

    @property
    def last_result(self) -> LoadResult | None:
        """Result of the most recent load, None before the first."""
        return self._last_result

    @property
    def available_languages(self) -> tuple[Language, ...]:
        """Languages of the table being served."""
        table = self._table
        return table.languages if table is not None else ()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def translate(self, key: str, language: LanguageCode | None = None) -> str | None:
        """Look up a translation, falling back through parent cultures.

        Args:
            key: Lookup key, e.g. '/common/hello' or 'Common/Hello'
            language: Requested culture; None means the master language

        Returns:
            The translation, or None if no culture in the chain has it
        """
        table = self._table
        if table is None or not key:
            return None
        normalized = normalize_lookup_key(key)
        for candidate in fallback_chain(language or "", self._config.master_language):
            value = table.lookup(candidate, normalized)
            if value is not None:
                return value
        return None

    def get_all_strings(
        self, language: LanguageCode | None = None, prefix: str = "/"
    ) -> dict[LookupKey, str]:
        """All translations visible in a culture below a key prefix.

        Entries of more specific cultures shadow those of parent cultures
        and the master language.
        """
        table = self._table
        if table is None:
            return {}
        wanted = normalize_lookup_key(prefix)
        chain = fallback_chain(language or "", self._config.master_language)
        merged: dict[LookupKey, str] = {}
        for candidate in reversed(chain):
            merged.update(table.strings(candidate))
        if wanted == "/":
            return dict(sorted(merged.items()))
        return {
            key: value
            for key, value in sorted(merged.items())
            if key == wanted or key.startswith(wanted + "/")
        }

    def supports(self, language: LanguageCode) -> bool:
        """True if a table language serves the culture or one of its parents."""
        keys = {lang.key for lang in self.available_languages}
        return any(candidate in keys for candidate in fallback_chain(language))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reload(self) -> LoadResult:
        """Rebuild the table from content and publish it.

        Never raises. On failure the previous table keeps being served;
        a first load that fails serves the empty table.
        """
        site_id = self._config.site_id
        try:
            root = self._settings.get_translation_root(site_id)
        except Exception as e:  # noqa: BLE001 - any store failure is a failed load
            logger.error("Could not resolve translation root for site %r", site_id, exc_info=True)
            return self._fail(e)

        if root is None:
            error = ConfigurationError(
                Diagnostic(
                    code=DiagnosticCode.TRANSLATION_ROOT_MISSING,
                    message=f"No translation root configured for site {site_id or '<default>'}",
                    hint="Set the translations root on the site's settings page",
                )
            )
            logger.warning("%s; serving no content translations", error)
            return self._publish(TranslationTable.empty(), LoadStatus.EMPTY, error=error)

        languages = resolve_available_languages(
            self._accessor, root, self._config.master_language
        )
        document = self._serializer.serialize(root, languages)
        if document.is_fallback:
            return self._fail(document.error, document)

        try:
            table = TranslationTable.from_document(document, document.languages)
        except (LocalizationError, etree.Error) as e:
            logger.error(
                "Translation document for root %s is unreadable", root.content_id, exc_info=True
            )
            return self._fail(e, document)

        result = self._publish(table, LoadStatus.SUCCESS, collisions=document.collisions)
        logger.info(
            "Loaded %d translation(s) in %d language(s) from root %s",
            result.entry_count,
            len(result.languages),
            root.content_id,
        )
        return result

    def unload(self) -> None:
        """Discard the table; lookups return None until the next load."""
        self._table = None
        self._last_result = None

    def _publish(
        self,
        table: TranslationTable,
        status: LoadStatus,
        *,
        error: Exception | None = None,
        collisions: tuple[KeyCollision, ...] = (),
    ) -> LoadResult:
        self._table = table
        result = LoadResult(
            status=status,
            error=error,
            languages=table.languages,
            entry_count=table.entry_count,
            collisions=collisions,
        )
        self._last_result = result
        return result

    def _fail(
        self, error: Exception | None, document: TranslationDocument | None = None
    ) -> LoadResult:
        table = self._table
        if table is None:
            table = TranslationTable.empty()
            self._table = table
        else:
            logger.warning("Keeping previous translations after failed load")
        result = LoadResult(
            status=LoadStatus.FAILED,
            error=error,
            languages=table.languages,
            entry_count=table.entry_count,
            collisions=document.collisions if document is not None else (),
        )
        self._last_result = result
        return result

