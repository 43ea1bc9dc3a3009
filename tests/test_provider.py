"""Tests for ContentXmlLocalizationProvider and TranslationTable."""

from __future__ import annotations

import logging

import pytest
from hypothesis import given
from lxml import etree

from contentl10n.config import ProviderConfig
from contentl10n.content import make_item
from contentl10n.diagnostics import ConfigurationError, DiagnosticCode, MalformedDataError
from contentl10n.enums import LoadStatus
from contentl10n.locale_utils import Language
from contentl10n.runtime import ContentXmlLocalizationProvider, TranslationTable
from contentl10n.settings import SiteDefinition, StartPageSettingsResolver
from tests.helpers.sites import (
    EXPECTED_SAMPLE_XML,
    STORE_FAILURES,
    SampleSite,
    SwitchableStore,
)
from tests.strategies import GeneratedTree, translation_trees

CONFIG = ProviderConfig(enabled=True)


def _provider(site: SampleSite, config: ProviderConfig = CONFIG) -> ContentXmlLocalizationProvider:
    return ContentXmlLocalizationProvider(site.tree, site.resolver, config)


def _add_greeting(site: SampleSite) -> None:
    tree = site.tree
    tree.add(
        make_item(
            tree.next_id(), site.root.content_id, "Greeting", translation="Welcome", language="en"
        )
    )


class TestTranslationTable:
    """Test TranslationTable parsing and lookup."""

    def test_from_sample_document(self) -> None:
        """Leaves become entries keyed by their element path."""
        table = TranslationTable.from_bytes(EXPECTED_SAMPLE_XML.encode())
        assert table.languages == (Language("en", "English"), Language("fr", "French"))
        assert table.lookup("en", "/common/hello") == "Hi"
        assert table.lookup("fr", "/common/hello") == "Salut"
        assert table.lookup("de", "/common/hello") is None
        assert table.lookup("en", "/common") is None
        assert table.entry_count == 2

    def test_empty(self) -> None:
        """The empty table has nothing."""
        table = TranslationTable.empty()
        assert table.languages == ()
        assert table.entry_count == 0
        assert table.lookup("en", "/x") is None
        assert dict(table.strings("en")) == {}

    def test_entries_read_only(self) -> None:
        """Published tables cannot be mutated."""
        table = TranslationTable.from_bytes(EXPECTED_SAMPLE_XML.encode())
        with pytest.raises(TypeError):
            table.entries["en"]["/new"] = "x"  # type: ignore[index]

    def test_wrong_root_element(self) -> None:
        """Documents not rooted at <languages> are malformed."""
        with pytest.raises(MalformedDataError) as exc_info:
            TranslationTable.from_bytes(b"<translations/>")
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.DOCUMENT_INVALID

    def test_language_without_id(self) -> None:
        """Language elements need an id."""
        with pytest.raises(MalformedDataError):
            TranslationTable.from_bytes(b"<languages><language name='English'/></languages>")

    def test_not_well_formed(self) -> None:
        """Broken XML surfaces as an lxml error."""
        with pytest.raises(etree.XMLSyntaxError):
            TranslationTable.from_bytes(b"<languages><language>")

    def test_entities_not_expanded(self) -> None:
        """External entities are never resolved."""
        document = (
            b'<!DOCTYPE languages [<!ENTITY x SYSTEM "file:///etc/passwd">]>'
            b"<languages><language id='en' name='English'><a>&x;</a></language></languages>"
        )
        table = TranslationTable.from_bytes(document)
        assert "root:" not in (table.lookup("en", "/a") or "")


class TestLoad:
    """Test reload() outcomes."""

    def test_successful_load(self, sample_site: SampleSite) -> None:
        """A load publishes the table and reports what it holds."""
        provider = _provider(sample_site)
        assert not provider.is_loaded
        result = provider.reload()
        assert result.status is LoadStatus.SUCCESS
        assert result.succeeded
        assert result.entry_count == 2
        assert result.languages == (Language("en", "English"), Language("fr", "French"))
        assert provider.is_loaded
        assert provider.last_result is result
        assert provider.available_languages == result.languages

    def test_end_to_end(self, sample_site: SampleSite) -> None:
        """Store content is served through translate()."""
        provider = _provider(sample_site)
        provider.reload()
        assert provider.translate("/common/hello", "fr") == "Salut"
        assert provider.translate("/common/hello", "en") == "Hi"

    def test_no_translation_root(self, sample_site: SampleSite) -> None:
        """A site without a root serves an empty table."""
        resolver = StartPageSettingsResolver(sample_site.tree, [])
        provider = ContentXmlLocalizationProvider(sample_site.tree, resolver, CONFIG)
        result = provider.reload()
        assert result.status is LoadStatus.EMPTY
        assert isinstance(result.error, ConfigurationError)
        assert provider.is_loaded
        assert provider.translate("/common/hello", "en") is None
        assert provider.available_languages == ()

    @pytest.mark.parametrize("error_type", STORE_FAILURES)
    def test_first_load_failure_installs_empty_table(
        self,
        sample_site: SampleSite,
        caplog: pytest.LogCaptureFixture,
        error_type: type[Exception],
    ) -> None:
        """A store failing while settings resolve never escapes reload()."""
        store = SwitchableStore(sample_site.tree, error_type)
        store.broken = True
        resolver = StartPageSettingsResolver(
            store, [SiteDefinition("main", "Main", start_page=sample_site.start_page.content_id)]
        )
        provider = ContentXmlLocalizationProvider(store, resolver, CONFIG)
        with caplog.at_level(logging.ERROR):
            result = provider.reload()
        assert result.status is LoadStatus.FAILED
        assert not result.succeeded
        assert isinstance(result.error, error_type)
        assert "Could not resolve translation root" in caplog.text
        assert provider.is_loaded
        assert provider.translate("/common/hello", "en") is None

    @pytest.mark.parametrize("error_type", STORE_FAILURES)
    def test_failed_reload_keeps_last_good_table(
        self, sample_site: SampleSite, error_type: type[Exception]
    ) -> None:
        """Later failures keep serving the previous translations."""
        store = SwitchableStore(sample_site.tree, error_type)
        resolver = StartPageSettingsResolver(
            store, [SiteDefinition("main", "Main", start_page=sample_site.start_page.content_id)]
        )
        provider = ContentXmlLocalizationProvider(store, resolver, CONFIG)
        assert provider.reload().status is LoadStatus.SUCCESS

        store.broken = True
        result = provider.reload()
        assert result.status is LoadStatus.FAILED
        assert result.entry_count == 2
        assert provider.translate("/common/hello", "fr") == "Salut"

    def test_serialization_failure_keeps_last_good_table(self, sample_site: SampleSite) -> None:
        """An unserializable edit does not wipe the table."""
        provider = _provider(sample_site)
        provider.reload()
        tree = sample_site.tree
        tree.add(make_item(tree.next_id(), sample_site.common.content_id, "9lives", language="en"))
        result = provider.reload()
        assert result.status is LoadStatus.FAILED
        assert isinstance(result.error, MalformedDataError)
        assert provider.translate("/common/hello", "en") == "Hi"

    def test_reload_picks_up_edits(self, sample_site: SampleSite) -> None:
        """Changes in the store appear after the next reload only."""
        provider = _provider(sample_site)
        provider.reload()
        sample_site.tree.add_language_variant(
            sample_site.hello.content_id, "fr", translation="Bonjour"
        )
        assert provider.translate("/common/hello", "fr") == "Salut"
        provider.reload()
        assert provider.translate("/common/hello", "fr") == "Bonjour"

    def test_collisions_reported(self, sample_site: SampleSite) -> None:
        """Key collisions show up on the load result."""
        tree = sample_site.tree
        tree.add(make_item(tree.next_id(), sample_site.common.content_id, "Hello!", language="en"))
        result = _provider(sample_site).reload()
        assert result.status is LoadStatus.SUCCESS
        assert {collision.language for collision in result.collisions} == {"en", "fr"}

    def test_unload(self, sample_site: SampleSite) -> None:
        """Unloading discards the table."""
        provider = _provider(sample_site)
        provider.reload()
        provider.unload()
        assert not provider.is_loaded
        assert provider.last_result is None
        assert provider.translate("/common/hello", "en") is None
        assert provider.available_languages == ()


class TestTranslate:
    """Test lookups and the fallback chain."""

    def test_falls_back_to_master_language(self, sample_site: SampleSite) -> None:
        """Keys missing in a language resolve in the master language."""
        _add_greeting(sample_site)
        provider = _provider(sample_site)
        provider.reload()
        assert provider.translate("greeting", "fr") == "Welcome"

    def test_missing_key(self, sample_site: SampleSite) -> None:
        """Unknown keys return None; values are never invented."""
        provider = _provider(sample_site)
        provider.reload()
        assert provider.translate("missingkey", "en") is None
        assert provider.translate("", "en") is None

    @pytest.mark.parametrize(
        "key", ["/common/hello", "common/hello", "/Common/Hello/", "COMMON/HELLO"]
    )
    def test_key_normalization(self, sample_site: SampleSite, key: str) -> None:
        """Keys are case-insensitive with optional leading and trailing slashes."""
        provider = _provider(sample_site)
        provider.reload()
        assert provider.translate(key, "fr") == "Salut"

    @pytest.mark.parametrize(
        ("language", "expected"),
        [("fr-CA", "Salut"), ("fr_BE", "Salut"), ("FR", "Salut"), ("de", "Hi"), (None, "Hi")],
    )
    def test_parent_cultures(
        self, sample_site: SampleSite, language: str | None, expected: str
    ) -> None:
        """Specific cultures fall back to their parent, then the master language."""
        provider = _provider(sample_site)
        provider.reload()
        assert provider.translate("/common/hello", language) == expected

    def test_other_master_language(self, sample_site: SampleSite) -> None:
        """The configured master language ends the chain."""
        provider = _provider(sample_site, ProviderConfig(enabled=True, master_language="fr"))
        provider.reload()
        assert provider.translate("/common/hello", "de") == "Salut"

    def test_before_first_load(self, sample_site: SampleSite) -> None:
        """Lookups before loading return None."""
        assert _provider(sample_site).translate("/common/hello", "en") is None

    def test_supports(self, sample_site: SampleSite) -> None:
        """supports() checks the culture and its parents against the table."""
        provider = _provider(sample_site)
        provider.reload()
        assert provider.supports("fr-CA")
        assert not provider.supports("de")


class TestGetAllStrings:
    """Test get_all_strings()."""

    def test_merges_fallbacks(self, sample_site: SampleSite) -> None:
        """More specific cultures shadow the master language."""
        _add_greeting(sample_site)
        provider = _provider(sample_site)
        provider.reload()
        assert provider.get_all_strings("fr") == {"/common/hello": "Salut", "/greeting": "Welcome"}

    def test_prefix(self, sample_site: SampleSite) -> None:
        """A prefix restricts results to a section."""
        _add_greeting(sample_site)
        provider = _provider(sample_site)
        provider.reload()
        assert provider.get_all_strings("en", "Common") == {"/common/hello": "Hi"}
        assert provider.get_all_strings("en", "/comm") == {}

    def test_not_loaded(self, sample_site: SampleSite) -> None:
        """Nothing is returned before the first load."""
        assert _provider(sample_site).get_all_strings("en") == {}


class TestGeneratedTrees:
    """Property tests over generated translation trees."""

    @given(translation_trees())
    def test_every_item_translates(self, generated: GeneratedTree) -> None:
        """Every generated item is served with the expected text in every language."""
        provider = ContentXmlLocalizationProvider(
            generated.tree,
            generated.resolver,
            ProviderConfig(enabled=True, master_language=generated.master),
        )
        assert provider.reload().status is LoadStatus.SUCCESS
        for language, strings in generated.expected.items():
            for key, text in strings.items():
                assert provider.translate(key, language) == text
            assert provider.get_all_strings(language) == strings
