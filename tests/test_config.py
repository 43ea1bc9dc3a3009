"""Tests for ProviderConfig and settings parsing."""

from __future__ import annotations

import pytest

from contentl10n.config import ProviderConfig, parse_bool


class TestParseBool:
    """Test lenient boolean parsing of settings values."""

    @pytest.mark.parametrize("value", ["true", "True", " TRUE ", True])
    def test_true_values(self, value: object) -> None:
        """Only spellings of 'true' enable a flag."""
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["false", "yes", "1", "", None, "on", 1, False])
    def test_everything_else_is_false(self, value: object) -> None:
        """Unparseable values fall back to False."""
        assert parse_bool(value) is False


class TestProviderConfig:
    """Test ProviderConfig construction and validation."""

    def test_defaults(self) -> None:
        """The default configuration is disabled, non-primary, English."""
        config = ProviderConfig()
        assert config.enabled is False
        assert config.is_primary_provider is False
        assert config.master_language == "en"
        assert config.site_id is None

    @pytest.mark.parametrize("master", ["", "   "])
    def test_blank_master_language_rejected(self, master: str) -> None:
        """A master language is required."""
        with pytest.raises(ValueError, match="master_language"):
            ProviderConfig(master_language=master)

    def test_blank_site_id_rejected(self) -> None:
        """A blank site id is rejected; None means the default site."""
        with pytest.raises(ValueError, match="site_id"):
            ProviderConfig(site_id=" ")

    def test_frozen(self) -> None:
        """Configurations are immutable."""
        config = ProviderConfig()
        with pytest.raises(AttributeError):
            config.enabled = True  # type: ignore[misc]


class TestFromSettings:
    """Test ProviderConfig.from_settings() and from_environment()."""

    def test_reads_prefixed_keys(self) -> None:
        """All four settings are read from their prefixed keys."""
        config = ProviderConfig.from_settings(
            {
                "ContentTranslationProvider:Enabled": "true",
                "ContentTranslationProvider:IsPrimaryProvider": "True",
                "ContentTranslationProvider:MasterLanguage": " nl ",
                "ContentTranslationProvider:SiteId": "shop",
            }
        )
        assert config == ProviderConfig(
            enabled=True, is_primary_provider=True, master_language="nl", site_id="shop"
        )

    def test_missing_keys_keep_defaults(self) -> None:
        """An empty settings mapping yields the default configuration."""
        assert ProviderConfig.from_settings({}) == ProviderConfig()

    def test_unparseable_flags_are_false(self) -> None:
        """Garbage flag values disable rather than fail."""
        config = ProviderConfig.from_settings({"ContentTranslationProvider:Enabled": "maybe"})
        assert config.enabled is False

    def test_from_environment(self) -> None:
        """Environment variables use '__' in place of ':'."""
        config = ProviderConfig.from_environment(
            {
                "ContentTranslationProvider__Enabled": "true",
                "ContentTranslationProvider__MasterLanguage": "de",
                "UNRELATED": "x",
            }
        )
        assert config.enabled is True
        assert config.master_language == "de"
        assert config.is_primary_provider is False

    def test_from_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without an explicit mapping os.environ is read."""
        monkeypatch.setenv("ContentTranslationProvider__IsPrimaryProvider", "true")
        assert ProviderConfig.from_environment().is_primary_provider is True
