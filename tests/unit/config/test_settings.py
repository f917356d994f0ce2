"""Tests for Settings configuration class."""

import pytest
from pydantic import ValidationError


class TestSettingsDefaults:
    """Test that Settings loads sensible defaults."""

    def test_settings_loads_with_defaults(self, monkeypatch):
        """Settings should load with default values when no env vars are set."""
        for var in ("KEYWORD_SOURCE", "MATCHER", "LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)

        from ats_tailor.config.settings import KeywordSourceMode, MatcherMode, Settings

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.keyword_source == KeywordSourceMode.LOCAL
        assert settings.matcher == MatcherMode.RELIABLE
        assert settings.log_level == "INFO"


class TestSettingsFromEnvironment:
    """Test that Settings reads environment variables."""

    def test_reads_environment(self, monkeypatch):
        from ats_tailor.config.settings import KeywordSourceMode, MatcherMode, Settings

        monkeypatch.setenv("KEYWORD_SOURCE", "AUTO")
        monkeypatch.setenv("MATCHER", "basic")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.keyword_source == KeywordSourceMode.AUTO
        assert settings.matcher == MatcherMode.BASIC
        assert settings.log_level == "DEBUG"


class TestSettingsValidation:
    """Test that invalid values are rejected."""

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("keyword_source", "cloud"),
            ("matcher", "fuzzy"),
            ("log_level", "LOUD"),
        ],
    )
    def test_invalid_values(self, field, value):
        from ats_tailor.config.settings import Settings

        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})  # type: ignore[arg-type]


class TestSettingsSingleton:
    def test_get_settings_is_singleton(self):
        from ats_tailor.config.settings import get_settings, reset_settings

        first = get_settings()
        assert get_settings() is first

        reset_settings()
        assert get_settings() is not first
