"""Tests for tailoring configuration."""

import pytest
from pydantic import ValidationError


class TestTailoringConfig:
    """Test TailoringConfig settings."""

    def test_tailoring_config_has_defaults(self):
        """TailoringConfig should load with sensible defaults."""
        from ats_tailor.tailoring.config import TailoringConfig

        config = TailoringConfig(_env_file=None)  # type: ignore[call-arg]

        assert config.target_score == 95
        assert config.max_keywords_summary == 8
        assert config.summary_insert_count == 4
        assert config.summary_append_count == 5
        assert config.max_keywords_experience == 20
        assert config.keywords_per_bullet == 2
        assert config.max_bullets == 10
        assert config.max_keywords_skills == 15
        assert config.yield_interval == 10
        assert config.initial_display_delay == 0.3
        assert config.score_animation_seconds == 0.8
        assert config.score_animation_steps == 20

    def test_tailoring_config_reads_from_environment_variables(self, monkeypatch):
        """TailoringConfig should read TAILORING_ prefixed variables."""
        from ats_tailor.tailoring.config import TailoringConfig

        monkeypatch.setenv("TAILORING_TARGET_SCORE", "90")
        monkeypatch.setenv("TAILORING_MAX_BULLETS", "4")
        monkeypatch.setenv("TAILORING_INITIAL_DISPLAY_DELAY", "0")

        config = TailoringConfig(_env_file=None)  # type: ignore[call-arg]

        assert config.target_score == 90
        assert config.max_bullets == 4
        assert config.initial_display_delay == 0.0

    def test_target_score_is_bounded(self):
        """Target score must be a percentage."""
        from ats_tailor.tailoring.config import TailoringConfig

        with pytest.raises(ValidationError):
            TailoringConfig(_env_file=None, target_score=101)  # type: ignore[call-arg]

    def test_summary_counts_cannot_exceed_cap(self):
        """Summary placement counts are bounded by the summary cap."""
        from ats_tailor.tailoring.config import TailoringConfig

        with pytest.raises(ValidationError, match="max_keywords_summary"):
            TailoringConfig(  # type: ignore[call-arg]
                _env_file=None, max_keywords_summary=3, summary_insert_count=4
            )

    def test_get_tailoring_config_is_singleton(self):
        """get_tailoring_config returns the same instance until reset."""
        from ats_tailor.tailoring.config import (
            get_tailoring_config,
            reset_tailoring_config,
        )

        first = get_tailoring_config()
        assert get_tailoring_config() is first

        reset_tailoring_config()
        assert get_tailoring_config() is not first
