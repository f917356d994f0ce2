"""Configuration settings for the Tailoring module.

Provides the target score, per-section injection caps and the pacing of
progress reporting.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TailoringConfig(BaseSettings):
    """Configuration for the tailoring system.

    Settings can be overridden via environment variables prefixed with TAILORING_.

    Example: TAILORING_TARGET_SCORE=90
    """

    model_config = SettingsConfigDict(
        env_prefix="TAILORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    target_score: Annotated[int, Field(ge=0, le=100)] = Field(
        default=95,
        description="Match score at which tailoring leaves the résumé unchanged",
    )

    # Summary injection
    max_keywords_summary: Annotated[int, Field(ge=0)] = Field(
        default=8,
        description="Missing keywords considered for the summary",
    )
    summary_insert_count: Annotated[int, Field(ge=0)] = Field(
        default=4,
        description="Keywords placed in a clause after the first sentence",
    )
    summary_append_count: Annotated[int, Field(ge=0)] = Field(
        default=5,
        description="Keywords placed in a sentence appended to the summary",
    )

    # Experience injection
    max_keywords_experience: Annotated[int, Field(ge=0)] = Field(
        default=20,
        description="Missing keywords considered for experience bullets",
    )
    keywords_per_bullet: Annotated[int, Field(ge=0)] = Field(
        default=2,
        description="Keywords spliced into a single bullet",
    )
    max_bullets: Annotated[int, Field(ge=0)] = Field(
        default=10,
        description="Bullets eligible for injection; later bullets are untouched",
    )

    # Skills injection
    max_keywords_skills: Annotated[int, Field(ge=0)] = Field(
        default=15,
        description="Missing keywords added to the skills section",
    )

    # Pacing
    yield_interval: Annotated[int, Field(gt=0)] = Field(
        default=10,
        description="Items processed between event-loop yields",
    )
    initial_display_delay: Annotated[float, Field(ge=0.0)] = Field(
        default=0.3,
        description="Seconds to pause after reporting the initial score",
    )
    score_animation_seconds: Annotated[float, Field(ge=0.0)] = Field(
        default=0.8,
        description="Duration of the initial-to-final score animation",
    )
    score_animation_steps: Annotated[int, Field(gt=0)] = Field(
        default=20,
        description="Frames reported during the score animation",
    )

    @model_validator(mode="after")
    def validate_summary_counts(self) -> TailoringConfig:
        """Ensure summary placement counts do not exceed the summary cap."""
        if (
            self.summary_insert_count > self.max_keywords_summary
            or self.summary_append_count > self.max_keywords_summary
        ):
            raise ValueError(
                "summary_insert_count and summary_append_count must not exceed "
                f"max_keywords_summary ({self.max_keywords_summary})"
            )
        return self


# Singleton instance
_tailoring_config: TailoringConfig | None = None


def get_tailoring_config() -> TailoringConfig:
    """Get the tailoring configuration singleton."""
    global _tailoring_config
    if _tailoring_config is None:
        _tailoring_config = TailoringConfig()
    return _tailoring_config


def reset_tailoring_config() -> None:
    """Reset the configuration singleton (useful for testing)."""
    global _tailoring_config
    _tailoring_config = None
