"""Configuration settings for ats_tailor."""

from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class KeywordSourceMode(str, Enum):
    """Where job keywords come from."""

    LOCAL = "local"
    REMOTE = "remote"
    AUTO = "auto"


class MatcherMode(str, Enum):
    """Which keyword presence check the pipeline uses."""

    RELIABLE = "reliable"
    BASIC = "basic"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings have sensible defaults and can be overridden via
    environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    keyword_source: KeywordSourceMode = Field(
        default=KeywordSourceMode.LOCAL,
        description=(
            "Keyword source: 'local' heuristic ranker, 'remote' LLM service, "
            "or 'auto' (remote with local fallback)"
        ),
    )
    matcher: MatcherMode = Field(
        default=MatcherMode.RELIABLE,
        description="Matcher: 'reliable' word-boundary regex or 'basic' substring",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR",
    )

    @field_validator("keyword_source", mode="before")
    @classmethod
    def validate_keyword_source(cls, v: str | KeywordSourceMode) -> KeywordSourceMode:
        """Convert string keyword source to KeywordSourceMode."""
        if isinstance(v, KeywordSourceMode):
            return v
        if isinstance(v, str):
            value = v.lower().strip()
            for mode in KeywordSourceMode:
                if mode.value == value:
                    return mode
            raise ValueError(
                f"Invalid keyword_source: {v}. Must be one of: local, remote, auto"
            )
        raise ValueError(f"Invalid keyword_source type: {type(v)}")

    @field_validator("matcher", mode="before")
    @classmethod
    def validate_matcher(cls, v: str | MatcherMode) -> MatcherMode:
        """Convert string matcher to MatcherMode."""
        if isinstance(v, MatcherMode):
            return v
        if isinstance(v, str):
            value = v.lower().strip()
            if value == "reliable":
                return MatcherMode.RELIABLE
            elif value == "basic":
                return MatcherMode.BASIC
            raise ValueError(f"Invalid matcher: {v}. Must be 'reliable' or 'basic'")
        raise ValueError(f"Invalid matcher type: {type(v)}")

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a known level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


# Singleton instance for easy import
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the application settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (useful for testing)."""
    global _settings
    _settings = None
