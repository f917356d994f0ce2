"""Configuration settings for keyword extraction."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class KeywordConfig(BaseSettings):
    """Keyword extraction configuration settings.

    All settings have sensible defaults and can be overridden via
    environment variables with `KEYWORDS_` prefix or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="KEYWORDS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Local ranking
    max_keywords: Annotated[int, Field(gt=0)] = Field(
        default=35,
        description="Maximum keywords kept after ranking",
    )
    phrase_weight: Annotated[float, Field(gt=0.0)] = Field(
        default=3.0,
        description="Score multiplier applied to each phrase occurrence",
    )
    vocabulary_path: Path | None = Field(
        default=None,
        description="Optional YAML file overriding the packaged word lists",
    )

    # Remote keyword service
    llm_provider: str = Field(
        default="openai",
        description="LLM provider (openai, anthropic, gemini, etc.)",
    )
    llm_model: str = Field(
        default="gpt-4o-mini",
        description="LLM model name",
    )
    llm_api_key: str | None = Field(
        default=None,
        description="API key for LLM provider",
    )
    llm_base_url: str | None = Field(
        default=None,
        description="Base URL for OpenAI-compatible endpoints",
    )
    llm_max_retries: Annotated[int, Field(ge=0)] = Field(
        default=1,
        description="Maximum retry attempts for transient LLM failures",
    )
    llm_timeout: Annotated[float, Field(gt=0)] = Field(
        default=60.0,
        description="Timeout in seconds for LLM calls",
    )
    min_description_chars: Annotated[int, Field(ge=0)] = Field(
        default=50,
        description="Shortest job description the remote service accepts",
    )
    description_char_limit: Annotated[int, Field(gt=0)] = Field(
        default=8000,
        description="Job description characters sent to the remote service",
    )
    remote_max_keywords: Annotated[int, Field(gt=0)] = Field(
        default=40,
        description="Maximum prioritized keywords kept from the remote service",
    )

    @field_validator("vocabulary_path", mode="before")
    @classmethod
    def convert_to_path(cls, v: str | Path | None) -> Path | None:
        """Convert string paths to Path objects."""
        if v is None or v == "":
            return None
        if isinstance(v, str):
            return Path(v)
        return v


# Singleton instance for easy import
_keyword_config: KeywordConfig | None = None


def get_keyword_config() -> KeywordConfig:
    """Get the keyword configuration singleton."""
    global _keyword_config
    if _keyword_config is None:
        _keyword_config = KeywordConfig()
    return _keyword_config


def reset_keyword_config() -> None:
    """Reset the keyword configuration singleton (useful for testing)."""
    global _keyword_config
    _keyword_config = None
