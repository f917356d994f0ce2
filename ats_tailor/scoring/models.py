"""Data models for keyword match scoring."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator


class MatchResult(BaseModel):
    """Which keywords occur in a text, and the resulting percentage score."""

    matched: list[str] = Field(default_factory=list, description="Keywords found")
    missing: list[str] = Field(default_factory=list, description="Keywords not found")
    score: int = Field(default=0, ge=0, le=100, description="Match percentage (0-100)")
    match_count: int = Field(default=0, ge=0)
    total_keywords: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def validate_counts(self) -> MatchResult:
        """Ensure counts agree with the keyword lists and the score."""
        if self.match_count != len(self.matched):
            raise ValueError("match_count must equal len(matched)")
        if self.total_keywords != len(self.matched) + len(self.missing):
            raise ValueError("total_keywords must equal len(matched) + len(missing)")
        expected = compute_score(self.match_count, self.total_keywords)
        if self.score != expected:
            raise ValueError(f"score must be {expected} (got {self.score})")
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return self.model_dump(mode="json")


def compute_score(match_count: int, total: int) -> int:
    """Return ``round(match_count / total * 100)``, or 0 when there are no keywords.

    Halves round up, so 1 of 8 keywords scores 13 rather than 12.
    """
    if total <= 0:
        return 0
    return int(match_count * 100 / total + 0.5)
