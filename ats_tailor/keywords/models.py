"""Data models for keyword extraction."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, model_validator


@dataclass
class ScoredTerm:
    """A candidate keyword with its ranking score."""

    term: str
    score: float
    frequency: int
    is_phrase: bool = False


@dataclass(frozen=True)
class TierThresholds:
    """Positional priority-tier sizes for a ranked keyword list.

    ``high = min(high_cap, ceil(n * high_ratio))`` and
    ``medium = min(medium_cap, ceil(n * medium_ratio))``; the rest is low.
    """

    high_cap: int
    high_ratio: float
    medium_cap: int
    medium_ratio: float

    def split(self, count: int) -> tuple[int, int]:
        """Return the (high, medium) tier sizes for ``count`` ranked keywords."""
        if count <= 0:
            return 0, 0
        high = min(self.high_cap, math.ceil(count * self.high_ratio), count)
        medium = min(self.medium_cap, math.ceil(count * self.medium_ratio))
        medium = min(medium, count - high)
        return high, medium


# Used by the heuristic ranker.
RANKER_TIERS = TierThresholds(high_cap=15, high_ratio=0.40, medium_cap=10, medium_ratio=0.35)

# Used when the orchestrator re-tiers a flat or remotely produced keyword list.
ORCHESTRATOR_TIERS = TierThresholds(
    high_cap=11, high_ratio=0.45, medium_cap=8, medium_ratio=0.35
)


class KeywordSet(BaseModel):
    """Ranked keywords partitioned into priority tiers.

    ``all`` is ordered by rank. The three tiers are a disjoint partition of
    ``all`` with the highest-ranked keywords in ``high_priority``.
    """

    all: list[str] = Field(default_factory=list, description="Keywords by rank")
    high_priority: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("high_priority", "highPriority"),
    )
    medium_priority: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("medium_priority", "mediumPriority"),
    )
    low_priority: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("low_priority", "lowPriority"),
    )
    total: int = Field(default=0, ge=0, description="Number of keywords in `all`")

    @model_validator(mode="before")
    @classmethod
    def fill_total(cls, data: Any) -> Any:
        """Default ``total`` to the length of ``all``."""
        if isinstance(data, dict) and data.get("total") is None:
            data = dict(data)
            data["total"] = len(data.get("all") or [])
        return data

    @model_validator(mode="after")
    def validate_partition(self) -> KeywordSet:
        """Ensure the tiers partition ``all`` and ``total`` agrees."""
        if len(set(self.all)) != len(self.all):
            raise ValueError("KeywordSet.all must not contain duplicates")
        if self.total != len(self.all):
            raise ValueError(
                f"KeywordSet.total must equal len(all) (got {self.total}, {len(self.all)})"
            )

        tiers = [self.high_priority, self.medium_priority, self.low_priority]
        tier_count = sum(len(tier) for tier in tiers)
        union = set().union(*tiers)
        if tier_count != len(union):
            raise ValueError("KeywordSet priority tiers must be pairwise disjoint")
        if union != set(self.all):
            raise ValueError("KeywordSet priority tiers must partition `all`")
        return self

    @classmethod
    def empty(cls) -> KeywordSet:
        """Return a keyword set with no keywords."""
        return cls()

    @classmethod
    def from_ranked(cls, keywords: list[str], tiers: TierThresholds) -> KeywordSet:
        """Partition an already-ranked keyword list into tiers by position."""
        ranked: list[str] = []
        seen: set[str] = set()
        for keyword in keywords:
            if keyword not in seen:
                seen.add(keyword)
                ranked.append(keyword)

        high, medium = tiers.split(len(ranked))
        return cls(
            all=ranked,
            high_priority=ranked[:high],
            medium_priority=ranked[high : high + medium],
            low_priority=ranked[high + medium :],
            total=len(ranked),
        )

    def tier_of(self, keyword: str) -> str | None:
        """Return 'high', 'medium' or 'low' for a keyword, or None if absent."""
        if keyword in self.high_priority:
            return "high"
        if keyword in self.medium_priority:
            return "medium"
        if keyword in self.low_priority:
            return "low"
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> KeywordSet:
        """Deserialize from dictionary."""
        return cls.model_validate(data)


class KeywordBreakdown(BaseModel):
    """Structured keyword breakdown returned by the remote keyword service."""

    required_skills: list[str] = Field(
        default_factory=list,
        description="Skills explicitly marked as required or must-have",
    )
    preferred_skills: list[str] = Field(
        default_factory=list,
        description="Skills marked as preferred, nice-to-have, bonus or plus",
    )
    key_responsibilities: list[str] = Field(
        default_factory=list,
        description="Main duties that should be reflected in experience bullets",
    )
    job_title: str = Field(default="", description="Standardized job title")
    experience_level: str = Field(default="mid", description="Seniority level")
    industry_keywords: list[str] = Field(
        default_factory=list, description="Industry and domain terms"
    )
    certifications: list[str] = Field(
        default_factory=list, description="Certifications mentioned by name"
    )
    soft_skills: list[str] = Field(
        default_factory=list, description="Soft skills mentioned explicitly"
    )
    tools_technologies: list[str] = Field(
        default_factory=list, description="Tools, platforms, frameworks and technologies"
    )
    ats_priority_keywords: list[str] = Field(
        default_factory=list,
        description="Deduplicated, priority-ordered keywords for ATS matching",
    )

    def build_priority_keywords(self, limit: int = 40) -> list[str]:
        """Combine the categories into one deduplicated, priority-ordered list."""
        combined = [
            *self.required_skills,
            *self.tools_technologies,
            *self.certifications,
            *self.preferred_skills[:10],
            *self.soft_skills[:5],
        ]
        ordered: list[str] = []
        for keyword in combined:
            value = keyword.strip()
            if value and value not in ordered:
                ordered.append(value)
        return ordered[:limit]

    def to_keyword_set(
        self, tiers: TierThresholds, max_keywords: int | None = None
    ) -> KeywordSet:
        """Convert the breakdown into a tiered KeywordSet."""
        keywords = self.ats_priority_keywords or self.build_priority_keywords()
        if max_keywords is not None:
            keywords = keywords[:max_keywords]
        return KeywordSet.from_ranked(keywords, tiers)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> KeywordBreakdown:
        """Deserialize from dictionary."""
        return cls.model_validate(data)
