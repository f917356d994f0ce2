"""Tests for keyword data models."""

import pytest
from pydantic import ValidationError

from ats_tailor.keywords.models import (
    ORCHESTRATOR_TIERS,
    RANKER_TIERS,
    KeywordBreakdown,
    KeywordSet,
    TierThresholds,
)


class TestTierThresholds:
    """Test positional tier sizing."""

    @pytest.mark.parametrize(
        ("tiers", "count", "expected"),
        [
            (RANKER_TIERS, 20, (8, 7)),
            (RANKER_TIERS, 50, (15, 10)),
            (RANKER_TIERS, 1, (1, 0)),
            (ORCHESTRATOR_TIERS, 20, (9, 7)),
            (ORCHESTRATOR_TIERS, 35, (11, 8)),
            (ORCHESTRATOR_TIERS, 0, (0, 0)),
        ],
    )
    def test_split(self, tiers: TierThresholds, count, expected):
        """Sizes are ratio-based and capped."""
        assert tiers.split(count) == expected


class TestKeywordSet:
    """Test KeywordSet invariants."""

    def test_from_ranked_partitions_by_position(self):
        """Highest-ranked keywords land in the high tier."""
        ranked = [f"kw{i}" for i in range(10)]

        keywords = KeywordSet.from_ranked(ranked, RANKER_TIERS)

        assert keywords.high_priority == ranked[:4]
        assert keywords.medium_priority == ranked[4:8]
        assert keywords.low_priority == ranked[8:]
        assert keywords.total == 10

    def test_from_ranked_drops_duplicates(self):
        """Repeated keywords keep their first position."""
        keywords = KeywordSet.from_ranked(["python", "aws", "python"], RANKER_TIERS)

        assert keywords.all == ["python", "aws"]

    def test_total_defaults_to_length(self):
        """Total is filled from all when omitted."""
        keywords = KeywordSet(all=["python"], low_priority=["python"])

        assert keywords.total == 1

    def test_rejects_duplicates(self):
        """All must be unique."""
        with pytest.raises(ValidationError):
            KeywordSet(all=["python", "python"], high_priority=["python"])

    def test_rejects_overlapping_tiers(self):
        """A keyword cannot be in two tiers."""
        with pytest.raises(ValidationError):
            KeywordSet(
                all=["python", "aws"],
                high_priority=["python"],
                medium_priority=["python"],
                low_priority=["aws"],
            )

    def test_rejects_incomplete_partition(self):
        """Every keyword must belong to a tier."""
        with pytest.raises(ValidationError):
            KeywordSet(all=["python", "aws"], high_priority=["python"])

    def test_rejects_wrong_total(self):
        """Total must match the number of keywords."""
        with pytest.raises(ValidationError):
            KeywordSet(all=["python"], high_priority=["python"], total=3)

    def test_tier_of(self):
        """tier_of reports the tier a keyword is in."""
        keywords = KeywordSet.from_ranked(["a1", "b2", "c3"], RANKER_TIERS)

        assert keywords.tier_of("a1") == "high"
        assert keywords.tier_of("c3") in {"medium", "low"}
        assert keywords.tier_of("zz") is None

    def test_dict_round_trip(self):
        """to_dict and from_dict are inverse."""
        keywords = KeywordSet.from_ranked(["python", "aws", "docker"], RANKER_TIERS)

        assert KeywordSet.from_dict(keywords.to_dict()) == keywords


class TestKeywordBreakdown:
    """Test the remote breakdown shape."""

    def test_build_priority_keywords_order_and_limits(self):
        """Required, tools and certifications first, then capped preferred and soft skills."""
        breakdown = KeywordBreakdown(
            required_skills=["Python", "AWS"],
            tools_technologies=["Docker", "AWS"],
            certifications=["CKA"],
            preferred_skills=[f"pref{i}" for i in range(12)],
            soft_skills=[f"soft{i}" for i in range(7)],
        )

        keywords = breakdown.build_priority_keywords()

        assert keywords[:4] == ["Python", "AWS", "Docker", "CKA"]
        assert "pref9" in keywords
        assert "pref10" not in keywords
        assert "soft4" in keywords
        assert "soft5" not in keywords
        assert len(keywords) == 19

    def test_build_priority_keywords_limit(self):
        """The combined list is truncated to the limit."""
        breakdown = KeywordBreakdown(required_skills=[f"skill{i}" for i in range(50)])

        assert len(breakdown.build_priority_keywords()) == 40
        assert len(breakdown.build_priority_keywords(limit=5)) == 5

    def test_to_keyword_set_prefers_ats_priority_keywords(self):
        """An explicit priority list is used as the ranking."""
        breakdown = KeywordBreakdown(
            required_skills=["Python"],
            ats_priority_keywords=["Kubernetes", "Python"],
        )

        keywords = breakdown.to_keyword_set(ORCHESTRATOR_TIERS)

        assert keywords.all == ["Kubernetes", "Python"]

    def test_defaults(self):
        """Experience level defaults to mid."""
        assert KeywordBreakdown().experience_level == "mid"
