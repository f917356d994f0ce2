"""Match analysis between a job description and a résumé.

Splits matched and missing keywords by priority tier and turns the result
into human-readable suggestions for the UI layer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field

from ats_tailor.keywords.models import KeywordSet
from ats_tailor.scoring.matchers import Matcher, WordBoundaryMatcher
from ats_tailor.scoring.models import MatchResult, compute_score

if TYPE_CHECKING:
    from ats_tailor.keywords.ranker import KeywordRanker


class TieredKeywords(BaseModel):
    """Keywords grouped by priority tier."""

    high: list[str] = Field(default_factory=list)
    medium: list[str] = Field(default_factory=list)
    low: list[str] = Field(default_factory=list)


class MatchAnalysis(BaseModel):
    """Keywords, their match against a résumé, and tiered breakdowns."""

    keywords: KeywordSet
    match: MatchResult
    categorized_matched: TieredKeywords
    categorized_missing: TieredKeywords

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return self.model_dump(mode="json")


class Suggestion(BaseModel):
    """A single improvement suggestion."""

    priority: Literal["high", "medium", "low"]
    type: Literal["missing_keywords", "overall"]
    message: str
    keywords: list[str] = Field(default_factory=list)
    impact: str | None = None
    action: str | None = None


class TailoringValidation(BaseModel):
    """Whether a tailored text reliably covers the job keywords."""

    score: int
    keyword_count: int
    reliable: bool
    matched: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)


def categorize(keywords: KeywordSet, match: MatchResult) -> tuple[TieredKeywords, TieredKeywords]:
    """Split a match result into (matched, missing) per tier."""
    matched = set(match.matched)

    def _split(found: bool) -> TieredKeywords:
        return TieredKeywords(
            high=[k for k in keywords.high_priority if (k in matched) is found],
            medium=[k for k in keywords.medium_priority if (k in matched) is found],
            low=[k for k in keywords.low_priority if (k in matched) is found],
        )

    return _split(True), _split(False)


def analyze_keywords(
    keywords: KeywordSet, resume_text: str, matcher: Matcher | None = None
) -> MatchAnalysis:
    """Match an existing KeywordSet against a résumé."""
    match = (matcher or WordBoundaryMatcher()).match(resume_text, keywords.all)
    matched, missing = categorize(keywords, match)
    return MatchAnalysis(
        keywords=keywords,
        match=match,
        categorized_matched=matched,
        categorized_missing=missing,
    )


def analyze_match(
    job_description: str,
    resume_text: str,
    ranker: KeywordRanker | None = None,
    matcher: Matcher | None = None,
    max_keywords: int | None = None,
) -> MatchAnalysis:
    """Extract keywords from a job description and match them against a résumé."""
    if ranker is None:
        from ats_tailor.keywords.ranker import KeywordRanker

        ranker = KeywordRanker()
    keywords = ranker.extract(job_description, max_keywords)
    return analyze_keywords(keywords, resume_text, matcher)


def generate_suggestions(analysis: MatchAnalysis) -> list[Suggestion]:
    """Suggest which keywords to add, most important first."""
    suggestions: list[Suggestion] = []
    missing = analysis.categorized_missing
    total = analysis.match.total_keywords

    if missing.high:
        more = "..." if len(missing.high) > 3 else ""
        suggestions.append(
            Suggestion(
                priority="high",
                type="missing_keywords",
                message=(
                    f"Add {len(missing.high)} high-priority keywords: "
                    f"{', '.join(missing.high[:3])}{more}"
                ),
                keywords=missing.high,
                impact=f"Could improve match by ~{compute_score(len(missing.high), total)}%",
            )
        )

    if missing.medium:
        suggestions.append(
            Suggestion(
                priority="medium",
                type="missing_keywords",
                message=f"Consider adding {len(missing.medium)} medium-priority keywords",
                keywords=missing.medium,
                impact=f"Could improve match by ~{compute_score(len(missing.medium), total)}%",
            )
        )

    if analysis.match.score < 70:
        suggestions.append(
            Suggestion(
                priority="high",
                type="overall",
                message="Résumé needs significant keyword optimization for ATS compatibility",
                action="Run full tailoring to reach the target match score",
            )
        )

    return suggestions


def potential_score(matched_count: int, total_keywords: int, additions: int) -> int:
    """Score a résumé would reach if ``additions`` more keywords were matched."""
    return compute_score(min(matched_count + additions, total_keywords), total_keywords)


def validate_tailoring(
    text: str,
    keywords: list[str],
    matcher: Matcher | None = None,
    min_score: int = 90,
    min_keywords: int = 10,
) -> TailoringValidation:
    """Check that a tailored text scores high enough on enough keywords."""
    match = (matcher or WordBoundaryMatcher()).match(text, keywords)
    return TailoringValidation(
        score=match.score,
        keyword_count=match.match_count,
        reliable=match.score >= min_score and match.match_count >= min_keywords,
        matched=match.matched,
        missing=match.missing,
    )
