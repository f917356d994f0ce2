"""Keyword match scoring.

Public API:
    - contains_keyword: The shared word-boundary presence check
    - Matcher, WordBoundaryMatcher, SubstringMatcher, get_matcher: Matcher variants
    - match_keywords: Score a keyword list against a text
    - MatchResult: Match output model
    - analyze_match, generate_suggestions, validate_tailoring: Tiered analysis
"""

from ats_tailor.scoring.analysis import (
    MatchAnalysis,
    Suggestion,
    TailoringValidation,
    TieredKeywords,
    analyze_keywords,
    analyze_match,
    generate_suggestions,
    potential_score,
    validate_tailoring,
)
from ats_tailor.scoring.matchers import (
    Matcher,
    SubstringMatcher,
    WordBoundaryMatcher,
    contains_keyword,
    get_matcher,
    keyword_pattern,
    match_keywords,
    normalize_keyword,
)
from ats_tailor.scoring.models import MatchResult, compute_score

__all__ = [
    "contains_keyword",
    "keyword_pattern",
    "normalize_keyword",
    "Matcher",
    "WordBoundaryMatcher",
    "SubstringMatcher",
    "get_matcher",
    "match_keywords",
    "MatchResult",
    "compute_score",
    "MatchAnalysis",
    "TieredKeywords",
    "Suggestion",
    "TailoringValidation",
    "analyze_keywords",
    "analyze_match",
    "generate_suggestions",
    "potential_score",
    "validate_tailoring",
]
