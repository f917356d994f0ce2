"""Keyword extraction from job descriptions.

Public API:
    - KeywordRanker: Heuristic ranking of terms and phrases
    - KeywordSet: Ranked keywords split into priority tiers
    - RemoteKeywordClient: LLM-backed keyword breakdown client
    - build_keyword_source / coerce_keywords: Source selection and shape coercion
"""

from ats_tailor.keywords.config import (
    KeywordConfig,
    get_keyword_config,
    reset_keyword_config,
)
from ats_tailor.keywords.models import (
    ORCHESTRATOR_TIERS,
    RANKER_TIERS,
    KeywordBreakdown,
    KeywordSet,
    ScoredTerm,
    TierThresholds,
)
from ats_tailor.keywords.normalizer import clean, tokenize
from ats_tailor.keywords.ranker import KeywordRanker, extract_keywords
from ats_tailor.keywords.remote import RemoteKeywordClient
from ats_tailor.keywords.sources import (
    FallbackKeywordSource,
    KeywordSource,
    LocalKeywordSource,
    RemoteKeywordSource,
    build_keyword_source,
    coerce_keywords,
)
from ats_tailor.keywords.vocabulary import Vocabulary, load_vocabulary

__all__ = [
    "KeywordRanker",
    "extract_keywords",
    "KeywordSet",
    "ScoredTerm",
    "KeywordBreakdown",
    "TierThresholds",
    "RANKER_TIERS",
    "ORCHESTRATOR_TIERS",
    "clean",
    "tokenize",
    "Vocabulary",
    "load_vocabulary",
    "RemoteKeywordClient",
    "KeywordSource",
    "LocalKeywordSource",
    "RemoteKeywordSource",
    "FallbackKeywordSource",
    "build_keyword_source",
    "coerce_keywords",
    "KeywordConfig",
    "get_keyword_config",
    "reset_keyword_config",
]
