"""Heuristic keyword ranking for job descriptions.

There is no corpus to compute a real inverse document frequency from, so each
term's in-document frequency is multiplied by a specificity weight instead:
longer terms, known technical/business vocabulary and terms containing
digits, "+" or "#" are boosted. Known multi-word phrases are counted
separately and weighted per occurrence, which ranks them above single terms.
"""

from __future__ import annotations

import logging
import re
from collections import Counter

from ats_tailor.keywords.config import KeywordConfig, get_keyword_config
from ats_tailor.keywords.models import RANKER_TIERS, KeywordSet, ScoredTerm, TierThresholds
from ats_tailor.keywords.normalizer import clean, tokenize
from ats_tailor.keywords.vocabulary import Vocabulary, load_vocabulary
from ats_tailor.scoring.matchers import contains_keyword, normalize_keyword

logger = logging.getLogger(__name__)

_TECHNICAL_CHAR_RE = re.compile(r"[\d+#]")


class KeywordRanker:
    """Extracts and ranks keywords from a single job description.

    Attributes:
        config: Keyword configuration (max keywords, phrase weight).
        vocabulary: Stopwords, high-value terms and phrases.
        tiers: Priority-tier thresholds applied to the ranked list.
    """

    def __init__(
        self,
        config: KeywordConfig | None = None,
        vocabulary: Vocabulary | None = None,
        tiers: TierThresholds = RANKER_TIERS,
    ) -> None:
        self.config = config or get_keyword_config()
        self.vocabulary = vocabulary or load_vocabulary(self.config.vocabulary_path)
        self.tiers = tiers

    def term_weight(self, term: str) -> float:
        """Return the specificity multiplier for a single term."""
        weight = 1.0
        if len(term) >= 8:
            weight *= 1.5
        elif len(term) >= 6:
            weight *= 1.2
        if term in self.vocabulary.high_value:
            weight *= 2.0
        if _TECHNICAL_CHAR_RE.search(term):
            weight *= 1.3
        return weight

    def score_terms(self, text: str) -> list[ScoredTerm]:
        """Score every single term and known phrase in ``text``.

        Single terms come first in order of first appearance, then phrases in
        vocabulary order. Ranking relies on this order to break ties.
        """
        cleaned = clean(text)
        if not cleaned:
            return []

        tokens = tokenize(cleaned, self.vocabulary.stop_words)
        candidates: list[ScoredTerm] = []

        if tokens:
            counts = Counter(tokens)
            total = len(tokens)
            for term, count in counts.items():
                tf = count / total
                candidates.append(
                    ScoredTerm(
                        term=term,
                        score=tf * self.term_weight(term),
                        frequency=count,
                        is_phrase=False,
                    )
                )

        for phrase in self.vocabulary.phrases:
            occurrences = cleaned.count(phrase)
            if occurrences:
                candidates.append(
                    ScoredTerm(
                        term=phrase,
                        score=occurrences * self.config.phrase_weight,
                        frequency=occurrences,
                        is_phrase=True,
                    )
                )

        return candidates

    def rank(self, text: str, max_keywords: int | None = None) -> list[ScoredTerm]:
        """Return the top-ranked, de-duplicated terms for ``text``."""
        limit = max_keywords if max_keywords is not None else self.config.max_keywords
        if limit <= 0:
            return []

        # sorted() is stable, so equal scores keep their candidate order.
        ranked = sorted(self.score_terms(text), key=lambda item: item.score, reverse=True)

        seen: set[str] = set()
        kept_phrases: list[str] = []
        unique: list[ScoredTerm] = []
        for item in ranked:
            key = normalize_keyword(item.term)
            if key in seen:
                continue
            if not item.is_phrase and any(
                contains_keyword(phrase, item.term) for phrase in kept_phrases
            ):
                continue
            seen.add(key)
            if item.is_phrase:
                kept_phrases.append(item.term)
            unique.append(item)
            if len(unique) >= limit:
                break

        return unique

    def extract(self, text: object, max_keywords: int | None = None) -> KeywordSet:
        """Extract a tiered KeywordSet from a job description.

        Empty, non-string or uninformative input yields an empty set.
        """
        if not isinstance(text, str) or not text.strip():
            return KeywordSet.empty()

        top = self.rank(text, max_keywords)
        keyword_set = KeywordSet.from_ranked([item.term for item in top], self.tiers)
        logger.debug(
            "Ranked %s keywords (%s high, %s medium, %s low)",
            keyword_set.total,
            len(keyword_set.high_priority),
            len(keyword_set.medium_priority),
            len(keyword_set.low_priority),
        )
        return keyword_set


def extract_keywords(text: object, max_keywords: int | None = None) -> KeywordSet:
    """Extract keywords with a default-configured ranker."""
    return KeywordRanker().extract(text, max_keywords)
