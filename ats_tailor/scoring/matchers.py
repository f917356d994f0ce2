"""Keyword presence checks and match scoring.

Every "is this keyword in the text" decision in the package goes through
:func:`contains_keyword`: case-insensitive, with the keyword escaped and
anchored so it cannot match inside a longer word. The anchors are
look-arounds rather than ``\\b`` so keywords that start or end with
punctuation ("c++", "c#", ".net") still match.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Protocol, runtime_checkable

from ats_tailor.scoring.models import MatchResult, compute_score
from ats_tailor.utils.aio import process_with_yield


def normalize_keyword(keyword: str) -> str:
    """Normalize a keyword for de-duplication.

    Lowercases and removes all whitespace, so "Machine Learning" and
    "machinelearning" collapse to the same key.
    """
    return re.sub(r"\s+", "", keyword.strip().lower())


@lru_cache(maxsize=2048)
def keyword_pattern(keyword: str) -> re.Pattern[str]:
    """Compile the word-boundary pattern for a keyword."""
    escaped = re.escape(keyword.strip())
    return re.compile(rf"(?<!\w){escaped}(?!\w)", re.IGNORECASE)


def contains_keyword(text: str, keyword: str) -> bool:
    """Return True if ``keyword`` occurs in ``text`` as a whole word or phrase."""
    if not text or not keyword or not keyword.strip():
        return False
    return keyword_pattern(keyword).search(text) is not None


def build_match_result(matched: list[str], missing: list[str]) -> MatchResult:
    """Assemble a MatchResult from matched and missing keyword lists."""
    total = len(matched) + len(missing)
    return MatchResult(
        matched=matched,
        missing=missing,
        score=compute_score(len(matched), total),
        match_count=len(matched),
        total_keywords=total,
    )


@runtime_checkable
class Matcher(Protocol):
    """Decides keyword presence and scores keyword lists against a text."""

    name: str

    def contains(self, text: str, keyword: str) -> bool: ...

    def match(self, text: str, keywords: list[str]) -> MatchResult: ...

    async def amatch(
        self, text: str, keywords: list[str], yield_interval: int = 10
    ) -> MatchResult: ...


class _BaseMatcher:
    name = "base"

    def contains(self, text: str, keyword: str) -> bool:
        raise NotImplementedError

    def match(self, text: str, keywords: list[str]) -> MatchResult:
        """Split ``keywords`` into matched and missing for ``text``."""
        text = text if isinstance(text, str) else ""
        matched: list[str] = []
        missing: list[str] = []
        for keyword in keywords or []:
            if self.contains(text, keyword):
                matched.append(keyword)
            else:
                missing.append(keyword)
        return build_match_result(matched, missing)

    async def amatch(
        self, text: str, keywords: list[str], yield_interval: int = 10
    ) -> MatchResult:
        """Same as :meth:`match`, yielding to the event loop periodically."""
        text = text if isinstance(text, str) else ""
        keywords = list(keywords or [])
        flags = await process_with_yield(
            keywords, lambda keyword: self.contains(text, keyword), yield_interval
        )
        matched = [kw for kw, found in zip(keywords, flags, strict=True) if found]
        missing = [kw for kw, found in zip(keywords, flags, strict=True) if not found]
        return build_match_result(matched, missing)


class WordBoundaryMatcher(_BaseMatcher):
    """Reliable matcher: escaped, case-insensitive, word-anchored regex."""

    name = "reliable"

    def contains(self, text: str, keyword: str) -> bool:
        return contains_keyword(text, keyword)


class SubstringMatcher(_BaseMatcher):
    """Basic matcher: case-insensitive substring containment.

    Counts "java" as present in "javascript". Only useful for comparing with
    tools that score this way.
    """

    name = "basic"

    def contains(self, text: str, keyword: str) -> bool:
        if not text or not keyword or not keyword.strip():
            return False
        return keyword.strip().lower() in text.lower()


_MATCHERS: dict[str, type[_BaseMatcher]] = {
    WordBoundaryMatcher.name: WordBoundaryMatcher,
    SubstringMatcher.name: SubstringMatcher,
}


def get_matcher(name: str = "reliable") -> Matcher:
    """Return the matcher registered under ``name`` ('reliable' or 'basic')."""
    try:
        return _MATCHERS[str(name).lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown matcher: {name}. Must be one of: {', '.join(_MATCHERS)}"
        ) from None


def match_keywords(
    text: str, keywords: list[str], matcher: Matcher | None = None
) -> MatchResult:
    """Score ``keywords`` against ``text`` with the reliable matcher by default."""
    return (matcher or WordBoundaryMatcher()).match(text, keywords)
