"""Keyword sources for the tailoring pipeline.

A source turns a job description into a tiered :class:`KeywordSet`. The
pipeline is given one source at construction time; fallback behaviour is
expressed by wrapping sources in :class:`FallbackKeywordSource`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from ats_tailor.config.settings import KeywordSourceMode, Settings, get_settings
from ats_tailor.errors import RemoteRequestError, UpstreamError
from ats_tailor.keywords.config import KeywordConfig, get_keyword_config
from ats_tailor.keywords.models import (
    ORCHESTRATOR_TIERS,
    KeywordBreakdown,
    KeywordSet,
    TierThresholds,
)
from ats_tailor.keywords.ranker import KeywordRanker
from ats_tailor.keywords.remote import RemoteKeywordClient

logger = logging.getLogger(__name__)


@runtime_checkable
class KeywordSource(Protocol):
    """Produces a KeywordSet for a job description."""

    name: str

    async def extract(
        self,
        description: str,
        job_title: str | None = None,
        company: str | None = None,
    ) -> KeywordSet: ...


class LocalKeywordSource:
    """Heuristic ranking on the job description text alone."""

    name = "local"

    def __init__(
        self, ranker: KeywordRanker | None = None, max_keywords: int | None = None
    ) -> None:
        self.ranker = ranker or KeywordRanker()
        self.max_keywords = max_keywords

    async def extract(
        self,
        description: str,
        job_title: str | None = None,
        company: str | None = None,
    ) -> KeywordSet:
        return self.ranker.extract(description, self.max_keywords)


class RemoteKeywordSource:
    """LLM keyword breakdown, re-tiered by position."""

    name = "remote"

    def __init__(
        self,
        client: RemoteKeywordClient | None = None,
        tiers: TierThresholds = ORCHESTRATOR_TIERS,
        max_keywords: int | None = None,
    ) -> None:
        self.client = client or RemoteKeywordClient()
        self.tiers = tiers
        self.max_keywords = max_keywords

    async def extract(
        self,
        description: str,
        job_title: str | None = None,
        company: str | None = None,
    ) -> KeywordSet:
        breakdown = await self.client.extract(description, job_title, company)
        return breakdown.to_keyword_set(self.tiers, self.max_keywords)


class FallbackKeywordSource:
    """Try ``primary`` and fall back to ``fallback`` when it is unavailable.

    The fallback is used when the primary raises an upstream or request
    error, or returns no keywords.
    """

    def __init__(self, primary: KeywordSource, fallback: KeywordSource) -> None:
        self.primary = primary
        self.fallback = fallback
        self.name = f"{primary.name}->{fallback.name}"

    async def extract(
        self,
        description: str,
        job_title: str | None = None,
        company: str | None = None,
    ) -> KeywordSet:
        try:
            keywords = await self.primary.extract(description, job_title, company)
        except (UpstreamError, RemoteRequestError) as e:
            logger.warning(
                "Keyword source '%s' unavailable, falling back to '%s': %s",
                self.primary.name,
                self.fallback.name,
                e,
            )
            return await self.fallback.extract(description, job_title, company)

        if keywords.total == 0:
            logger.warning(
                "Keyword source '%s' returned no keywords, falling back to '%s'",
                self.primary.name,
                self.fallback.name,
            )
            return await self.fallback.extract(description, job_title, company)
        return keywords


def build_keyword_source(
    settings: Settings | None = None,
    keyword_config: KeywordConfig | None = None,
    max_keywords: int | None = None,
) -> KeywordSource:
    """Select the keyword source chain from settings."""
    settings = settings or get_settings()
    keyword_config = keyword_config or get_keyword_config()

    local = LocalKeywordSource(KeywordRanker(config=keyword_config), max_keywords)
    if settings.keyword_source == KeywordSourceMode.LOCAL:
        return local

    remote = RemoteKeywordSource(
        RemoteKeywordClient(config=keyword_config), max_keywords=max_keywords
    )
    if settings.keyword_source == KeywordSourceMode.REMOTE:
        return remote
    return FallbackKeywordSource(remote, local)


TIER_KEYS = (
    "high_priority",
    "medium_priority",
    "low_priority",
    "highPriority",
    "mediumPriority",
    "lowPriority",
)


def coerce_keywords(
    value: Any, tiers: TierThresholds = ORCHESTRATOR_TIERS
) -> KeywordSet:
    """Accept any supported keyword shape and return a KeywordSet.

    Supported shapes: KeywordSet, KeywordBreakdown, a mapping in either of
    those shapes (tier keys in snake_case or camelCase), or a plain sequence
    of keyword strings. Plain lists and breakdowns are tiered by position
    with ``tiers``.
    """
    if value is None:
        return KeywordSet.empty()
    if isinstance(value, KeywordSet):
        return value
    if isinstance(value, KeywordBreakdown):
        return value.to_keyword_set(tiers)
    if isinstance(value, Mapping):
        if "all" in value:
            if any(key in value for key in TIER_KEYS):
                return KeywordSet.model_validate(dict(value))
            return KeywordSet.from_ranked(_strings(value["all"]), tiers)
        if "keywords" in value and isinstance(value["keywords"], Mapping):
            return coerce_keywords(value["keywords"], tiers)
        return KeywordBreakdown.model_validate(dict(value)).to_keyword_set(tiers)
    if isinstance(value, (list, tuple)):
        return KeywordSet.from_ranked(_strings(value), tiers)
    raise TypeError(f"Unsupported keyword shape: {type(value).__name__}")


def _strings(values: Any) -> list[str]:
    return [str(item).strip() for item in values or [] if str(item).strip()]
