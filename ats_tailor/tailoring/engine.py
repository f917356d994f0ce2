"""One tailoring pass over a résumé.

Parse the résumé into sections, inject missing keywords into the summary,
experience and skills sections (in that order, each keyword at most once),
rebuild the text and rescore it.
"""

from __future__ import annotations

import logging

from ats_tailor.errors import InputError
from ats_tailor.keywords.models import KeywordSet
from ats_tailor.scoring.matchers import (
    Matcher,
    WordBoundaryMatcher,
    contains_keyword,
    normalize_keyword,
)
from ats_tailor.tailoring.config import TailoringConfig, get_tailoring_config
from ats_tailor.tailoring.injector import SectionInjector
from ats_tailor.tailoring.models import ParsedDocument, TailorResult
from ats_tailor.tailoring.reconstructor import reconstruct
from ats_tailor.tailoring.sections import SectionParser
from ats_tailor.utils.aio import yield_control

logger = logging.getLogger(__name__)

SECTION_STATS = ("summary", "experience", "skills")


def _excluding(keywords: list[str], excluded: set[str]) -> list[str]:
    return [kw for kw in keywords if normalize_keyword(kw) not in excluded]


def _absent(
    document: ParsedDocument, keywords: list[str], excluded: set[str]
) -> list[str]:
    """Keywords not excluded and not present anywhere in the document yet."""
    text = reconstruct(document)
    return [kw for kw in _excluding(keywords, excluded) if not contains_keyword(text, kw)]


class ResumeTailor:
    """Injects missing keywords into a résumé to raise its match score."""

    def __init__(
        self,
        config: TailoringConfig | None = None,
        matcher: Matcher | None = None,
        parser: SectionParser | None = None,
        injector: SectionInjector | None = None,
    ):
        """Initialize the tailoring engine.

        Args:
            config: Optional TailoringConfig. Uses global config if not provided.
            matcher: Matcher used for scoring. Defaults to the reliable matcher.
            parser: Section parser. Defaults to the standard header patterns.
            injector: Injection strategies. Built from ``config`` if not provided.
        """
        self.config = config or get_tailoring_config()
        self.matcher = matcher or WordBoundaryMatcher()
        self.parser = parser or SectionParser()
        self.injector = injector or SectionInjector(self.config)

    async def tailor(
        self,
        resume_text: str,
        keywords: KeywordSet,
        target_score: int | None = None,
    ) -> TailorResult:
        """Run one tailoring pass.

        When the initial score already meets ``target_score`` the original
        text is returned with no injections. The result never scores lower
        than the input: if it would, the original text is kept.

        Raises:
            InputError: If ``resume_text`` is empty.
        """
        if not isinstance(resume_text, str) or not resume_text.strip():
            raise InputError("Résumé text is empty")

        target = self.config.target_score if target_score is None else target_score
        interval = self.config.yield_interval
        stats = dict.fromkeys(SECTION_STATS, 0)

        initial = await self.matcher.amatch(resume_text, keywords.all, interval)
        if initial.score >= target or not initial.missing:
            logger.info(
                f"Initial score {initial.score}% meets target {target}%, "
                "leaving résumé unchanged"
            )
            return TailorResult(
                tailored_text=resume_text,
                original_text=resume_text,
                initial_score=initial.score,
                final_score=initial.score,
                matched_keywords=initial.matched,
                missing_keywords=initial.missing,
                per_section_stats=stats,
            )

        document = self.parser.parse(resume_text)
        excluded = {normalize_keyword(kw) for kw in initial.matched}
        injected: list[str] = []

        def record(section: str, words: list[str]) -> None:
            stats[section] = len(words)
            injected.extend(words)
            excluded.update(normalize_keyword(kw) for kw in words)

        # Summary gets the high-priority keywords
        if document.has_section("summary"):
            candidates = keywords.high_priority or keywords.all[
                : self.config.max_keywords_summary
            ]
            result = self.injector.summary(
                document.sections["summary"], _excluding(candidates, excluded)
            )
            document.sections["summary"] = result.text
            record("summary", result.injected)
        await yield_control()

        # Experience gets medium priority plus any high priority left over
        if document.has_section("experience"):
            candidates = keywords.medium_priority + keywords.high_priority
            result = self.injector.experience(
                document.sections["experience"], _absent(document, candidates, excluded)
            )
            document.sections["experience"] = result.text
            record("experience", result.injected)
        await yield_control()

        # Skills takes whatever is still missing
        result = self.injector.skills(
            document.sections.get("skills"), _absent(document, keywords.all, excluded)
        )
        if result.injected:
            document.sections["skills"] = result.text
            record("skills", result.injected)
        await yield_control()

        tailored_text = reconstruct(document)
        final = await self.matcher.amatch(tailored_text, keywords.all, interval)

        if final.score < initial.score:
            logger.warning(
                f"Tailored score {final.score}% is below initial {initial.score}%, "
                "keeping original résumé"
            )
            return TailorResult(
                tailored_text=resume_text,
                original_text=resume_text,
                initial_score=initial.score,
                final_score=initial.score,
                matched_keywords=initial.matched,
                missing_keywords=initial.missing,
                per_section_stats=dict.fromkeys(SECTION_STATS, 0),
            )

        logger.info(
            f"Tailoring injected {len(injected)} keywords: "
            f"{initial.score}% -> {final.score}%"
        )
        return TailorResult(
            tailored_text=tailored_text,
            original_text=resume_text,
            injected_keywords=injected,
            initial_score=initial.score,
            final_score=final.score,
            matched_keywords=final.matched,
            missing_keywords=final.missing,
            per_section_stats=stats,
        )
