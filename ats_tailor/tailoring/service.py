"""Auto-tailoring orchestrator.

Drives the complete pipeline for one job description and one résumé:

1. Extract keywords from the job description
2. Score the original résumé
3. Tailor the résumé to inject missing keywords
4. Rescore the tailored résumé
5. Return the bundled result

Progress, score and chip updates are reported through caller-supplied
callbacks, which may be plain functions or coroutines.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from ats_tailor.errors import ExtractionEmptyError, InputError, RenderTargetMissing
from ats_tailor.keywords.models import ORCHESTRATOR_TIERS, KeywordSet
from ats_tailor.keywords.sources import KeywordSource, LocalKeywordSource, coerce_keywords
from ats_tailor.scoring.matchers import Matcher, WordBoundaryMatcher
from ats_tailor.tailoring.config import TailoringConfig, get_tailoring_config
from ats_tailor.tailoring.engine import ResumeTailor
from ats_tailor.tailoring.models import (
    AutoTailorResult,
    PipelineRun,
    PipelineState,
    PipelineStats,
)
from ats_tailor.utils.aio import yield_control

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, str], Awaitable[None] | None]
ScoreCallback = Callable[[int, str], Awaitable[None] | None]
ChipsCallback = Callable[[KeywordSet, str, str], Awaitable[None] | None]

PROGRESS_STEPS: dict[PipelineState, tuple[int, str]] = {
    PipelineState.EXTRACTING_KEYWORDS: (10, "Extracting keywords from job description..."),
    PipelineState.SCORING_INITIAL: (25, "Analyzing initial match..."),
    PipelineState.TAILORING: (50, "Tailoring résumé for ATS optimization..."),
    PipelineState.SCORING_FINAL: (75, "Recalculating match score..."),
    PipelineState.DONE: (100, "Complete!"),
}


async def _invoke(callback: Callable[..., Any] | None, *args: Any) -> None:
    if callback is None:
        return
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


async def animate_score(
    start: int,
    end: int,
    on_update: Callable[[int], Awaitable[None] | None],
    duration: float = 0.8,
    steps: int = 20,
) -> None:
    """Report scores easing from ``start`` to ``end``.

    Uses an ease-out cubic curve; the last reported value is always ``end``.
    """
    steps = max(1, steps)
    delay = max(0.0, duration) / steps
    for step in range(1, steps + 1):
        progress = step / steps
        eased = 1 - (1 - progress) ** 3
        value = end if step == steps else int(start + (end - start) * eased + 0.5)
        await _invoke(on_update, value)
        await asyncio.sleep(delay)


class AutoTailorService:
    """Runs extract -> score -> tailor -> rescore for one résumé."""

    def __init__(
        self,
        keyword_source: KeywordSource | None = None,
        matcher: Matcher | None = None,
        tailor: ResumeTailor | None = None,
        config: TailoringConfig | None = None,
        on_progress: ProgressCallback | None = None,
        on_score_update: ScoreCallback | None = None,
        on_chips_update: ChipsCallback | None = None,
    ):
        """Initialize the orchestrator.

        Args:
            keyword_source: Where keywords come from. Defaults to local ranking.
            matcher: Matcher for scoring. Defaults to the reliable matcher.
            tailor: Tailoring engine. Built from ``config`` and ``matcher`` if
                not provided.
            config: Optional TailoringConfig. Uses global config if not provided.
            on_progress: Called with (percent, label) on every state change.
            on_score_update: Called with (score, phase) where phase is
                'initial', 'animating' or 'final'.
            on_chips_update: Called with (keywords, text, phase) where phase
                is 'initial' or 'final'.
        """
        self.config = config or get_tailoring_config()
        self.keyword_source = keyword_source or LocalKeywordSource()
        self.matcher = matcher or WordBoundaryMatcher()
        self.tailor = tailor or ResumeTailor(config=self.config, matcher=self.matcher)
        self.on_progress = on_progress
        self.on_score_update = on_score_update
        self.on_chips_update = on_chips_update

    async def _notify(self, callback: Callable[..., Any] | None, *args: Any) -> None:
        """Invoke a presentation callback, tolerating a missing render target."""
        try:
            await _invoke(callback, *args)
        except RenderTargetMissing as e:
            logger.warning(f"Skipping UI update: {e}")

    async def _enter(self, pipeline: PipelineRun, state: PipelineState) -> None:
        pipeline.enter(state)
        percent, label = PROGRESS_STEPS[state]
        logger.info(f"[{percent}%] {label}")
        await self._notify(self.on_progress, percent, label)

    async def run(
        self,
        job_description: str,
        resume_text: str,
        job_title: str | None = None,
        company: str | None = None,
        keywords: Any = None,
        target_score: int | None = None,
    ) -> AutoTailorResult:
        """Tailor ``resume_text`` to ``job_description``.

        Args:
            job_description: Raw job description text; may contain HTML.
            resume_text: Plain résumé text with section headers on their own lines.
            job_title: Optional job title passed to the keyword source.
            company: Optional company name passed to the keyword source.
            keywords: Pre-extracted keywords in any shape accepted by
                :func:`coerce_keywords`. Skips the keyword source when given.
            target_score: Overrides the configured target score.

        Returns:
            AutoTailorResult with the tailored text, scores and stats.

        Raises:
            InputError: If the job description or résumé is empty.
            ExtractionEmptyError: If no keywords could be extracted.
        """
        pipeline = PipelineRun()
        try:
            return await self._run(
                pipeline,
                job_description,
                resume_text,
                job_title,
                company,
                keywords,
                target_score,
            )
        except Exception as e:
            failed_in = pipeline.state
            pipeline.enter(PipelineState.FAILED)
            logger.error(f"Auto-tailoring failed during {failed_in.value}: {e}")
            e.add_note(f"auto-tailoring failed during {failed_in.value}")
            raise

    async def _run(
        self,
        pipeline: PipelineRun,
        job_description: str,
        resume_text: str,
        job_title: str | None,
        company: str | None,
        keywords: Any,
        target_score: int | None,
    ) -> AutoTailorResult:
        if keywords is None and (
            not isinstance(job_description, str) or not job_description.strip()
        ):
            raise InputError("Job description is required")
        if not isinstance(resume_text, str) or not resume_text.strip():
            raise InputError("Résumé text is required")

        interval = self.config.yield_interval

        # Step 1: Extract keywords
        await self._enter(pipeline, PipelineState.EXTRACTING_KEYWORDS)
        if keywords is not None:
            keyword_set = coerce_keywords(keywords, ORCHESTRATOR_TIERS)
        else:
            keyword_set = await self.keyword_source.extract(
                job_description, job_title, company
            )
        if keyword_set.total == 0:
            raise ExtractionEmptyError(
                "Could not extract keywords from job description"
            )
        logger.info(f"Extracted {keyword_set.total} keywords")
        await yield_control()

        # Step 2: Initial match
        await self._enter(pipeline, PipelineState.SCORING_INITIAL)
        initial = await self.matcher.amatch(resume_text, keyword_set.all, interval)
        await self._notify(self.on_score_update, initial.score, "initial")
        await self._notify(self.on_chips_update, keyword_set, resume_text, "initial")
        await asyncio.sleep(self.config.initial_display_delay)

        # Step 3: Tailor
        await self._enter(pipeline, PipelineState.TAILORING)
        tailored = await self.tailor.tailor(resume_text, keyword_set, target_score)

        # Step 4: Rescore
        await self._enter(pipeline, PipelineState.SCORING_FINAL)
        final = await self.matcher.amatch(
            tailored.tailored_text, keyword_set.all, interval
        )
        await animate_score(
            initial.score,
            final.score,
            lambda score: self._notify(self.on_score_update, score, "animating"),
            duration=self.config.score_animation_seconds,
            steps=self.config.score_animation_steps,
        )
        await self._notify(self.on_score_update, final.score, "final")
        await self._notify(
            self.on_chips_update, keyword_set, tailored.tailored_text, "final"
        )

        await self._enter(pipeline, PipelineState.DONE)
        return AutoTailorResult(
            tailored_text=tailored.tailored_text,
            original_text=resume_text,
            keywords=keyword_set,
            initial_score=initial.score,
            final_score=final.score,
            matched_keywords=final.matched,
            missing_keywords=final.missing,
            injected_keywords=tailored.injected_keywords,
            per_section_stats=tailored.per_section_stats,
            stats=PipelineStats(
                keywords_extracted=keyword_set.total,
                keywords_injected=len(tailored.injected_keywords),
                score_improvement=final.score - initial.score,
            ),
            state=pipeline.state,
        )
