"""Tests for the auto-tailoring orchestrator."""

import asyncio

import pytest

from ats_tailor.errors import ExtractionEmptyError, InputError, RenderTargetMissing
from ats_tailor.keywords.models import ORCHESTRATOR_TIERS, KeywordSet
from ats_tailor.keywords.ranker import KeywordRanker
from ats_tailor.keywords.sources import LocalKeywordSource
from ats_tailor.tailoring.models import PipelineState
from ats_tailor.tailoring.service import AutoTailorService, animate_score

JOB = "Looking for a Python developer with AWS and Docker experience."


class _CountingSource:
    name = "counting"

    def __init__(self, keywords: KeywordSet):
        self.keywords = keywords
        self.calls = 0

    async def extract(self, description, job_title=None, company=None):
        self.calls += 1
        return self.keywords


class _Recorder:
    def __init__(self):
        self.progress: list[tuple[int, str]] = []
        self.scores: list[tuple[int, str]] = []
        self.chips: list[tuple[KeywordSet, str, str]] = []

    def on_progress(self, percent, label):
        self.progress.append((percent, label))

    def on_score_update(self, score, phase):
        self.scores.append((score, phase))

    def on_chips_update(self, keywords, text, phase):
        self.chips.append((keywords, text, phase))


@pytest.fixture
def local_source(keyword_config) -> LocalKeywordSource:
    return LocalKeywordSource(KeywordRanker(config=keyword_config))


def _service(tailoring_config, source, recorder=None, **kwargs) -> AutoTailorService:
    recorder = recorder or _Recorder()
    return AutoTailorService(
        keyword_source=source,
        config=tailoring_config,
        on_progress=kwargs.pop("on_progress", recorder.on_progress),
        on_score_update=kwargs.pop("on_score_update", recorder.on_score_update),
        on_chips_update=kwargs.pop("on_chips_update", recorder.on_chips_update),
        **kwargs,
    )


class TestAutoTailorService:
    """Test AutoTailorService.run()."""

    @pytest.mark.asyncio
    async def test_full_run(self, tailoring_config, local_source, sample_resume):
        """A run returns the tailored text, scores and stats."""
        service = _service(tailoring_config, local_source)

        result = await service.run(JOB, sample_resume)

        assert result.state == PipelineState.DONE
        assert result.original_text == sample_resume
        assert result.keywords.all[:3] == ["python", "docker", "aws"]
        assert result.final_score >= result.initial_score
        assert result.final_score == 100
        assert "python" in result.matched_keywords
        assert set(result.injected_keywords) == {"docker", "aws", "developer"}
        assert result.stats.keywords_extracted == result.keywords.total
        assert result.stats.keywords_injected == len(result.injected_keywords)
        assert result.stats.score_improvement == result.final_score - result.initial_score

    @pytest.mark.asyncio
    async def test_progress_sequence(self, tailoring_config, local_source, sample_resume):
        """Progress is reported at 10, 25, 50, 75 and 100 percent."""
        recorder = _Recorder()
        service = _service(tailoring_config, local_source, recorder)

        await service.run(JOB, sample_resume)

        assert [percent for percent, _ in recorder.progress] == [10, 25, 50, 75, 100]
        assert all(label for _, label in recorder.progress)

    @pytest.mark.asyncio
    async def test_score_and_chip_phases(self, tailoring_config, local_source, sample_resume):
        """Scores go initial -> animating -> final; chips go initial -> final."""
        recorder = _Recorder()
        service = _service(tailoring_config, local_source, recorder)

        result = await service.run(JOB, sample_resume)

        phases = [phase for _, phase in recorder.scores]
        assert phases[0] == "initial"
        assert phases[-1] == "final"
        assert set(phases[1:-1]) == {"animating"}
        assert recorder.scores[0][0] == result.initial_score
        assert recorder.scores[-1][0] == result.final_score
        assert [phase for _, _, phase in recorder.chips] == ["initial", "final"]
        assert recorder.chips[1][1] == result.tailored_text

    @pytest.mark.asyncio
    async def test_empty_job_description_fails_before_extraction(
        self, tailoring_config, sample_resume
    ):
        """An empty job description raises InputError without extracting."""
        source = _CountingSource(KeywordSet.from_ranked(["python"], ORCHESTRATOR_TIERS))
        recorder = _Recorder()
        service = _service(tailoring_config, source, recorder)

        with pytest.raises(InputError) as exc_info:
            await service.run("", sample_resume)

        assert source.calls == 0
        assert recorder.progress == []
        assert exc_info.value.__notes__ == ["auto-tailoring failed during idle"]

    @pytest.mark.asyncio
    async def test_empty_resume_fails(self, tailoring_config, local_source):
        service = _service(tailoring_config, local_source)

        with pytest.raises(InputError):
            await service.run(JOB, "  ")

    @pytest.mark.asyncio
    async def test_no_keywords_fails(self, tailoring_config, sample_resume):
        """Extraction yielding nothing raises ExtractionEmptyError."""
        service = _service(tailoring_config, _CountingSource(KeywordSet.empty()))

        with pytest.raises(ExtractionEmptyError) as exc_info:
            await service.run(JOB, sample_resume)

        assert exc_info.value.__notes__ == [
            "auto-tailoring failed during extracting_keywords"
        ]

    @pytest.mark.asyncio
    async def test_precomputed_keywords_skip_the_source(
        self, tailoring_config, sample_resume
    ):
        """Keywords in any supported shape bypass extraction."""
        source = _CountingSource(KeywordSet.empty())
        service = _service(tailoring_config, source)

        result = await service.run(
            "", sample_resume, keywords={"required_skills": ["Kafka", "Python"]}
        )

        assert source.calls == 0
        assert result.keywords.all == ["Kafka", "Python"]
        assert result.final_score == 100

    @pytest.mark.asyncio
    async def test_already_at_target(self, tailoring_config, sample_resume):
        """A résumé already at the target still completes with no injections."""
        source = _CountingSource(KeywordSet.from_ranked(["python"], ORCHESTRATOR_TIERS))
        recorder = _Recorder()
        service = _service(tailoring_config, source, recorder)

        result = await service.run(JOB, sample_resume)

        assert result.tailored_text == sample_resume
        assert result.injected_keywords == []
        assert result.stats.score_improvement == 0
        assert [percent for percent, _ in recorder.progress] == [10, 25, 50, 75, 100]

    @pytest.mark.asyncio
    async def test_missing_render_target_is_tolerated(
        self, tailoring_config, local_source, sample_resume, caplog
    ):
        """RenderTargetMissing from a UI callback is logged, not raised."""

        def _no_gauge(score, phase):
            raise RenderTargetMissing("score gauge not mounted")

        service = _service(tailoring_config, local_source, on_score_update=_no_gauge)

        result = await service.run(JOB, sample_resume)

        assert result.final_score == 100
        assert result.state == PipelineState.DONE
        assert "score gauge not mounted" in caplog.text

    @pytest.mark.asyncio
    async def test_other_callback_errors_propagate(
        self, tailoring_config, local_source, sample_resume
    ):
        """Unexpected callback errors fail the run."""

        def _broken(percent, label):
            raise ValueError("boom")

        service = _service(tailoring_config, local_source, on_progress=_broken)

        with pytest.raises(ValueError, match="boom") as exc_info:
            await service.run(JOB, sample_resume)

        assert "failed during extracting_keywords" in exc_info.value.__notes__[0]

    @pytest.mark.asyncio
    async def test_async_callbacks(self, tailoring_config, local_source, sample_resume):
        """Coroutine callbacks are awaited."""
        seen = []

        async def _progress(percent, label):
            seen.append(percent)

        service = _service(tailoring_config, local_source, on_progress=_progress)

        await service.run(JOB, sample_resume)

        assert seen == [10, 25, 50, 75, 100]

    @pytest.mark.asyncio
    async def test_concurrent_runs_are_independent(
        self, tailoring_config, local_source, sample_resume
    ):
        """Two runs in flight on one service do not share state."""
        recorder = _Recorder()
        service = _service(tailoring_config, local_source, recorder)
        other_resume = "SKILLS\nLanguages: Java"

        first, second = await asyncio.gather(
            service.run(JOB, sample_resume), service.run(JOB, other_resume)
        )

        assert first.state == second.state == PipelineState.DONE
        assert first.original_text == sample_resume
        assert second.original_text == other_resume
        assert "python" in second.injected_keywords
        assert "python" not in first.injected_keywords
        assert sorted(p for p, _ in recorder.progress) == sorted([10, 25, 50, 75, 100] * 2)

    @pytest.mark.asyncio
    async def test_result_serializes(self, tailoring_config, local_source, sample_resume):
        service = _service(tailoring_config, local_source)

        data = (await service.run(JOB, sample_resume)).to_dict()

        assert data["stats"]["keywords_extracted"] == data["keywords"]["total"]
        assert data["keywords"]["all"][0] == "python"


class TestAnimateScore:
    @pytest.mark.asyncio
    async def test_eases_to_end(self):
        """Values rise monotonically and finish exactly at the end score."""
        values = []

        await animate_score(40, 90, values.append, duration=0, steps=5)

        assert len(values) == 5
        assert values[-1] == 90
        assert values == sorted(values)
        assert values[0] > 40

    @pytest.mark.asyncio
    async def test_single_step(self):
        values = []

        await animate_score(10, 20, values.append, duration=0, steps=1)

        assert values == [20]
