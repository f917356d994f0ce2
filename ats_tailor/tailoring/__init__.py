"""Résumé tailoring.

Public API:
    - SectionParser / parse_resume: Split a résumé into named sections
    - SectionInjector: Summary, experience and skills injection strategies
    - quick_optimize: Append missing keywords as a single skills line
    - reconstruct: Join a parsed résumé back into text
    - ResumeTailor: One tailoring pass (parse, inject, rebuild, rescore)
    - AutoTailorService: The full extract -> score -> tailor -> rescore pipeline
"""

from ats_tailor.tailoring.config import (
    TailoringConfig,
    get_tailoring_config,
    reset_tailoring_config,
)
from ats_tailor.tailoring.engine import ResumeTailor
from ats_tailor.tailoring.injector import (
    SectionInjector,
    inject_experience,
    inject_skills,
    inject_summary,
    missing_keywords,
    quick_optimize,
)
from ats_tailor.tailoring.models import (
    AutoTailorResult,
    ParsedDocument,
    PipelineRun,
    PipelineState,
    PipelineStats,
    SectionInjection,
    TailorResult,
)
from ats_tailor.tailoring.reconstructor import reconstruct
from ats_tailor.tailoring.sections import SECTION_PATTERNS, SectionParser, parse_resume
from ats_tailor.tailoring.service import AutoTailorService, animate_score

__all__ = [
    "AutoTailorService",
    "animate_score",
    "ResumeTailor",
    "SectionParser",
    "SECTION_PATTERNS",
    "parse_resume",
    "reconstruct",
    "SectionInjector",
    "inject_summary",
    "inject_experience",
    "inject_skills",
    "missing_keywords",
    "quick_optimize",
    "ParsedDocument",
    "SectionInjection",
    "TailorResult",
    "AutoTailorResult",
    "PipelineRun",
    "PipelineState",
    "PipelineStats",
    "TailoringConfig",
    "get_tailoring_config",
    "reset_tailoring_config",
]
