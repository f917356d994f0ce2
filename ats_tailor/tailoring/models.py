"""Data models for the Tailoring module.

Contains:
- ParsedDocument: A résumé split into named sections
- SectionInjection: The outcome of injecting keywords into one section
- TailorResult: One tailoring pass over a résumé
- PipelineRun: State history of one orchestrator run
- AutoTailorResult: The full extract -> score -> tailor -> rescore run
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from ats_tailor.keywords.models import KeywordSet

HEADER_SECTION = "header"


@dataclass
class ParsedDocument:
    """A résumé split into a header and named sections.

    ``section_order`` lists each named section once, in the order it was
    first opened. The header is kept separately and is never in the order.
    """

    header: str = ""
    sections: dict[str, str] = field(default_factory=dict)
    section_order: list[str] = field(default_factory=list)

    def get(self, name: str) -> str:
        """Return a section's text, or an empty string if it is absent."""
        if name == HEADER_SECTION:
            return self.header
        return self.sections.get(name, "")

    def has_section(self, name: str) -> bool:
        return name in self.sections


@dataclass
class SectionInjection:
    """Keywords written into a section and the resulting text."""

    text: str
    injected: list[str] = field(default_factory=list)
    created: bool = False


class TailorResult(BaseModel):
    """Result of a single tailoring pass."""

    tailored_text: str = Field(..., description="Résumé text after injection")
    original_text: str = Field(..., description="Résumé text before injection")
    injected_keywords: list[str] = Field(
        default_factory=list, description="Keywords written into the résumé"
    )
    initial_score: int = Field(..., ge=0, le=100)
    final_score: int = Field(..., ge=0, le=100)
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    per_section_stats: dict[str, int] = Field(
        default_factory=dict, description="Injected keyword count per section"
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return self.model_dump(mode="json")


class PipelineState(str, Enum):
    """States of an auto-tailoring run."""

    IDLE = "idle"
    EXTRACTING_KEYWORDS = "extracting_keywords"
    SCORING_INITIAL = "scoring_initial"
    TAILORING = "tailoring"
    SCORING_FINAL = "scoring_final"
    DONE = "done"
    FAILED = "failed"


@dataclass
class PipelineRun:
    """State of one auto-tailoring run. Each call to ``run`` owns its own."""

    state: PipelineState = PipelineState.IDLE
    history: list[PipelineState] = field(default_factory=list)

    def enter(self, state: PipelineState) -> None:
        self.state = state
        self.history.append(state)


class PipelineStats(BaseModel):
    """Summary numbers for an auto-tailoring run."""

    keywords_extracted: int = Field(..., ge=0)
    keywords_injected: int = Field(..., ge=0)
    score_improvement: int = Field(..., description="final_score - initial_score")


class AutoTailorResult(BaseModel):
    """Result of a complete auto-tailoring run."""

    tailored_text: str
    original_text: str
    keywords: KeywordSet
    initial_score: int = Field(..., ge=0, le=100)
    final_score: int = Field(..., ge=0, le=100)
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    injected_keywords: list[str] = Field(default_factory=list)
    per_section_stats: dict[str, int] = Field(default_factory=dict)
    stats: PipelineStats
    state: PipelineState = PipelineState.DONE

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AutoTailorResult:
        """Deserialize from dictionary."""
        return cls.model_validate(data)
