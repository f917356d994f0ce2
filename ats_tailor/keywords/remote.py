"""Remote keyword extraction through an LLM.

Uses LiteLLM to ask a model for a categorized keyword breakdown of a job
description. The result is consumed as a :class:`KeywordBreakdown`; callers
that need a tiered list convert it with ``to_keyword_set``.
"""

from __future__ import annotations

import asyncio
import logging
import os
import warnings
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ats_tailor.errors import (
    RemoteRequestError,
    UpstreamError,
    UpstreamRateLimitError,
    UpstreamServiceError,
)
from ats_tailor.keywords.config import KeywordConfig, get_keyword_config
from ats_tailor.keywords.models import KeywordBreakdown

logger = logging.getLogger(__name__)

warnings.filterwarnings(
    "ignore",
    message=r"(?s)^Pydantic serializer warnings:.*",
    category=UserWarning,
)

# LiteLLM loads `.env` into the process environment in DEV mode.
os.environ.setdefault("LITELLM_MODE", "PRODUCTION")


class ExtractedKeywords(BaseModel):
    """LLM response structure for keyword extraction."""

    required_skills: list[str] = Field(default_factory=list)
    preferred_skills: list[str] = Field(default_factory=list)
    key_responsibilities: list[str] = Field(default_factory=list)
    job_title: str | None = None
    experience_level: str | None = None
    industry_keywords: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    soft_skills: list[str] = Field(default_factory=list)
    tools_technologies: list[str] = Field(default_factory=list)


KEYWORD_SYSTEM_PROMPT = """You are an expert ATS (Applicant Tracking System) analyst specializing in resume optimization. Your task is to extract and categorize keywords from job descriptions that are critical for passing ATS screening.

EXTRACTION RULES:
1. Extract EXACT phrases as they appear in the job description - ATS systems match exact terms
2. Prioritize technical skills, tools, certifications, and industry-specific terms
3. Distinguish between REQUIRED skills (must-have) and PREFERRED skills (nice-to-have)
4. Extract key responsibilities that should be reflected in resume bullet points
5. Identify the experience level (entry, junior, mid, senior, lead, principal, staff, director, executive)
6. Extract certification names exactly as written (AWS Certified, PMP, etc.)
7. Include both acronyms AND full names when both appear (e.g., "ML" and "Machine Learning")

IMPORTANT FOR ATS COMPLIANCE:
- Use the exact terminology from the job posting
- Capture tool names exactly (e.g., "Kubernetes" not just "container orchestration")
- Extract soft skills mentioned explicitly (not inferred)

Respond with ONLY a JSON object with these fields:
required_skills, preferred_skills, key_responsibilities, job_title, experience_level,
industry_keywords, certifications, soft_skills, tools_technologies.
All fields except job_title and experience_level are arrays of strings.
"""


class RemoteKeywordClient:
    """Client for the LLM-backed keyword breakdown service."""

    def __init__(self, config: KeywordConfig | None = None) -> None:
        self.config = config or get_keyword_config()

    def _get_model_name(self) -> str:
        """Return provider-qualified model name for LiteLLM routing."""
        if "/" in self.config.llm_model:
            return self.config.llm_model
        if self.config.llm_base_url:
            return f"openai/{self.config.llm_model}"
        if self.config.llm_provider == "openai":
            return self.config.llm_model
        return f"{self.config.llm_provider}/{self.config.llm_model}"

    def build_prompt(
        self, description: str, job_title: str | None = None, company: str | None = None
    ) -> str:
        """Build the user prompt for a job description."""
        return (
            "Analyze this job description and extract all keywords for ATS optimization:\n\n"
            f"JOB TITLE: {job_title or 'Not specified'}\n"
            f"COMPANY: {company or 'Not specified'}\n\n"
            "JOB DESCRIPTION:\n"
            f"{description[: self.config.description_char_limit]}"
        )

    async def extract(
        self,
        description: str,
        job_title: str | None = None,
        company: str | None = None,
    ) -> KeywordBreakdown:
        """Extract a categorized keyword breakdown for a job description.

        Raises:
            RemoteRequestError: If the description is missing or too short.
            UpstreamRateLimitError: If the provider is rate limiting.
            UpstreamServiceError: If the call fails or the response is unusable.
        """
        if not isinstance(description, str) or (
            len(description.strip()) < self.config.min_description_chars
        ):
            raise RemoteRequestError(
                "Job description too short. Please provide at least "
                f"{self.config.min_description_chars} characters."
            )

        logger.info(
            "Remote keyword extraction for %s at %s (%s chars)",
            job_title or "unknown title",
            company or "unknown company",
            len(description),
        )

        messages = [
            {"role": "system", "content": KEYWORD_SYSTEM_PROMPT},
            {"role": "user", "content": self.build_prompt(description, job_title, company)},
        ]

        from litellm.exceptions import RateLimitError, Timeout

        last_error: Exception | None = None
        for attempt in range(self.config.llm_max_retries + 1):
            try:
                response = await self._call_completion(
                    messages=messages, response_format=ExtractedKeywords
                )
                extracted = self._parse_response(response)
                break

            except UpstreamError:
                raise

            except RateLimitError as e:
                raise UpstreamRateLimitError(
                    "Rate limit exceeded. Please try again in a moment.", e
                ) from e

            except Timeout as e:
                raise UpstreamServiceError(
                    "Keyword service timed out "
                    f"(timeout={self.config.llm_timeout}s). Increase KEYWORDS_LLM_TIMEOUT.",
                    e,
                ) from e

            except Exception as e:
                last_error = e
                if attempt < self.config.llm_max_retries:
                    wait_time = 2 * (attempt + 1)
                    logger.warning(
                        "Keyword service call failed (attempt %s), retrying in %ss: %s",
                        attempt + 1,
                        wait_time,
                        e,
                    )
                    await asyncio.sleep(wait_time)
                    continue
                raise UpstreamServiceError(
                    f"Keyword service failed after retries: {e}", e
                ) from e
        else:
            raise UpstreamServiceError(f"Keyword service failed: {last_error}", last_error)

        breakdown = KeywordBreakdown(
            required_skills=extracted.required_skills,
            preferred_skills=extracted.preferred_skills,
            key_responsibilities=extracted.key_responsibilities,
            job_title=extracted.job_title or job_title or "",
            experience_level=extracted.experience_level or "mid",
            industry_keywords=extracted.industry_keywords,
            certifications=extracted.certifications,
            soft_skills=extracted.soft_skills,
            tools_technologies=extracted.tools_technologies,
        )
        breakdown.ats_priority_keywords = breakdown.build_priority_keywords(
            self.config.remote_max_keywords
        )

        logger.info(
            "Remote extraction: %s required, %s preferred, %s tools, %s prioritized",
            len(breakdown.required_skills),
            len(breakdown.preferred_skills),
            len(breakdown.tools_technologies),
            len(breakdown.ats_priority_keywords),
        )
        return breakdown

    async def _call_completion(
        self,
        messages: list[dict[str, str]],
        response_format: type[BaseModel] | None = None,
    ):
        from litellm import acompletion

        kwargs: dict[str, Any] = {
            "model": self._get_model_name(),
            "messages": messages,
            "timeout": self.config.llm_timeout,
        }
        if self.config.llm_api_key:
            kwargs["api_key"] = self.config.llm_api_key
        if self.config.llm_base_url:
            kwargs["base_url"] = self.config.llm_base_url
        if response_format is not None:
            kwargs["response_format"] = response_format

        return await acompletion(**kwargs)

    def _parse_response(self, response) -> ExtractedKeywords:
        try:
            message = response.choices[0].message
        except (AttributeError, IndexError) as e:
            raise UpstreamServiceError("Keyword service returned no choices.", e) from e

        content = getattr(message, "content", None)
        if content is None:
            tool_calls = getattr(message, "tool_calls", None) or []
            if tool_calls:
                function = getattr(tool_calls[0], "function", None)
                arguments = getattr(function, "arguments", None)
                if isinstance(arguments, str) and arguments.strip():
                    content = arguments

        if content is None:
            raise UpstreamServiceError("Keyword service returned no content to parse.")

        try:
            return ExtractedKeywords.model_validate_json(_extract_json(str(content)))
        except ValidationError as e:
            raise UpstreamServiceError(
                f"Failed to parse keyword response - validation error: {e}", e
            ) from e


def _extract_json(content: str) -> str:
    """Strip code fences and surrounding prose from a JSON object response."""
    content = content.strip()

    if content.startswith("```"):
        first_newline = content.find("\n")
        if first_newline != -1:
            content = content[first_newline + 1 :]
        if content.endswith("```"):
            content = content[:-3]
        content = content.strip()

    if content.startswith("{"):
        return content

    start = content.find("{")
    end = content.rfind("}")
    if start != -1 and end > start:
        return content[start : end + 1]
    return content
