"""Pytest configuration and shared fixtures."""

import pytest

from ats_tailor.config.settings import reset_settings
from ats_tailor.keywords.config import KeywordConfig, reset_keyword_config
from ats_tailor.tailoring.config import TailoringConfig, reset_tailoring_config
from ats_tailor.utils.logging import reset_logging


@pytest.fixture(autouse=True)
def _reset_singletons():
    """Give every test fresh configuration singletons and logging state."""
    reset_settings()
    reset_keyword_config()
    reset_tailoring_config()
    reset_logging()
    yield
    reset_settings()
    reset_keyword_config()
    reset_tailoring_config()
    reset_logging()


@pytest.fixture
def keyword_config() -> KeywordConfig:
    """Keyword configuration with defaults and no .env file."""
    return KeywordConfig(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def tailoring_config() -> TailoringConfig:
    """Tailoring configuration with no pacing delays."""
    return TailoringConfig(  # type: ignore[call-arg]
        _env_file=None,
        initial_display_delay=0.0,
        score_animation_seconds=0.0,
        score_animation_steps=4,
    )


@pytest.fixture
def sample_job_description() -> str:
    """Job description with technical terms, phrases and HTML."""
    return (
        "<h2>Senior Backend Engineer</h2>"
        "<p>We are looking for a Python engineer with AWS, Docker and Kubernetes "
        "experience. You will build microservices, design REST APIs and own "
        "continuous integration pipelines.</p>"
        "<ul><li>5+ years of Python</li><li>PostgreSQL and Redis</li>"
        "<li>Machine learning exposure is a plus</li></ul>"
    )


@pytest.fixture
def sample_resume() -> str:
    """Résumé with header, summary, experience, skills and education sections."""
    return (
        "Jane Doe\n"
        "jane@example.com | London\n"
        "\n"
        "PROFESSIONAL SUMMARY\n"
        "Backend engineer with eight years of experience building APIs. "
        "Comfortable owning services end to end.\n"
        "\n"
        "EXPERIENCE\n"
        "Acme Corp - Senior Engineer\n"
        "• Built payment services handling millions of requests per day, "
        "reducing latency by 40%\n"
        "• Led migration of the monolith to services.\n"
        "• Mentored four engineers\n"
        "\n"
        "SKILLS\n"
        "Languages: Python, Go\n"
        "Databases: PostgreSQL\n"
        "\n"
        "EDUCATION\n"
        "BSc Computer Science"
    )
