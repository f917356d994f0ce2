"""Command-line entry point for ats_tailor."""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from ats_tailor import __version__
from ats_tailor.config.settings import Settings
from ats_tailor.errors import AtsTailorError
from ats_tailor.keywords.config import KeywordConfig
from ats_tailor.keywords.ranker import KeywordRanker
from ats_tailor.keywords.sources import build_keyword_source
from ats_tailor.scoring.analysis import analyze_match, generate_suggestions
from ats_tailor.scoring.matchers import get_matcher
from ats_tailor.tailoring.config import TailoringConfig
from ats_tailor.tailoring.service import AutoTailorService
from ats_tailor.utils.logging import configure_logging


def _target_score(value: str) -> int:
    score = int(value)
    if not (0 <= score <= 100):
        raise argparse.ArgumentTypeError("--target-score must be between 0 and 100")
    return score


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError("value must be a positive integer")
    return number


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _dumps(payload: object) -> str:
    def _default(value: object):
        to_dict = getattr(value, "to_dict", None)
        if callable(to_dict):
            return to_dict()
        model_dump = getattr(value, "model_dump", None)
        if callable(model_dump):
            return model_dump(mode="json")
        return str(value)

    return json.dumps(payload, indent=2, default=_default, ensure_ascii=False)


def _emit_json(payload: object, out: Path | None = None) -> None:
    text = _dumps(payload)
    if out is None:
        print(text)
    else:
        out.write_text(text + "\n", encoding="utf-8")
        print(f"Wrote: {out}", file=sys.stderr)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="ats-tailor",
        description="ats-tailor: keyword extraction, résumé scoring and tailoring",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m ats_tailor extract --jd job.txt
  python -m ats_tailor score --jd job.txt --resume resume.txt
  python -m ats_tailor tailor --jd job.txt --resume resume.txt --out result.json
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set the log level (overrides settings)",
    )

    subparsers = parser.add_subparsers(
        dest="mode",
        title="modes",
        description="Available commands",
    )

    # Extract keywords
    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract ranked keywords from a job description",
    )
    extract_parser.add_argument(
        "--jd", type=Path, required=True, help="Path to the job description text"
    )
    extract_parser.add_argument(
        "--max-keywords",
        type=_positive_int,
        default=None,
        help="Maximum number of keywords to return",
    )

    # Score a résumé
    score_parser = subparsers.add_parser(
        "score",
        help="Score a résumé against a job description",
    )
    score_parser.add_argument(
        "--jd", type=Path, required=True, help="Path to the job description text"
    )
    score_parser.add_argument(
        "--resume", type=Path, required=True, help="Path to the résumé text"
    )

    # Tailor a résumé
    tailor_parser = subparsers.add_parser(
        "tailor",
        help="Tailor a résumé to a job description",
    )
    tailor_parser.add_argument(
        "--jd", type=Path, required=True, help="Path to the job description text"
    )
    tailor_parser.add_argument(
        "--resume", type=Path, required=True, help="Path to the résumé text"
    )
    tailor_parser.add_argument(
        "--target-score",
        type=_target_score,
        default=None,
        help="Match score to aim for (0-100, overrides settings)",
    )
    tailor_parser.add_argument(
        "--job-title", default=None, help="Job title passed to the keyword source"
    )
    tailor_parser.add_argument(
        "--company", default=None, help="Company passed to the keyword source"
    )
    tailor_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Write the result JSON to this file instead of stdout",
    )

    return parser


def _print_progress(percent: int, label: str) -> None:
    print(f"[{percent:3d}%] {label}", file=sys.stderr)


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    # Load settings
    try:
        settings = Settings()
        keyword_config = KeywordConfig()
        tailoring_config = TailoringConfig()
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Configure logging
    log_level = parsed.log_level or settings.log_level
    logger = configure_logging(level=log_level)

    # If no mode specified, show help
    if parsed.mode is None:
        parser.print_help()
        return 0

    logger.info(f"ats-tailor v{__version__} running '{parsed.mode}'")

    try:
        job_description = _read_text(parsed.jd)
        resume_text = _read_text(parsed.resume) if hasattr(parsed, "resume") else ""
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    matcher = get_matcher(settings.matcher.value)

    try:
        if parsed.mode == "extract":
            ranker = KeywordRanker(config=keyword_config)
            _emit_json(ranker.extract(job_description, parsed.max_keywords))
            return 0

        if parsed.mode == "score":
            analysis = analyze_match(
                job_description,
                resume_text,
                ranker=KeywordRanker(config=keyword_config),
                matcher=matcher,
            )
            _emit_json(
                {
                    "analysis": analysis,
                    "suggestions": generate_suggestions(analysis),
                }
            )
            return 0

        if parsed.mode == "tailor":
            service = AutoTailorService(
                keyword_source=build_keyword_source(settings, keyword_config),
                matcher=matcher,
                config=tailoring_config,
                on_progress=_print_progress,
            )
            result = asyncio.run(
                service.run(
                    job_description,
                    resume_text,
                    job_title=parsed.job_title,
                    company=parsed.company,
                    target_score=parsed.target_score,
                )
            )
            _emit_json(result, parsed.out)
            return 0
    except AtsTailorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
