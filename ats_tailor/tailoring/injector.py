"""Keyword injection strategies for résumé sections.

Each strategy takes the text of one parsed section and a candidate keyword
list, writes in the keywords that are not already present, and reports
exactly which keywords it wrote. Presence is always judged with
:func:`ats_tailor.scoring.matchers.contains_keyword`.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable

from ats_tailor.scoring.matchers import contains_keyword, normalize_keyword
from ats_tailor.tailoring.config import TailoringConfig, get_tailoring_config
from ats_tailor.tailoring.models import SectionInjection
from ats_tailor.tailoring.reconstructor import reconstruct
from ats_tailor.tailoring.sections import SectionParser

logger = logging.getLogger(__name__)

BULLET_PATTERN = re.compile(r"^(\s*(?:[-*•●○◦▪▸►]\s*|\d{1,2}\.\s+))(\S.*)$")
SENTENCE_END_PATTERN = re.compile(r"[.!?]\s+")
SKILLS_LINE_MARKERS = ("•", "-", "*", ":", ",")

# A sentence must run past this many characters before a clause goes after it.
MIN_FIRST_SENTENCE = 20
# Bullets longer than this with an interior comma get the keyword mid-sentence.
MIN_SPLICE_LENGTH = 50


def missing_keywords(
    text: str, keywords: Iterable[str], limit: int | None = None
) -> list[str]:
    """Keywords not present in ``text``, deduplicated, in input order."""
    seen: set[str] = set()
    missing: list[str] = []
    for keyword in keywords:
        if not isinstance(keyword, str) or not keyword.strip():
            continue
        key = normalize_keyword(keyword)
        if key in seen:
            continue
        seen.add(key)
        if not contains_keyword(text, keyword):
            missing.append(keyword.strip())
    return missing if limit is None else missing[:limit]


def _split_heading(text: str) -> tuple[str, str]:
    """Split a section into its heading line and body."""
    heading, _, body = text.partition("\n")
    return heading, body


def _join_heading(heading: str, body: str) -> str:
    return f"{heading}\n{body}" if body else heading


def inject_summary(
    text: str,
    keywords: Iterable[str],
    max_keywords: int = 8,
    insert_count: int = 4,
    append_count: int = 5,
) -> SectionInjection:
    """Add missing keywords to a summary section.

    If the summary's first sentence ends past character 20 an "Expertise
    includes ..." clause goes right after it; otherwise a "Proficient in ..."
    sentence is appended.
    """
    heading, body = _split_heading(text)
    if not body.strip():
        return SectionInjection(text=text)

    candidates = missing_keywords(text, keywords, max_keywords)
    if not candidates:
        return SectionInjection(text=text)

    boundary = SENTENCE_END_PATTERN.search(body)
    if boundary and boundary.start() > MIN_FIRST_SENTENCE and insert_count > 0:
        placed = candidates[:insert_count]
        cut = boundary.start() + 1
        body = f"{body[:cut]} Expertise includes {', '.join(placed)}.{body[cut:]}"
    elif append_count > 0:
        placed = candidates[:append_count]
        body = f"{body.rstrip()} Proficient in {', '.join(placed)}."
    else:
        return SectionInjection(text=text)

    return SectionInjection(text=_join_heading(heading, body), injected=placed)


def _splice_bullet(body: str, phrase: str) -> str:
    comma = body.rfind(",")
    if (
        len(body) > MIN_SPLICE_LENGTH
        and MIN_FIRST_SENTENCE < comma < len(body.rstrip()) - 1
    ):
        return f"{body[:comma]}, utilizing {phrase}{body[comma:]}"

    trimmed = body.rstrip()
    if trimmed.endswith((".", ",")):
        return f"{trimmed[:-1].rstrip()} with {phrase}{trimmed[-1]}"
    return f"{trimmed} using {phrase}"


def inject_experience(
    text: str,
    keywords: Iterable[str],
    max_keywords: int = 20,
    keywords_per_bullet: int = 2,
    max_bullets: int = 10,
) -> SectionInjection:
    """Splice missing keywords into experience bullets.

    Bullets are visited in order and each takes up to ``keywords_per_bullet``
    keywords from the pool. Bullets past ``max_bullets`` are left as they are.
    """
    pool = missing_keywords(text, keywords, max_keywords)
    if not pool or keywords_per_bullet <= 0:
        return SectionInjection(text=text)

    lines = text.split("\n")
    injected: list[str] = []
    cursor = 0
    bullets_seen = 0

    for index, line in enumerate(lines):
        if cursor >= len(pool):
            break
        match = BULLET_PATTERN.match(line)
        if match is None:
            continue
        bullets_seen += 1
        if bullets_seen > max_bullets:
            break

        current = "\n".join(lines)
        taken: list[str] = []
        while cursor < len(pool) and len(taken) < keywords_per_bullet:
            keyword = pool[cursor]
            cursor += 1
            # An earlier phrase may already contain this keyword.
            if not contains_keyword(current, keyword) and not contains_keyword(
                " ".join(taken), keyword
            ):
                taken.append(keyword)
        if not taken:
            continue

        prefix, body = match.groups()
        lines[index] = prefix + _splice_bullet(body, " and ".join(taken))
        injected.extend(taken)

    return SectionInjection(text="\n".join(lines), injected=injected)


def _skills_lines(keywords: list[str]) -> list[str]:
    half = math.ceil(len(keywords) / 2)
    lines = [f"• Technical: {', '.join(keywords[:half])}"]
    if keywords[half:]:
        lines.append(f"• Additional: {', '.join(keywords[half:])}")
    return lines


def inject_skills(
    text: str | None, keywords: Iterable[str], max_keywords: int = 15
) -> SectionInjection:
    """Add missing keywords to the skills section, creating it if needed.

    Keywords are appended to the last line that looks like a list (a bullet,
    a colon or a comma). Without one, a new "Additional" bullet is added.
    """
    existing = text or ""
    candidates = missing_keywords(existing, keywords, max_keywords)
    if not candidates:
        return SectionInjection(text=existing)

    if not existing.strip():
        section = "\n".join(["SKILLS", *_skills_lines(candidates)])
        return SectionInjection(text=section, injected=candidates, created=True)

    joined = ", ".join(candidates)
    lines = existing.split("\n")
    target = None
    for index in range(len(lines) - 1, 0, -1):
        stripped = lines[index].strip()
        if stripped.startswith(SKILLS_LINE_MARKERS) or ":" in stripped or "," in stripped:
            target = index
            break

    if target is None:
        lines.append(f"• Additional: {joined}")
    else:
        line = lines[target].rstrip()
        separator = " " if line.endswith((":", ",")) else ", "
        lines[target] = f"{line}{separator}{joined}"

    return SectionInjection(text="\n".join(lines), injected=candidates)


def quick_optimize(
    text: str,
    missing: Iterable[str],
    max_additions: int = 10,
    parser: SectionParser | None = None,
) -> SectionInjection:
    """Add missing keywords with one skills line and no other edits.

    The light alternative to a full tailoring pass. An existing skills section
    gets a trailing "• Additional: ..." bullet. Without one, a new SKILLS
    section with a "• Technical: ..." bullet goes before EDUCATION, or last
    when there is no education section.
    """
    if not text or not text.strip():
        return SectionInjection(text=text or "")
    candidates = missing_keywords(text, missing, max(0, max_additions))
    if not candidates:
        return SectionInjection(text=text)

    document = (parser or SectionParser()).parse(text)
    joined = ", ".join(candidates)

    if document.has_section("skills"):
        skills = document.sections["skills"].rstrip()
        document.sections["skills"] = f"{skills}\n• Additional: {joined}"
        created = False
    else:
        document.sections["skills"] = f"SKILLS\n• Technical: {joined}"
        if "education" in document.section_order:
            position = document.section_order.index("education")
        else:
            position = len(document.section_order)
        document.section_order.insert(position, "skills")
        created = True

    logger.debug(f"Quick optimize: added {len(candidates)} keywords")
    return SectionInjection(text=reconstruct(document), injected=candidates, created=created)

class SectionInjector:
    """Injection strategies bound to a TailoringConfig."""

    def __init__(self, config: TailoringConfig | None = None):
        self.config = config or get_tailoring_config()

    def summary(self, text: str, keywords: Iterable[str]) -> SectionInjection:
        result = inject_summary(
            text,
            keywords,
            max_keywords=self.config.max_keywords_summary,
            insert_count=self.config.summary_insert_count,
            append_count=self.config.summary_append_count,
        )
        logger.debug(f"Summary: injected {len(result.injected)} keywords")
        return result

    def experience(self, text: str, keywords: Iterable[str]) -> SectionInjection:
        result = inject_experience(
            text,
            keywords,
            max_keywords=self.config.max_keywords_experience,
            keywords_per_bullet=self.config.keywords_per_bullet,
            max_bullets=self.config.max_bullets,
        )
        logger.debug(f"Experience: injected {len(result.injected)} keywords")
        return result

    def skills(self, text: str | None, keywords: Iterable[str]) -> SectionInjection:
        result = inject_skills(
            text, keywords, max_keywords=self.config.max_keywords_skills
        )
        logger.debug(
            f"Skills: injected {len(result.injected)} keywords"
            + (" (new section)" if result.created else "")
        )
        return result
