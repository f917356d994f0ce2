"""Résumé section parsing.

A résumé is plain text with section headers on their own lines. Lines before
the first recognised header form the header block (name, contact details).
Header lines are kept as the first line of their section so that nothing is
lost when the document is put back together.
"""

from __future__ import annotations

import re

from ats_tailor.tailoring.models import ParsedDocument


def _header(*names: str) -> re.Pattern[str]:
    alternatives = "|".join(name.replace(" ", r"\s*") for name in names)
    return re.compile(rf"^(?:{alternatives})\s*:?$", re.IGNORECASE)


# Checked in this order; the first pattern that matches a line wins.
SECTION_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        "summary",
        _header(
            "professional summary",
            "career summary",
            "summary",
            "profile",
            "objective",
            "about me",
        ),
    ),
    (
        "experience",
        _header(
            "work experience",
            "professional experience",
            "experience",
            "employment history",
            "employment",
            "work history",
            "career history",
        ),
    ),
    (
        "skills",
        _header(
            "technical skills",
            "core skills",
            "key skills",
            "skills",
            "core competencies",
            "competencies",
            "technologies",
        ),
    ),
    (
        "education",
        _header(
            "education",
            "academic background",
            "academic",
            "qualifications",
            "degrees?",
        ),
    ),
    (
        "certifications",
        _header("certifications?", "certificates", "licenses?", "credentials"),
    ),
    ("achievements", _header("achievements", "accomplishments", "awards", "honors")),
    ("projects", _header("key projects", "projects?", "portfolio")),
)


class SectionParser:
    """Splits résumé text into a header block and named sections."""

    def __init__(
        self, patterns: tuple[tuple[str, re.Pattern[str]], ...] = SECTION_PATTERNS
    ):
        self.patterns = patterns

    def detect(self, line: str) -> str | None:
        """Return the section a header line opens, or None for a content line."""
        stripped = line.strip()
        if not stripped:
            return None
        for name, pattern in self.patterns:
            if pattern.match(stripped):
                return name
        return None

    def parse(self, text: str) -> ParsedDocument:
        """Parse ``text`` into a ParsedDocument.

        A section opened a second time keeps accumulating into the same entry
        and keeps its first position in ``section_order``.
        """
        header_lines: list[str] = []
        section_lines: dict[str, list[str]] = {}
        order: list[str] = []
        current: list[str] = header_lines

        for line in (text or "").replace("\r\n", "\n").split("\n"):
            name = self.detect(line)
            if name is not None:
                if name not in section_lines:
                    section_lines[name] = []
                    order.append(name)
                current = section_lines[name]
            current.append(line)

        return ParsedDocument(
            header="\n".join(header_lines).strip(),
            sections={
                name: "\n".join(lines).strip() for name, lines in section_lines.items()
            },
            section_order=order,
        )


def parse_resume(text: str) -> ParsedDocument:
    """Parse résumé text with the default section patterns."""
    return SectionParser().parse(text)
