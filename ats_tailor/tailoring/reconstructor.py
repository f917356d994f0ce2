"""Put a parsed résumé back together as plain text."""

from __future__ import annotations

from ats_tailor.tailoring.models import ParsedDocument

SECTION_SEPARATOR = "\n\n"


def reconstruct(document: ParsedDocument) -> str:
    """Join the header and sections with a blank line between each block.

    Sections follow ``section_order``; sections added after parsing (and so
    missing from the order) come last.
    """
    blocks: list[str] = []
    if document.header.strip():
        blocks.append(document.header)

    names = list(document.section_order)
    names.extend(name for name in document.sections if name not in names)

    for name in names:
        text = document.sections.get(name, "")
        if text.strip():
            blocks.append(text)

    return SECTION_SEPARATOR.join(blocks)
