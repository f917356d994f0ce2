"""Text cleaning and tokenization for keyword extraction."""

from __future__ import annotations

import html
import re

from ats_tailor.keywords.vocabulary import default_vocabulary

_TAG_RE = re.compile(r"<[^>]*>")
_SEPARATOR_RE = re.compile(r"[•\-–—|/\\:;,]")
# "+", "#" and "." survive cleaning so "c++", "c#" and "node.js" stay intact.
_DISALLOWED_RE = re.compile(r"[^a-zA-Z0-9\s+#.]")
_WHITESPACE_RE = re.compile(r"\s+")
_NUMERIC_RE = re.compile(r"\d+(?:\.\d+)*")


def clean(text: object) -> str:
    """Strip HTML and punctuation from text, lowercase it and collapse whitespace.

    Non-string or empty input yields an empty string.
    """
    if not isinstance(text, str) or not text:
        return ""

    cleaned = _TAG_RE.sub(" ", text)
    cleaned = html.unescape(cleaned)
    cleaned = _SEPARATOR_RE.sub(" ", cleaned)
    cleaned = _DISALLOWED_RE.sub(" ", cleaned)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()
    return cleaned.lower()


def tokenize(text: object, stop_words: frozenset[str] | None = None) -> list[str]:
    """Split cleaned text into candidate terms.

    Drops tokens shorter than two characters, numbers and stopwords. Sentence
    periods are trimmed from the end of each token.
    """
    if not isinstance(text, str) or not text:
        return []
    if stop_words is None:
        stop_words = default_vocabulary().stop_words

    tokens: list[str] = []
    for raw in text.split():
        token = raw.rstrip(".")
        if len(token) < 2:
            continue
        if _NUMERIC_RE.fullmatch(token):
            continue
        if token in stop_words:
            continue
        tokens.append(token)
    return tokens
