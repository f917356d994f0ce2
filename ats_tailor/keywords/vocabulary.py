"""Word lists used by the keyword ranker.

The lists live in ``vocabulary.yaml`` next to this module. They are parsed
once into a frozen :class:`Vocabulary` and handed to the components that
need them.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import yaml

DEFAULT_VOCABULARY_PATH = Path(__file__).with_name("vocabulary.yaml")


@dataclass(frozen=True)
class Vocabulary:
    """Immutable stopword, high-value term and phrase lists."""

    stop_words: frozenset[str]
    high_value: frozenset[str]
    phrases: tuple[str, ...]

    @classmethod
    def from_dict(cls, data: dict) -> Vocabulary:
        """Build a vocabulary from a mapping of lists, lowercasing every entry."""

        def _entries(key: str) -> list[str]:
            raw = data.get(key) or []
            if not isinstance(raw, list):
                raise ValueError(f"Vocabulary '{key}' must be a list")
            return [str(item).strip().lower() for item in raw if str(item).strip()]

        phrases: list[str] = []
        for phrase in _entries("phrases"):
            if phrase not in phrases:
                phrases.append(phrase)

        return cls(
            stop_words=frozenset(_entries("stop_words")),
            high_value=frozenset(_entries("high_value")),
            phrases=tuple(phrases),
        )


@lru_cache(maxsize=8)
def load_vocabulary(path: Path | str | None = None) -> Vocabulary:
    """Load and cache a vocabulary from YAML.

    Args:
        path: YAML file to load. Defaults to the packaged vocabulary.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a mapping of lists.
    """
    vocab_path = Path(path) if path is not None else DEFAULT_VOCABULARY_PATH
    if not vocab_path.exists():
        raise FileNotFoundError(f"Vocabulary not found: {vocab_path}")

    try:
        with vocab_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML vocabulary: {vocab_path}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Vocabulary must be a mapping/dict: {vocab_path}")
    return Vocabulary.from_dict(data)


def default_vocabulary() -> Vocabulary:
    """Return the packaged vocabulary."""
    return load_vocabulary(None)
