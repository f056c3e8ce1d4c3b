# src/keysearch/models.py
"""
Data models for the fuzzy key search engine.

- NormalizedText: the character and token views of one input string.
- Strategy / ScoreComponent: one similarity signal computed for a pair.
- Candidate: a (key, value, score) row handed to / returned by the top-K selector.

These classes carry no scoring logic; they only give names to the values that
flow between the normalizer, the scorers, fusion and the selector.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple, Tuple


@dataclass(frozen=True, slots=True)
class NormalizedText:
    """
    Attributes
    ----------
    raw : str
        The text exactly as supplied by the caller.
    folded_chars : str
        Casefolded text with the configured punctuation removed. Original
        spacing is preserved so edit distance sees the real gaps.
    tokens : tuple of str
        Non-empty whitespace-delimited pieces of ``folded_chars``.
    """
    raw: str
    folded_chars: str
    tokens: Tuple[str, ...]

    def __len__(self) -> int:
        return len(self.folded_chars)


class Strategy(str, Enum):
    HAMMING = "hamming"
    EDIT_DISTANCE = "edit_distance"
    JACCARD = "jaccard"
    PARTIAL_RATIO_WINDOW = "partial_ratio_window"


@dataclass(frozen=True, slots=True)
class ScoreComponent:
    strategy: Strategy
    value: float  # in [0, 1]


class Candidate(NamedTuple):
    """One ranked row. Unpacks as ``key, value, score``."""
    key: Any
    value: Any
    score: float

