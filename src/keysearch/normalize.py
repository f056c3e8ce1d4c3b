from __future__ import annotations
from typing import Tuple

from . import config as CFG
from .models import NormalizedText

_TABLES: dict[str, dict[int, None]] = {}


def _strip_table(punctuation: str) -> dict[int, None]:
    table = _TABLES.get(punctuation)
    if table is None:
        table = _TABLES[punctuation] = str.maketrans("", "", punctuation)
    return table


def fold(text: str, punctuation: str | None = None) -> str:
    """Casefold and drop punctuation. Whitespace is left exactly where it was."""
    if punctuation is None:
        punctuation = CFG.PUNCTUATION
    return text.casefold().translate(_strip_table(punctuation))


def tokenize(folded: str) -> Tuple[str, ...]:
    """Split on runs of whitespace; empty pieces never appear."""
    return tuple(folded.split())


def normalize(text: str, punctuation: str | None = None) -> NormalizedText:
    """
    Build the NormalizedText for one input.
      * case-insensitive via .casefold()
      * punctuation from CFG.PUNCTUATION removed ("a, b" -> "a b", "don't" -> "dont")
      * tokens: whitespace runs collapsed, leading/trailing space ignored
    Empty input gives an empty character view and no tokens.
    """
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}; decode bytes before scoring")
    folded = fold(text, punctuation)
    return NormalizedText(raw=text, folded_chars=folded, tokens=tokenize(folded))


def normalize_only(text: str) -> str:
    """Convenience: normalized character view only."""
    return normalize(text).folded_chars
