"""
Individual similarity scorers. Each takes already-normalized input and
returns a float in [0, 1]; none of them normalizes, logs or keeps state.
"""
from __future__ import annotations
from typing import Iterable, Optional

from . import config as CFG
from .distance import get_backend


def hamming(a: str, b: str) -> float:
    """1 - mismatches/length for equal-length sequences. Two empties are identical."""
    if len(a) != len(b):
        raise ValueError(f"hamming() needs equal lengths, got {len(a)} and {len(b)}")
    if not a:
        return 1.0
    mismatches = sum(1 for x, y in zip(a, b) if x != y)
    return 1.0 - mismatches / len(a)


def edit_distance(a: str, b: str, *, backend: Optional[str] = None) -> float:
    """1 - levenshtein/max_len, clamped; 1.0 when both are empty."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    dist = get_backend(backend)(a, b)
    return min(1.0, max(0.0, 1.0 - dist / longest))


def jaccard(a_tokens: Iterable[str], b_tokens: Iterable[str]) -> float:
    """Set overlap of unique tokens: |A & B| / |A | B|."""
    a, b = set(a_tokens), set(b_tokens)
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    return len(a & b) / len(a | b)


def partial_ratio(
    query: str,
    target: str,
    *,
    stride: Optional[int] = None,
    backend: Optional[str] = None,
) -> float:
    """
    Best edit-distance score of ``query`` against any window of ``target``.

    Window length is len(query) clamped to len(target). Windows start every
    ``stride`` code points (CFG.PARTIAL_STRIDE); the last window is always
    tried, so with stride s the best alignment is missed by at most s-1
    positions. An empty query scores 0.0.
    """
    if not query:
        return 0.0
    step = max(1, int(stride if stride is not None else CFG.PARTIAL_STRIDE))
    dist = get_backend(backend)

    width = min(len(query), len(target))
    if width == 0:
        return 0.0
    last = len(target) - width
    starts = list(range(0, last + 1, step))
    if starts[-1] != last:
        starts.append(last)

    longest = max(len(query), width)
    best = 0.0
    for i in starts:
        score = 1.0 - dist(query, target[i:i + width]) / longest
        if score > best:
            best = score
            if best >= 1.0:
                return 1.0
    return max(0.0, best)
