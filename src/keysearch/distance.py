"""
Levenshtein distance execution strategies.

Both backends compute the exact unit-cost insert/delete/substitute distance
over code points; they differ only in speed. ``rapidfuzz`` uses a
bit-parallel implementation and is the default, ``python`` is the plain
two-row dynamic program kept as the readable reference.
"""
from __future__ import annotations
from typing import Callable, Dict

from rapidfuzz.distance import Levenshtein

from . import config as CFG

DistanceFn = Callable[[str, str], int]


def levenshtein_python(a: str, b: str) -> int:
    """Two-row DP, O(len_a * len_b) time, O(min) memory."""
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        cur = [i]
        for j, cb in enumerate(b, start=1):
            cur.append(min(
                prev[j] + 1,               # delete
                cur[j - 1] + 1,            # insert
                prev[j - 1] + (ca != cb),  # substitute
            ))
        prev = cur
    return prev[-1]


def levenshtein_rapidfuzz(a: str, b: str) -> int:
    return Levenshtein.distance(a, b)


BACKENDS: Dict[str, DistanceFn] = {
    "python": levenshtein_python,
    "rapidfuzz": levenshtein_rapidfuzz,
}


def get_backend(name: str | None = None) -> DistanceFn:
    name = name or CFG.EDIT_BACKEND
    try:
        return BACKENDS[name]
    except KeyError:
        raise ValueError(f"Unknown edit-distance backend {name!r}; expected one of {sorted(BACKENDS)}") from None


def levenshtein(a: str, b: str, *, backend: str | None = None) -> int:
    return get_backend(backend)(a, b)
