"""
Strategy selection and fusion.

compute_similarity(query, target) normalizes both sides, decides which scorers
are worth running for the pair's length regime, and keeps the strongest
signal:

  * equal lengths up to CFG.HAMMING_MAX_LEN  -> Hamming + whole-string edit distance
  * comparable lengths                       -> whole-string edit distance
  * target longer than the query             -> windowed partial match
  * target far longer (CFG.EDIT_MAX_RATIO)   -> windowed partial match only
  * always                                   -> token-bag Jaccard

The shorter folded string always plays the query role, which makes the
fused score symmetric.
"""
from __future__ import annotations
from typing import Callable, Dict, List, Tuple

from . import config as CFG
from .models import NormalizedText, ScoreComponent, Strategy
from .normalize import normalize
from .scorers import edit_distance, hamming, jaccard, partial_ratio

# Anything with this shape can rank candidates: built-in fusion, a single
# metric, or a user callback.
Scorer = Callable[[str, str], float]


def select_strategies(len_q: int, len_t: int) -> Tuple[Strategy, ...]:
    """Strategies to run for a (query, target) pair with the given folded lengths."""
    picked: List[Strategy] = []
    if len_q == len_t and len_q <= CFG.HAMMING_MAX_LEN:
        picked.append(Strategy.HAMMING)

    long_target = len_q >= 1 and len_t > CFG.EDIT_MAX_RATIO * len_q
    if not long_target:
        picked.append(Strategy.EDIT_DISTANCE)

    picked.append(Strategy.JACCARD)

    if len_q >= 1 and len_t > CFG.PARTIAL_MIN_RATIO * len_q:
        picked.append(Strategy.PARTIAL_RATIO_WINDOW)
    return tuple(picked)


def _orient(a: NormalizedText, b: NormalizedText) -> Tuple[NormalizedText, NormalizedText]:
    return (b, a) if len(b) < len(a) else (a, b)


def _coverage_weight(len_q: int, len_t: int) -> float:
    # 1.0 at equal length, strictly decreasing towards CFG.PARTIAL_FLOOR.
    ratio = len_q / len_t
    return CFG.PARTIAL_FLOOR + (1.0 - CFG.PARTIAL_FLOOR) * ratio * ratio


def score_components(query: NormalizedText, target: NormalizedText) -> List[ScoreComponent]:
    """Run the selected scorers for one normalized pair."""
    q, t = _orient(query, target)
    qc, tc = q.folded_chars, t.folded_chars
    len_q, len_t = len(qc), len(tc)

    values: Dict[Strategy, float] = {}
    for strategy in select_strategies(len_q, len_t):
        if strategy is Strategy.HAMMING:
            values[strategy] = hamming(qc, tc)
        elif strategy is Strategy.EDIT_DISTANCE:
            values[strategy] = edit_distance(qc, tc)
        elif strategy is Strategy.PARTIAL_RATIO_WINDOW:
            values[strategy] = partial_ratio(qc, tc) * _coverage_weight(len_q, len_t)

    # Token evidence is order-insensitive; positional agreement and length
    # agreement keep a reordered or padded string from scoring as identical.
    positional = values.get(Strategy.HAMMING, values.get(Strategy.EDIT_DISTANCE, 0.0))
    longest = max(len_q, len_t)
    length_agreement = 1.0 if longest == 0 else len_q / longest
    values[Strategy.JACCARD] = (
        CFG.TOKEN_WEIGHT * jaccard(q.tokens, t.tokens) * length_agreement
        + (1.0 - CFG.TOKEN_WEIGHT) * positional
    )

    return [ScoreComponent(strategy=s, value=v) for s, v in values.items()]


def fuse(components: List[ScoreComponent]) -> float:
    """Strongest signal wins, clamped to [0, 1]."""
    if not components:
        return 0.0
    best = max(c.value for c in components)
    return min(1.0, max(0.0, best))


def compute_similarity(query: str, target: str) -> float:
    """Fused similarity in [0, 1]. Pure and deterministic."""
    return fuse(score_components(normalize(query), normalize(target)))


def explain(query: str, target: str) -> Tuple[float, List[ScoreComponent]]:
    """compute_similarity plus the components it was fused from."""
    components = score_components(normalize(query), normalize(target))
    return fuse(components), components


# ---------- single-metric scorers (same Scorer shape) ----------

def hamming_similarity(query: str, target: str) -> float:
    q, t = normalize(query).folded_chars, normalize(target).folded_chars
    return hamming(q, t) if len(q) == len(t) else 0.0


def edit_similarity(query: str, target: str) -> float:
    return edit_distance(normalize(query).folded_chars, normalize(target).folded_chars)


def jaccard_similarity(query: str, target: str) -> float:
    return jaccard(normalize(query).tokens, normalize(target).tokens)


def partial_similarity(query: str, target: str) -> float:
    q, t = _orient(normalize(query), normalize(target))
    return partial_ratio(q.folded_chars, t.folded_chars)


SCORERS: Dict[str, Scorer] = {
    "fused": compute_similarity,
    "hamming": hamming_similarity,
    "edit": edit_similarity,
    "jaccard": jaccard_similarity,
    "partial": partial_similarity,
}


def get_scorer(name: str) -> Scorer:
    try:
        return SCORERS[name]
    except KeyError:
        raise ValueError(f"Unknown scorer {name!r}; expected one of {sorted(SCORERS)}") from None
