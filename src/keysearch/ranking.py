from __future__ import annotations
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from . import config as CFG
from .models import Candidate
from .similarity import Scorer
from .topk import BoundedTopK

log = logging.getLogger(__name__)

Pair = Tuple[Any, Any]


def _key_text(key: Any) -> str:
    return key if isinstance(key, str) else str(key)


def _check_min_score(min_score: float) -> float:
    min_score = float(min_score)
    if math.isnan(min_score) or not 0.0 <= min_score <= 1.0:
        raise ValueError(f"min_score must be within [0, 1], got {min_score}")
    return min_score


def _checked_score(scorer: Scorer, query: str, key: Any) -> float:
    score = scorer(query, _key_text(key))
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise ValueError(f"scorer returned {type(score).__name__} for key {key!r}; expected a float")
    score = float(score)
    if math.isnan(score) or not 0.0 <= score <= 1.0:
        raise ValueError(f"scorer returned {score} for key {key!r}; scores must be within [0, 1]")
    return score


def rank_top_k(
    candidates: Iterable[Pair],
    scorer: Scorer,
    query: str,
    k: Optional[int] = None,
    min_score: Optional[float] = None,
) -> List[Candidate]:
    """
    Score every (key, value) against ``query`` and return the best ``k`` as
    Candidates, strictly descending by score, ties in first-seen order.
    Scores below ``min_score`` are rejected, not errors.
    """
    k = CFG.TOP_K if k is None else k
    min_score = _check_min_score(CFG.MIN_SCORE if min_score is None else min_score)
    top = BoundedTopK(k)
    scanned = 0
    for key, value in candidates:
        scanned += 1
        score = _checked_score(scorer, query, key)
        if score < min_score:
            continue
        top.offer(Candidate(key, value, score))
    out = top.drain_desc()
    log.debug("rank_top_k q=%r scanned=%d returned=%d", query, scanned, len(out))
    return out


# ---------- shard-then-merge ----------

class _Ranked(NamedTuple):
    score: float
    index: int          # position in the caller's candidate sequence
    candidate: Candidate


def _rank_shard(
    shard: Sequence[Tuple[int, Pair]],
    scorer: Scorer,
    query: str,
    k: int,
    min_score: float,
) -> List[_Ranked]:
    top = BoundedTopK(k)
    for index, (key, value) in shard:
        score = _checked_score(scorer, query, key)
        if score >= min_score:
            top.offer(_Ranked(score, index, Candidate(key, value, score)))
    return top.drain_desc()


def rank_top_k_parallel(
    candidates: Iterable[Pair],
    scorer: Scorer,
    query: str,
    k: Optional[int] = None,
    min_score: Optional[float] = None,
    workers: Optional[int] = None,
) -> List[Candidate]:
    """
    Same result as rank_top_k, computed by W threads each holding its own
    selector over a round-robin shard, then merged through one final
    selector. The scorer must be safe to call from several threads
    (compute_similarity is).
    """
    k = CFG.TOP_K if k is None else k
    min_score = _check_min_score(CFG.MIN_SCORE if min_score is None else min_score)
    BoundedTopK(k)  # reject bad capacities before spawning threads
    workers = CFG.WORKERS if workers is None else int(workers)
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    indexed = list(enumerate(candidates))
    if workers == 1 or len(indexed) <= 1:
        return rank_top_k((pair for _, pair in indexed), scorer, query, k, min_score)

    shards = [indexed[w::workers] for w in range(workers)]
    shards = [s for s in shards if s]
    with ThreadPoolExecutor(max_workers=len(shards)) as ex:
        partials = list(ex.map(lambda s: _rank_shard(s, scorer, query, k, min_score), shards))

    # Re-offer in global (score desc, first-seen) order so ties resolve the
    # same way a single sequential pass would.
    merged = sorted((r for part in partials for r in part), key=lambda r: (-r.score, r.index))
    final = BoundedTopK(k)
    final.offer_many(r.candidate for r in merged)
    out = final.drain_desc()
    log.debug("rank_top_k_parallel q=%r scanned=%d shards=%d returned=%d",
              query, len(indexed), len(shards), len(out))
    return out
