from __future__ import annotations
import heapq
import math
from typing import Any, Iterable, List, Optional, Tuple


class CapacityMisuse(ValueError):
    """Selector built with k < 1, or used again after drain_desc()."""


class BoundedTopK:
    """
    Online top-K: keeps the K highest-scoring items offered so far.

    Backed by a min-heap keyed by (score, -seq) where seq is the offer order,
    so the root is the weakest member and, among equal lowest scores, the most
    recently accepted one. That gives the tie-break rule: once full, an item
    with a score equal to the current minimum is dropped, and earlier
    arrivals at a given score are never displaced by later ones.

    States:
      collecting  size < K, every offer is accepted
      full        size == K, only strictly better scores get in
      drained     drain_desc() has run; the instance is finished

    Items only need a numeric ``score`` attribute (Candidate qualifies).
    offer() is O(log K), drain_desc() is O(K log K). Not thread-safe.
    """

    __slots__ = ("_k", "_heap", "_seq", "_drained")

    def __init__(self, k: int) -> None:
        if isinstance(k, bool) or not isinstance(k, int):
            raise CapacityMisuse(f"capacity must be an int, got {type(k).__name__}")
        if k < 1:
            raise CapacityMisuse(f"capacity must be >= 1, got {k}")
        self._k = k
        self._heap: List[Tuple[float, int, Any]] = []
        self._seq = 0
        self._drained = False

    # ------------- state -------------

    @property
    def capacity(self) -> int:
        return self._k

    @property
    def state(self) -> str:
        if self._drained:
            return "drained"
        return "full" if len(self._heap) >= self._k else "collecting"

    def __len__(self) -> int:
        return len(self._heap)

    def min_score(self) -> Optional[float]:
        """Score a newcomer must beat once full; None while empty."""
        return self._heap[0][0] if self._heap else None

    # ------------- mutation -------------

    def offer(self, item: Any) -> bool:
        """Offer one item. Returns True if it is now retained."""
        self._check_live("offer")
        score = float(item.score)
        if math.isnan(score):
            raise ValueError("offer(): score is NaN")
        entry = (score, -self._seq, item)
        self._seq += 1

        if len(self._heap) < self._k:
            heapq.heappush(self._heap, entry)
            return True
        if score > self._heap[0][0]:
            heapq.heapreplace(self._heap, entry)
            return True
        return False

    def offer_many(self, items: Iterable[Any]) -> int:
        """Offer items in order; returns how many were accepted on arrival."""
        return sum(1 for it in items if self.offer(it))

    # ------------- extraction -------------

    def peek_desc(self) -> List[Any]:
        """Current members, best first, without consuming the selector."""
        self._check_live("peek_desc")
        return [item for _, _, item in sorted(self._heap, key=lambda e: (-e[0], -e[1]))]

    def drain_desc(self) -> List[Any]:
        """
        Terminal: members by descending score, ties by offer order (earliest
        first). A second call raises CapacityMisuse.
        """
        out = self.peek_desc()
        self._heap = []
        self._drained = True
        return out

    def _check_live(self, op: str) -> None:
        if self._drained:
            raise CapacityMisuse(f"{op}() on a drained selector; create a new one per search")
