# keysearch/engine.py
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple

from . import config as CFG
from .DB.api import KeyStore, make_store
from .loader import load_pairs
from .models import Candidate
from .ranking import rank_top_k, rank_top_k_parallel
from .similarity import Scorer, compute_similarity

log = logging.getLogger(__name__)

Loader = Callable[[], Iterable[Tuple[str, Any]]]


class Engine:
    """
    Thin orchestration layer that glues together:
      - key/value storage via a KeyStore (in-memory),
      - a loader that (re)materializes the key set,
      - the ranking pipeline (ranking.rank_top_k) with a pluggable scorer.

    Public API (used by CLI/Flask):
      * build(pairs=..., loader=..., roots=...): seed the store
      * get / insert / delete / stream: plain cache access
      * reload():       wipe and re-run the loader
      * text_search(query, limit=...): ranked fuzzy lookup over all keys
      * shutdown():     close underlying resources
    """

    # ------------- lifecycle -------------

    def __init__(self, scorer: Optional[Scorer] = None) -> None:
        self.scorer: Scorer = scorer or compute_similarity
        self._store: Optional[KeyStore] = None
        self._loader: Optional[Loader] = None

    # /* ~~~ Seed the store from explicit pairs, a loader callable, or key files ~~~ */
    def build(
        self,
        pairs: Optional[Iterable[Tuple[str, Any]]] = None,
        *,
        loader: Optional[Loader] = None,
        roots: Optional[Iterable[str]] = None,
        db_dsn: Optional[str] = None,   # e.g. "memory://"
        verbose: bool = False,
    ) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)

        sources = [s is not None for s in (pairs, loader, roots)]
        if sum(sources) > 1:
            raise ValueError("build(): pass only one of pairs, loader or roots")

        if roots is not None:
            roots = list(roots)
            if not roots:
                raise ValueError("build(): at least one root folder is required")
            loader = lambda: load_pairs(roots)  # noqa: E731
        elif pairs is not None:
            pairs = list(pairs)
            loader = None

        # Materialize before touching state: a failing loader leaves the engine as it was.
        if loader is not None:
            pairs = list(loader())

        dsn = db_dsn or "memory://"
        log.info("Initializing key store: %s", dsn)
        store = make_store(dsn, items=pairs or [])
        if self._store is not None:
            self._store.close()
        self._store = store
        self._loader = loader
        log.info("Engine build() complete: keys=%d", self._store.count())

    # /* ~~~ Drop everything inserted since build and re-run the loader ~~~ */
    def reload(self) -> int:
        store = self._require_store()
        if self._loader is None:
            raise RuntimeError("reload(): engine was built without a loader")
        pairs = list(self._loader())
        store.clear()
        store.put_many(pairs)
        log.info("Engine reload() complete: keys=%d", store.count())
        return store.count()

    # ------------- cache access -------------

    def get(self, key: str, default: Any = None) -> Any:
        return self._require_store().get(key, default)

    def get_strict(self, key: str) -> Any:
        return self._require_store().read(key)

    def insert(self, key: str, value: Any) -> None:
        if not isinstance(key, str):
            raise TypeError(f"keys must be str, got {type(key).__name__}")
        self._require_store().put(key, value)

    def delete(self, key: str) -> None:
        self._require_store().delete(key)

    def count(self) -> int:
        return self._require_store().count()

    def keys(self) -> List[str]:
        return [k for k, _ in self._require_store().items()]

    def stream(self, predicate: Optional[Callable[[Any], bool]] = None) -> Iterator[Tuple[str, Any]]:
        """Iterate (key, value) pairs whose value satisfies ``predicate``.

        Raises ``RuntimeError`` immediately when the engine was never built.
        """
        store = self._require_store()
        return (
            (key, value)
            for key, value in store.items()
            if predicate is None or predicate(value)
        )

    # ------------- query -------------

    # /* ~~~ Rank every stored key against the query ~~~ */
    def text_search(
        self,
        query: str,
        *,
        limit: Optional[int] = None,
        min_score: Optional[float] = None,
        scorer: Optional[Scorer] = None,
        workers: int = 1,
    ) -> List[Candidate]:
        store = self._require_store()
        scorer = scorer or self.scorer
        if workers > 1:
            return rank_top_k_parallel(store.items(), scorer, query, limit, min_score, workers)
        return rank_top_k(store.items(), scorer, query, limit, min_score)

    def score(self, query: str, target: str) -> float:
        self._require_store()
        return self.scorer(query, target)

    # ------------- teardown -------------

    def shutdown(self) -> None:
        try:
            if self._store:
                self._store.close()
        finally:
            self._store = None
            self._loader = None
            log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _require_store(self) -> KeyStore:
        if self._store is None:
            raise RuntimeError("Engine not initialized. Call build() first.")
        return self._store
