# keysearch/DB/memory_store.py
from __future__ import annotations
import threading
from typing import Any, Dict, Iterable, Iterator, Tuple

from .api import KeyStore

_MISSING = object()


class MemoryStore(KeyStore):
    """In-memory key/value map; iteration follows first-insertion order."""

    def __init__(self) -> None:
        self._rows: Dict[str, Any] = {}
        self._lock = threading.Lock()

    # C / U
    def put(self, key: str, value: Any) -> None:
        with self._lock:
            self._rows[key] = value

    def put_many(self, items: Iterable[Tuple[str, Any]]) -> int:
        n = 0
        with self._lock:
            for key, value in items:
                self._rows[key] = value
                n += 1
        return n

    # R
    def read(self, key: str) -> Any:
        value = self._rows.get(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def get(self, key: str, default: Any = None) -> Any:
        return self._rows.get(key, default)

    def items(self) -> Iterator[Tuple[str, Any]]:
        # snapshot so callers may mutate the store while iterating
        with self._lock:
            rows = list(self._rows.items())
        return iter(rows)

    def count(self) -> int:
        return len(self._rows)

    # D
    def delete(self, key: str) -> None:
        with self._lock:
            self._rows.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._rows.clear()

    def close(self) -> None:
        self.clear()
