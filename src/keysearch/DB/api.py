# keysearch/DB/api.py
from __future__ import annotations
from typing import Any, Iterable, Iterator, Optional, Protocol, Tuple


class KeyStore(Protocol):
    # Create / Update
    def put(self, key: str, value: Any) -> None: ...
    def put_many(self, items: Iterable[Tuple[str, Any]]) -> int: ...
    # Read
    def read(self, key: str) -> Any: ...
    def get(self, key: str, default: Any = None) -> Any: ...
    def items(self) -> Iterator[Tuple[str, Any]]: ...
    def count(self) -> int: ...
    # Delete
    def delete(self, key: str) -> None: ...
    def clear(self) -> None: ...
    # lifecycle
    def close(self) -> None: ...


def make_store(dsn: str, *, items: Optional[Iterable[Tuple[str, Any]]] = None) -> KeyStore:
    """
    Factory:
      - memory:// -> MemoryStore (seeded with ``items`` when given)
    """
    if dsn.startswith("memory://"):
        # Lazy import to avoid a circular import with memory_store -> api
        from .memory_store import MemoryStore
        store = MemoryStore()
        if items is not None:
            store.put_many(items)
        return store

    raise ValueError(f"Unsupported store DSN: {dsn}")
