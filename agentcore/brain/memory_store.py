"""
Memory Store - Pluggable key/value memory for the agent brain

WHAT: Store contract plus the volatile (in-process) implementation
WHERE: agentcore/brain/memory_store.py - leaf of the brain dependency graph
WHO: Brain (short-term and long-term slots), agent wiring, callers holding facts
TIME: Volatile operations O(1) except list_keys/search which are O(n)

Every store implements remember/recall/search/forget/list_keys and is safe to
call from multiple threads. Absence of a key is reported by returning the
``NOT_FOUND`` sentinel, never by raising and never by returning ``None`` (a
stored ``None`` is a legitimate value).

The durable implementation lives in ``sqlite_store``.

Boundary Notes:
- Search is exact-key match only; no ranking
- Volatile values are live references, not copies
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, runtime_checkable

from .locks import ReadWriteLock


class _NotFound:
    """Sentinel type for a key with no stored value."""

    _instance: "_NotFound | None" = None

    def __new__(cls) -> "_NotFound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __reduce__(self) -> str:
        return "NOT_FOUND"


NOT_FOUND = _NotFound()


@runtime_checkable
class MemoryStore(Protocol):
    """Abstract interface for brain memory stores."""

    def remember(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any prior value."""

    def recall(self, key: str) -> Any:
        """Return the stored value, or ``NOT_FOUND`` if the key is absent."""

    def search(self, query: str) -> List[Any]:
        """Return values whose key matches ``query`` exactly (possibly empty)."""

    def forget(self, key: str) -> None:
        """Remove ``key``; forgetting an absent key is a no-op."""

    def list_keys(self) -> List[str]:
        """Snapshot of all keys, in no particular order."""


class VolatileMemoryStore(MemoryStore):
    """In-process store; contents are lost when the process exits."""

    def __init__(self) -> None:
        self._store: Dict[str, Any] = {}
        self._lock = ReadWriteLock()

    def remember(self, key: str, value: Any) -> None:
        with self._lock.write():
            self._store[key] = value

    def recall(self, key: str) -> Any:
        with self._lock.read():
            return self._store.get(key, NOT_FOUND)

    def contains(self, key: str) -> bool:
        with self._lock.read():
            return key in self._store

    def search(self, query: str) -> List[Any]:
        with self._lock.read():
            if query in self._store:
                return [self._store[query]]
            return []

    def forget(self, key: str) -> None:
        with self._lock.write():
            self._store.pop(key, None)

    def list_keys(self) -> List[str]:
        with self._lock.read():
            return list(self._store)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._store)


__all__ = [
    "MemoryStore",
    "NOT_FOUND",
    "VolatileMemoryStore",
]
