"""
SQLite Memory Store - Durable key/value persistence for the agent brain

WHAT: Durable MemoryStore backed by an embedded SQLite database via SQLAlchemy
WHERE: agentcore/brain/sqlite_store.py - long-term slot of the brain
WHO: Brain summarization, agent wiring, callers persisting facts
TIME: Single-key operations are one short transaction each

Values are wrapped in a ``StoredValue`` envelope (encoding tag + JSON text)
before they reach the database, so the on-disk rows stay inspectable with any
SQLite client:

    memory_entries(key TEXT PRIMARY KEY, value TEXT, updated_at DATETIME)

Each operation runs in its own ``engine.begin()`` transaction. Encoding
happens before the transaction opens, so a value that cannot be serialized
never touches the prior row.

Boundary Notes:
- Absent key -> NOT_FOUND; I/O failures -> MemoryBackendError
- Search is exact-key match only
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Callable, List, TypeVar

from sqlalchemy import Column, DateTime, MetaData, String, Table, Text, create_engine, delete, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .errors import MemoryBackendError, MemorySerializationError, MemoryStoreClosedError
from .memory_store import NOT_FOUND, MemoryStore
from .models import StoredValue, utc_now

logger = logging.getLogger(__name__)

DB_FILENAME = "memory.db"

_T = TypeVar("_T")

metadata = MetaData()

memory_entries = Table(
    "memory_entries",
    metadata,
    Column("key", String, primary_key=True),
    Column("value", Text, nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)


class SQLiteMemoryStore(MemoryStore):
    """Durable store; ``path`` is a directory that will hold ``memory.db``."""

    def __init__(self, path: str | Path, *, echo: bool = False) -> None:
        self.path = Path(path)
        try:
            self.path.mkdir(parents=True, exist_ok=True)
            self._engine: Engine | None = create_engine(
                f"sqlite:///{self.path / DB_FILENAME}",
                connect_args={"check_same_thread": False},
                echo=echo,
            )
            metadata.create_all(self._engine)
        except (OSError, SQLAlchemyError) as exc:
            raise MemoryBackendError(f"Failed to open memory store at {self.path}: {exc}") from exc
        self._close_lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._engine is None

    def close(self) -> None:
        with self._close_lock:
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None

    def __enter__(self) -> SQLiteMemoryStore:
        return self

    def __exit__(self, exc_type, exc, exc_tb) -> None:
        self.close()

    # ------------------ helpers -----------------
    def _run(self, op: str, fn: Callable[[Any], _T]) -> _T:
        engine = self._engine
        if engine is None:
            raise MemoryStoreClosedError(f"Memory store at {self.path} is closed")
        try:
            with engine.begin() as conn:
                return fn(conn)
        except SQLAlchemyError as exc:
            raise MemoryBackendError(f"{op} failed: {exc}") from exc

    # ------------------ operations --------------
    def remember(self, key: str, value: Any) -> None:
        raw = StoredValue.wrap(value).model_dump_json()
        now = utc_now()
        stmt = sqlite_insert(memory_entries).values(key=key, value=raw, updated_at=now)
        stmt = stmt.on_conflict_do_update(
            index_elements=[memory_entries.c.key],
            set_={"value": raw, "updated_at": now},
        )
        self._run("remember", lambda conn: conn.execute(stmt))

    def recall(self, key: str) -> Any:
        query = select(memory_entries.c.value).where(memory_entries.c.key == key)
        raw = self._run("recall", lambda conn: conn.execute(query).scalar_one_or_none())
        if raw is None:
            return NOT_FOUND
        return StoredValue.from_raw(raw).unwrap()

    def contains(self, key: str) -> bool:
        query = select(memory_entries.c.key).where(memory_entries.c.key == key)
        return self._run("contains", lambda conn: conn.execute(query).first() is not None)

    def search(self, query: str) -> List[Any]:
        stmt = select(memory_entries.c.key, memory_entries.c.value).where(memory_entries.c.key == query)
        rows = self._run("search", lambda conn: conn.execute(stmt).all())
        results: List[Any] = []
        for row in rows:
            try:
                results.append(StoredValue.from_raw(row.value).unwrap())
            except MemorySerializationError as exc:
                logger.warning(f"Skipping undecodable entry {row.key!r} during search: {exc}")
        return results

    def forget(self, key: str) -> None:
        stmt = delete(memory_entries).where(memory_entries.c.key == key)
        self._run("forget", lambda conn: conn.execute(stmt))

    def list_keys(self) -> List[str]:
        stmt = select(memory_entries.c.key)
        return self._run("list_keys", lambda conn: list(conn.execute(stmt).scalars()))


def open_long_term_store(path: str | Path, *, fallback: MemoryStore) -> MemoryStore:
    """Open the durable store at ``path``; on failure log a warning and return ``fallback``."""

    try:
        return SQLiteMemoryStore(path)
    except MemoryBackendError as exc:
        logger.warning(f"Falling back to {type(fallback).__name__} for long-term memory: {exc}")
        return fallback


__all__ = [
    "DB_FILENAME",
    "SQLiteMemoryStore",
    "memory_entries",
    "open_long_term_store",
]
