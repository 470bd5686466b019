import json
import threading

import pytest
from sqlalchemy import create_engine, text

from agentcore.brain.errors import MemorySerializationError, MemoryStoreClosedError
from agentcore.brain.memory_store import NOT_FOUND, MemoryStore, VolatileMemoryStore
from agentcore.brain.sqlite_store import DB_FILENAME, SQLiteMemoryStore, open_long_term_store


@pytest.fixture(params=["volatile", "sqlite"])
def store(request, tmp_path):
    if request.param == "volatile":
        yield VolatileMemoryStore()
        return
    durable = SQLiteMemoryStore(tmp_path / "mem")
    yield durable
    durable.close()


def test_store_satisfies_protocol(store):
    assert isinstance(store, MemoryStore)


def test_remember_recall_overwrite(store):
    store.remember("k", {"a": [1, 2, 3], "b": "text"})
    assert store.recall("k") == {"a": [1, 2, 3], "b": "text"}

    store.remember("k", "replaced")
    assert store.recall("k") == "replaced"
    assert store.list_keys() == ["k"]


def test_absent_key_is_not_found_not_none(store):
    assert store.recall("missing") is NOT_FOUND
    assert not NOT_FOUND

    store.remember("empty", None)
    assert store.recall("empty") is None
    assert store.contains("empty")
    assert not store.contains("missing")


def test_forget_removes_key_and_is_idempotent(store):
    store.remember("a", 1)
    store.remember("b", 2)
    store.forget("a")
    store.forget("a")
    store.forget("never-stored")

    assert store.recall("a") is NOT_FOUND
    assert sorted(store.list_keys()) == ["b"]
    assert store.search("a") == []


def test_search_is_exact_key_match(store):
    store.remember("user:name", "ada")
    store.remember("user:name:old", "bob")

    assert store.search("user:name") == ["ada"]
    assert store.search("user") == []


def test_concurrent_writers(store):
    def worker(i: int) -> None:
        store.remember(f"key-{i}", i)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(store.list_keys()) == sorted(f"key-{i}" for i in range(20))
    assert store.recall("key-7") == 7


def test_volatile_keeps_live_references():
    store = VolatileMemoryStore()
    value = {"items": []}
    store.remember("v", value)
    value["items"].append(1)
    assert store.recall("v") is value
    assert len(store) == 1


def test_sqlite_unserializable_value_leaves_prior_value(tmp_path):
    with SQLiteMemoryStore(tmp_path) as store:
        store.remember("k", "original")
        with pytest.raises(MemorySerializationError):
            store.remember("k", {"bad": object()})
        assert store.recall("k") == "original"


@pytest.mark.parametrize("value", [{1: "a"}, ("a", "b"), {"nested": [("x", 1)]}])
def test_sqlite_rejects_values_json_would_coerce(tmp_path, value):
    with SQLiteMemoryStore(tmp_path) as store:
        store.remember("k", ["original"])
        with pytest.raises(MemorySerializationError):
            store.remember("k", value)
        assert store.recall("k") == ["original"]


def test_sqlite_persists_across_reopen(tmp_path):
    store = SQLiteMemoryStore(tmp_path)
    store.remember("fact", {"n": 1.5, "tags": ["x"]})
    store.close()

    reopened = SQLiteMemoryStore(tmp_path)
    try:
        assert reopened.recall("fact") == {"n": 1.5, "tags": ["x"]}
    finally:
        reopened.close()


def test_sqlite_rows_are_json_envelopes(tmp_path):
    with SQLiteMemoryStore(tmp_path) as store:
        store.remember("summary:20260101T000000", "line\n")

    engine = create_engine(f"sqlite:///{tmp_path / DB_FILENAME}")
    with engine.connect() as conn:
        raw = conn.execute(text("SELECT value FROM memory_entries WHERE key = :k"), {"k": "summary:20260101T000000"}).scalar_one()
    engine.dispose()

    doc = json.loads(raw)
    assert doc["encoding"] == "json"
    assert json.loads(doc["data"]) == "line\n"


def test_sqlite_closed_store_raises(tmp_path):
    store = SQLiteMemoryStore(tmp_path)
    store.close()
    store.close()
    assert store.closed
    with pytest.raises(MemoryStoreClosedError):
        store.recall("k")


def test_open_long_term_store_falls_back(tmp_path, caplog):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x")
    fallback = VolatileMemoryStore()

    with caplog.at_level("WARNING"):
        store = open_long_term_store(blocker, fallback=fallback)

    assert store is fallback
    assert any("Falling back" in rec.getMessage() for rec in caplog.records)


def test_open_long_term_store_returns_durable(tmp_path):
    store = open_long_term_store(tmp_path / "data", fallback=VolatileMemoryStore())
    try:
        assert isinstance(store, SQLiteMemoryStore)
    finally:
        store.close()
