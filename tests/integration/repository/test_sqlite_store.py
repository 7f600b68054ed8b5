# ==============================================================================
# INTEGRATION TEST: SQLite key-value store (in-memory database).
# ==============================================================================
import pickle
import sqlite3

import pytest

from src.qotd.adapters.db_manager import DatabaseManager
from src.qotd.adapters.sqlite_store import SQLiteKeyValueStore


def test_missing_key_returns_default(sqlite_store):
    assert sqlite_store.get("nothing") is None
    assert sqlite_store.get("nothing", []) == []


def test_values_are_json_typed(sqlite_store):
    sqlite_store.set("index", 3)
    sqlite_store.set("dates", ["2026-01-06", "2026-01-07"])
    sqlite_store.set("answer", "Content")

    assert sqlite_store.get("index") == 3
    assert sqlite_store.get("dates") == ["2026-01-06", "2026-01-07"]
    assert sqlite_store.get("answer") == "Content"


def test_set_overwrites(sqlite_store):
    sqlite_store.set("answer", "first")
    sqlite_store.set("answer", "second")
    assert sqlite_store.get("answer") == "second"
    row = sqlite_store.db_manager.get_connection().execute("SELECT count(*) FROM kv_store").fetchone()
    assert row[0] == 1


def test_delete(sqlite_store):
    sqlite_store.set("answer", "Content")
    sqlite_store.delete("answer")
    sqlite_store.delete("answer")  # deleting twice is fine
    assert sqlite_store.get("answer") is None


def test_set_many_is_all_or_nothing(sqlite_store):
    sqlite_store.set("a", 1)

    with pytest.raises(TypeError):
        # The set is not JSON serializable; nothing may be written
        sqlite_store.set_many({"a": 2, "b": {1, 2}})

    assert sqlite_store.get("a") == 1
    assert sqlite_store.get("b") is None


def test_rollback_on_sqlite_error(db_manager, sqlite_store):
    sqlite_store.set("a", 1)
    conn = db_manager.get_connection()
    conn.execute(
        "CREATE TRIGGER no_b BEFORE INSERT ON kv_store WHEN NEW.key = 'b' "
        "BEGIN SELECT RAISE(ABORT, 'blocked'); END"
    )

    with pytest.raises(sqlite3.Error):
        sqlite_store.set_many({"a": 2, "b": 3})

    assert sqlite_store.get("a") == 1


def test_unreadable_value_falls_back(db_manager, sqlite_store):
    conn = db_manager.get_connection()
    with conn:
        conn.execute("INSERT INTO kv_store (key, value) VALUES ('broken', '{not json')")
    assert sqlite_store.get("broken", "fallback") == "fallback"


def test_file_database_persists(tmp_path):
    path = str(tmp_path / "nested" / "qotd.db")
    first = DatabaseManager(path)
    SQLiteKeyValueStore(first).set("lastAnswer", "Content")
    first.close()

    second = DatabaseManager(path)
    assert SQLiteKeyValueStore(second).get("lastAnswer") == "Content"
    second.close()


def test_manager_reconnects_after_unpickle(tmp_path):
    path = str(tmp_path / "qotd.db")
    manager = DatabaseManager(path)
    SQLiteKeyValueStore(manager).set("k", "v")

    restored = pickle.loads(pickle.dumps(manager))
    assert restored._shared_connection is None
    assert SQLiteKeyValueStore(restored).get("k") == "v"
    manager.close()
    restored.close()
