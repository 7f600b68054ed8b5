import json
import sqlite3
from collections.abc import Mapping
from typing import Any

from src.qotd.adapters.db_manager import DatabaseManager
from src.qotd.domain.ports import IKeyValueStore
from src.shared.telemetry import Telemetry, measure_time

UPSERT_SQL = """
             INSERT INTO kv_store (key, value, updated_at)
             VALUES (?, ?, CURRENT_TIMESTAMP) ON CONFLICT(key)
             DO UPDATE SET value = excluded.value,
                           updated_at = CURRENT_TIMESTAMP
             """


class SQLiteKeyValueStore(IKeyValueStore):
    def __init__(self, db_manager: DatabaseManager) -> None:
        self.telemetry = Telemetry("SQLiteKeyValueStore")
        self.db_manager = db_manager

    def _get_connection(self) -> sqlite3.Connection:
        return self.db_manager.get_connection()

    def get(self, key: str, default: Any = None) -> Any:
        conn = self._get_connection()
        row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        if row is None:
            return default
        try:
            return json.loads(row[0])
        except json.JSONDecodeError as e:
            self.telemetry.log_warning("Unreadable value, using default", key=key, error=str(e))
            return default

    def set(self, key: str, value: Any) -> None:
        self.set_many({key: value})

    @measure_time("kv_set_many")
    def set_many(self, values: Mapping[str, Any]) -> None:
        conn = self._get_connection()
        rows = [(key, json.dumps(value)) for key, value in values.items()]
        try:
            # Connection context manager commits, or rolls back on error
            with conn:
                conn.executemany(UPSERT_SQL, rows)
        except sqlite3.Error as e:
            self.telemetry.log_error("set_many failed", e, keys=list(values))
            raise

    def delete(self, key: str) -> None:
        conn = self._get_connection()
        try:
            with conn:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        except sqlite3.Error as e:
            self.telemetry.log_error("delete failed", e, key=key)
            raise

