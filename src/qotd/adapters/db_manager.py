import os
import sqlite3
from typing import Any

from src.shared.telemetry import Telemetry, measure_time


class DatabaseManager:
    """
    Owns the SQLite connection and the key-value schema.
    Safe to keep in Streamlit session state (see __getstate__).
    """

    def __init__(self, db_path: str = "data/qotd.db") -> None:
        self.db_path = db_path
        self.telemetry = Telemetry("DatabaseManager")
        self._shared_connection: sqlite3.Connection | None = None

        self._ensure_db_dir()
        self._init_schema()

    # --- Pickle Safety ---
    def __getstate__(self) -> dict[str, Any]:
        state = self.__dict__.copy()
        state.pop("_shared_connection", None)
        return state

    def __setstate__(self, state: dict[str, Any]) -> None:
        # Connection is re-opened lazily; ":memory:" contents do not survive this
        self.__dict__.update(state)
        self._shared_connection = None

    @property
    def is_memory(self) -> bool:
        return self.db_path == ":memory:"

    def get_connection(self) -> sqlite3.Connection:
        """Returns the shared connection, reconnecting if it was closed."""
        if self._shared_connection is not None:
            try:
                self._shared_connection.execute("SELECT 1")
                return self._shared_connection
            except sqlite3.ProgrammingError:
                self._shared_connection = None

        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        if not self.is_memory:
            conn.execute("PRAGMA journal_mode=WAL")

        self._shared_connection = conn
        return conn

    def close(self) -> None:
        if self._shared_connection is not None:
            self._shared_connection.close()
            self._shared_connection = None

    def _ensure_db_dir(self) -> None:
        if self.is_memory:
            return
        dir_name = os.path.dirname(self.db_path)
        if dir_name:
            os.makedirs(dir_name, exist_ok=True)

    @measure_time("db_init_schema")
    def _init_schema(self) -> None:
        conn = self.get_connection()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store
                (
                    key        TEXT PRIMARY KEY,
                    value      TEXT NOT NULL,
                    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
                )
                """
            )
            conn.commit()
        except sqlite3.Error as e:
            self.telemetry.log_error("Schema init failed", e)
            raise
