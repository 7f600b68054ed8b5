import uuid
from datetime import datetime
from typing import Any

from src.config import StorageKey
from src.qotd.domain.models import TrackerSnapshot
from src.qotd.domain.ports import IKeyValueStore, ITrackerRepository
from src.shared.telemetry import Telemetry, measure_time


class KeyValueTrackerRepository(ITrackerRepository):
    """
    Maps TrackerSnapshot onto the flat keys of the key-value store.

    Reads are best-effort: a malformed value is logged and replaced by the
    snapshot default, and unparseable category ids are dropped.
    """

    def __init__(self, store: IKeyValueStore) -> None:
        self.store = store
        self.telemetry = Telemetry("TrackerRepository")

    # --- Reads ---

    @measure_time("load_snapshot")
    def load_snapshot(self) -> TrackerSnapshot:
        return TrackerSnapshot(
            last_selected_category=self._read_index(),
            last_answered_at=self._read_timestamp(),
            last_answer=self._read_text(),
            answered_dates=self._read_string_set(StorageKey.ANSWERED_DATES),
            answered_categories_for_today=self._read_id_set(),
        )

    def _read_index(self) -> int | None:
        raw = self.store.get(StorageKey.LAST_SELECTED_CATEGORY.value)
        # bool is an int subclass; reject it explicitly
        if raw is None or isinstance(raw, bool) or not isinstance(raw, int):
            if raw is not None:
                self._malformed(StorageKey.LAST_SELECTED_CATEGORY, raw)
            return None
        return raw

    def _read_timestamp(self) -> datetime | None:
        raw = self.store.get(StorageKey.LAST_ANSWERED_DATE.value)
        if raw is None:
            return None
        try:
            return datetime.fromisoformat(raw)
        except (TypeError, ValueError):
            self._malformed(StorageKey.LAST_ANSWERED_DATE, raw)
            return None

    def _read_text(self) -> str:
        raw = self.store.get(StorageKey.LAST_ANSWER.value)
        if raw is None:
            return ""
        if not isinstance(raw, str):
            self._malformed(StorageKey.LAST_ANSWER, raw)
            return ""
        return raw

    def _read_string_set(self, key: StorageKey) -> set[str]:
        raw = self.store.get(key.value)
        if raw is None:
            return set()
        if not isinstance(raw, list):
            self._malformed(key, raw)
            return set()
        return {item for item in raw if isinstance(item, str)}

    def _read_id_set(self) -> set[uuid.UUID]:
        ids = set()
        for item in self._read_string_set(StorageKey.ANSWERED_CATEGORIES_FOR_TODAY):
            try:
                ids.add(uuid.UUID(item))
            except ValueError:
                self.telemetry.log_warning("Dropping unparseable category id", value=item)
        return ids

    def _malformed(self, key: StorageKey, raw: Any) -> None:
        self.telemetry.log_warning("Malformed stored value, using default", key=key.value, value=repr(raw))

    # --- Writes ---

    def save_selected_category(self, index: int) -> None:
        self.store.set(StorageKey.LAST_SELECTED_CATEGORY.value, index)

    @measure_time("save_submission")
    def save_submission(self, snapshot: TrackerSnapshot) -> None:
        answered_at = snapshot.last_answered_at.isoformat() if snapshot.last_answered_at else None
        self.store.set_many(
            {
                StorageKey.LAST_ANSWERED_DATE.value: answered_at,
                StorageKey.LAST_ANSWER.value: snapshot.last_answer,
                StorageKey.ANSWERED_DATES.value: sorted(snapshot.answered_dates),
                StorageKey.ANSWERED_CATEGORIES_FOR_TODAY.value: sorted(
                    str(category_id) for category_id in snapshot.answered_categories_for_today
                ),
            }
        )

    def clear_answered_categories(self) -> None:
        self.store.delete(StorageKey.ANSWERED_CATEGORIES_FOR_TODAY.value)
