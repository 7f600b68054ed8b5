from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from src.qotd.domain.models import TrackerSnapshot


class IKeyValueStore(ABC):
    """Durable key-value storage. Values are JSON-compatible."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        pass

    @abstractmethod
    def set_many(self, values: Mapping[str, Any]) -> None:
        """
        Writes all values in one transaction: either every key is
        updated or none is.
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass


class ITrackerRepository(ABC):
    @abstractmethod
    def load_snapshot(self) -> TrackerSnapshot:
        pass

    @abstractmethod
    def save_selected_category(self, index: int) -> None:
        pass

    @abstractmethod
    def save_submission(self, snapshot: TrackerSnapshot) -> None:
        """
        Persists last answered instant, last answer, answered dates and
        today's answered categories together.
        """
        pass

    @abstractmethod
    def clear_answered_categories(self) -> None:
        pass
