import copy
from collections.abc import Mapping
from typing import Any

from src.qotd.domain.ports import IKeyValueStore


class InMemoryKeyValueStore(IKeyValueStore):
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def set_many(self, values: Mapping[str, Any]) -> None:
        self._data.update(copy.deepcopy(dict(values)))

    def delete(self, key: str) -> None:
        self._data.pop(key, None)
