from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from archaeolog.core.repositories.key_value_store import KeyValueStore

if TYPE_CHECKING:
    from collections.abc import Mapping


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store; state lives as long as the instance."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def load(self, storage_key: str) -> str | None:
        with self._lock:
            return self._data.get(storage_key)

    def store(self, storage_key: str, value: str) -> None:
        with self._lock:
            self._data[storage_key] = value

    def store_many(self, items: Mapping[str, str]) -> None:
        with self._lock:
            self._data.update(items)

    def snapshot(self) -> dict[str, str]:
        """Copy of everything stored, keyed by storage key."""
        with self._lock:
            return dict(self._data)
