from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from archaeolog.core.repositories.key_value_store import KeyValueStore
from archaeolog.db.base import read_json, write_json_atomic
from archaeolog.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

logger = get_logger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """Key-value store kept as one JSON object in a file.

    Every write is a whole-file read-modify-write, replaced atomically. A
    missing file reads as empty and a file with unparsable contents loads as
    empty, but I/O errors propagate from ``load``. Writes refuse to replace a
    file that exists but cannot be read, so one bad read never drops the
    other keys.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def load(self, storage_key: str) -> str | None:
        with self._lock:
            try:
                data = self._read_all()
            except ValueError as err:
                logger.warning("Unreadable key-value file %s: %s", self._path, err)
                return None
        value = data.get(storage_key)
        return value if isinstance(value, str) else None

    def store(self, storage_key: str, value: str) -> None:
        self.store_many({storage_key: value})

    def store_many(self, items: Mapping[str, str]) -> None:
        with self._lock:
            data = self._read_all()
            data.update(items)
            write_json_atomic(self._path, data)

    def _read_all(self) -> dict[str, object]:
        """Current file contents. Raises OSError / ValueError when unreadable."""
        if not self._path.exists():
            return {}
        raw = read_json(self._path)
        if not isinstance(raw, dict):
            raise ValueError(f"Key-value file {self._path} does not hold a JSON object")
        return raw
