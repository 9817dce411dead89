from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


class KeyValueStore(ABC):
    """String key-value persistence used for per-field vocabulary state.

    Values are opaque strings (callers serialize). Implementations are local
    and fast, so the interface is synchronous.
    """

    @abstractmethod
    def load(self, storage_key: str) -> str | None:  # pragma: no cover - interface only
        """Return the stored value, or None if nothing was stored under the key."""

    @abstractmethod
    def store(self, storage_key: str, value: str) -> None:  # pragma: no cover
        """Persist value under the key, replacing any previous value."""

    def store_many(self, items: Mapping[str, str]) -> None:
        """Persist several keys together.

        Implementations that can write all keys at once override this so a
        failure leaves either every key updated or none.
        """
        for storage_key, value in items.items():
            self.store(storage_key, value)
