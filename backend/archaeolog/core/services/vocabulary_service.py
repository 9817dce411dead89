from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from archaeolog.core.schemas.vocabulary import VocabularyView
from archaeolog.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from archaeolog.core.models.artifact import Artifact
    from archaeolog.core.repositories.key_value_store import KeyValueStore


logger = get_logger(__name__)

OPTIONS_PREFIX = "custom_opts_"
ORDER_PREFIX = "custom_order_"

# Vocabulary key -> Artifact attribute whose values feed the frequency ranking
FIELD_ATTRIBUTES: dict[str, str] = {
    "siteName": "site_name",
    "unit": "unit",
    "layer": "layer",
    "category": "category",
    "material": "material",
    "potteryTexture": "pottery_texture",
    "potteryColor": "pottery_color",
    "decoration": "decoration",
    "condition": "condition",
    "finder": "finder",
    "recorder": "recorder",
    "remarks": "remarks",
}


def options_storage_key(key: str) -> str:
    return OPTIONS_PREFIX + key


def order_storage_key(key: str) -> str:
    return ORDER_PREFIX + key


def historical_values(artifacts: Iterable[Artifact], key: str) -> list[str]:
    """Extract the non-empty values of the field behind ``key`` across records.

    Unknown keys have no backing field and yield an empty list.
    """
    attribute = FIELD_ATTRIBUTES.get(key)
    if attribute is None:
        return []
    values: list[str] = []
    for artifact in artifacts:
        value = getattr(artifact, attribute, None)
        if isinstance(value, str) and value.strip():
            values.append(value.strip())
    return values


def rank_by_frequency(values: Iterable[str]) -> list[str]:
    """Distinct values, most frequent first; ties keep first-seen order."""
    counts: dict[str, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    # dicts preserve insertion (first-seen) order and sorted() is stable
    return sorted(counts, key=lambda v: counts[v], reverse=True)


def merge_tiers(*tiers: Iterable[str]) -> list[str]:
    """Concatenate tiers in priority order, keeping the first occurrence of each string."""
    seen: set[str] = set()
    merged: list[str] = []
    for tier in tiers:
        for value in tier:
            if value and value not in seen:
                seen.add(value)
                merged.append(value)
    return merged


def filter_by_query(options: Sequence[str], query: str) -> list[str]:
    """Case-insensitive substring filter.

    An empty query, or one that equals an entry ignoring case, leaves the list
    whole so the user can still switch to another value.
    """
    if not query:
        return list(options)
    needle = query.lower()
    if any(option.lower() == needle for option in options):
        return list(options)
    return [option for option in options if needle in option.lower()]


@dataclass
class _VocabularyState:
    options: set[str] = field(default_factory=set)
    order: list[str] = field(default_factory=list)
    # False when the store could not be read; such state is never cached or written back
    loaded: bool = True


class VocabularyManager:
    """Per-field option vocabularies with manual ordering and frequency ranking.

    For every vocabulary key two values are persisted through the key-value
    store: the set of explicitly added options and the user's manual order.
    The display list puts the manual order first, then values ranked by how
    often they occur in the caller's records, then the remaining added options.

    Storage faults never propagate. A failed read counts as empty for that
    call only: the state is not cached, the next access reads again, and
    nothing is written back over the stored lists until a read succeeds. A
    failed write still leaves the mutation applied for this process, since
    state is cached per key after the first successful load.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self._states: dict[str, _VocabularyState] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def get_display_list(self, key: str, query: str, historical: Sequence[str]) -> list[str]:
        """Return the ordered, de-duplicated candidate list for ``key``."""
        return filter_by_query(self._merged(key, historical), query)

    def describe(self, key: str, query: str, historical: Sequence[str]) -> VocabularyView:
        """Display list together with the add/reorder affordances for the UI."""
        merged = self._merged(key, historical)
        typed = query.strip()
        return VocabularyView(
            key=key,
            query=query,
            options=filter_by_query(merged, query),
            can_add=bool(typed) and typed not in merged,
            can_reorder=not query,
        )

    def add_option(self, key: str, value: str) -> None:
        """Add ``value`` to the field's options and put it at the top of the manual order.

        Blank values and values already in the option set are ignored.
        """
        value = (value or "").strip()
        if not value:
            return
        with self._lock_for(key):
            state = self._state(key)
            if value in state.options:
                return
            state.options.add(value)
            state.order = [value] + [v for v in state.order if v != value]
            self._persist(key, state)
        logger.debug("Added vocabulary option", extra={"key": key})

    def remove_option(self, key: str, value: str) -> None:
        """Drop ``value`` from both the option set and the manual order.

        Values still present in the records reappear through frequency ranking.
        """
        value = (value or "").strip()
        if not value:
            return
        with self._lock_for(key):
            state = self._state(key)
            if value not in state.options and value not in state.order:
                return
            state.options.discard(value)
            state.order = [v for v in state.order if v != value]
            self._persist(key, state)
        logger.debug("Removed vocabulary option", extra={"key": key})

    def reorder(self, key: str, sequence: Sequence[str]) -> None:
        """Replace the manual order wholesale; the option set is untouched.

        Callers must only submit orders taken from an unfiltered list. The
        manager applies whatever it receives.
        """
        new_order = merge_tiers(v.strip() for v in sequence if v)
        with self._lock_for(key):
            state = self._state(key)
            state.order = new_order
            self._write(state, {order_storage_key(key): state.order})

    def options(self, key: str) -> set[str]:
        """Copy of the explicitly added options for ``key``."""
        with self._lock_for(key):
            return set(self._state(key).options)

    def manual_order(self, key: str) -> list[str]:
        """Copy of the manual order for ``key``."""
        with self._lock_for(key):
            return list(self._state(key).order)

    def _merged(self, key: str, historical: Sequence[str]) -> list[str]:
        with self._lock_for(key):
            state = self._state(key)
            order = list(state.order)
            added = sorted(state.options)
        return merge_tiers(order, rank_by_frequency(historical), added)

    def _lock_for(self, key: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def _state(self, key: str) -> _VocabularyState:
        state = self._states.get(key)
        if state is not None:
            return state
        options = self._load_list(options_storage_key(key))
        order = self._load_list(order_storage_key(key))
        state = _VocabularyState(
            options=set(options or []),
            order=merge_tiers(order or []),
            loaded=options is not None and order is not None,
        )
        if state.loaded:
            self._states[key] = state
        return state

    def _persist(self, key: str, state: _VocabularyState) -> None:
        self._write(
            state,
            {
                options_storage_key(key): sorted(state.options),
                order_storage_key(key): state.order,
            },
        )

    def _load_list(self, storage_key: str) -> list[str] | None:
        """Stored list under ``storage_key``; None when the store itself failed."""
        try:
            raw = self._store.load(storage_key)
        except Exception as err:
            logger.warning("Failed to load %s, treating as empty: %s", storage_key, err)
            return None
        if raw is None:
            return []
        try:
            values = json.loads(raw)
        except ValueError as err:
            logger.warning("Corrupt value under %s, treating as empty: %s", storage_key, err)
            return []
        if not isinstance(values, list):
            logger.warning("Value under %s is not a list, treating as empty", storage_key)
            return []
        return [v for v in values if isinstance(v, str)]

    def _write(self, state: _VocabularyState, lists: dict[str, Sequence[str]]) -> None:
        if not state.loaded:
            logger.warning("Stored vocabulary unreadable; not overwriting %s", ", ".join(lists))
            return
        items = {k: json.dumps(list(v), ensure_ascii=False) for k, v in lists.items()}
        try:
            self._store.store_many(items)
        except Exception as err:
            logger.error("Failed to persist %s; change kept for this session only: %s", ", ".join(items), err)
