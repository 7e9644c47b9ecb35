"""TTL + capacity bounded cache of weather snapshots.

All entries live in one JSON array under a single storage key. Every
operation reads the whole list, edits it and writes it back; there is no
locking, so concurrent writers race and the last write wins.

When the store is missing or failing, get() returns None and put()/clear()
do nothing.

The capacity counts keys, not places: the pipeline stores each text-query
snapshot under both its query key and its coordinate key, so one query
occupies two slots.
"""

import json
import logging
import sqlite3
import time
from collections.abc import Callable

from roadwx.models.cache import CacheEntry
from roadwx.models.forecast import WeatherSnapshot, snapshot_from_dict, snapshot_to_dict
from roadwx.storage.kv_store import KeyValueStore, StorageUnavailable

logger = logging.getLogger(__name__)

STORAGE_KEY = "roadwx.weatherCache.v1"
DEFAULT_TTL_SECONDS = 15 * 60
DEFAULT_CAPACITY = 5

_STORAGE_ERRORS = (StorageUnavailable, sqlite3.Error, OSError)


def coords_key(lat: float, lon: float) -> str:
    """Cache key for coordinates; rounding to 4 places merges near-duplicates."""
    return f"coords:{lat:.4f},{lon:.4f}"


def query_key(text: str) -> str:
    return f"query:{text.strip().lower()}"


class SnapshotCache:
    def __init__(
        self,
        store: KeyValueStore | None,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        capacity: int = DEFAULT_CAPACITY,
        storage_key: str = STORAGE_KEY,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.ttl_seconds = ttl_seconds
        self.capacity = capacity
        self.storage_key = storage_key
        self._clock = clock

    def get(self, key: str) -> WeatherSnapshot | None:
        """Return the live snapshot for key, pruning expired entries."""
        if self.store is None:
            return None
        try:
            entries = self._load()
            live = self._drop_expired(entries)
            if len(live) != len(entries):
                self._save(live)
        except _STORAGE_ERRORS as e:
            logger.warning("Snapshot cache read failed: %s", e)
            return None

        for entry in live:
            if entry.key == key:
                logger.debug("Cache hit for %s", key)
                return entry.snapshot
        logger.debug("Cache miss for %s", key)
        return None

    def put(self, key: str, snapshot: WeatherSnapshot) -> None:
        """Store snapshot under key, replacing any entry with the same key."""
        if self.store is None:
            return
        now = self._clock()
        entry = CacheEntry(
            key=key,
            fetched_at=now,
            expires_at=now + self.ttl_seconds,
            snapshot=snapshot,
        )
        try:
            entries = [e for e in self._load() if e.key != key]
            entries.append(entry)
            if len(entries) > self.capacity:
                entries.sort(key=lambda e: e.fetched_at)
                evicted = entries[: len(entries) - self.capacity]
                entries = entries[len(entries) - self.capacity :]
                logger.debug("Evicted %s", ", ".join(e.key for e in evicted))
            self._save(entries)
        except _STORAGE_ERRORS as e:
            logger.warning("Snapshot cache write skipped: %s", e)

    def clear(self) -> None:
        if self.store is None:
            return
        try:
            self.store.remove_item(self.storage_key)
        except _STORAGE_ERRORS as e:
            logger.warning("Snapshot cache clear skipped: %s", e)

    def close(self) -> None:
        if self.store is not None:
            self.store.close()

    def entries(self) -> list[CacheEntry]:
        """Live entries in storage order, without pruning the stored list."""
        if self.store is None:
            return []
        try:
            return self._drop_expired(self._load())
        except _STORAGE_ERRORS as e:
            logger.warning("Snapshot cache read failed: %s", e)
            return []

    # --- persistence ---

    def _drop_expired(self, entries: list[CacheEntry]) -> list[CacheEntry]:
        now = self._clock()
        return [e for e in entries if e.expires_at > now]

    def _load(self) -> list[CacheEntry]:
        assert self.store is not None
        raw = self.store.get_item(self.storage_key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise TypeError(f"expected a list, got {type(data).__name__}")
            return [_entry_from_dict(item) for item in data]
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning("Discarding unreadable snapshot cache: %s", e)
            return []

    def _save(self, entries: list[CacheEntry]) -> None:
        assert self.store is not None
        payload = [
            {
                "key": e.key,
                "fetched_at": e.fetched_at,
                "expires_at": e.expires_at,
                "snapshot": snapshot_to_dict(e.snapshot),
            }
            for e in entries
        ]
        self.store.set_item(self.storage_key, json.dumps(payload))


def _entry_from_dict(data: dict) -> CacheEntry:
    if not isinstance(data, dict) or not isinstance(data.get("snapshot"), dict):
        raise TypeError("malformed cache entry")
    return CacheEntry(
        key=data["key"],
        fetched_at=float(data["fetched_at"]),
        expires_at=float(data["expires_at"]),
        snapshot=snapshot_from_dict(data["snapshot"]),
    )
