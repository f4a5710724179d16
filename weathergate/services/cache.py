"""Thread-safe FIFO + TTL cache for shaped weather responses."""

from __future__ import annotations

import threading
import time
from typing import Any

from weathergate.config import settings
from weathergate.services.metrics import metrics


class TTLCache:
    """Bounded cache with per-entry TTL and first-in-first-out eviction.

    Eviction follows insertion order only; lookups never change which entry
    goes next.  Expired entries are dropped when looked up, or evicted when
    the cache fills before anyone asks for them.
    """

    def __init__(self, maxsize: int = 100, ttl: float = 300):
        self._maxsize = maxsize
        self._ttl = ttl
        # dicts preserve insertion order, which is the eviction order
        self._data: dict[str, tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def lookup(self, key: str) -> Any | None:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                metrics.inc_cache_miss()
                return None
            value, inserted_at = entry
            if time.monotonic() - inserted_at >= self._ttl:
                del self._data[key]
                metrics.inc_cache_miss()
                return None
            metrics.inc_cache_hit()
            return value

    def store(self, key: str, value: Any) -> None:
        with self._lock:
            # Overwriting keeps the key's slot; only new keys can evict.
            if key not in self._data and len(self._data) >= self._maxsize:
                del self._data[next(iter(self._data))]
            self._data[key] = (value, time.monotonic())

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    @property
    def size(self) -> int:
        with self._lock:
            return len(self._data)


def make_cache_key(location: str) -> str:
    """Case-fold a sanitized location so "London" and "LONDON" share an entry."""
    return location.lower()


# Module-level singleton initialized from config
weather_cache = TTLCache(maxsize=settings.cache_maxsize, ttl=settings.cache_ttl)
