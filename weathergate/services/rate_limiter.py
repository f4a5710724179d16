"""In-memory sliding-window rate limiter keyed by client address."""

from __future__ import annotations

import threading
import time
from collections import deque

from weathergate.config import settings


class SlidingWindowRateLimiter:
    """Thread-safe per-key sliding-window rate limiter.

    When more than *max_keys* clients are tracked, keys whose every
    timestamp has left the window are swept out.  Clients with requests
    still inside the window keep their history.
    """

    def __init__(
        self,
        max_requests: int = 10,
        window_seconds: float = 60,
        max_keys: int = 10_000,
    ):
        self._max_requests = max_requests
        self._window = window_seconds
        self._max_keys = max_keys
        self._buckets: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    def admit(self, key: str) -> bool:
        """Record a request for *key* and return whether it may proceed.

        Rejected attempts are not recorded.
        """
        now = time.monotonic()
        window_start = now - self._window

        with self._lock:
            if len(self._buckets) > self._max_keys:
                self._compact(window_start)

            dq = self._buckets.setdefault(key, deque())

            # Discard timestamps outside the current window
            while dq and dq[0] <= window_start:
                dq.popleft()

            if len(dq) >= self._max_requests:
                return False

            dq.append(now)
            return True

    def _compact(self, window_start: float) -> None:
        """Drop fully expired keys.  Caller must hold ``_lock``."""
        stale = [k for k, dq in self._buckets.items() if not dq or dq[-1] <= window_start]
        for k in stale:
            del self._buckets[k]

    @property
    def active_keys(self) -> int:
        with self._lock:
            return len(self._buckets)

    def clear(self) -> None:
        """Remove all tracked state (useful in tests)."""
        with self._lock:
            self._buckets.clear()


# Module-level singleton initialized from config
rate_limiter = SlidingWindowRateLimiter(
    max_requests=settings.rate_limit_per_window,
    window_seconds=settings.rate_limit_window,
    max_keys=settings.rate_limit_max_keys,
)
