"""Thread-safe in-memory application metrics collector."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field


@dataclass
class MetricsCollector:
    """Collects counters and latency samples for observability.

    Thread-safe via a single ``threading.Lock``.  The latency list is
    bounded at ``_MAX_LATENCY_SAMPLES``; when exceeded it is halved by
    keeping only the most-recent entries.
    """

    _MAX_LATENCY_SAMPLES: int = field(default=10_000, repr=False)

    # Counters
    total_requests: int = field(default=0, init=False)
    status_codes: dict[int, int] = field(default_factory=dict, init=False)
    cache_hits: int = field(default=0, init=False)
    cache_misses: int = field(default=0, init=False)
    rate_limited: int = field(default=0, init=False)
    upstream_ok: int = field(default=0, init=False)
    upstream_timeouts: int = field(default=0, init=False)
    upstream_failures: int = field(default=0, init=False)

    _latencies: list[float] = field(default_factory=list, init=False, repr=False)

    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _start_time: float = field(default_factory=time.monotonic, init=False, repr=False)

    # -- Counter helpers ---------------------------------------------------

    def inc_request(self, status_code: int) -> None:
        with self._lock:
            self.total_requests += 1
            self.status_codes[status_code] = self.status_codes.get(status_code, 0) + 1

    def inc_cache_hit(self) -> None:
        with self._lock:
            self.cache_hits += 1

    def inc_cache_miss(self) -> None:
        with self._lock:
            self.cache_misses += 1

    def inc_rate_limited(self) -> None:
        with self._lock:
            self.rate_limited += 1

    def inc_upstream(self, outcome: str) -> None:
        """Count an upstream call as ``"ok"``, ``"timeout"`` or anything else (failure)."""
        with self._lock:
            if outcome == "ok":
                self.upstream_ok += 1
            elif outcome == "timeout":
                self.upstream_timeouts += 1
            else:
                self.upstream_failures += 1

    # -- Latency -----------------------------------------------------------

    def record_latency(self, ms: float) -> None:
        with self._lock:
            self._latencies.append(ms)
            if len(self._latencies) > self._MAX_LATENCY_SAMPLES:
                half = self._MAX_LATENCY_SAMPLES // 2
                self._latencies = self._latencies[-half:]

    def _percentiles_unlocked(self) -> dict[str, float]:
        """Compute p50/p90/p95/p99. Caller must hold ``_lock``."""
        if not self._latencies:
            return {"p50": 0.0, "p90": 0.0, "p95": 0.0, "p99": 0.0}
        s = sorted(self._latencies)
        n = len(s)
        return {
            "p50": round(s[int(n * 0.50)], 2),
            "p90": round(s[int(min(n * 0.90, n - 1))], 2),
            "p95": round(s[int(min(n * 0.95, n - 1))], 2),
            "p99": round(s[int(min(n * 0.99, n - 1))], 2),
        }

    # -- Snapshot / reset --------------------------------------------------

    def uptime_seconds(self) -> float:
        return round(time.monotonic() - self._start_time, 2)

    def snapshot(self) -> dict:
        with self._lock:
            total = self.cache_hits + self.cache_misses
            hit_rate = round(self.cache_hits / total, 4) if total else 0.0
            return {
                "uptime_seconds": round(time.monotonic() - self._start_time, 2),
                "total_requests": self.total_requests,
                "status_codes": dict(self.status_codes),
                "cache": {
                    "hits": self.cache_hits,
                    "misses": self.cache_misses,
                    "hit_rate": hit_rate,
                },
                "rate_limited": self.rate_limited,
                "upstream": {
                    "ok": self.upstream_ok,
                    "timeouts": self.upstream_timeouts,
                    "failures": self.upstream_failures,
                },
                "latency_ms": self._percentiles_unlocked(),
            }

    def reset(self) -> None:
        with self._lock:
            self.total_requests = 0
            self.status_codes.clear()
            self.cache_hits = 0
            self.cache_misses = 0
            self.rate_limited = 0
            self.upstream_ok = 0
            self.upstream_timeouts = 0
            self.upstream_failures = 0
            self._latencies.clear()
            self._start_time = time.monotonic()


# Module-level singleton
metrics = MetricsCollector()
