"""In-memory expiring counter store.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: uses a lock around shared state.
"""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable

from riddle_gate.adapters.counter_store.base import AbstractCounterStore


@dataclass
class _CounterEntry:
    count: int
    expires_at: float


class InMemoryCounterStore(AbstractCounterStore):
    """Counter table keyed by client, with a TTL started by the first increment.

    Important:
        This store is per-process only. If the app runs with multiple workers
        (e.g., multiple Uvicorn/Gunicorn workers), each worker keeps its own
        independent counters.
    """

    backend_name = "memory"

    def __init__(self, *, clock: Callable[[], float] = time.time) -> None:
        """Initialize the store.

        Args:
            clock: Time source function returning UNIX time in seconds.
        """
        self._clock = clock
        self._lock = threading.RLock()
        self._entries: dict[str, _CounterEntry] = {}

    def _live_entry(self, key: str, now: float) -> _CounterEntry | None:
        """Return the entry for key, dropping it first if it has expired."""
        entry = self._entries.get(key)
        if entry is not None and entry.expires_at <= now:
            del self._entries[key]
            return None
        return entry

    def _purge_expired(self, now: float) -> None:
        expired = [k for k, e in self._entries.items() if e.expires_at <= now]
        for key in expired:
            del self._entries[key]

    async def increment_with_ttl(self, key: str, ttl_seconds: int) -> int:
        if not key:
            raise ValueError("key must be a non-empty string")
        if ttl_seconds < 1:
            raise ValueError("ttl_seconds must be >= 1")

        now = self._clock()
        with self._lock:
            entry = self._live_entry(key, now)
            if entry is None:
                self._purge_expired(now)
                entry = _CounterEntry(count=0, expires_at=now + ttl_seconds)
                self._entries[key] = entry
            entry.count += 1
            return entry.count

    async def ttl_remaining(self, key: str) -> int | None:
        now = self._clock()
        with self._lock:
            entry = self._live_entry(key, now)
            if entry is None:
                return None
            return max(0, int(math.ceil(entry.expires_at - now)))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
