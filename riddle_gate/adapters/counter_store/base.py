"""Counter store interface.

The rate limiter depends on this abstraction (not a concrete backend) so the
same limiter logic runs against memory, Redis or Upstash.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

# Increment, and start the expiry clock when the increment created the key.
# Runs as a single script so no caller can observe a counter without a TTL.
INCREMENT_WITH_TTL_SCRIPT = """
local count = redis.call('INCR', KEYS[1])
if count == 1 then
    redis.call('EXPIRE', KEYS[1], tonumber(ARGV[1]))
end
return count
"""


def normalize_ttl(raw_ttl: int) -> int | None:
    """Map Redis TTL replies to seconds, or None for -1 (no expiry) / -2 (missing)."""

    if raw_ttl < 0:
        return None
    return raw_ttl


class AbstractCounterStore(ABC):
    """Interface for expiring per-key counters.

    Implementations must raise StoreUnavailableAppError for every backend
    failure so callers can fail closed.
    """

    backend_name: str = "abstract"

    @abstractmethod
    async def increment_with_ttl(self, key: str, ttl_seconds: int) -> int:
        """Atomically increment ``key`` and return the new count.

        When the increment creates the key (result is 1), an expiry of
        ``ttl_seconds`` is attached in the same atomic step.
        """
        raise NotImplementedError

    @abstractmethod
    async def ttl_remaining(self, key: str) -> int | None:
        """Return whole seconds until ``key`` expires, or None if unknown."""
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release connections held by the store."""
        return None
