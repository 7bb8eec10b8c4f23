"""Fixed-window rate limiting on top of an expiring counter store."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from riddle_gate.adapters.counter_store.base import AbstractCounterStore
from riddle_gate.core.errors import StoreUnavailableAppError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of a single rate limit check.

    Attributes:
        allowed: Whether the request may proceed.
        count: Post-increment attempt count in the current window.
        limit: Max requests per window.
        remaining: Attempts left in the current window (0 when blocked).
        retry_after_seconds: Seconds until the window resets when blocked.
    """

    allowed: bool
    count: int
    limit: int
    remaining: int
    retry_after_seconds: int | None = None


class RateLimiter:
    """Per-client quota of ``max_requests`` per ``window_seconds``.

    The window starts with a client's first request and ends when the store
    expires the counter. Denied requests still count, so hammering the
    endpoint does not shorten the wait.
    """

    def __init__(
        self,
        store: AbstractCounterStore,
        *,
        max_requests: int,
        window_seconds: int,
        key_prefix: str = "rate_limit",
        timeout_seconds: float = 2.0,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be >= 1")
        if window_seconds < 1:
            raise ValueError("window_seconds must be >= 1")

        self.store = store
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.key_prefix = key_prefix
        self.timeout_seconds = timeout_seconds

    def build_key(self, identifier: str) -> str:
        return f"{self.key_prefix}:{identifier}"

    async def _bounded(self, operation: str, awaitable):
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout_seconds)
        except asyncio.TimeoutError as exc:
            logger.error(
                "counter_store.timeout",
                extra={
                    "backend": self.store.backend_name,
                    "operation": operation,
                    "timeout_s": self.timeout_seconds,
                },
            )
            raise StoreUnavailableAppError(
                code="counter_store_timeout",
                message="Rate limit store did not respond in time",
                details={"backend": self.store.backend_name, "hint": operation},
            ) from exc

    async def check(self, identifier: str) -> RateLimitDecision:
        """Count one attempt for ``identifier`` and decide whether to admit it.

        Raises:
            ValueError: If identifier is empty.
            StoreUnavailableAppError: If the store fails or times out.
        """
        if not identifier:
            raise ValueError("identifier must be a non-empty string")

        key = self.build_key(identifier)
        count = await self._bounded(
            "increment", self.store.increment_with_ttl(key, self.window_seconds)
        )

        if count <= self.max_requests:
            return RateLimitDecision(
                allowed=True,
                count=count,
                limit=self.max_requests,
                remaining=self.max_requests - count,
            )

        # Read after the increment so a freshly created window reports its full TTL
        ttl = await self._bounded("ttl", self.store.ttl_remaining(key))
        if ttl is None or ttl < 0:
            ttl = self.window_seconds

        return RateLimitDecision(
            allowed=False,
            count=count,
            limit=self.max_requests,
            remaining=0,
            retry_after_seconds=int(ttl),
        )
