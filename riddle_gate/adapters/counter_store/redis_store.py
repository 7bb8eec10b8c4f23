"""Redis counter store using a direct asyncio connection."""

from __future__ import annotations

import logging
from typing import Any

import redis
import redis.asyncio as aioredis

from riddle_gate.adapters.counter_store.base import (
    INCREMENT_WITH_TTL_SCRIPT,
    AbstractCounterStore,
    normalize_ttl,
)
from riddle_gate.core.errors import StoreUnavailableAppError

logger = logging.getLogger(__name__)


class RedisCounterStore(AbstractCounterStore):
    """Counter store backed by a Redis server.

    Atomicity comes from running INCR and EXPIRE inside one Lua script, so
    concurrent requests from the same client cannot lose increments or
    leave a counter behind without an expiry.
    """

    backend_name = "redis"

    def __init__(
        self,
        *,
        url: str | None = None,
        timeout_seconds: float = 2.0,
        client: Any | None = None,
    ) -> None:
        """Initialize the Redis store.

        Args:
            url: Redis connection URL; ignored when ``client`` is given.
            timeout_seconds: Socket connect/read timeout for each command.
            client: Pre-built ``redis.asyncio.Redis`` instance (tests, pooling).

        Raises:
            ValueError: If neither url nor client is provided.
        """
        if client is None and not url:
            raise ValueError("url or client is required")

        self._client = client or aioredis.from_url(
            url,
            socket_timeout=timeout_seconds,
            socket_connect_timeout=timeout_seconds,
            decode_responses=True,
        )

    def _unavailable(self, operation: str, exc: Exception) -> StoreUnavailableAppError:
        logger.error(
            "counter_store.error",
            extra={
                "backend": self.backend_name,
                "operation": operation,
                "error_type": type(exc).__name__,
            },
        )
        return StoreUnavailableAppError(
            code="counter_store_unavailable",
            message="Rate limit store is unavailable",
            details={"backend": self.backend_name, "hint": operation},
        )

    async def increment_with_ttl(self, key: str, ttl_seconds: int) -> int:
        try:
            result = await self._client.eval(INCREMENT_WITH_TTL_SCRIPT, 1, key, ttl_seconds)
            return int(result)
        except (redis.RedisError, OSError, TypeError, ValueError) as exc:
            raise self._unavailable("increment", exc) from exc

    async def ttl_remaining(self, key: str) -> int | None:
        try:
            raw = await self._client.ttl(key)
            return normalize_ttl(int(raw))
        except (redis.RedisError, OSError, TypeError, ValueError) as exc:
            raise self._unavailable("ttl", exc) from exc

    async def aclose(self) -> None:
        await self._client.aclose()
