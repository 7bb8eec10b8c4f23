"""Factory for creating counter store instances."""

from riddle_gate.adapters.counter_store.base import AbstractCounterStore
from riddle_gate.adapters.counter_store.in_memory import InMemoryCounterStore
from riddle_gate.adapters.counter_store.redis_store import RedisCounterStore
from riddle_gate.adapters.counter_store.upstash import UpstashCounterStore
from riddle_gate.core.config import settings
from riddle_gate.core.errors import ValidationAppError


def create_counter_store() -> AbstractCounterStore:
    """Instantiate the counter store selected by RATE_LIMIT_BACKEND.

    Reads configuration from riddle_gate.core.config.settings and validates
    backend-specific requirements.

    Returns:
        AbstractCounterStore: Configured store instance.

    Raises:
        ValidationAppError: If backend requirements are not met.
    """
    backend = settings.rate_limit.backend.lower()
    timeout = settings.rate_limit.store_timeout_seconds

    if backend == "memory":
        return InMemoryCounterStore()

    if backend == "redis":
        if not settings.redis.url:
            raise ValidationAppError(
                code="counter_store_missing_url",
                message="Redis backend requires REDIS_URL environment variable",
            )
        return RedisCounterStore(url=settings.redis.url, timeout_seconds=timeout)

    if backend == "upstash":
        if not settings.upstash.url or not settings.upstash.token:
            raise ValidationAppError(
                code="counter_store_missing_credentials",
                message=(
                    "Upstash backend requires UPSTASH_REDIS_REST_URL and "
                    "UPSTASH_REDIS_REST_TOKEN environment variables"
                ),
            )
        return UpstashCounterStore(
            rest_url=settings.upstash.url,
            token=settings.upstash.token,
            timeout_seconds=timeout,
        )

    raise ValidationAppError(
        code="counter_store_unknown_backend",
        message=(
            f"Unknown rate limit backend: '{backend}'. "
            "Supported backends: memory, redis, upstash"
        ),
    )
