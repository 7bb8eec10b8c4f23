from __future__ import annotations

"""Application factory for the FastAPI app.

Centralizes app construction (logging, counter store, middleware, handlers,
routers) so tests can build isolated instances with their own store.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from riddle_gate.adapters.counter_store import AbstractCounterStore, create_counter_store
from riddle_gate.api.routes import health_router, puzzle_router
from riddle_gate.core.config import settings
from riddle_gate.core.exception_handlers import setup_exception_handlers
from riddle_gate.core.logging import configure_logging
from riddle_gate.core.middleware import request_id_middleware
from riddle_gate.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


def build_rate_limiter(store: AbstractCounterStore) -> RateLimiter:
    """Create the limiter from the rate limit settings."""
    cfg = settings.rate_limit
    return RateLimiter(
        store,
        max_requests=cfg.max_requests,
        window_seconds=cfg.window_seconds,
        key_prefix=cfg.key_prefix,
        timeout_seconds=cfg.store_timeout_seconds,
    )


def create_app(counter_store: AbstractCounterStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        counter_store: Store to back the rate limiter. When omitted, the
            backend named by RATE_LIMIT_BACKEND is created.

    Returns:
        Configured FastAPI app with middleware, handlers and routers.

    Raises:
        ValidationAppError: If the configured backend is unknown or lacks
            its connection settings.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    store = counter_store if counter_store is not None else create_counter_store()
    rate_limiter = build_rate_limiter(store)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "app.startup",
            extra={
                "rate_limit_backend": store.backend_name,
                "rate_limit_enabled": settings.rate_limit.enabled,
                "max_requests": rate_limiter.max_requests,
                "window_s": rate_limiter.window_seconds,
            },
        )
        try:
            yield
        finally:
            await store.aclose()
            logger.info("app.shutdown", extra={"rate_limit_backend": store.backend_name})

    app = FastAPI(
        title="Riddle Gate",
        description=(
            "Answer the riddle to unlock the audio puzzle. Answer checks are "
            "rate limited per client."
        ),
        version="0.1.0",
        debug=settings.app.debug,
        lifespan=lifespan,
    )
    app.state.rate_limiter = rate_limiter

    # Middleware
    app.middleware("http")(request_id_middleware)

    # Exception handlers
    setup_exception_handlers(app)

    # Routers
    app.include_router(puzzle_router)
    app.include_router(health_router)

    return app
