"""Rate limiting dependency for FastAPI routes.

This module wires the RateLimiter service into the HTTP layer.

Design goals:
- Minimal coupling: routes depend on a dependency function only.
- Swap-friendly: the counter store is chosen at app construction and stored
  on ``app.state``; the dependency never knows which backend it talks to.
- Fail closed: store errors propagate as StoreUnavailableAppError (HTTP 500).
"""

from __future__ import annotations

import hashlib
import logging

from fastapi import Request

from riddle_gate.core.config import settings
from riddle_gate.core.errors import QuotaExceededAppError
from riddle_gate.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

FORWARDED_FOR_HEADER = "X-Forwarded-For"


def resolve_client_identifier(request: Request, trusted_proxy_depth: int = 0) -> str:
    """Derive the client address used as the rate limit identity.

    With ``trusted_proxy_depth`` of 0 the socket peer is used and forwarding
    headers are ignored. With depth n, the address n hops back along the
    X-Forwarded-For chain is used (the peer counting as hop 0), clamped to
    the leftmost entry when the chain is shorter.

    Examples:
        peer 10.0.0.2, X-Forwarded-For "1.1.1.1, 10.0.0.1"
        depth 0 -> "10.0.0.2", depth 1 -> "10.0.0.1", depth 5 -> "1.1.1.1"
    """

    peer = request.client.host if request.client else "unknown"
    if trusted_proxy_depth <= 0:
        return peer

    header = request.headers.get(FORWARDED_FOR_HEADER, "")
    forwarded = [part.strip() for part in header.split(",") if part.strip()]
    chain = forwarded + [peer]
    index = max(len(chain) - 1 - trusted_proxy_depth, 0)
    return chain[index]


def _hash_identifier(identifier: str) -> str:
    """Hash the client identifier for logging without exposing addresses."""
    return hashlib.sha256(identifier.encode()).hexdigest()[:16]


def get_rate_limiter(request: Request) -> RateLimiter:
    """Return the limiter built for this application instance."""
    return request.app.state.rate_limiter


async def enforce_rate_limit(request: Request) -> None:
    """FastAPI dependency enforcing the per-client answer-check quota.

    Raises:
        QuotaExceededAppError: When the client exceeded its quota (HTTP 429).
        StoreUnavailableAppError: When the counter store fails (HTTP 500).
    """

    if not settings.rate_limit.enabled:
        return

    limiter = get_rate_limiter(request)
    identifier = resolve_client_identifier(request, settings.rate_limit.trusted_proxy_depth)
    client_hash = _hash_identifier(identifier)

    decision = await limiter.check(identifier)
    if decision.allowed:
        logger.debug(
            "rate_limit.allowed",
            extra={
                "client_hash": client_hash,
                "count": decision.count,
                "limit": decision.limit,
                "remaining": decision.remaining,
            },
        )
        return

    retry_after = decision.retry_after_seconds or 0
    logger.warning(
        "rate_limit.exceeded",
        extra={
            "client_hash": client_hash,
            "count": decision.count,
            "limit": decision.limit,
            "window_s": limiter.window_seconds,
            "retry_after_s": retry_after,
        },
    )

    raise QuotaExceededAppError(
        code="rate_limit_exceeded",
        message=f"Too many attempts. Please wait {retry_after} seconds before trying again.",
        details={
            "retry_after": retry_after,
            "limit": decision.limit,
            "remaining": decision.remaining,
        },
    )
