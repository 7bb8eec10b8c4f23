from __future__ import annotations

from fastapi import APIRouter

from riddle_gate.core.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness probe for load balancers; never rate limited.

    Reports the configured counter store backend but does not contact it,
    so a store outage does not take the instance out of rotation.
    """

    return {"status": "ok", "rate_limit_backend": settings.rate_limit.backend.lower()}
