"""Upstash counter store speaking the Redis REST protocol over HTTPS.

Commands are posted to the endpoint root as a JSON array
(e.g. ``["TTL", "rate_limit:1.2.3.4"]``) with a bearer token. Replies are
``{"result": ...}`` on success and ``{"error": "..."}`` on failure.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from riddle_gate.adapters.counter_store.base import (
    INCREMENT_WITH_TTL_SCRIPT,
    AbstractCounterStore,
    normalize_ttl,
)
from riddle_gate.core.errors import StoreUnavailableAppError

logger = logging.getLogger(__name__)


class UpstashCounterStore(AbstractCounterStore):
    """Counter store backed by the Upstash REST API."""

    backend_name = "upstash"

    def __init__(
        self,
        *,
        rest_url: str,
        token: str,
        timeout_seconds: float = 2.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            rest_url: Base REST URL of the Upstash database.
            token: REST bearer token.
            timeout_seconds: Per-request timeout.
            transport: Optional httpx transport (used by tests).
        """
        if not rest_url or not token:
            raise ValueError("rest_url and token are required")

        self._client = httpx.AsyncClient(
            base_url=rest_url.rstrip("/"),
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout_seconds,
            transport=transport,
        )

    def _unavailable(self, operation: str, reason: str) -> StoreUnavailableAppError:
        logger.error(
            "counter_store.error",
            extra={
                "backend": self.backend_name,
                "operation": operation,
                "reason": reason,
            },
        )
        return StoreUnavailableAppError(
            code="counter_store_unavailable",
            message="Rate limit store is unavailable",
            details={"backend": self.backend_name, "hint": operation},
        )

    async def _command(self, operation: str, *args: Any) -> int:
        """Run one command and return its integer result."""
        try:
            response = await self._client.post("/", json=[str(a) for a in args])
        except httpx.HTTPError as exc:
            raise self._unavailable(operation, type(exc).__name__) from exc

        if response.status_code >= 400:
            raise self._unavailable(operation, f"http_{response.status_code}")

        try:
            body = response.json()
        except ValueError as exc:
            raise self._unavailable(operation, "invalid_json") from exc

        if not isinstance(body, dict) or "error" in body or "result" not in body:
            raise self._unavailable(operation, "unexpected_payload")

        result = body["result"]
        if isinstance(result, bool):
            raise self._unavailable(operation, "non_integer_result")
        try:
            return int(result)
        except (TypeError, ValueError) as exc:
            raise self._unavailable(operation, "non_integer_result") from exc

    async def increment_with_ttl(self, key: str, ttl_seconds: int) -> int:
        return await self._command(
            "increment", "EVAL", INCREMENT_WITH_TTL_SCRIPT, 1, key, ttl_seconds
        )

    async def ttl_remaining(self, key: str) -> int | None:
        return normalize_ttl(await self._command("ttl", "TTL", key))

    async def aclose(self) -> None:
        await self._client.aclose()
