"""Tests for global exception handlers.

Validates that domain errors map to the right HTTP status codes, that quota
errors carry Retry-After, and that unexpected errors leak nothing.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from riddle_gate.core.errors import (
    AppError,
    ArtifactMissingAppError,
    QuotaExceededAppError,
    StoreUnavailableAppError,
    ValidationAppError,
)
from riddle_gate.core.exception_handlers import setup_exception_handlers, status_for

JSON = {"Accept": "application/json"}


@pytest.fixture
def app_with_handlers() -> FastAPI:
    """Create FastAPI app with exception handlers registered."""
    app = FastAPI()
    setup_exception_handlers(app)
    return app


@pytest.fixture
def client(app_with_handlers: FastAPI) -> TestClient:
    return TestClient(app_with_handlers)


@pytest.mark.parametrize(
    "error, status",
    [
        (QuotaExceededAppError(code="q", message="q"), 429),
        (StoreUnavailableAppError(code="s", message="s"), 500),
        (ArtifactMissingAppError(code="a", message="a"), 404),
        (ValidationAppError(code="v", message="v"), 400),
        (AppError(code="x", message="x"), 400),
    ],
)
def test_status_mapping(error: AppError, status: int) -> None:
    assert status_for(error) == status


class TestAppErrorHandler:
    def test_quota_error_sets_retry_after(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-quota")
        async def test_endpoint():
            raise QuotaExceededAppError(
                code="rate_limit_exceeded",
                message="slow down",
                details={"retry_after": 17, "limit": 5, "remaining": 0},
            )

        response = client.get("/test-quota")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "17"
        assert response.headers["X-RateLimit-Limit"] == "5"
        assert "17 seconds" in response.text

    def test_quota_error_without_details_still_has_retry_after(
        self, client: TestClient, app_with_handlers: FastAPI
    ):
        @app_with_handlers.get("/test-quota-bare")
        async def test_endpoint():
            raise QuotaExceededAppError(code="rate_limit_exceeded", message="slow down")

        response = client.get("/test-quota-bare")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "0"

    def test_store_error_returns_500_html(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-store")
        async def test_endpoint():
            raise StoreUnavailableAppError(
                code="counter_store_unavailable",
                message="redis://secret-host:6379 refused connection",
            )

        response = client.get("/test-store")

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("text/html")
        assert "secret-host" not in response.text

    def test_artifact_error_returns_404(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-artifact")
        async def test_endpoint():
            raise ArtifactMissingAppError(code="artifact_missing", message="gone")

        response = client.get("/test-artifact", headers=JSON)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "artifact_missing"

    def test_json_error_format_is_consistent(self, client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/test-format")
        async def test_endpoint():
            raise ValidationAppError(code="test", message="test")

        data = client.get("/test-format", headers=JSON).json()

        assert "error" in data
        assert "code" in data["error"]
        assert "message" in data["error"]
        assert "request_id" in data["error"]
        assert "details" not in data["error"]


class TestGeneralExceptionHandler:
    def test_unexpected_exception_handler_registered(self, app_with_handlers: FastAPI):
        assert Exception in app_with_handlers.exception_handlers

    def test_json_response_hides_internals(self):
        from riddle_gate.core.exception_handlers import general_exception_handler

        request = AsyncMock()
        request.url.path = "/test"
        request.method = "GET"
        request.headers = {"accept": "application/json"}

        exc = RuntimeError("Unexpected error: database connection failed")
        response = asyncio.run(general_exception_handler(request, exc))

        data = json.loads(bytes(response.body).decode())
        assert response.status_code == 500
        assert data["error"]["code"] == "internal_server_error"
        assert "database connection" not in data["error"]["message"]

    def test_html_response_never_leaks_stack_trace(self):
        from riddle_gate.core.exception_handlers import general_exception_handler

        request = AsyncMock()
        request.url.path = "/test"
        request.method = "GET"
        request.headers = {}

        response = asyncio.run(general_exception_handler(request, ValueError("Test error with details")))

        text = bytes(response.body).decode()
        assert response.status_code == 500
        assert "Traceback" not in text
        assert "ValueError" not in text
        assert "Test error with details" not in text


def test_multiple_handler_setups_does_not_fail():
    app = FastAPI()

    setup_exception_handlers(app)
    setup_exception_handlers(app)

    assert AppError in app.exception_handlers
