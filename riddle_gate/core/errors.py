"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and HTTP responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    hint: str
    retry_after: int
    limit: int
    remaining: int
    backend: str


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input/config validation fails."""


class QuotaExceededAppError(AppError):
    """Raised when a client has used up its answer checks for the window."""


class StoreUnavailableAppError(AppError):
    """Raised when the counter store is unreachable, slow or returns junk."""


class ArtifactMissingAppError(AppError):
    """Raised when the reward file is absent from storage."""
