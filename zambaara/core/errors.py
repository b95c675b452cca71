"""Error types surfaced through the API envelope."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from .logging_config import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """Base error carrying the HTTP status and a caller-facing message."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = 400
    default_message = "Invalid request"


class AuthError(ApiError):
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(ApiError):
    status_code = 409
    default_message = "Conflict"


class StoreError(ApiError):
    """Failure of the document store; ``detail`` is logged, never returned."""

    status_code = 500

    def __init__(self, message: Optional[str] = None, *, detail: str = "") -> None:
        super().__init__(message)
        self.detail = detail or self.message


class NotConfiguredError(ApiError):
    status_code = 503
    default_message = "Service not configured"


class LoginRedirect(Exception):
    """Raised by the admin page guard; answered with a redirect to login."""

    def __init__(self, next_path: str) -> None:
        self.next_path = next_path
        super().__init__(next_path)


@contextmanager
def store_failure(message: str) -> Iterator[None]:
    """Re-raise store errors inside the block with a route-specific message."""

    try:
        yield
    except StoreError as exc:
        logger.error("store_operation_failed", error=exc.detail, public_message=message)
        raise StoreError(message, detail=exc.detail) from exc


__all__ = [
    "ApiError",
    "AuthError",
    "ConflictError",
    "LoginRedirect",
    "NotConfiguredError",
    "NotFoundError",
    "StoreError",
    "ValidationError",
    "store_failure",
]
