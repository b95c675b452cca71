"""Core configuration and infrastructure helpers."""

from .config import (
    ADMIN_EMAIL,
    ADMIN_PASSWORD,
    ADMIN_SESSION_MAX_AGE,
    ADMIN_SESSION_SECRET,
    ALLOWED_CORS_ORIGINS,
    COOKIE_DOMAIN,
    COOKIE_SAMESITE,
    COOKIE_SECURE,
    DATABASE_URL,
    LOG_FORMAT,
    LOG_LEVEL,
    STORE_BACKEND,
)
from .database import init_db, make_engine
from .errors import (
    ApiError,
    AuthError,
    ConflictError,
    LoginRedirect,
    NotConfiguredError,
    NotFoundError,
    StoreError,
    ValidationError,
    store_failure,
)
from .logging_config import configure_logging, get_logger
from .time import isoformat, parse_timestamp, utcnow

__all__ = [
    "ADMIN_EMAIL",
    "ADMIN_PASSWORD",
    "ADMIN_SESSION_MAX_AGE",
    "ADMIN_SESSION_SECRET",
    "ALLOWED_CORS_ORIGINS",
    "COOKIE_DOMAIN",
    "COOKIE_SAMESITE",
    "COOKIE_SECURE",
    "DATABASE_URL",
    "LOG_FORMAT",
    "LOG_LEVEL",
    "STORE_BACKEND",
    "ApiError",
    "AuthError",
    "ConflictError",
    "LoginRedirect",
    "NotConfiguredError",
    "NotFoundError",
    "StoreError",
    "ValidationError",
    "configure_logging",
    "get_logger",
    "init_db",
    "isoformat",
    "make_engine",
    "parse_timestamp",
    "store_failure",
    "utcnow",
]
