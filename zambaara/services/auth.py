"""Single-tenant admin authentication with signed, expiring session tokens.

The server keeps no session table. A token is valid while its signature
checks out against ``ADMIN_SESSION_SECRET`` and its expiry has not passed;
logging out only clears the cookie on the client, so a copied token keeps
working until it expires.
"""

from __future__ import annotations

import enum
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional

from itsdangerous import BadData, URLSafeSerializer

from ..core import config
from ..core.errors import AuthError, NotConfiguredError, ValidationError
from ..core.logging_config import get_logger
from ..core.time import utcnow

logger = get_logger(__name__)

COOKIE_NAME = "admin_session"
MIN_SECRET_LENGTH = 16
_TOKEN_SALT = "zambaara.admin-session"


@dataclass(frozen=True)
class AdminAuthConfig:
    email: str = ""
    password: str = ""
    session_secret: str = ""
    session_max_age: int = 60 * 60 * 24 * 7
    cookie_secure: bool = False
    cookie_samesite: str = "lax"
    cookie_domain: Optional[str] = None

    @classmethod
    def from_env(cls) -> "AdminAuthConfig":
        return cls(
            email=config.ADMIN_EMAIL,
            password=config.ADMIN_PASSWORD,
            session_secret=config.ADMIN_SESSION_SECRET,
            session_max_age=config.ADMIN_SESSION_MAX_AGE,
            cookie_secure=config.COOKIE_SECURE,
            cookie_samesite=config.COOKIE_SAMESITE,
            cookie_domain=config.COOKIE_DOMAIN,
        )

    def configuration_error(self) -> Optional[str]:
        if not self.email or not self.password:
            return "Admin credentials not configured. Set ADMIN_EMAIL and ADMIN_PASSWORD"
        if not self.session_secret:
            return "Session not configured. ADMIN_SESSION_SECRET is not set"
        if len(self.session_secret) < MIN_SECRET_LENGTH:
            return (
                "Session not configured. ADMIN_SESSION_SECRET must be at least "
                f"{MIN_SECRET_LENGTH} characters"
            )
        return None


class AuthState(enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"
    EXPIRED = "expired"


@dataclass(frozen=True)
class AuthResult:
    state: AuthState
    identity: Optional[Dict[str, Any]] = None

    @property
    def authenticated(self) -> bool:
        return self.state is AuthState.AUTHENTICATED


_UNAUTHENTICATED = AuthResult(AuthState.UNAUTHENTICATED)


class SessionAuthGuard:
    def __init__(
        self, auth_config: AdminAuthConfig, clock: Callable[[], datetime] = utcnow
    ) -> None:
        self.config = auth_config
        self._clock = clock

    def _serializer(self) -> URLSafeSerializer:
        return URLSafeSerializer(self.config.session_secret, salt=_TOKEN_SALT)

    def _classify(self, token: Optional[str]) -> AuthResult:
        if not token or self.config.configuration_error():
            return _UNAUTHENTICATED
        try:
            payload = self._serializer().loads(token)
        except BadData:
            return _UNAUTHENTICATED
        if not isinstance(payload, dict):
            return _UNAUTHENTICATED
        expires_at = payload.get("exp")
        if not isinstance(expires_at, (int, float)) or isinstance(expires_at, bool):
            return _UNAUTHENTICATED
        if self._clock().timestamp() >= expires_at:
            return AuthResult(AuthState.EXPIRED)
        return AuthResult(AuthState.AUTHENTICATED, identity=payload)

    def verify(self, token: Optional[str]) -> AuthResult:
        """Authenticated with the token payload, or Unauthenticated.

        Expired tokens are reported exactly like absent or forged ones.
        """

        result = self._classify(token)
        if result.state is AuthState.EXPIRED:
            logger.debug("admin_session_expired")
            return _UNAUTHENTICATED
        return result

    def issue_token(self) -> str:
        expires_at = self._clock() + timedelta(seconds=self.config.session_max_age)
        return self._serializer().dumps(
            {"email": self.config.email, "exp": int(expires_at.timestamp())}
        )

    def login(self, email: Any, password: Any) -> str:
        """Return a fresh session token for the configured admin identity."""

        problem = self.config.configuration_error()
        if problem:
            raise NotConfiguredError(problem)
        if not isinstance(email, str) or not isinstance(password, str):
            raise ValidationError("Email and password required")

        email_ok = secrets.compare_digest(
            email.strip().encode("utf-8"), self.config.email.encode("utf-8")
        )
        password_ok = secrets.compare_digest(
            password.strip().encode("utf-8"), self.config.password.encode("utf-8")
        )
        if not (email_ok and password_ok):
            logger.info("admin_login_rejected")
            raise AuthError("Invalid email or password")

        logger.info("admin_login")
        return self.issue_token()

    def logout(self) -> None:
        # Nothing to invalidate server-side; the caller clears the cookie.
        logger.info("admin_logout")


__all__ = [
    "AdminAuthConfig",
    "AuthResult",
    "AuthState",
    "COOKIE_NAME",
    "MIN_SECRET_LENGTH",
    "SessionAuthGuard",
]
