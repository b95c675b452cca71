"""Tests for the admin session guard."""

from datetime import datetime, timedelta, timezone

import pytest
from itsdangerous import URLSafeSerializer

from zambaara.core import AuthError, NotConfiguredError, ValidationError
from zambaara.services import AdminAuthConfig, AuthState, SessionAuthGuard

ADMIN_EMAIL = "admin@x.com"
ADMIN_PASSWORD = "secret"
SESSION_SECRET = "test-session-secret-0123456789"

START = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)


class Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture()
def clock():
    return Clock(START)


@pytest.fixture()
def guard(auth_config, clock):
    return SessionAuthGuard(auth_config, clock=clock)


def test_login_issues_a_verifiable_token(guard):
    token = guard.login(ADMIN_EMAIL, ADMIN_PASSWORD)

    result = guard.verify(token)

    assert result.state is AuthState.AUTHENTICATED
    assert result.identity["email"] == ADMIN_EMAIL


def test_credentials_are_trimmed(guard):
    token = guard.login(f"  {ADMIN_EMAIL} ", f"{ADMIN_PASSWORD}\n")
    assert guard.verify(token).authenticated


def test_wrong_password(guard):
    with pytest.raises(AuthError) as exc:
        guard.login(ADMIN_EMAIL, "wrong")
    assert exc.value.status_code == 401
    assert exc.value.message == "Invalid email or password"


def test_wrong_email(guard):
    with pytest.raises(AuthError):
        guard.login("someone@x.com", ADMIN_PASSWORD)


def test_missing_credentials(guard):
    with pytest.raises(ValidationError):
        guard.login(None, ADMIN_PASSWORD)
    with pytest.raises(ValidationError):
        guard.login(ADMIN_EMAIL, 1234)


@pytest.mark.parametrize(
    "config",
    [
        AdminAuthConfig(password="secret", session_secret=SESSION_SECRET),
        AdminAuthConfig(email="admin@x.com", session_secret=SESSION_SECRET),
        AdminAuthConfig(email="admin@x.com", password="secret"),
        AdminAuthConfig(email="admin@x.com", password="secret", session_secret="short"),
    ],
)
def test_unconfigured_login_is_503_not_401(config):
    guard = SessionAuthGuard(config)

    with pytest.raises(NotConfiguredError) as exc:
        guard.login("admin@x.com", "wrong")

    assert exc.value.status_code == 503


def test_token_expires(guard, clock, auth_config):
    token = guard.login(ADMIN_EMAIL, ADMIN_PASSWORD)

    clock.now = START + timedelta(seconds=auth_config.session_max_age - 1)
    assert guard.verify(token).authenticated

    clock.now = START + timedelta(seconds=auth_config.session_max_age)
    result = guard.verify(token)
    assert result.state is AuthState.UNAUTHENTICATED
    assert result.identity is None


def test_expired_is_distinguished_internally(guard, clock, auth_config):
    token = guard.login(ADMIN_EMAIL, ADMIN_PASSWORD)
    clock.now = START + timedelta(days=30)

    assert guard._classify(token).state is AuthState.EXPIRED


@pytest.mark.parametrize("token", [None, "", "not-a-token"])
def test_garbage_tokens_are_unauthenticated(guard, token):
    assert guard.verify(token).state is AuthState.UNAUTHENTICATED


def test_tampered_token(guard, clock):
    token = guard.login(ADMIN_EMAIL, ADMIN_PASSWORD)
    clock.now = START + timedelta(hours=1)
    other = guard.issue_token()
    tampered = other.rsplit(".", 1)[0] + "." + token.rsplit(".", 1)[1]

    assert not guard.verify(tampered).authenticated


def test_token_from_another_secret(guard):
    forged = URLSafeSerializer("another-secret-value-123", salt="zambaara.admin-session").dumps(
        {"email": ADMIN_EMAIL, "exp": int((START + timedelta(days=1)).timestamp())}
    )
    assert not guard.verify(forged).authenticated


def test_token_without_expiry(auth_config, guard):
    unexpiring = URLSafeSerializer(SESSION_SECRET, salt="zambaara.admin-session").dumps(
        {"email": ADMIN_EMAIL}
    )
    assert not guard.verify(unexpiring).authenticated


def test_rotating_the_secret_invalidates_tokens(guard, clock):
    token = guard.login(ADMIN_EMAIL, ADMIN_PASSWORD)
    rotated = SessionAuthGuard(
        AdminAuthConfig(
            email=ADMIN_EMAIL,
            password=ADMIN_PASSWORD,
            session_secret="a-brand-new-session-secret",
        ),
        clock=clock,
    )
    assert not rotated.verify(token).authenticated


def test_logout_does_not_revoke_issued_tokens(guard):
    token = guard.login(ADMIN_EMAIL, ADMIN_PASSWORD)

    guard.logout()

    assert guard.verify(token).authenticated
