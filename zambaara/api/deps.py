"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import Depends, Request, Response

from ..core.errors import AuthError, LoginRedirect
from ..services import (
    ContactService,
    EventService,
    GameService,
    LeaderboardUpdater,
    NewsletterService,
    RankingEngine,
    ScoreService,
    SessionAuthGuard,
)
from ..services.auth import COOKIE_NAME
from ..store import DocumentStore


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_guard(request: Request) -> SessionAuthGuard:
    return request.app.state.guard


def get_ranking_engine(store: DocumentStore = Depends(get_store)) -> RankingEngine:
    return RankingEngine(store)


def get_leaderboard(store: DocumentStore = Depends(get_store)) -> LeaderboardUpdater:
    return LeaderboardUpdater(store)


def get_score_service(
    store: DocumentStore = Depends(get_store),
    leaderboard: LeaderboardUpdater = Depends(get_leaderboard),
) -> ScoreService:
    return ScoreService(store, leaderboard)


def get_game_service(
    store: DocumentStore = Depends(get_store),
    scores: ScoreService = Depends(get_score_service),
) -> GameService:
    return GameService(store, scores)


def get_event_service(store: DocumentStore = Depends(get_store)) -> EventService:
    return EventService(store)


def get_contact_service(store: DocumentStore = Depends(get_store)) -> ContactService:
    return ContactService(store)


def get_newsletter_service(
    store: DocumentStore = Depends(get_store),
) -> NewsletterService:
    return NewsletterService(store)


def require_admin(
    request: Request, guard: SessionAuthGuard = Depends(get_guard)
) -> Dict[str, Any]:
    """Admin API gate: answers 401 without a valid session cookie."""

    result = guard.verify(request.cookies.get(COOKIE_NAME))
    if not result.authenticated:
        raise AuthError("Unauthorized")
    return result.identity or {}


def require_admin_page(
    request: Request, guard: SessionAuthGuard = Depends(get_guard)
) -> Dict[str, Any]:
    """Admin page gate: sends the browser to login, remembering the path."""

    result = guard.verify(request.cookies.get(COOKIE_NAME))
    if not result.authenticated:
        next_path = request.url.path
        if request.url.query:
            next_path = f"{next_path}?{request.url.query}"
        raise LoginRedirect(next_path)
    return result.identity or {}


def set_session_cookie(response: Response, guard: SessionAuthGuard, token: str) -> None:
    cfg = guard.config
    response.set_cookie(
        COOKIE_NAME,
        token,
        max_age=cfg.session_max_age,
        path="/",
        domain=cfg.cookie_domain,
        secure=cfg.cookie_secure,
        httponly=True,
        samesite=cfg.cookie_samesite,
    )


def clear_session_cookie(response: Response, guard: SessionAuthGuard) -> None:
    cfg = guard.config
    response.delete_cookie(
        COOKIE_NAME,
        path="/",
        domain=cfg.cookie_domain,
        secure=cfg.cookie_secure,
        httponly=True,
        samesite=cfg.cookie_samesite,
    )


__all__ = [
    "clear_session_cookie",
    "get_contact_service",
    "get_event_service",
    "get_game_service",
    "get_guard",
    "get_leaderboard",
    "get_newsletter_service",
    "get_ranking_engine",
    "get_score_service",
    "get_store",
    "require_admin",
    "require_admin_page",
    "set_session_cookie",
]
