"""Aggregate API routers."""

from fastapi import APIRouter

from .admin import router as admin_router
from .contact import router as contact_router
from .events import router as events_router
from .games import router as games_router
from .leaderboard import router as leaderboard_router
from .newsletter import router as newsletter_router
from .rankings import router as rankings_router
from .scores import router as scores_router
from .system import router as system_router

ALL_ROUTERS: tuple[APIRouter, ...] = (
    system_router,
    rankings_router,
    events_router,
    games_router,
    leaderboard_router,
    scores_router,
    contact_router,
    newsletter_router,
    admin_router,
)

__all__ = ["ALL_ROUTERS"]
