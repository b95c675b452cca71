"""Service layer helpers."""

from .admin import dashboard_summary, delete_all_data
from .auth import AdminAuthConfig, AuthResult, AuthState, SessionAuthGuard
from .contact import ContactService
from .events import EventService
from .games import GameService
from .leaderboard import LeaderboardUpdateResult, LeaderboardUpdater
from .newsletter import NewsletterService
from .rankings import RankingEngine, RankingEntry
from .scores import ScoreService

__all__ = [
    "AdminAuthConfig",
    "AuthResult",
    "AuthState",
    "ContactService",
    "EventService",
    "GameService",
    "LeaderboardUpdateResult",
    "LeaderboardUpdater",
    "NewsletterService",
    "RankingEngine",
    "RankingEntry",
    "ScoreService",
    "SessionAuthGuard",
    "dashboard_summary",
    "delete_all_data",
]
