"""Document store interface and bindings."""

from .base import (
    CONTACT,
    EVENTS,
    GAMES,
    LEADERBOARD,
    NEWSLETTER,
    SCORES,
    SITE_COLLECTIONS,
    Document,
    DocumentStore,
)
from .memory import InMemoryDocumentStore
from .sql import SqlDocumentStore

__all__ = [
    "CONTACT",
    "EVENTS",
    "GAMES",
    "LEADERBOARD",
    "NEWSLETTER",
    "SCORES",
    "SITE_COLLECTIONS",
    "Document",
    "DocumentStore",
    "InMemoryDocumentStore",
    "SqlDocumentStore",
]
