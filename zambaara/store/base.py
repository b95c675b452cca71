"""Document store capability interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

Document = Dict[str, Any]

SCORES = "scores"
LEADERBOARD = "leaderboard"
CONTACT = "contact"
NEWSLETTER = "newsletter"
EVENTS = "events"
GAMES = "games"

SITE_COLLECTIONS = (GAMES, SCORES, LEADERBOARD, CONTACT, NEWSLETTER, EVENTS)


def matches(document: Mapping[str, Any], filters: Optional[Mapping[str, Any]]) -> bool:
    """Equality match of every filter field against ``document``."""

    if not filters:
        return True
    return all(document.get(field) == value for field, value in filters.items())


class DocumentStore(ABC):
    """CRUD over named collections of JSON-like documents.

    Returned documents carry their id under ``"id"``. Failures of the backing
    storage are raised as :class:`~zambaara.core.errors.StoreError`; a missing
    document on ``update``/``delete`` raises
    :class:`~zambaara.core.errors.NotFoundError`.
    """

    @abstractmethod
    def query(
        self, collection: str, filters: Optional[Mapping[str, Any]] = None
    ) -> List[Document]:
        """Return documents of ``collection`` equal on every filter field."""

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Return a single document or ``None``."""

    @abstractmethod
    def create(
        self,
        collection: str,
        data: Mapping[str, Any],
        doc_id: Optional[str] = None,
    ) -> str:
        """Store ``data`` and return its id.

        With an explicit ``doc_id`` an existing document is replaced.
        """

    @abstractmethod
    def update(self, collection: str, doc_id: str, patch: Mapping[str, Any]) -> None:
        """Merge ``patch`` into an existing document."""

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        """Remove an existing document."""

    def ping(self) -> None:
        """Raise ``StoreError`` when the backing storage is unreachable."""

        self.query(SCORES, {"__ping__": True})


__all__ = [
    "CONTACT",
    "Document",
    "DocumentStore",
    "EVENTS",
    "GAMES",
    "LEADERBOARD",
    "NEWSLETTER",
    "SCORES",
    "SITE_COLLECTIONS",
    "matches",
]
