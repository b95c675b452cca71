"""Admin dashboard summary and bulk maintenance."""

from __future__ import annotations

from typing import Any, Dict

from ..core.errors import NotFoundError, StoreError
from ..core.logging_config import get_logger
from ..store import (
    CONTACT,
    EVENTS,
    GAMES,
    LEADERBOARD,
    NEWSLETTER,
    SCORES,
    SITE_COLLECTIONS,
    DocumentStore,
)

logger = get_logger(__name__)


def dashboard_summary(store: DocumentStore) -> Dict[str, int]:
    messages = store.query(CONTACT)
    return {
        "contactMessages": len(messages),
        "unreadMessages": sum(1 for message in messages if not message.get("read")),
        "activeSubscribers": len(store.query(NEWSLETTER, {"subscribed": True})),
        "leaderboardEntries": len(store.query(LEADERBOARD)),
        "scores": len(store.query(SCORES)),
        "runningGames": len(store.query(GAMES, {"status": "running"})),
        "events": len(store.query(EVENTS)),
    }


def delete_all_data(store: DocumentStore) -> Dict[str, Any]:
    """Delete every document of the site collections.

    Each collection is attempted independently; a failing collection is
    reported with its error and does not stop the others. When every
    collection fails the store is treated as unavailable.
    """

    results: Dict[str, Dict[str, Any]] = {}
    for collection in SITE_COLLECTIONS:
        deleted = 0
        try:
            for document in store.query(collection):
                try:
                    store.delete(collection, document["id"])
                except NotFoundError:
                    continue
                deleted += 1
            results[collection] = {"deleted": deleted}
        except StoreError as exc:
            logger.error("delete_all_data_failed", collection=collection, error=exc.detail)
            results[collection] = {"deleted": deleted, "error": "Failed to delete documents"}

    if all("error" in result for result in results.values()):
        raise StoreError(detail="no collection could be cleared")

    total = sum(result["deleted"] for result in results.values())
    logger.warning("all_data_deleted", total_deleted=total)
    return {"results": results, "totalDeleted": total}


__all__ = ["dashboard_summary", "delete_all_data"]
