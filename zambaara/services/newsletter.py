"""Newsletter subscriptions."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, Optional

from ..core.errors import ConflictError, NotFoundError, ValidationError
from ..core.logging_config import get_logger
from ..core.time import isoformat, utcnow
from ..store import NEWSLETTER, Document, DocumentStore
from .contact import newest_first
from .validation import validate_email, validate_required

logger = get_logger(__name__)


def _normalize_email(email: Any) -> str:
    error = validate_required(email, "Email")
    if error:
        raise ValidationError(error)
    if not isinstance(email, str) or not validate_email(email.strip()):
        raise ValidationError("Invalid email format")
    return email.strip().lower()


class NewsletterService:
    def __init__(
        self, store: DocumentStore, clock: Callable[[], datetime] = utcnow
    ) -> None:
        self._store = store
        self._clock = clock

    def find_by_email(self, email: str) -> Optional[Document]:
        matches = self._store.query(NEWSLETTER, {"email": email})
        return matches[0] if matches else None

    def subscribe(self, email: Any) -> Document:
        email = _normalize_email(email)
        now = isoformat(self._clock())
        existing = self.find_by_email(email)
        if existing:
            if existing.get("subscribed"):
                raise ConflictError("Email is already subscribed")
            self._store.update(NEWSLETTER, existing["id"], {"subscribed": True, "updatedAt": now})
            logger.info("newsletter_resubscribed", subscriber_id=existing["id"])
            return {**existing, "subscribed": True, "updatedAt": now}

        document = {"email": email, "subscribed": True, "createdAt": now, "updatedAt": now}
        subscriber_id = self._store.create(NEWSLETTER, document)
        logger.info("newsletter_subscribed", subscriber_id=subscriber_id)
        return {**document, "id": subscriber_id}

    def unsubscribe(self, email: Any) -> None:
        email = _normalize_email(email)
        existing = self.find_by_email(email)
        if not existing:
            raise NotFoundError("Email not found in newsletter list")
        self._store.update(
            NEWSLETTER,
            existing["id"],
            {"subscribed": False, "updatedAt": isoformat(self._clock())},
        )
        logger.info("newsletter_unsubscribed", subscriber_id=existing["id"])

    def list_subscribers(
        self, subscribed: Optional[bool] = None, limit: int = 100, offset: int = 0
    ) -> Dict[str, Any]:
        filters = {"subscribed": subscribed} if subscribed is not None else None
        subscribers = newest_first(self._store.query(NEWSLETTER, filters))
        offset = max(0, offset)
        limit = max(1, limit)
        return {
            "subscribers": subscribers[offset : offset + limit],
            "total": len(subscribers),
        }

    def delete_subscriber(self, subscriber_id: str) -> None:
        self._store.delete(NEWSLETTER, subscriber_id)
        logger.info("newsletter_subscriber_deleted", subscriber_id=subscriber_id)


__all__ = ["NewsletterService"]
