"""Contact form messages."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional

from ..core.errors import ValidationError
from ..core.logging_config import get_logger
from ..core.time import isoformat, utcnow
from ..store import CONTACT, DocumentStore
from .validation import validate_email, validate_length, validate_required

logger = get_logger(__name__)

MESSAGE_MIN_LENGTH = 5
MESSAGE_MAX_LENGTH = 5000


def newest_first(documents, field: str = "createdAt"):
    return sorted(documents, key=lambda doc: str(doc.get(field) or ""), reverse=True)


class ContactService:
    def __init__(
        self, store: DocumentStore, clock: Callable[[], datetime] = utcnow
    ) -> None:
        self._store = store
        self._clock = clock

    def create_message(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        for field, label in (("name", "Name"), ("email", "Email"), ("message", "Message")):
            error = validate_required(payload.get(field), label)
            if error:
                raise ValidationError(error)
            if not isinstance(payload.get(field), str):
                raise ValidationError(f"{label} must be a string")

        email = payload["email"].strip()
        if not validate_email(email):
            raise ValidationError("Invalid email format")

        message = payload["message"].strip()
        error = validate_length(message, MESSAGE_MIN_LENGTH, MESSAGE_MAX_LENGTH, "Message")
        if error:
            raise ValidationError(error)

        document: Dict[str, Any] = {
            "name": payload["name"].strip(),
            "email": email.lower(),
            "message": message,
            "read": False,
            "createdAt": isoformat(self._clock()),
        }
        subject = payload.get("subject")
        if isinstance(subject, str) and subject.strip():
            document["subject"] = subject.strip()

        message_id = self._store.create(CONTACT, document)
        logger.info("contact_message_created", message_id=message_id)
        return {**document, "id": message_id}

    def list_messages(
        self, read: Optional[bool] = None, limit: int = 50, offset: int = 0
    ) -> Dict[str, Any]:
        filters = {"read": read} if read is not None else None
        messages = newest_first(self._store.query(CONTACT, filters))
        offset = max(0, offset)
        limit = max(1, limit)
        return {"messages": messages[offset : offset + limit], "total": len(messages)}

    def update_message(self, message_id: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
        patch: Dict[str, Any] = {"updatedAt": isoformat(self._clock())}
        if "read" in payload:
            if not isinstance(payload["read"], bool):
                raise ValidationError("read must be a boolean")
            patch["read"] = payload["read"]
        self._store.update(CONTACT, message_id, patch)
        return self._store.get(CONTACT, message_id) or {"id": message_id, **patch}

    def delete_message(self, message_id: str) -> None:
        self._store.delete(CONTACT, message_id)
        logger.info("contact_message_deleted", message_id=message_id)


__all__ = ["ContactService", "newest_first"]
