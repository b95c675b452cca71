"""Events that group games and scores for the public rankings."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional

from ..core.errors import NotFoundError, ValidationError
from ..core.logging_config import get_logger
from ..core.time import isoformat, parse_timestamp, utcnow
from ..store import EVENTS, Document, DocumentStore
from .validation import optional_text, validate_required

logger = get_logger(__name__)

EVENT_STATUSES = ("upcoming", "ongoing", "completed", "cancelled")
DEFAULT_STATUS = "upcoming"

_TEXT_FIELDS = (
    ("description", "Description"),
    ("location", "Location"),
    ("hostId", "Host"),
    ("image", "Image"),
)


def _parse_date(value: Any, label: str) -> datetime:
    parsed = parse_timestamp(value) if isinstance(value, str) else None
    if parsed is None:
        raise ValidationError(f"Invalid {label} date format")
    return parsed


def _validate_status(value: Any) -> str:
    if value not in EVENT_STATUSES:
        raise ValidationError(
            "Status must be one of: upcoming, ongoing, completed, cancelled"
        )
    return value


def _validate_max_participants(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError("Max participants must be a whole number")
    if value < 1:
        raise ValidationError("Max participants must be at least 1")
    return value


def _by_start_date(event: Document):
    return (parse_timestamp(event.get("startDate")) is None, str(event.get("startDate") or ""))


class EventService:
    def __init__(
        self, store: DocumentStore, clock: Callable[[], datetime] = utcnow
    ) -> None:
        self._store = store
        self._clock = clock

    def get_event(self, event_id: str) -> Document:
        event = self._store.get(EVENTS, event_id)
        if event is None:
            raise NotFoundError("Event not found")
        return event

    def list_events(
        self,
        status: Optional[str] = None,
        host_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Dict[str, Any]:
        """Events ordered by start date, soonest first."""

        filters: Dict[str, Any] = {}
        if status:
            filters["status"] = status
        if host_id:
            filters["hostId"] = host_id
        events = sorted(self._store.query(EVENTS, filters), key=_by_start_date)
        offset = max(0, offset)
        limit = max(1, limit)
        return {"events": events[offset : offset + limit], "total": len(events)}

    def create_event(self, payload: Mapping[str, Any]) -> Document:
        for field, label in (("name", "Name"), ("startDate", "Start Date")):
            error = validate_required(payload.get(field), label)
            if error:
                raise ValidationError(error)
        name = optional_text(payload, "name", "Name")

        start = _parse_date(payload["startDate"], "start")
        status = payload.get("status")
        now = isoformat(self._clock())
        event: Dict[str, Any] = {
            "name": name,
            "startDate": isoformat(start),
            "status": _validate_status(status) if status else DEFAULT_STATUS,
            "createdAt": now,
            "updatedAt": now,
        }
        if payload.get("endDate"):
            end = _parse_date(payload["endDate"], "end")
            if end < start:
                raise ValidationError("End date must be after start date")
            event["endDate"] = isoformat(end)
        if payload.get("maxParticipants") is not None:
            event["maxParticipants"] = _validate_max_participants(payload["maxParticipants"])
        for field, label in _TEXT_FIELDS:
            value = optional_text(payload, field, label)
            if value:
                event[field] = value

        event_id = self._store.create(EVENTS, event)
        logger.info("event_created", event_id=event_id)
        return {**event, "id": event_id}

    def update_event(self, event_id: str, payload: Mapping[str, Any]) -> Document:
        current = self.get_event(event_id)
        patch: Dict[str, Any] = {}

        if payload.get("name") is not None:
            name = optional_text(payload, "name", "Name")
            if not name:
                raise ValidationError("Name is required")
            patch["name"] = name
        if payload.get("status"):
            patch["status"] = _validate_status(payload["status"])
        if payload.get("startDate"):
            patch["startDate"] = isoformat(_parse_date(payload["startDate"], "start"))
        if payload.get("endDate"):
            patch["endDate"] = isoformat(_parse_date(payload["endDate"], "end"))
        if payload.get("maxParticipants") is not None:
            patch["maxParticipants"] = _validate_max_participants(payload["maxParticipants"])
        for field, label in _TEXT_FIELDS:
            if field in payload:
                patch[field] = optional_text(payload, field, label) or ""

        # The date order is checked against the merged result.
        start = parse_timestamp(patch.get("startDate", current.get("startDate")))
        end = parse_timestamp(patch.get("endDate", current.get("endDate")))
        if start and end and end < start:
            raise ValidationError("End date must be after start date")

        patch["updatedAt"] = isoformat(self._clock())
        self._store.update(EVENTS, event_id, patch)
        logger.info("event_updated", event_id=event_id)
        return self.get_event(event_id)

    def delete_event(self, event_id: str) -> None:
        self.get_event(event_id)
        self._store.delete(EVENTS, event_id)
        logger.info("event_deleted", event_id=event_id)


__all__ = ["EVENT_STATUSES", "EventService"]
