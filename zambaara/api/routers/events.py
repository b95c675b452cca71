"""Event endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from ...core import store_failure
from ...core.responses import success_response
from ...services import EventService
from ...services.validation import parse_int
from ..deps import get_event_service, require_admin

router = APIRouter(tags=["events"])


@router.get("/api/events")
def list_events(
    status: Optional[str] = None,
    host_id: Optional[str] = Query(None, alias="hostId"),
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    events: EventService = Depends(get_event_service),
):
    limit_value = parse_int(limit, 50)
    offset_value = parse_int(offset, 0)
    with store_failure("Failed to fetch events"):
        result = events.list_events(status or None, host_id or None, limit_value, offset_value)
    return success_response(
        {
            "events": result["events"],
            "total": result["total"],
            "limit": limit_value,
            "offset": offset_value,
        }
    )


@router.get("/api/events/{event_id}")
def get_event(event_id: str, events: EventService = Depends(get_event_service)):
    with store_failure("Failed to fetch event"):
        event = events.get_event(event_id)
    return success_response(event)


@router.post("/api/events")
def create_event(
    body: Dict[str, Any],
    events: EventService = Depends(get_event_service),
    _admin: Dict[str, Any] = Depends(require_admin),
):
    with store_failure("Failed to create event"):
        event = events.create_event(body)
    return success_response(event, "Event created successfully", 201)


@router.patch("/api/events/{event_id}")
def update_event(
    event_id: str,
    body: Dict[str, Any],
    events: EventService = Depends(get_event_service),
    _admin: Dict[str, Any] = Depends(require_admin),
):
    with store_failure("Failed to update event"):
        event = events.update_event(event_id, body)
    return success_response(event, "Event updated successfully")


@router.delete("/api/events/{event_id}")
def delete_event(
    event_id: str,
    events: EventService = Depends(get_event_service),
    _admin: Dict[str, Any] = Depends(require_admin),
):
    with store_failure("Failed to delete event"):
        events.delete_event(event_id)
    return success_response(None, "Event deleted successfully")


__all__ = ["router"]
