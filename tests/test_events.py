"""Tests for event management."""

import pytest

from zambaara.core import NotFoundError, ValidationError
from zambaara.services import EventService
from zambaara.store import EVENTS


@pytest.fixture()
def events(store):
    return EventService(store)


def test_create_with_defaults(events, store):
    event = events.create_event(
        {"name": " Spring Cup ", "startDate": "2026-04-01T10:00:00Z", "location": "Hall A"}
    )

    stored = store.get(EVENTS, event["id"])
    assert stored["name"] == "Spring Cup"
    assert stored["status"] == "upcoming"
    assert stored["startDate"] == "2026-04-01T10:00:00Z"
    assert stored["location"] == "Hall A"


@pytest.mark.parametrize(
    "payload, error",
    [
        ({"startDate": "2026-04-01"}, "Name is required"),
        ({"name": "Cup"}, "Start Date is required"),
        ({"name": "Cup", "startDate": "someday"}, "Invalid start date format"),
        (
            {"name": "Cup", "startDate": "2026-04-02", "endDate": "2026-04-01"},
            "End date must be after start date",
        ),
        (
            {"name": "Cup", "startDate": "2026-04-01", "status": "postponed"},
            "Status must be one of: upcoming, ongoing, completed, cancelled",
        ),
        (
            {"name": "Cup", "startDate": "2026-04-01", "maxParticipants": 0},
            "Max participants must be at least 1",
        ),
    ],
)
def test_create_rejected(events, payload, error):
    with pytest.raises(ValidationError) as exc:
        events.create_event(payload)
    assert exc.value.message == error


def test_update_checks_dates_against_stored_start(events):
    event = events.create_event({"name": "Cup", "startDate": "2026-04-10"})

    with pytest.raises(ValidationError):
        events.update_event(event["id"], {"endDate": "2026-04-01"})

    updated = events.update_event(event["id"], {"endDate": "2026-04-12", "status": "ongoing"})
    assert updated["endDate"] == "2026-04-12T00:00:00Z"
    assert updated["status"] == "ongoing"


def test_listing_is_soonest_first(events):
    events.create_event({"name": "Late", "startDate": "2026-09-01"})
    events.create_event({"name": "Early", "startDate": "2026-03-01", "status": "ongoing"})

    assert [e["name"] for e in events.list_events()["events"]] == ["Early", "Late"]
    assert events.list_events(status="ongoing")["total"] == 1


def test_get_and_delete(events):
    event = events.create_event({"name": "Cup", "startDate": "2026-04-01"})

    assert events.get_event(event["id"])["name"] == "Cup"
    events.delete_event(event["id"])
    with pytest.raises(NotFoundError):
        events.get_event(event["id"])
    with pytest.raises(NotFoundError):
        events.delete_event(event["id"])
