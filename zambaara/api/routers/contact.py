"""Contact form endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from ...core import NotFoundError, store_failure
from ...core.responses import success_response
from ...services import ContactService
from ...services.validation import parse_bool, parse_int
from ..deps import get_contact_service, require_admin

router = APIRouter(tags=["contact"])


@router.post("/api/contact")
def submit_contact(body: Dict[str, Any], contact: ContactService = Depends(get_contact_service)):
    with store_failure("Failed to submit contact form"):
        message = contact.create_message(body)
    return success_response(message, "Message sent successfully", 201)


@router.get("/api/contact")
def list_contact_messages(
    read: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    contact: ContactService = Depends(get_contact_service),
    _admin: Dict[str, Any] = Depends(require_admin),
):
    limit_value = parse_int(limit, 50)
    offset_value = parse_int(offset, 0)
    with store_failure("Failed to fetch contact messages"):
        result = contact.list_messages(parse_bool(read), limit_value, offset_value)
    return success_response(
        {
            "messages": result["messages"],
            "total": result["total"],
            "limit": limit_value,
            "offset": offset_value,
        }
    )


@router.patch("/api/contact/{message_id}")
def update_contact_message(
    message_id: str,
    body: Dict[str, Any],
    contact: ContactService = Depends(get_contact_service),
    _admin: Dict[str, Any] = Depends(require_admin),
):
    """Mark a message as read or unread."""

    try:
        with store_failure("Failed to update contact message"):
            message = contact.update_message(message_id, body)
    except NotFoundError as exc:
        raise NotFoundError("Contact message not found") from exc
    return success_response(message, "Contact message updated successfully")


@router.delete("/api/contact/{message_id}")
def delete_contact_message(
    message_id: str,
    contact: ContactService = Depends(get_contact_service),
    _admin: Dict[str, Any] = Depends(require_admin),
):
    try:
        with store_failure("Failed to delete contact message"):
            contact.delete_message(message_id)
    except NotFoundError as exc:
        raise NotFoundError("Contact message not found") from exc
    return success_response(None, "Contact message deleted successfully")


__all__ = ["router"]
