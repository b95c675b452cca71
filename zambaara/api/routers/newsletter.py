"""Newsletter endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from ...core import NotFoundError, store_failure
from ...core.responses import success_response
from ...services import NewsletterService
from ...services.validation import parse_bool, parse_int
from ..deps import get_newsletter_service, require_admin

router = APIRouter(tags=["newsletter"])


@router.post("/api/newsletter")
def subscribe(
    body: Dict[str, Any], newsletter: NewsletterService = Depends(get_newsletter_service)
):
    with store_failure("Failed to subscribe to newsletter"):
        subscriber = newsletter.subscribe(body.get("email"))
    return success_response(subscriber, "Successfully subscribed to newsletter", 201)


@router.delete("/api/newsletter")
def unsubscribe(
    email: Optional[str] = None,
    newsletter: NewsletterService = Depends(get_newsletter_service),
):
    with store_failure("Failed to unsubscribe from newsletter"):
        newsletter.unsubscribe(email)
    return success_response(None, "Successfully unsubscribed from newsletter")


@router.get("/api/newsletter")
def list_subscribers(
    subscribed: Optional[str] = None,
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    newsletter: NewsletterService = Depends(get_newsletter_service),
    _admin: Dict[str, Any] = Depends(require_admin),
):
    limit_value = parse_int(limit, 100)
    offset_value = parse_int(offset, 0)
    with store_failure("Failed to fetch newsletter subscribers"):
        result = newsletter.list_subscribers(
            parse_bool(subscribed), limit_value, offset_value
        )
    return success_response(
        {
            "subscribers": result["subscribers"],
            "total": result["total"],
            "limit": limit_value,
            "offset": offset_value,
        }
    )


@router.delete("/api/newsletter/{subscriber_id}")
def delete_subscriber(
    subscriber_id: str,
    newsletter: NewsletterService = Depends(get_newsletter_service),
    _admin: Dict[str, Any] = Depends(require_admin),
):
    try:
        with store_failure("Failed to delete newsletter subscriber"):
            newsletter.delete_subscriber(subscriber_id)
    except NotFoundError as exc:
        raise NotFoundError("Newsletter subscriber not found") from exc
    return success_response(None, "Newsletter subscriber deleted successfully")


__all__ = ["router"]
