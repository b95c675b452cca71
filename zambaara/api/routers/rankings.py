"""Event rankings endpoint."""

from __future__ import annotations

import math
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...core import store_failure
from ...core.responses import success_response
from ...services import RankingEngine
from ...services.rankings import clamp_page_size
from ...services.validation import parse_int
from ...store import EVENTS, DocumentStore
from ..deps import get_ranking_engine, get_store

router = APIRouter(tags=["rankings"])

DEFAULT_PAGE_SIZE = 20


@router.get("/api/rankings")
def get_rankings(
    event_id: Optional[str] = Query(None, alias="eventId"),
    page: Optional[str] = None,
    page_size: Optional[str] = Query(None, alias="pageSize"),
    engine: RankingEngine = Depends(get_ranking_engine),
    store: DocumentStore = Depends(get_store),
):
    """Best time per participant for an event, lowest first."""

    page_number = max(1, parse_int(page, 1))
    size = clamp_page_size(parse_int(page_size, DEFAULT_PAGE_SIZE))

    with store_failure("Failed to fetch rankings"):
        result = engine.get_rankings(event_id, size, (page_number - 1) * size)
        event = store.get(EVENTS, (event_id or "").strip())

    return success_response(
        {
            "rankings": [entry.to_dict() for entry in result["rankings"]],
            "total": result["total"],
            "event": event,
            "page": page_number,
            "pageSize": size,
            "totalPages": math.ceil(result["total"] / size),
        }
    )


__all__ = ["router"]
