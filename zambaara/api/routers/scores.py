"""Score endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from ...core import NotFoundError, store_failure
from ...core.responses import success_response
from ...services import ScoreService
from ...services.validation import parse_int
from ..deps import get_score_service, require_admin

router = APIRouter(tags=["scores"])


@router.get("/api/scores")
def list_scores(
    player_name: Optional[str] = Query(None, alias="playerName"),
    game_id: Optional[str] = Query(None, alias="gameId"),
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    order_by: Optional[str] = Query(None, alias="orderBy"),
    order: Optional[str] = None,
    scores: ScoreService = Depends(get_score_service),
):
    limit_value = parse_int(limit, 50)
    offset_value = parse_int(offset, 0)
    with store_failure("Failed to fetch scores"):
        result = scores.list_scores(
            player_name=player_name or None,
            game_id=game_id or None,
            limit=limit_value,
            offset=offset_value,
            order_by=order_by or "value",
            order="desc" if order == "desc" else "asc",
        )
    return success_response(
        {
            "scores": result["scores"],
            "total": result["total"],
            "limit": limit_value,
            "offset": offset_value,
        }
    )


@router.post("/api/scores")
def submit_score(body: Dict[str, Any], scores: ScoreService = Depends(get_score_service)):
    """Record a score and refresh the game's leaderboard."""

    with store_failure("Failed to submit score"):
        score = scores.create_score(body)
    return success_response(score, "Score submitted successfully", 201)


@router.delete("/api/scores/{score_id}")
def delete_score(
    score_id: str,
    scores: ScoreService = Depends(get_score_service),
    _admin: Dict[str, Any] = Depends(require_admin),
):
    try:
        with store_failure("Failed to delete score"):
            scores.delete_score(score_id)
    except NotFoundError as exc:
        raise NotFoundError("Score not found") from exc
    return success_response(None, "Score deleted successfully")


__all__ = ["router"]
