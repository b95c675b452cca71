"""Leaderboard endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from ...core import NotFoundError, store_failure
from ...core.responses import error_response, success_response
from ...services import LeaderboardUpdater
from ...services.validation import parse_int
from ..deps import get_leaderboard, require_admin

router = APIRouter(tags=["leaderboard"])


@router.get("/api/leaderboard")
def list_leaderboard(
    game_id: Optional[str] = Query(None, alias="gameId"),
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    leaderboard: LeaderboardUpdater = Depends(get_leaderboard),
):
    """Persisted leaderboard entries, best first within each game."""

    limit_value = parse_int(limit, 100)
    offset_value = parse_int(offset, 0)
    with store_failure("Failed to fetch leaderboard"):
        result = leaderboard.list_leaderboard(game_id, limit_value, offset_value)
    return success_response(
        {
            "leaderboard": result["leaderboard"],
            "total": result["total"],
            "limit": limit_value,
            "offset": offset_value,
        }
    )


@router.post("/api/leaderboard/update")
def update_leaderboard(
    body: Dict[str, Any], leaderboard: LeaderboardUpdater = Depends(get_leaderboard)
):
    """Recompute a game's leaderboard from its scores."""

    result = leaderboard.update_leaderboard(body.get("gameId"))
    if not result.success:
        return error_response(result.message or "Failed to update leaderboard", 500)
    payload = result.to_dict()
    payload.pop("success")
    return success_response(
        payload, f"Leaderboard updated: {result.entries_updated} entries"
    )


@router.get("/api/leaderboard/status")
def leaderboard_status(
    game_id: Optional[str] = Query(None, alias="gameId"),
    leaderboard: LeaderboardUpdater = Depends(get_leaderboard),
):
    """Whether a game has any leaderboard entries yet."""

    with store_failure("Failed to check leaderboard status"):
        status = leaderboard.check_leaderboard_status(game_id)
    return success_response(status)


@router.delete("/api/leaderboard/{entry_id}")
def delete_leaderboard_entry(
    entry_id: str,
    leaderboard: LeaderboardUpdater = Depends(get_leaderboard),
    _admin: Dict[str, Any] = Depends(require_admin),
):
    try:
        with store_failure("Failed to delete leaderboard entry"):
            leaderboard.delete_entry(entry_id)
    except NotFoundError as exc:
        raise NotFoundError("Leaderboard entry not found") from exc
    return success_response(None, "Leaderboard entry deleted successfully")


__all__ = ["router"]
