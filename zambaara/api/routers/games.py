"""Game endpoints."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from ...core import store_failure
from ...core.responses import success_response
from ...services import GameService
from ...services.validation import parse_int
from ..deps import get_game_service, require_admin

router = APIRouter(tags=["games"])


@router.get("/api/games")
def list_games(
    status: Optional[str] = None,
    difficulty: Optional[str] = None,
    event_id: Optional[str] = Query(None, alias="eventId"),
    host_id: Optional[str] = Query(None, alias="hostId"),
    limit: Optional[str] = None,
    offset: Optional[str] = None,
    games: GameService = Depends(get_game_service),
):
    limit_value = parse_int(limit, 50)
    offset_value = parse_int(offset, 0)
    with store_failure("Failed to fetch games"):
        result = games.list_games(
            status=status or None,
            difficulty=difficulty or None,
            event_id=event_id or None,
            host_id=host_id or None,
            limit=limit_value,
            offset=offset_value,
        )
    return success_response(
        {
            "games": result["games"],
            "total": result["total"],
            "limit": limit_value,
            "offset": offset_value,
        }
    )


@router.get("/api/games/{game_id}")
def get_game(game_id: str, games: GameService = Depends(get_game_service)):
    with store_failure("Failed to fetch game"):
        game = games.get_game(game_id)
    return success_response(game)


@router.post("/api/games")
def create_game(
    body: Dict[str, Any],
    games: GameService = Depends(get_game_service),
    _admin: Dict[str, Any] = Depends(require_admin),
):
    with store_failure("Failed to create game"):
        game = games.create_game(body)
    return success_response(game, "Game created successfully", 201)


@router.patch("/api/games/{game_id}")
def update_game(
    game_id: str,
    body: Dict[str, Any],
    games: GameService = Depends(get_game_service),
    _admin: Dict[str, Any] = Depends(require_admin),
):
    """Edit a game, or complete it when the body names a ``winner``."""

    if "winner" in body:
        with store_failure("Failed to complete game"):
            game = games.complete_game(game_id, body["winner"])
        return success_response(game, "Game completed successfully")

    with store_failure("Failed to update game"):
        game = games.update_game(game_id, body)
    return success_response(game, "Game updated successfully")


@router.delete("/api/games/{game_id}")
def delete_game(
    game_id: str,
    games: GameService = Depends(get_game_service),
    _admin: Dict[str, Any] = Depends(require_admin),
):
    with store_failure("Failed to delete game"):
        removed = games.delete_game(game_id)
    return success_response(removed, "Game deleted successfully")


__all__ = ["router"]
