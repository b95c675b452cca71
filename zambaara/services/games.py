"""Hosted games: creation, completion into a score, cascade deletion."""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..core.errors import NotFoundError, StoreError, ValidationError
from ..core.logging_config import get_logger
from ..core.time import isoformat, parse_timestamp, utcnow
from ..store import GAMES, LEADERBOARD, SCORES, Document, DocumentStore
from .contact import newest_first
from .scores import ScoreService, participant_id_for
from .validation import optional_text, validate_required

logger = get_logger(__name__)

RUNNING = "running"
COMPLETED = "completed"
GAME_STATUSES = (RUNNING, COMPLETED)
DIFFICULTIES = ("easy", "medium", "hard")
DEFAULT_DIFFICULTY = "medium"
MIN_PLAYERS = 3
MAX_PLAYERS = 6

_MOBILE_RE = re.compile(r"^[0-9]{10,15}$")


def _validate_difficulty(value: Any) -> str:
    if value not in DIFFICULTIES:
        raise ValidationError("Difficulty must be one of: easy, medium, hard")
    return value


def validate_players(players: Any) -> List[Dict[str, str]]:
    """Normalise the roster to ``[{"name", "mobile"}]``.

    A bare string is accepted as a name with no mobile number.
    """

    if not isinstance(players, list):
        raise ValidationError("Players must be an array")
    if not MIN_PLAYERS <= len(players) <= MAX_PLAYERS:
        raise ValidationError(f"Players must be between {MIN_PLAYERS} and {MAX_PLAYERS}")

    roster = []
    for position, player in enumerate(players, start=1):
        if isinstance(player, str):
            if not player.strip():
                raise ValidationError(f"Player {position} name is required")
            roster.append({"name": player.strip(), "mobile": ""})
            continue
        if not isinstance(player, dict):
            raise ValidationError(
                f"Player {position} must be an object with name and mobile"
            )
        name, mobile = player.get("name"), player.get("mobile")
        if not isinstance(name, str) or not name.strip():
            raise ValidationError(f"Player {position} name is required")
        if not isinstance(mobile, str) or not mobile.strip():
            raise ValidationError(f"Player {position} mobile number is required")
        if not _MOBILE_RE.match(mobile.strip()):
            raise ValidationError(f"Player {position} mobile number must be 10-15 digits")
        roster.append({"name": name.strip(), "mobile": mobile.strip()})
    return roster


def player_key(player: Mapping[str, str]) -> str:
    """Winner id of a roster entry: ``name_mobile``, or the name alone."""

    return f"{player['name']}_{player['mobile']}" if player.get("mobile") else player["name"]


def _resolve_winner(game: Document, winner: str) -> Tuple[str, str]:
    for player in game.get("players") or []:
        if not isinstance(player, dict) or not player.get("name"):
            continue
        if winner in (player_key(player), player["name"]):
            return player["name"], player.get("mobile") or ""
    raise ValidationError("Winner must be one of the game's players")


class GameService:
    def __init__(
        self,
        store: DocumentStore,
        scores: ScoreService,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._store = store
        self._scores = scores
        self._clock = clock

    def get_game(self, game_id: str) -> Document:
        game = self._store.get(GAMES, game_id)
        if game is None:
            raise NotFoundError("Game not found")
        return game

    def list_games(
        self,
        status: Optional[str] = None,
        difficulty: Optional[str] = None,
        event_id: Optional[str] = None,
        host_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Dict[str, Any]:
        filters = {
            field: value
            for field, value in (
                ("status", status),
                ("difficulty", difficulty),
                ("eventId", event_id),
                ("hostId", host_id),
            )
            if value
        }
        games = newest_first(self._store.query(GAMES, filters))
        offset = max(0, offset)
        limit = max(1, limit)
        return {"games": games[offset : offset + limit], "total": len(games)}

    def create_game(self, payload: Mapping[str, Any]) -> Document:
        for field, label in (("eventId", "Event"), ("hostId", "Host")):
            error = validate_required(payload.get(field), label)
            if error:
                raise ValidationError(error)
            if not isinstance(payload.get(field), str):
                raise ValidationError(f"{label} must be a string")

        players = validate_players(payload.get("players"))
        difficulty = payload.get("difficulty")
        difficulty = _validate_difficulty(difficulty) if difficulty else DEFAULT_DIFFICULTY

        now = isoformat(self._clock())
        game: Dict[str, Any] = {
            "eventId": payload["eventId"].strip(),
            "hostId": payload["hostId"].strip(),
            "players": players,
            "difficulty": difficulty,
            "status": RUNNING,
            "startTime": now,
            "createdAt": now,
            "updatedAt": now,
        }
        for field, label in (("name", "Name"), ("description", "Description")):
            value = optional_text(payload, field, label)
            if value:
                game[field] = value

        game_id = self._store.create(GAMES, game)
        logger.info("game_created", game_id=game_id, event_id=game["eventId"])
        return {**game, "id": game_id}

    def update_game(self, game_id: str, payload: Mapping[str, Any]) -> Document:
        patch: Dict[str, Any] = {}
        if payload.get("name") is not None:
            name = optional_text(payload, "name", "Name")
            if not name:
                raise ValidationError("Name is required")
            patch["name"] = name
        if "description" in payload:
            patch["description"] = optional_text(payload, "description", "Description") or ""
        if payload.get("difficulty"):
            patch["difficulty"] = _validate_difficulty(payload["difficulty"])

        self.get_game(game_id)
        patch["updatedAt"] = isoformat(self._clock())
        self._store.update(GAMES, game_id, patch)
        return self.get_game(game_id)

    def complete_game(self, game_id: str, winner: Any) -> Document:
        """Close a running game and record the winner's time as a score.

        The winning time is whole seconds from ``startTime`` to now. The
        score submission refreshes the game's leaderboard; a failure there is
        logged and does not undo the completion.
        """

        if not isinstance(winner, str) or not winner.strip():
            raise ValidationError("Winner is required")
        game = self.get_game(game_id)
        if game.get("status") == COMPLETED:
            raise ValidationError("Game is already completed")
        started = parse_timestamp(game.get("startTime"))
        if started is None:
            raise ValidationError("Game start time not found")

        name, mobile = _resolve_winner(game, winner.strip())
        completed = self._clock()
        winner_time = max(0, math.floor((completed - started).total_seconds()))

        patch: Dict[str, Any] = {
            "status": COMPLETED,
            "winner": name,
            "winnerId": winner.strip(),
            "winnerTime": winner_time,
            "completedAt": isoformat(completed),
            "updatedAt": isoformat(completed),
        }
        if mobile:
            patch["winnerMobile"] = mobile
        self._store.update(GAMES, game_id, patch)
        logger.info("game_completed", game_id=game_id, winner_time=winner_time)

        score = {"playerName": name, "playerMobile": mobile}
        try:
            self._scores.create_score(
                {
                    **score,
                    "participantId": participant_id_for(score),
                    "gameId": game_id,
                    "eventId": game.get("eventId"),
                    "value": winner_time,
                }
            )
        except (StoreError, ValidationError) as exc:
            logger.warning(
                "game_score_not_recorded", game_id=game_id, error=exc.message
            )

        return self.get_game(game_id)

    def delete_game(self, game_id: str) -> Dict[str, int]:
        """Delete a game together with its scores and leaderboard entries."""

        self.get_game(game_id)
        removed = {}
        cascade = ((SCORES, "scoresDeleted"), (LEADERBOARD, "leaderboardEntriesDeleted"))
        for collection, label in cascade:
            count = 0
            for document in self._store.query(collection, {"gameId": game_id}):
                try:
                    self._store.delete(collection, document["id"])
                except NotFoundError:
                    continue
                count += 1
            removed[label] = count
        self._store.delete(GAMES, game_id)
        logger.info(
            "game_deleted",
            game_id=game_id,
            scores_deleted=removed["scoresDeleted"],
            leaderboard_entries_deleted=removed["leaderboardEntriesDeleted"],
        )
        return removed


__all__ = [
    "DIFFICULTIES",
    "GAME_STATUSES",
    "GameService",
    "player_key",
    "validate_players",
]
