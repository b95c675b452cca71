"""Score submission and listing."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Optional

from ..core.errors import ValidationError
from ..core.logging_config import get_logger
from ..core.time import isoformat, parse_timestamp, utcnow
from ..store import SCORES, DocumentStore
from .leaderboard import LeaderboardUpdater
from .rankings import record_value
from .validation import coerce_number, validate_number, validate_required

logger = get_logger(__name__)

_SORTABLE_FIELDS = {"value", "submittedAt", "playerName"}


def participant_id_for(payload: Mapping[str, Any]) -> str:
    explicit = payload.get("participantId") or payload.get("playerId")
    if isinstance(explicit, str) and explicit.strip():
        return explicit.strip()
    mobile = payload.get("playerMobile")
    mobile = mobile.strip() if isinstance(mobile, str) and mobile.strip() else "unknown"
    return f"{str(payload.get('playerName')).strip()}_{mobile}"


def _sort_value(score: Dict[str, Any], field: str) -> Any:
    if field == "value":
        return record_value(score)
    if field == "submittedAt":
        return parse_timestamp(score.get("submittedAt"))
    value = score.get(field)
    return str(value) if value is not None else None


class ScoreService:
    def __init__(
        self,
        store: DocumentStore,
        leaderboard: LeaderboardUpdater,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._store = store
        self._leaderboard = leaderboard
        self._clock = clock

    def list_scores(
        self,
        player_name: Optional[str] = None,
        game_id: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
        order_by: str = "value",
        order: str = "asc",
    ) -> Dict[str, Any]:
        filters: Dict[str, Any] = {}
        if player_name:
            filters["playerName"] = player_name
        if game_id:
            filters["gameId"] = game_id
        if order_by not in _SORTABLE_FIELDS:
            raise ValidationError(f"Cannot order scores by {order_by}")

        scores = self._store.query(SCORES, filters)
        keyed = [(_sort_value(score, order_by), score) for score in scores]
        present = [pair for pair in keyed if pair[0] is not None]
        present.sort(key=lambda pair: pair[0], reverse=order == "desc")
        # Scores missing the field always sort last, whatever the direction.
        ordered = [score for _, score in present] + [
            score for value, score in keyed if value is None
        ]

        offset = max(0, offset)
        limit = max(1, limit)
        return {"scores": ordered[offset : offset + limit], "total": len(ordered)}

    def create_score(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        for field, label in (
            ("playerName", "Player Name"),
            ("gameId", "Game ID"),
            ("eventId", "Event ID"),
        ):
            error = validate_required(payload.get(field), label)
            if error:
                raise ValidationError(error)
            if not isinstance(payload.get(field), str):
                raise ValidationError(f"{label} must be a string")
        error = validate_number(payload.get("value"), 0, None, "Value")
        if error:
            raise ValidationError(error)

        raw_value = payload.get("value")
        value = raw_value if isinstance(raw_value, (int, float)) else coerce_number(raw_value)
        record: Dict[str, Any] = {
            "participantId": participant_id_for(payload),
            "playerName": payload["playerName"].strip(),
            "gameId": payload["gameId"].strip(),
            "eventId": payload["eventId"].strip(),
            "value": value,
            "submittedAt": isoformat(self._clock()),
        }
        mobile = payload.get("playerMobile")
        if isinstance(mobile, str) and mobile.strip():
            record["playerMobile"] = mobile.strip()

        score_id = self._store.create(SCORES, record)
        logger.info(
            "score_created",
            score_id=score_id,
            game_id=record["gameId"],
            participant_id=record["participantId"],
        )

        # A failed recomputation must not fail the submission itself.
        result = self._leaderboard.update_leaderboard(record["gameId"])
        if not result.success:
            logger.warning("score_leaderboard_refresh_failed", game_id=record["gameId"])

        return {**record, "id": score_id}

    def delete_score(self, score_id: str) -> None:
        self._store.delete(SCORES, score_id)
        logger.info("score_deleted", score_id=score_id)


__all__ = ["ScoreService", "participant_id_for"]
