"""Persisted per-game leaderboard, recomputed from score records."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from ..core.errors import NotFoundError, StoreError, ValidationError
from ..core.logging_config import get_logger
from ..core.time import isoformat, parse_timestamp, utcnow
from ..store import LEADERBOARD, SCORES, Document, DocumentStore
from .rankings import best_per_participant, clamp_page_size, record_value

logger = get_logger(__name__)

_ESCAPED = re.compile(r"[^A-Za-z0-9]")


def _escape_id_part(part: str) -> str:
    return _ESCAPED.sub(lambda match: f"_{ord(match.group()):x}_", part)


def leaderboard_doc_id(game_id: str, participant_id: str) -> str:
    """Stable, URL-safe document id; one leaderboard entry per (game, participant).

    Every character outside ``[A-Za-z0-9]`` is written as ``_<hex>_`` so two
    different pairs never share an id, and ``.`` joins the two parts.
    """

    return f"{_escape_id_part(game_id)}.{_escape_id_part(participant_id)}"


@dataclass
class LeaderboardUpdateResult:
    success: bool
    game_id: str
    entries_updated: int = 0
    total_entries: int = 0
    entries_removed: int = 0
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "success": self.success,
            "gameId": self.game_id,
            "entriesUpdated": self.entries_updated,
            "totalEntries": self.total_entries,
            "entriesRemoved": self.entries_removed,
        }
        if self.message:
            payload["message"] = self.message
        return payload


def _require_game_id(game_id: Optional[str]) -> str:
    game_id = (game_id or "").strip() if isinstance(game_id, str) else ""
    if not game_id:
        raise ValidationError("Game ID is required")
    return game_id


class LeaderboardUpdater:
    """Owns the ``leaderboard`` collection.

    Recomputation is idempotent: it only writes entries whose best value
    changed, so replaying it over unchanged scores writes nothing. It is not
    transactional; a store failure part-way leaves earlier writes in place.
    """

    def __init__(
        self, store: DocumentStore, clock: Callable[[], datetime] = utcnow
    ) -> None:
        self._store = store
        self._clock = clock

    def update_leaderboard(self, game_id: Optional[str]) -> LeaderboardUpdateResult:
        game_id = _require_game_id(game_id)
        result = LeaderboardUpdateResult(success=True, game_id=game_id)
        try:
            records = self._store.query(SCORES, {"gameId": game_id})
            best = best_per_participant(records)
            result.total_entries = len(best)

            existing = {
                doc["id"]: doc for doc in self._store.query(LEADERBOARD, {"gameId": game_id})
            }
            now = isoformat(self._clock())
            wanted = set()

            for participant_id in sorted(best):
                item = best[participant_id]
                doc_id = leaderboard_doc_id(game_id, participant_id)
                wanted.add(doc_id)
                current = existing.get(doc_id)
                if current is not None and current.get("bestValue") == item.best_value:
                    continue
                self._store.create(
                    LEADERBOARD,
                    {
                        "gameId": game_id,
                        "participantId": participant_id,
                        "playerName": item.player_name,
                        "bestValue": item.best_value,
                        "createdAt": (current or {}).get("createdAt") or now,
                        "updatedAt": now,
                    },
                    doc_id=doc_id,
                )
                result.entries_updated += 1

            for doc_id in sorted(set(existing) - wanted):
                try:
                    self._store.delete(LEADERBOARD, doc_id)
                except NotFoundError:
                    # Removed by a concurrent recomputation.
                    continue
                result.entries_removed += 1
        except StoreError as exc:
            logger.error(
                "leaderboard_update_failed",
                game_id=game_id,
                entries_written=result.entries_updated,
                error=exc.detail,
            )
            result.success = False
            result.message = "Failed to update leaderboard"
            return result

        logger.info(
            "leaderboard_updated",
            game_id=game_id,
            entries_updated=result.entries_updated,
            total_entries=result.total_entries,
            entries_removed=result.entries_removed,
        )
        return result

    def check_leaderboard_status(self, game_id: Optional[str]) -> Dict[str, Any]:
        """Count persisted entries for a game without recomputing anything."""

        game_id = _require_game_id(game_id)
        entries = self._store.query(LEADERBOARD, {"gameId": game_id})
        stamps = [
            stamp
            for stamp in (
                parse_timestamp(entry.get("updatedAt") or entry.get("createdAt"))
                for entry in entries
            )
            if stamp is not None
        ]
        return {
            "hasEntries": bool(entries),
            "entryCount": len(entries),
            "lastUpdated": isoformat(max(stamps)) if stamps else None,
        }

    def list_leaderboard(
        self, game_id: Optional[str] = None, limit: int = 100, offset: int = 0
    ) -> Dict[str, Any]:
        filters = {"gameId": game_id.strip()} if game_id and game_id.strip() else None
        entries = self._store.query(LEADERBOARD, filters)

        by_game: Dict[str, List[tuple]] = {}
        for entry in entries:
            value = record_value({"value": entry.get("bestValue")})
            if value is None:
                continue
            sort_key = (value, str(entry.get("participantId") or ""))
            by_game.setdefault(str(entry.get("gameId") or ""), []).append((sort_key, entry))

        listing: List[Document] = []
        for game in sorted(by_game):
            ranked = [entry for _, entry in sorted(by_game[game], key=lambda pair: pair[0])]
            for position, entry in enumerate(ranked, start=1):
                listing.append({**entry, "rank": position})

        offset = max(0, offset)
        limit = clamp_page_size(limit)
        return {"leaderboard": listing[offset : offset + limit], "total": len(listing)}

    def delete_entry(self, entry_id: str) -> None:
        self._store.delete(LEADERBOARD, entry_id)
        logger.info("leaderboard_entry_deleted", entry_id=entry_id)


__all__ = ["LeaderboardUpdateResult", "LeaderboardUpdater", "leaderboard_doc_id"]
