"""Best-per-participant rankings derived from raw score records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Union

from ..core.errors import ValidationError
from ..core.time import isoformat, parse_timestamp
from ..store import SCORES, Document, DocumentStore
from .validation import coerce_number

Number = Union[int, float]

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100

_LATEST = datetime.max.replace(tzinfo=timezone.utc)


@dataclass
class BestScore:
    """Running best for one participant while folding their records."""

    participant_id: str
    player_name: Optional[str]
    best_value: Number
    submitted_at: Optional[datetime]


@dataclass(frozen=True)
class RankingEntry:
    participant_id: str
    player_name: Optional[str]
    best_value: Number
    submitted_at: Optional[datetime]
    rank: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "participantId": self.participant_id,
            "playerName": self.player_name,
            "bestValue": self.best_value,
            "submittedAt": isoformat(self.submitted_at) if self.submitted_at else None,
            "rank": self.rank,
        }


def record_value(record: Document) -> Optional[Number]:
    raw = record.get("value")
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return raw if coerce_number(raw) is not None else None
    return coerce_number(raw)


def best_per_participant(records: Iterable[Document]) -> Dict[str, BestScore]:
    """Reduce records to each participant's minimum value.

    ``submitted_at`` is the earliest submission among the records that reach
    the minimum. Records without a participant or a numeric value are skipped.
    """

    best: Dict[str, BestScore] = {}
    for record in records:
        participant_id = record.get("participantId")
        value = record_value(record)
        if not participant_id or value is None:
            continue
        submitted_at = parse_timestamp(record.get("submittedAt"))
        current = best.get(participant_id)
        if current is None or value < current.best_value:
            best[participant_id] = BestScore(
                participant_id=participant_id,
                player_name=record.get("playerName"),
                best_value=value,
                submitted_at=submitted_at,
            )
        elif value == current.best_value and _earlier(submitted_at, current.submitted_at):
            current.submitted_at = submitted_at
            current.player_name = record.get("playerName") or current.player_name
    return best


def _earlier(candidate: Optional[datetime], current: Optional[datetime]) -> bool:
    return (candidate or _LATEST) < (current or _LATEST)


def rank_best_scores(best: Iterable[BestScore]) -> List[RankingEntry]:
    """Order ascending by value, then earliest submission, then participant id."""

    ordered = sorted(
        best,
        key=lambda item: (
            item.best_value,
            item.submitted_at or _LATEST,
            item.participant_id,
        ),
    )
    return [
        RankingEntry(
            participant_id=item.participant_id,
            player_name=item.player_name,
            best_value=item.best_value,
            submitted_at=item.submitted_at,
            rank=position,
        )
        for position, item in enumerate(ordered, start=1)
    ]


def clamp_page_size(limit: int) -> int:
    return max(MIN_PAGE_SIZE, min(MAX_PAGE_SIZE, limit))


class RankingEngine:
    """Read-only ranking of an event's score records (lower value is better)."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    def get_rankings(self, event_id: Optional[str], limit: int, offset: int) -> Dict[str, Any]:
        """Return ``{"rankings": [RankingEntry], "total": int}`` for one page.

        ``total`` counts distinct participants before slicing, so it does not
        depend on ``limit`` or ``offset``.
        """

        event_id = (event_id or "").strip()
        if not event_id:
            raise ValidationError("eventId is required")
        limit = clamp_page_size(limit)
        offset = max(0, offset)

        records = self._store.query(SCORES, {"eventId": event_id})
        ranked = rank_best_scores(best_per_participant(records).values())
        return {
            "rankings": ranked[offset : offset + limit],
            "total": len(ranked),
        }


__all__ = [
    "BestScore",
    "MAX_PAGE_SIZE",
    "RankingEngine",
    "RankingEntry",
    "best_per_participant",
    "clamp_page_size",
    "rank_best_scores",
    "record_value",
]
