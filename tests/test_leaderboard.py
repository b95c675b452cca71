"""Tests for leaderboard recomputation, status and listing."""

from datetime import datetime, timezone

import pytest

from zambaara.core import NotFoundError, ValidationError
from zambaara.services import LeaderboardUpdater
from zambaara.services.leaderboard import leaderboard_doc_id
from zambaara.store import LEADERBOARD, SCORES

FIXED_NOW = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture()
def updater(store):
    return LeaderboardUpdater(store, clock=lambda: FIXED_NOW)


def test_no_scores_is_a_successful_noop(store, updater):
    result = updater.update_leaderboard("G1")

    assert result.success is True
    assert result.entries_updated == 0
    assert result.total_entries == 0
    assert store.query(LEADERBOARD) == []


def test_first_run_writes_one_entry_per_participant(store, updater, add_score):
    add_score(store, "p1", 120)
    add_score(store, "p1", 110)
    add_score(store, "p2", 115)

    result = updater.update_leaderboard("G1")

    assert (result.entries_updated, result.total_entries) == (2, 2)
    entry = store.get(LEADERBOARD, leaderboard_doc_id("G1", "p1"))
    assert entry["bestValue"] == 110
    assert entry["gameId"] == "G1"
    assert entry["updatedAt"] == "2026-03-01T09:30:00Z"


def test_second_run_writes_nothing(store, updater, add_score):
    add_score(store, "p1", 120)
    add_score(store, "p2", 115)
    updater.update_leaderboard("G1")

    result = updater.update_leaderboard("G1")

    assert result.success is True
    assert result.entries_updated == 0
    assert result.total_entries == 2
    assert len(store.query(LEADERBOARD, {"gameId": "G1"})) == 2


def test_only_improved_participants_are_rewritten(store, updater, add_score):
    add_score(store, "p1", 120)
    add_score(store, "p2", 115)
    updater.update_leaderboard("G1")

    add_score(store, "p1", 100)
    add_score(store, "p2", 130)
    result = updater.update_leaderboard("G1")

    assert result.entries_updated == 1
    assert store.get(LEADERBOARD, leaderboard_doc_id("G1", "p1"))["bestValue"] == 100
    assert store.get(LEADERBOARD, leaderboard_doc_id("G1", "p2"))["bestValue"] == 115


def test_rewrite_keeps_created_at(store, add_score):
    times = iter([FIXED_NOW, FIXED_NOW.replace(hour=11)])
    updater = LeaderboardUpdater(store, clock=lambda: next(times))
    add_score(store, "p1", 120)
    updater.update_leaderboard("G1")
    add_score(store, "p1", 90)
    updater.update_leaderboard("G1")

    entry = store.get(LEADERBOARD, leaderboard_doc_id("G1", "p1"))
    assert entry["createdAt"] == "2026-03-01T09:30:00Z"
    assert entry["updatedAt"] == "2026-03-01T11:30:00Z"


def test_games_are_kept_apart(store, updater, add_score):
    add_score(store, "p1", 50, game_id="G2")
    add_score(store, "p1", 70, game_id="G1")

    updater.update_leaderboard("G1")

    assert [doc["id"] for doc in store.query(LEADERBOARD)] == ["G1.p1"]


def test_orphaned_entries_are_removed(store, updater, add_score):
    add_score(store, "p1", 100)
    doomed = add_score(store, "p2", 110)
    updater.update_leaderboard("G1")
    store.delete(SCORES, doomed)

    result = updater.update_leaderboard("G1")

    assert result.entries_removed == 1
    assert store.get(LEADERBOARD, leaderboard_doc_id("G1", "p2")) is None


def test_doc_id_escapes_everything_but_alphanumerics():
    assert leaderboard_doc_id("game-1", "Ana Lee_555") == "game_2d_1.Ana_20_Lee_5f_555"


@pytest.mark.parametrize(
    "first, second",
    [
        (("G1", "p.1"), ("G1", "p_1")),
        (("a_b", "c"), ("a", "b_c")),
        (("G1", "John Doe"), ("G1", "John_Doe")),
    ],
)
def test_doc_ids_never_collide(first, second):
    assert leaderboard_doc_id(*first) != leaderboard_doc_id(*second)


def test_lookalike_participants_keep_separate_entries(store, updater, add_score):
    add_score(store, "p.1", 10)
    add_score(store, "p_1", 20)

    first = updater.update_leaderboard("G1")
    second = updater.update_leaderboard("G1")

    assert first.entries_updated == 2
    assert second.entries_updated == 0
    assert second.entries_removed == 0
    entries = sorted(
        (e["participantId"], e["bestValue"]) for e in store.query(LEADERBOARD, {"gameId": "G1"})
    )
    assert entries == [("p.1", 10), ("p_1", 20)]


def test_blank_game_id_rejected(updater):
    with pytest.raises(ValidationError):
        updater.update_leaderboard("  ")
    with pytest.raises(ValidationError):
        updater.update_leaderboard(None)


def test_store_failure_mid_batch_is_reported(failing_store, add_score):
    for name, value in (("p1", 100), ("p2", 110), ("p3", 120)):
        add_score(failing_store, name, value)
    failing_store.creates_before_failure = 1
    updater = LeaderboardUpdater(failing_store, clock=lambda: FIXED_NOW)

    result = updater.update_leaderboard("G1")

    assert result.success is False
    assert result.message == "Failed to update leaderboard"
    assert result.entries_updated == 1
    # Writes before the failure stay in place.
    assert len(failing_store.query(LEADERBOARD)) == 1
    assert result.to_dict()["message"] == "Failed to update leaderboard"


def test_failing_query_is_reported(failing_store):
    failing_store.fail_on.add("query")

    result = LeaderboardUpdater(failing_store).update_leaderboard("G1")

    assert result.success is False
    assert result.entries_updated == 0


class TestStatus:
    def test_nothing_persisted_yet(self, store, updater, add_score):
        add_score(store, "p1", 100)

        status = updater.check_leaderboard_status("G1")

        assert status == {"hasEntries": False, "entryCount": 0, "lastUpdated": None}

    def test_counts_persisted_entries(self, store, updater, add_score):
        add_score(store, "p1", 100)
        add_score(store, "p2", 105)
        updater.update_leaderboard("G1")

        status = updater.check_leaderboard_status("G1")

        assert status == {
            "hasEntries": True,
            "entryCount": 2,
            "lastUpdated": "2026-03-01T09:30:00Z",
        }

    def test_status_does_not_write(self, store, updater, add_score):
        add_score(store, "p1", 100)
        updater.check_leaderboard_status("G1")
        assert store.query(LEADERBOARD) == []


class TestListing:
    def test_ranked_within_each_game(self, store, updater, add_score):
        add_score(store, "p1", 120, game_id="G1")
        add_score(store, "p2", 100, game_id="G1")
        add_score(store, "p3", 90, game_id="G2")
        updater.update_leaderboard("G1")
        updater.update_leaderboard("G2")

        listing = updater.list_leaderboard()

        assert [(e["gameId"], e["participantId"], e["rank"]) for e in listing["leaderboard"]] == [
            ("G1", "p2", 1),
            ("G1", "p1", 2),
            ("G2", "p3", 1),
        ]
        assert listing["total"] == 3

    def test_filter_by_game(self, store, updater, add_score):
        add_score(store, "p1", 120, game_id="G1")
        add_score(store, "p3", 90, game_id="G2")
        updater.update_leaderboard("G1")
        updater.update_leaderboard("G2")

        listing = updater.list_leaderboard("G2")

        assert [e["participantId"] for e in listing["leaderboard"]] == ["p3"]

    def test_delete_entry(self, store, updater, add_score):
        add_score(store, "p1", 120)
        updater.update_leaderboard("G1")

        updater.delete_entry("G1.p1")

        assert store.query(LEADERBOARD) == []
        with pytest.raises(NotFoundError):
            updater.delete_entry("G1.p1")
