"""Tests for the browsing state engine."""

from __future__ import annotations

import threading

import pytest

from careerdeck.exceptions import CompareFullError, PersistenceError
from careerdeck.state.engine import BrowsingState
from careerdeck.storage.memory_store import MemoryStore
from careerdeck.storage.sqlite_store import SqliteStore


class _RecordingStore(MemoryStore):
    def __init__(self) -> None:
        super().__init__()
        self.writes: list[tuple[str, object]] = []

    def set(self, key, value):
        self.writes.append((key, value))
        super().set(key, value)


class _BrokenStore(MemoryStore):
    def __init__(self) -> None:
        super().__init__()
        self.attempts = 0

    def get(self, key):
        raise PersistenceError("disk on fire")

    def set(self, key, value):
        self.attempts += 1
        raise PersistenceError("quota exceeded")


# ---- favorites ----


def test_toggle_favorite_pairs_cancel(store):
    state = BrowsingState(store)
    assert state.is_favorite("swe") is False
    assert state.toggle_favorite("swe") is True
    assert state.is_favorite("swe") is True
    assert state.toggle_favorite("swe") is False
    assert state.is_favorite("swe") is False


def test_every_toggle_writes_through():
    store = _RecordingStore()
    state = BrowsingState(store)
    state.toggle_favorite("swe")
    state.toggle_favorite("swe")
    assert store.writes == [("favorites", ["swe"]), ("favorites", [])]


def test_favorites_returns_copy(store):
    state = BrowsingState(store)
    state.toggle_favorite("a")
    state.favorites().add("b")
    assert state.favorites() == {"a"}


def test_clear_favorites(store):
    state = BrowsingState(store)
    state.toggle_favorite("a")
    state.clear_favorites()
    assert state.favorites() == set()
    assert store.get("favorites") == []


# ---- compare ----


def test_compare_bound_rejects_fourth(store):
    state = BrowsingState(store)
    for job_id in ("a", "b", "c"):
        assert state.toggle_compare(job_id) is True
    assert state.is_compare_full()
    with pytest.raises(CompareFullError) as info:
        state.toggle_compare("d")
    assert info.value.limit == 3
    assert state.compare_list() == ["a", "b", "c"]
    assert store.get("compareList") == ["a", "b", "c"]
    assert state.is_in_compare("d") is False


def test_compare_remove_frees_slot(store):
    state = BrowsingState(store)
    for job_id in ("a", "b", "c"):
        state.toggle_compare(job_id)
    assert state.toggle_compare("b") is False
    assert state.toggle_compare("d") is True
    assert state.compare_list() == ["a", "c", "d"]


def test_toggle_existing_when_full_removes(store):
    state = BrowsingState(store)
    for job_id in ("a", "b", "c"):
        state.toggle_compare(job_id)
    assert state.toggle_compare("a") is False
    assert state.compare_list() == ["b", "c"]


def test_clear_compare_list(store):
    state = BrowsingState(store)
    state.toggle_compare("a")
    state.clear_compare_list()
    assert state.compare_list() == []
    assert store.get("compareList") == []


def test_custom_compare_limit(store):
    state = BrowsingState(store, compare_limit=1)
    state.toggle_compare("a")
    with pytest.raises(CompareFullError):
        state.toggle_compare("b")


def test_invalid_limits(store):
    with pytest.raises(ValueError):
        BrowsingState(store, compare_limit=0)
    with pytest.raises(ValueError):
        BrowsingState(store, recently_viewed_cap=0)


def test_concurrent_compare_never_exceeds_limit(store):
    state = BrowsingState(store)
    rejected = []

    def worker(job_id: str) -> None:
        try:
            state.toggle_compare(job_id)
        except CompareFullError:
            rejected.append(job_id)

    threads = [threading.Thread(target=worker, args=(f"job-{i}",)) for i in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(state.compare_list()) == 3
    assert len(rejected) == 17


# ---- recently viewed ----


def test_recently_viewed_dedup_and_order(store):
    state = BrowsingState(store)
    for job_id in ("a", "b", "a", "c"):
        state.add_recently_viewed(job_id)
    assert state.recently_viewed() == ["c", "a", "b"]
    assert store.get("recentlyViewed") == ["c", "a", "b"]


def test_recently_viewed_capped(store):
    state = BrowsingState(store, recently_viewed_cap=3)
    for job_id in ("a", "b", "c", "d"):
        state.add_recently_viewed(job_id)
    assert state.recently_viewed() == ["d", "c", "b"]


def test_recently_viewed_limit_and_copy(store):
    state = BrowsingState(store)
    for job_id in ("a", "b", "c", "d"):
        state.add_recently_viewed(job_id)
    assert state.recently_viewed(limit=2) == ["d", "c"]
    assert state.recently_viewed(limit=-1) == []
    state.recently_viewed().clear()
    assert len(state.recently_viewed()) == 4


# ---- view counts ----


def test_view_count_increments(store):
    state = BrowsingState(store)
    for expected in range(1, 6):
        assert state.increment_view_count("swe") == expected
    assert state.view_count("swe") == 5
    assert state.view_count("other") == 0
    assert store.get("viewCounts") == {"swe": 5}


def test_record_view_applies_both_effects(store):
    state = BrowsingState(store)
    state.record_view("swe")
    state.record_view("nurse")
    state.record_view("swe")
    assert state.recently_viewed() == ["swe", "nurse"]
    assert state.view_counts() == {"swe": 2, "nurse": 1}


# ---- persistence ----


def test_round_trip_through_store(tmp_path):
    db = tmp_path / "state.db"
    store = SqliteStore(db)
    state = BrowsingState(store)
    state.toggle_favorite("swe")
    state.toggle_favorite("nurse")
    state.toggle_compare("ds")
    state.toggle_compare("swe")
    state.record_view("a")
    state.record_view("b")
    state.record_view("a")
    store.close()

    reopened = SqliteStore(db)
    try:
        fresh = BrowsingState(reopened)
        assert fresh.favorites() == {"swe", "nurse"}
        assert fresh.compare_list() == ["ds", "swe"]
        assert fresh.recently_viewed() == ["a", "b"]
        assert fresh.view_counts() == {"a": 2, "b": 1}
    finally:
        reopened.close()


def test_hydration_sanitises_bad_data():
    store = MemoryStore(
        {
            "favorites": ["a", 3, "a", None],
            "compareList": ["a", "b", "a", "c", "d", "e"],
            "recentlyViewed": "not-a-list",
            "viewCounts": {"a": 2, "b": -1, "c": "7", "d": True},
        }
    )
    state = BrowsingState(store)
    assert state.favorites() == {"a"}
    assert state.compare_list() == ["a", "b", "c"]
    assert state.recently_viewed() == []
    assert state.view_counts() == {"a": 2}


def test_store_failure_degrades_to_memory(caplog):
    store = _BrokenStore()
    state = BrowsingState(store)
    assert state.persisting is True

    state.toggle_favorite("a")
    state.toggle_compare("b")
    state.record_view("c")

    assert state.persisting is False
    assert store.attempts == 1
    assert state.is_favorite("a")
    assert state.compare_list() == ["b"]
    assert state.view_count("c") == 1
    assert "memory only" in caplog.text
