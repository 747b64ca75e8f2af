"""Tests for the key-value store backends."""

from __future__ import annotations

import pytest

from careerdeck.exceptions import PersistenceError
from careerdeck.storage.base import KeyValueStore
from careerdeck.storage.json_store import JsonFileStore
from careerdeck.storage.memory_store import MemoryStore
from careerdeck.storage.sqlite_store import SqliteStore


@pytest.fixture(params=["memory", "json", "sqlite"])
def any_store(request, tmp_path):
    if request.param == "memory":
        s = MemoryStore()
    elif request.param == "json":
        s = JsonFileStore(tmp_path / "state.json")
    else:
        s = SqliteStore(tmp_path / "state.db")
    yield s
    s.close()


def test_satisfies_protocol(any_store):
    assert isinstance(any_store, KeyValueStore)


def test_missing_key_is_none(any_store):
    assert any_store.get("favorites") is None


def test_set_then_get(any_store):
    any_store.set("viewCounts", {"swe": 2})
    any_store.set("favorites", ["a", "b"])
    any_store.set("favorites", ["c"])
    assert any_store.get("favorites") == ["c"]
    assert any_store.get("viewCounts") == {"swe": 2}


def test_unserializable_value_rejected(any_store):
    with pytest.raises(PersistenceError):
        any_store.set("favorites", {1, 2})


def test_memory_store_returns_copies():
    s = MemoryStore()
    value = ["a"]
    s.set("favorites", value)
    value.append("b")
    got = s.get("favorites")
    got.append("c")
    assert s.get("favorites") == ["a"]


def test_sqlite_survives_reopen(tmp_path):
    db = tmp_path / "state.db"
    first = SqliteStore(db)
    first.set("compareList", ["x", "y"])
    first.close()

    second = SqliteStore(db)
    try:
        assert second.get("compareList") == ["x", "y"]
        assert second.keys() == ["compareList"]
    finally:
        second.close()


def test_json_store_survives_reopen(tmp_path):
    path = tmp_path / "nested" / "state.json"
    JsonFileStore(path).set("recentlyViewed", ["b", "a"])
    assert JsonFileStore(path).get("recentlyViewed") == ["b", "a"]


def test_json_store_corrupt_file(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("{not json")
    with pytest.raises(PersistenceError):
        JsonFileStore(path).get("favorites")


def test_json_store_ignores_non_object(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("[1, 2]")
    assert JsonFileStore(path).get("favorites") is None
