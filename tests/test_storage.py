"""Tests for the file-backed registry."""

import json

import pytest

from lightsync.core import AccessoryCache
from lightsync.storage import Database, FileAccessoryRegistry


def test_accessories_persist_with_camel_case_keys(tmp_path, make_accessory):
    db = Database(tmp_path)
    db.save_accessories([make_accessory("A1", "10.0.0.5", restarts_since_seen=2)])

    raw = json.loads(db.accessories_path.read_text())
    context = raw["accessories"][0]["context"]
    assert context["cachedIpAddress"] == "10.0.0.5"
    assert context["restartsSinceSeen"] == 2

    (loaded,) = db.load_accessories()
    assert loaded.unique_id == "A1"
    assert loaded.context.cached_ip_address == "10.0.0.5"


def test_invalid_accessories_file_raises(tmp_path):
    db = Database(tmp_path)
    db.accessories_path.write_text("{not json")

    with pytest.raises(ValueError, match="Invalid JSON"):
        db.load_accessories()


def test_restore_increments_restart_counter(tmp_path, make_accessory):
    db = Database(tmp_path)
    db.save_accessories(
        [make_accessory("A1"), make_accessory("B2", restarts_since_seen=4)]
    )

    cache = AccessoryCache()
    FileAccessoryRegistry(db).restore_into(cache)

    counts = {a.unique_id: a.context.restarts_since_seen for a in cache}
    assert counts == {"A1": 1, "B2": 5}


def test_registry_writes_through(tmp_path, make_accessory):
    db = Database(tmp_path)
    registry = FileAccessoryRegistry(db)
    accessory = make_accessory("A1")

    registry.register([accessory])
    assert [a.unique_id for a in db.load_accessories()] == ["A1"]

    with pytest.raises(ValueError, match="already registered"):
        registry.register([make_accessory("A1")])

    accessory.context.cached_ip_address = "10.0.0.9"
    registry.update([accessory])
    assert db.load_accessories()[0].context.cached_ip_address == "10.0.0.9"

    registry.unregister([accessory])
    assert db.load_accessories() == []


def test_init_is_idempotent(tmp_path):
    db = Database(tmp_path / "data")

    assert db.init() is True
    assert db.init() is False
    assert db.init(force=True) is True
    assert db.load_accessories() == []
