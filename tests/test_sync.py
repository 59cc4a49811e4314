"""End-to-end runs of the discover, reconcile and prune pipeline."""

from __future__ import annotations

import asyncio

from lightsync.config import PruningConfig, Settings
from lightsync.core import AccessoryCache, run_sync
from lightsync.storage import Database, FileAccessoryRegistry


def _run(cache, discovery, registry, transport_factory, settings=None):
    return asyncio.run(
        run_sync(
            cache,
            discovery=discovery,
            registry=registry,
            transport_factory=transport_factory,
            settings=settings or Settings(),
        )
    )


def test_single_new_device(
    cache, fake_discovery, fake_registry, transport_factory, make_device
):
    discovery = fake_discovery([make_device("A1", "1.1.1.1")])

    summary = _run(cache, discovery, fake_registry, transport_factory)

    assert summary.registered == 1
    assert summary.new == 1
    assert summary.cached_seen == 0
    assert summary.unseen == 0
    assert fake_registry.calls == [("register", "A1")]


def test_effects_follow_discovery_order_then_pruning(
    cache, fake_discovery, fake_registry, transport_factory, make_device, make_accessory
):
    cache.restore(make_accessory("B2", "1.1.1.2"))
    cache.restore(make_accessory("Z9", "1.1.1.9"))
    cache.restore(make_accessory("D4", display_name="delete D4"))
    discovery = fake_discovery([make_device("A1"), make_device("B2", "1.1.1.2")])

    summary = _run(cache, discovery, fake_registry, transport_factory)

    assert fake_registry.calls == [
        ("register", "A1"),
        ("update", "B2"),
        ("update", "Z9"),
        ("unregister", "D4"),
    ]
    assert summary.registered == 3
    assert summary.new == 1
    assert summary.cached_seen == 1
    assert summary.unseen == 1


def test_empty_discovery_retains_cache(
    cache, fake_discovery, fake_registry, transport_factory, make_accessory
):
    cache.restore(make_accessory("A1"))

    summary = _run(cache, fake_discovery(), fake_registry, transport_factory)

    assert summary.registered == 1
    assert summary.unseen == 1
    assert fake_registry.calls == [("update", "A1")]


def test_missing_device_pruned_on_threshold_run(
    tmp_path, fake_discovery, transport_factory, make_device
):
    settings = Settings(
        pruning=PruningConfig(
            prune_missing_cached_accessories=True,
            restarts_before_missing_accessories_pruned=3,
        )
    )
    db = Database(tmp_path)

    def restart(devices):
        registry = FileAccessoryRegistry(db)
        cache = AccessoryCache()
        registry.restore_into(cache)
        _run(cache, fake_discovery(devices), registry, transport_factory, settings)
        return {a.unique_id: a for a in db.load_accessories()}

    stored = restart([make_device("A1"), make_device("B2")])
    assert set(stored) == {"A1", "B2"}

    for expected_restarts in (1, 2):
        stored = restart([make_device("A1")])
        assert set(stored) == {"A1", "B2"}
        assert stored["B2"].context.restarts_since_seen == expected_restarts
        assert stored["A1"].context.restarts_since_seen == 0

    stored = restart([make_device("A1")])
    assert set(stored) == {"A1"}


def test_restart_with_same_devices_converges(
    tmp_path, fake_discovery, transport_factory, make_device
):
    db = Database(tmp_path)
    devices = [make_device("A1", "10.0.0.5")]

    for _ in range(3):
        registry = FileAccessoryRegistry(db)
        cache = AccessoryCache()
        registry.restore_into(cache)
        summary = _run(cache, fake_discovery(devices), registry, transport_factory)

    assert summary.new == 0
    assert summary.cached_seen == 1
    (accessory,) = db.load_accessories()
    assert accessory.context.cached_ip_address == "10.0.0.5"
    assert accessory.context.restarts_since_seen == 0
