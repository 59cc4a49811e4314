from __future__ import annotations

from collections.abc import Callable

import pytest

from lightsync.config import get_settings
from lightsync.core import AccessoryCache, TransportError
from lightsync.models import (
    Accessory,
    AccessoryContext,
    Device,
    DeviceState,
    generate_uuid,
)


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("LIGHTSYNC_CONFIG", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def _make_device(
    unique_id: str = "A1", ip_address: str = "1.1.1.1", **overrides
) -> Device:
    fields = {
        "unique_id": unique_id,
        "ip_address": ip_address,
        "model_number": "AK001-ZJ2101",
        "light_version": 9,
        "light_version_modifier": 0x33,
    }
    fields.update(overrides)
    return Device(**fields)


@pytest.fixture
def make_device() -> Callable[..., Device]:
    return _make_device


@pytest.fixture
def make_accessory() -> Callable[..., Accessory]:
    def _make(
        unique_id: str = "A1",
        ip_address: str = "1.1.1.1",
        display_name: str | None = None,
        restarts_since_seen: int = 0,
    ) -> Accessory:
        device = _make_device(unique_id, ip_address)
        name = display_name or f"Strip {unique_id}"
        return Accessory(
            uuid=generate_uuid(unique_id),
            display_name=name,
            context=AccessoryContext(
                display_name=name,
                device=device,
                device_type="RGB Strip",
                cached_ip_address=ip_address,
                restarts_since_seen=restarts_since_seen,
            ),
        )

    return _make


class FakeDiscovery:
    def __init__(self, *results: list[Device]) -> None:
        self._results = list(results)
        self.calls: list[float] = []

    async def scan(self, timeout: float) -> list[Device]:
        self.calls.append(timeout)
        if not self._results:
            return []
        if len(self._results) == 1:
            return list(self._results[0])
        return list(self._results.pop(0))


class FakeTransport:
    def __init__(self, device: Device, unreachable: set[str]) -> None:
        self.device = device
        self._unreachable = unreachable

    async def get_state(self, timeout: float) -> DeviceState:
        if self.device.unique_id in self._unreachable:
            raise TransportError(f"{self.device.unique_id} did not answer")
        return DeviceState(is_on=True, brightness=80, debug_buffer="81 33 23 61")


class FakeRegistry:
    """Records registry calls in the order they are made."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def create(
        self, display_name: str, uuid: str, context: AccessoryContext
    ) -> Accessory:
        return Accessory(uuid=uuid, display_name=display_name, context=context)

    def register(self, accessories: list[Accessory]) -> None:
        self.calls.extend(("register", a.unique_id) for a in accessories)

    def update(self, accessories: list[Accessory]) -> None:
        self.calls.extend(("update", a.unique_id) for a in accessories)

    def unregister(self, accessories: list[Accessory]) -> None:
        self.calls.extend(("unregister", a.unique_id) for a in accessories)


@pytest.fixture
def fake_discovery() -> type[FakeDiscovery]:
    return FakeDiscovery


@pytest.fixture
def fake_registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def unreachable() -> set[str]:
    return set()


@pytest.fixture
def transport_factory(unreachable: set[str]) -> Callable[[Device], FakeTransport]:
    def _factory(device: Device) -> FakeTransport:
        return FakeTransport(device, unreachable)

    return _factory


@pytest.fixture
def cache() -> AccessoryCache:
    return AccessoryCache()
