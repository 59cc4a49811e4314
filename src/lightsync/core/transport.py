from __future__ import annotations

from typing import Protocol

from lightsync.models import Device, DeviceState, ScanResult


class TransportError(RuntimeError):
    """A device did not answer a state query."""


class DeviceTransport(Protocol):
    async def get_state(self, timeout: float) -> DeviceState: ...


class SnapshotTransport:
    """Answers state queries from the states recorded in a discovery snapshot."""

    def __init__(self, device: Device, snapshot: ScanResult | None) -> None:
        self.device = device
        self._snapshot = snapshot

    async def get_state(self, timeout: float) -> DeviceState:
        states = self._snapshot.states if self._snapshot else {}
        state = states.get(self.device.unique_id)
        if state is None:
            raise TransportError(
                f"No state recorded for {self.device.unique_id} "
                f"at {self.device.ip_address}"
            )
        return state
