from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from lightsync.config import ScanningConfig
from lightsync.models import Device, DeviceState, ScanResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5


class Discovery(Protocol):
    async def scan(self, timeout: float) -> list[Device]: ...


_DEVICE_ADAPTER = TypeAdapter(Device)
_STATE_ADAPTER = TypeAdapter(DeviceState)
_TIMESTAMP_ADAPTER = TypeAdapter(datetime | None)


def _valid_devices(entries: object, path: Path) -> list[Device]:
    if not isinstance(entries, list):
        logger.warning("Ignoring devices in %s: expected a list", path)
        return []

    devices: list[Device] = []
    for index, entry in enumerate(entries):
        try:
            devices.append(_DEVICE_ADAPTER.validate_python(entry))
        except ValidationError as exc:
            logger.warning("Skipping device #%d in %s: %s", index, path, exc)
    return devices


def _valid_states(entries: object, path: Path) -> dict[str, DeviceState]:
    if not isinstance(entries, dict):
        logger.warning("Ignoring device states in %s: expected a mapping", path)
        return {}

    states: dict[str, DeviceState] = {}
    for unique_id, entry in entries.items():
        try:
            states[unique_id] = _STATE_ADAPTER.validate_python(entry)
        except ValidationError as exc:
            logger.warning("Skipping state of %s in %s: %s", unique_id, path, exc)
    return states


def load_snapshot(path: Path) -> ScanResult | None:
    """Read a discovery snapshot, returning None when there is none to read.

    Entries are validated one by one so a single malformed reply does not
    hide the devices that answered correctly.
    """
    if not path.exists():
        return None

    try:
        # bytes in, so undecodable text surfaces as a ValueError here
        data = json.loads(path.read_bytes())
    except (OSError, ValueError) as exc:
        logger.warning("Unreadable discovery snapshot %s: %s", path, exc)
        return None

    if not isinstance(data, dict):
        logger.warning("Unreadable discovery snapshot %s: expected an object", path)
        return None

    try:
        timestamp = _TIMESTAMP_ADAPTER.validate_python(
            data.get("scanTimestamp", data.get("scan_timestamp"))
        )
    except ValidationError:
        timestamp = None

    return ScanResult(
        scan_timestamp=timestamp,
        devices=_valid_devices(data.get("devices", []), path),
        states=_valid_states(data.get("states", {}), path),
    )


class SnapshotDiscovery:
    """Discovery backed by a snapshot file written by an external scanner.

    The file is re-read on every scan so a retry can pick up a snapshot
    that was still being written on the previous attempt.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    async def scan(self, timeout: float) -> list[Device]:
        logger.debug(
            "Reading discovery snapshot %s (timeout=%.2fs)", self.path, timeout
        )
        snapshot = load_snapshot(self.path)
        if snapshot is None:
            return []
        return list(snapshot.devices)


class ScanCoordinator:
    """Retries discovery until something answers or attempts run out."""

    def __init__(
        self,
        discovery: Discovery,
        timeout: float = 2.0,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.discovery = discovery
        self.timeout = timeout
        self.max_attempts = max_attempts

    @classmethod
    def from_config(
        cls, discovery: Discovery, config: ScanningConfig
    ) -> ScanCoordinator:
        return cls(discovery, timeout=config.timeout, max_attempts=config.max_attempts)

    async def scan(self) -> list[Device]:
        devices: list[Device] = []
        for attempt in range(1, self.max_attempts + 1):
            devices = await self.discovery.scan(self.timeout)
            if devices:
                break
            logger.warning(
                "(Scan: %d/%d) Found zero devices...%s",
                attempt,
                self.max_attempts,
                " rescanning..." if attempt < self.max_attempts else "",
            )

        if devices:
            logger.info("Found %d device(s).", len(devices))
        else:
            logger.info("Found 0 devices. Will load cached devices if they exist.")
        return devices
