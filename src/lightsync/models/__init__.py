"""Data models for lightsync."""

from lightsync.models.accessory import Accessory, AccessoryContext, generate_uuid
from lightsync.models.device import Device, DeviceState, ScanResult
from lightsync.models.reconciliation import (
    Effect,
    EffectKind,
    ReconciliationResult,
    RunSummary,
    SweepResult,
)

__all__ = [
    "Accessory",
    "AccessoryContext",
    "Device",
    "DeviceState",
    "Effect",
    "EffectKind",
    "ReconciliationResult",
    "RunSummary",
    "ScanResult",
    "SweepResult",
    "generate_uuid",
]
