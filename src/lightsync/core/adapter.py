from __future__ import annotations

from typing import Protocol

from lightsync.models import Device

# light_version_modifier -> controller type for common Magichome hardware
DEVICE_TYPES: dict[int, str] = {
    0x04: "RGBW Strip",
    0x06: "RGBWW Strip",
    0x21: "Dimmer",
    0x25: "RGBWW Controller",
    0x33: "RGB Strip",
    0x35: "RGBCW Bulb",
    0x44: "RGBW Bulb",
    0x52: "CCT Controller",
}

UNKNOWN_DEVICE_TYPE = "RGB Strip"


class AccessoryAdapter(Protocol):
    def device_type(self, device: Device) -> str: ...

    def display_name(self, device: Device) -> str: ...


class DefaultAccessoryAdapter:
    """Names accessories after their controller type and unique id."""

    def device_type(self, device: Device) -> str:
        return DEVICE_TYPES.get(device.light_version_modifier, UNKNOWN_DEVICE_TYPE)

    def display_name(self, device: Device) -> str:
        suffix = device.unique_id[-6:].upper()
        return f"{self.device_type(device)} {suffix}"
