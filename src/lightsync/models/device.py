"""Device models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(
    extra="forbid",
    alias_generator=to_camel,
    populate_by_name=True,
)


class Device(BaseModel):
    """Magichome controller as reported by one discovery scan."""

    model_config = ConfigDict(**_WIRE_CONFIG, frozen=True)

    unique_id: str = Field(min_length=1)
    ip_address: str = Field(min_length=1)
    model_number: str
    light_version: int
    light_version_modifier: int
    initial_state: str | None = None


class DeviceState(BaseModel):
    """Result of a state query against a single device."""

    model_config = _WIRE_CONFIG

    is_on: bool = False
    brightness: int = Field(default=0, ge=0, le=100)
    debug_buffer: str = ""


class ScanResult(BaseModel):
    """Discovery snapshot with the states recorded alongside it."""

    model_config = _WIRE_CONFIG

    scan_timestamp: datetime | None = None
    devices: list[Device] = Field(default_factory=list)
    states: dict[str, DeviceState] = Field(default_factory=dict)
