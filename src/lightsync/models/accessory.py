"""Accessory models."""

import hashlib
import uuid as uuid_lib

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lightsync.models.device import Device


def generate_uuid(unique_id: str) -> str:
    """Derive a stable accessory UUID from a hardware unique id.

    SHA-1 of the id, truncated to 128 bits, so the same controller always
    maps to the same accessory across restarts.
    """
    digest = hashlib.sha1(unique_id.encode("utf-8")).digest()
    return str(uuid_lib.UUID(bytes=digest[:16]))


class AccessoryContext(BaseModel):
    """Mutable state persisted alongside an accessory."""

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    display_name: str
    device: Device
    device_type: str = ""
    cached_ip_address: str
    restarts_since_seen: int = Field(default=0, ge=0)


class Accessory(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    uuid: str = Field(frozen=True)
    display_name: str
    context: AccessoryContext

    @property
    def unique_id(self) -> str:
        return self.context.device.unique_id
