from __future__ import annotations

import json
import logging
import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic.alias_generators import to_camel

from .paths import default_config_path, default_data_dir, expand_path

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LIGHTSYNC_CONFIG"

_SECTION_CONFIG = ConfigDict(
    frozen=True,
    extra="forbid",
    alias_generator=to_camel,
    populate_by_name=True,
)


class DatabaseConfig(BaseModel):
    model_config = _SECTION_CONFIG

    path: str = Field(default_factory=lambda: str(default_data_dir()))


class ScanningConfig(BaseModel):
    model_config = _SECTION_CONFIG

    timeout: float = Field(default=2.0, gt=0)
    max_attempts: int = Field(default=5, ge=1)
    state_timeout: float = Field(default=1.0, gt=0)


class DeviceManagementConfig(BaseModel):
    """Allow-list configuration.

    ``blacklisted_unique_ids`` doubles as the allow-set when the mode contains
    ``whitelist``. Leaving either field unset disables the check, and so
    does a value of the wrong shape.
    """

    model_config = _SECTION_CONFIG

    blacklisted_unique_ids: list[str] | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "blacklisted_unique_ids",
            "blacklistedUniqueIds",
            "blacklistedUniqueIDs",
        ),
    )
    blacklist_or_whitelist: str | None = None

    @field_validator("blacklisted_unique_ids", "blacklist_or_whitelist", mode="wrap")
    @classmethod
    def _unset_when_malformed(
        cls, value: Any, handler: ValidatorFunctionWrapHandler
    ) -> Any:
        # a broken allow list must not keep every device from registering
        try:
            return handler(value)
        except ValidationError as exc:
            logger.debug("Ignoring malformed allow list setting %r: %s", value, exc)
            return None


class PruningConfig(BaseModel):
    model_config = _SECTION_CONFIG

    prune_missing_cached_accessories: bool = False
    prune_all_accessories_next_restart: bool = False
    restarts_before_missing_accessories_pruned: int = Field(default=3, ge=0)


AllowListConfig = DeviceManagementConfig
RetentionPolicy = PruningConfig


class Settings(BaseModel):
    model_config = _SECTION_CONFIG

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    scanning: ScanningConfig = Field(default_factory=ScanningConfig)
    device_management: DeviceManagementConfig = Field(
        default_factory=DeviceManagementConfig
    )
    pruning: PruningConfig = Field(default_factory=PruningConfig)


def resolve_config_path(allow_missing: bool = False) -> tuple[Path, bool]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = expand_path(env_path)
        if not allow_missing and not path.exists():
            raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to missing file: {path}")
        return path, path.exists()

    path = default_config_path()
    return path, path.exists()


def load_settings(path: Path) -> Settings:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file: {path}\n{exc}") from exc

    try:
        return Settings.model_validate(data or {})
    except ValidationError as exc:
        raise ValueError(f"Invalid config file: {path}\n{exc}") from exc


@lru_cache
def get_settings() -> Settings:
    path, exists = resolve_config_path(allow_missing=False)
    if exists:
        return load_settings(path)
    return Settings()


def data_dir_from_settings(settings: Settings) -> Path:
    return expand_path(settings.database.path)


def _toml_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return json.dumps(value)


def render_settings_toml(settings: Settings) -> str:
    lines = ["# lightsync configuration"]
    sections = {
        "database": settings.database,
        "scanning": settings.scanning,
        "device_management": settings.device_management,
        "pruning": settings.pruning,
    }
    for name, section in sections.items():
        lines.extend(["", f"[{name}]"])
        for key, value in section.model_dump().items():
            if value is None:
                # TOML has no null; an absent key means "unset"
                lines.append(f"# {key} =")
                continue
            lines.append(f"{key} = {_toml_value(value)}")
    lines.append("")
    return "\n".join(lines)


def write_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_settings_toml(settings))
