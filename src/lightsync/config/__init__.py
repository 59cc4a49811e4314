from __future__ import annotations

from .paths import (
    ACCESSORIES_FILENAME,
    APP_NAME,
    CONFIG_FILENAME,
    SNAPSHOT_FILENAME,
    default_config_path,
    default_data_dir,
    expand_path,
)
from .settings import (
    CONFIG_ENV_VAR,
    AllowListConfig,
    DatabaseConfig,
    DeviceManagementConfig,
    PruningConfig,
    RetentionPolicy,
    ScanningConfig,
    Settings,
    data_dir_from_settings,
    get_settings,
    load_settings,
    render_settings_toml,
    resolve_config_path,
    write_settings,
)

__all__ = [
    "ACCESSORIES_FILENAME",
    "APP_NAME",
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAME",
    "SNAPSHOT_FILENAME",
    "AllowListConfig",
    "DatabaseConfig",
    "DeviceManagementConfig",
    "PruningConfig",
    "RetentionPolicy",
    "ScanningConfig",
    "Settings",
    "data_dir_from_settings",
    "default_config_path",
    "default_data_dir",
    "expand_path",
    "get_settings",
    "load_settings",
    "render_settings_toml",
    "resolve_config_path",
    "write_settings",
]
