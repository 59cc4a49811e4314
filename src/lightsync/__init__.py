"""lightsync - reconcile discovered Magichome lights with persisted accessories."""

from __future__ import annotations

from importlib.metadata import version

from .config import PruningConfig, ScanningConfig, Settings, get_settings
from .core import AccessoryCache, AllowListPolicy, run_sync
from .models import Accessory, Device, RunSummary
from .storage import Database, FileAccessoryRegistry

__all__ = [
    "Accessory",
    "AccessoryCache",
    "AllowListPolicy",
    "Database",
    "Device",
    "FileAccessoryRegistry",
    "PruningConfig",
    "RunSummary",
    "ScanningConfig",
    "Settings",
    "__version__",
    "get_settings",
    "run_sync",
]

__version__ = version("lightsync")
