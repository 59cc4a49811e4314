from __future__ import annotations

from .adapter import AccessoryAdapter, DefaultAccessoryAdapter
from .cache import AccessoryCache
from .policy import AllowListPolicy
from .pruning import PruneAction, PruningPolicy, evaluate
from .reconciler import ReconciliationEngine, match_device
from .scanner import Discovery, ScanCoordinator, SnapshotDiscovery, load_snapshot
from .sync import AccessoryRegistry, apply_effects, run_sync
from .transport import DeviceTransport, SnapshotTransport, TransportError

__all__ = [
    "AccessoryAdapter",
    "AccessoryCache",
    "AccessoryRegistry",
    "AllowListPolicy",
    "DefaultAccessoryAdapter",
    "DeviceTransport",
    "Discovery",
    "PruneAction",
    "PruningPolicy",
    "ReconciliationEngine",
    "ScanCoordinator",
    "SnapshotDiscovery",
    "SnapshotTransport",
    "TransportError",
    "apply_effects",
    "evaluate",
    "load_snapshot",
    "match_device",
    "run_sync",
]
