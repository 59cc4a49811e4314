from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Protocol

from lightsync.config import Settings
from lightsync.models import (
    Accessory,
    AccessoryContext,
    Effect,
    EffectKind,
    RunSummary,
)

from .adapter import AccessoryAdapter
from .cache import AccessoryCache
from .policy import AllowListPolicy
from .pruning import PruningPolicy
from .reconciler import ReconciliationEngine, TransportFactory
from .scanner import Discovery, ScanCoordinator

logger = logging.getLogger(__name__)


class AccessoryRegistry(Protocol):
    def create(
        self, display_name: str, uuid: str, context: AccessoryContext
    ) -> Accessory: ...

    def register(self, accessories: list[Accessory]) -> None: ...

    def update(self, accessories: list[Accessory]) -> None: ...

    def unregister(self, accessories: list[Accessory]) -> None: ...


def apply_effects(registry: AccessoryRegistry, effects: Iterable[Effect]) -> None:
    """Push effects to the registry one at a time, preserving their order."""
    for effect in effects:
        if effect.kind is EffectKind.REGISTER:
            registry.register([effect.accessory])
        elif effect.kind is EffectKind.UPDATE:
            registry.update([effect.accessory])
        else:
            registry.unregister([effect.accessory])


async def run_sync(
    cache: AccessoryCache,
    *,
    discovery: Discovery,
    registry: AccessoryRegistry,
    transport_factory: TransportFactory,
    settings: Settings,
    adapter: AccessoryAdapter | None = None,
) -> RunSummary:
    """Run one discover, reconcile and prune cycle against ``cache``.

    ``cache`` must already hold the restored accessories. Reconciliation
    effects reach the registry before the pruning sweep runs, so pruning
    always works from the reconciled cache.
    """
    policy = AllowListPolicy.from_config(settings.device_management)

    devices = await ScanCoordinator.from_config(discovery, settings.scanning).scan()

    engine = ReconciliationEngine(
        policy,
        transport_factory,
        adapter=adapter,
        state_timeout=settings.scanning.state_timeout,
        create=registry.create,
    )
    reconciliation = await engine.reconcile(devices, cache)
    apply_effects(registry, reconciliation.effects)

    sweep = PruningPolicy(policy).sweep(cache, settings.pruning)
    apply_effects(registry, sweep.effects)

    summary = RunSummary.combine(reconciliation, sweep)
    logger.info(
        "Registered %d Magichome device(s). New devices: %d, "
        "cached devices seen this restart: %d, not seen this restart: %d",
        summary.registered,
        summary.new,
        summary.cached_seen,
        summary.unseen,
    )
    return summary
