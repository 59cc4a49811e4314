from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence

from lightsync.models import (
    Accessory,
    AccessoryContext,
    Device,
    DeviceState,
    EffectKind,
    ReconciliationResult,
    generate_uuid,
)

from .adapter import AccessoryAdapter, DefaultAccessoryAdapter
from .cache import AccessoryCache
from .policy import AllowListPolicy
from .transport import DeviceTransport, TransportError

logger = logging.getLogger(__name__)

DEFAULT_STATE_TIMEOUT = 1.0

TransportFactory = Callable[[Device], DeviceTransport]
AccessoryFactory = Callable[[str, str, AccessoryContext], Accessory]


def _new_accessory(
    display_name: str, uuid: str, context: AccessoryContext
) -> Accessory:
    return Accessory(uuid=uuid, display_name=display_name, context=context)


def match_device(device: Device, cache: AccessoryCache) -> Accessory | None:
    """Find the cached accessory for a device by hardware identity."""
    return cache.get(generate_uuid(device.unique_id))


class ReconciliationEngine:
    """Merges one run's discovered devices into the accessory cache.

    Devices are processed one at a time in discovery order. New devices are
    queried for their current state and registered; devices already cached
    are refreshed, with their address corrected if it drifted. Effects are
    collected in the result rather than applied, and the cache is mutated in
    place so the pruning sweep sees the reconciled view.
    """

    def __init__(
        self,
        policy: AllowListPolicy,
        transport_factory: TransportFactory,
        adapter: AccessoryAdapter | None = None,
        state_timeout: float = DEFAULT_STATE_TIMEOUT,
        create: AccessoryFactory | None = None,
    ) -> None:
        self.policy = policy
        self.transport_factory = transport_factory
        self.adapter = adapter or DefaultAccessoryAdapter()
        self.state_timeout = state_timeout
        self.create = create or _new_accessory

    async def reconcile(
        self, discovered: Sequence[Device], cache: AccessoryCache
    ) -> ReconciliationResult:
        result = ReconciliationResult()
        processed = 0
        try:
            for device in discovered:
                existing = match_device(device, cache)
                if existing is None:
                    await self._register_new(device, cache, result)
                else:
                    self._refresh_cached(existing, device, cache, result)
                processed += 1
        except Exception:
            logger.exception(
                "Reconciliation stopped after %d of %d device(s)",
                processed,
                len(discovered),
            )
        return result

    async def _query_state(self, device: Device) -> DeviceState | None:
        transport = self.transport_factory(device)
        try:
            return await asyncio.wait_for(
                transport.get_state(self.state_timeout), timeout=self.state_timeout
            )
        except (TransportError, asyncio.TimeoutError, TimeoutError, OSError) as exc:
            logger.error(
                "Could not query state of %s at %s: %s",
                device.unique_id,
                device.ip_address,
                str(exc) or type(exc).__name__,
            )
            return None

    async def _register_new(
        self, device: Device, cache: AccessoryCache, result: ReconciliationResult
    ) -> None:
        state = await self._query_state(device)
        if state is None:
            result.failed.append(device.unique_id)
            return
        device = device.model_copy(update={"initial_state": state.debug_buffer})

        if not self.policy.is_allowed(device.unique_id):
            logger.warning(
                "New device with Unique ID: %s is blacklisted or is not whitelisted.",
                device.unique_id,
            )
            return

        display_name = self.adapter.display_name(device)
        context = AccessoryContext(
            display_name=display_name,
            device=device,
            device_type=self.adapter.device_type(device),
            cached_ip_address=device.ip_address,
            restarts_since_seen=0,
        )
        accessory = self.create(display_name, generate_uuid(device.unique_id), context)
        cache.add(accessory)
        result.add(EffectKind.REGISTER, accessory)
        result.new += 1
        result.registered += 1

        logger.info(
            "Registering new accessory %s (model=%s, unique_id=%s, ip=%s, "
            "version=%d, modifier=%d)",
            display_name,
            device.model_number,
            device.unique_id,
            device.ip_address,
            device.light_version,
            device.light_version_modifier,
        )

    def _refresh_cached(
        self,
        existing: Accessory,
        device: Device,
        cache: AccessoryCache,
        result: ReconciliationResult,
    ) -> None:
        context = existing.context
        context.restarts_since_seen = 0

        if context.cached_ip_address != device.ip_address:
            logger.warning(
                "IP address of %s moved from %s to %s; reassigning",
                context.display_name,
                context.cached_ip_address,
                device.ip_address,
            )
            context.cached_ip_address = device.ip_address

        if not self.policy.is_allowed(existing.unique_id):
            logger.warning(
                "Accessory %s will be pruned as its Unique ID: %s is blacklisted "
                "or is not whitelisted.",
                context.display_name,
                existing.unique_id,
            )
            cache.discard(existing.uuid)
            result.add(EffectKind.UNREGISTER, existing)
            return

        result.add(EffectKind.UPDATE, existing)
        result.registered += 1
        logger.info(
            "Registering cached accessory %s (model=%s, unique_id=%s, ip=%s)",
            context.display_name,
            context.device.model_number,
            existing.unique_id,
            context.cached_ip_address,
        )
