from __future__ import annotations

import logging
from collections.abc import Iterator

from lightsync.models import Accessory

logger = logging.getLogger(__name__)


class AccessoryCache:
    """Accessories known to the current run, keyed by UUID.

    Owned by a single run and passed explicitly through scan, reconcile and
    prune. Iteration follows insertion order: restored accessories first,
    then the ones registered this run.
    """

    def __init__(self) -> None:
        self._by_uuid: dict[str, Accessory] = {}

    def restore(self, accessory: Accessory) -> None:
        """Load a persisted accessory at startup.

        It counts as not seen until discovery matches it again.
        """
        logger.debug("Loading accessory from cache: %s", accessory.display_name)
        accessory.context.restarts_since_seen += 1
        self._by_uuid[accessory.uuid] = accessory

    def add(self, accessory: Accessory) -> None:
        if accessory.uuid in self._by_uuid:
            raise ValueError(f"Accessory already cached: {accessory.uuid}")
        self._by_uuid[accessory.uuid] = accessory

    def get(self, uuid: str) -> Accessory | None:
        return self._by_uuid.get(uuid)

    def discard(self, uuid: str) -> None:
        self._by_uuid.pop(uuid, None)

    def __contains__(self, uuid: object) -> bool:
        return uuid in self._by_uuid

    def __iter__(self) -> Iterator[Accessory]:
        return iter(list(self._by_uuid.values()))

    def __len__(self) -> int:
        return len(self._by_uuid)
