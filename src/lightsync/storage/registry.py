"""File-backed accessory registry."""

from __future__ import annotations

import logging

from lightsync.core import AccessoryCache
from lightsync.models import Accessory, AccessoryContext

from .database import Database

logger = logging.getLogger(__name__)


class FileAccessoryRegistry:
    """System of record for accessories between runs.

    Every register, update and unregister call is written through to the
    database immediately, so an interrupted run keeps the effects it already
    applied.
    """

    def __init__(self, db: Database) -> None:
        self.db = db
        self._accessories: dict[str, Accessory] = {
            accessory.uuid: accessory for accessory in db.load_accessories()
        }

    @property
    def accessories(self) -> list[Accessory]:
        return list(self._accessories.values())

    def restore_into(self, cache: AccessoryCache) -> None:
        """Hand every persisted accessory to the run's restore hook."""
        for accessory in self._accessories.values():
            cache.restore(accessory)
        logger.debug("Restored %d accessory(ies) from %s", len(cache), self.db.path)

    def create(
        self, display_name: str, uuid: str, context: AccessoryContext
    ) -> Accessory:
        return Accessory(uuid=uuid, display_name=display_name, context=context)

    def register(self, accessories: list[Accessory]) -> None:
        for accessory in accessories:
            if accessory.uuid in self._accessories:
                raise ValueError(f"Accessory already registered: {accessory.uuid}")
            self._accessories[accessory.uuid] = accessory
        self._save()

    def update(self, accessories: list[Accessory]) -> None:
        for accessory in accessories:
            if accessory.uuid not in self._accessories:
                raise ValueError(f"Accessory is not registered: {accessory.uuid}")
            self._accessories[accessory.uuid] = accessory
        self._save()

    def unregister(self, accessories: list[Accessory]) -> None:
        for accessory in accessories:
            self._accessories.pop(accessory.uuid, None)
        self._save()

    def _save(self) -> None:
        self.db.save_accessories(self._accessories.values())
