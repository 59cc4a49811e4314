from __future__ import annotations

import logging
from collections.abc import Collection

from lightsync.config import AllowListConfig

logger = logging.getLogger(__name__)


class AllowListPolicy:
    """Blacklist/whitelist gate for device unique ids.

    A single id list serves both modes: in ``blacklist`` mode listed ids are
    rejected, in ``whitelist`` mode unlisted ids are rejected. The mode is a
    substring match, so a mode naming both rejects every id.
    """

    def __init__(
        self,
        unique_ids: Collection[str] | None = None,
        mode: str | None = None,
    ) -> None:
        self._unique_ids = unique_ids
        self._mode = mode

    @classmethod
    def from_config(cls, config: AllowListConfig) -> AllowListPolicy:
        return cls(config.blacklisted_unique_ids, config.blacklist_or_whitelist)

    def is_allowed(self, unique_id: str) -> bool:
        if self._unique_ids is None or self._mode is None:
            return True

        try:
            listed = unique_id in self._unique_ids
            if listed and "blacklist" in self._mode:
                return False
            if not listed and "whitelist" in self._mode:
                return False
        except (TypeError, AttributeError) as exc:
            # a broken allow list must not strand every device unregistered
            logger.debug("Ignoring malformed allow list: %s", exc)
        return True
