from __future__ import annotations

import enum
import logging

from lightsync.config import RetentionPolicy
from lightsync.models import Accessory, EffectKind, SweepResult

from .cache import AccessoryCache
from .policy import AllowListPolicy

logger = logging.getLogger(__name__)

DELETE_MARKER = "delete"


class PruneAction(enum.Enum):
    NONE = "none"
    MARKED_FOR_DELETION = "marked_for_deletion"
    RESET_ALL = "reset_all"
    MISSING = "missing"
    DISALLOWED = "disallowed"
    KEEP_UNSEEN = "keep_unseen"

    @property
    def prunes(self) -> bool:
        return self in _PRUNING_ACTIONS


_PRUNING_ACTIONS = frozenset(
    {
        PruneAction.MARKED_FOR_DELETION,
        PruneAction.RESET_ALL,
        PruneAction.MISSING,
        PruneAction.DISALLOWED,
    }
)

_PRUNE_MESSAGES = {
    PruneAction.MARKED_FOR_DELETION: (
        "Pruning accessory %s: its name marks it for deletion"
    ),
    PruneAction.RESET_ALL: "Pruning accessory %s: all accessories are being reset",
    PruneAction.MISSING: "Pruning accessory %s: not seen for %d restart(s)",
    PruneAction.DISALLOWED: (
        "Pruning accessory %s: its Unique ID %s is blacklisted or is not whitelisted"
    ),
}


def evaluate(
    accessory: Accessory, retention: RetentionPolicy, policy: AllowListPolicy
) -> PruneAction:
    """Decide what the sweep does with one accessory; first matching rule wins."""
    context = accessory.context
    if DELETE_MARKER in context.display_name.lower():
        return PruneAction.MARKED_FOR_DELETION

    if retention.prune_all_accessories_next_restart:
        return PruneAction.RESET_ALL

    if (
        retention.prune_missing_cached_accessories
        and context.restarts_since_seen
        >= retention.restarts_before_missing_accessories_pruned
    ):
        return PruneAction.MISSING

    if context.restarts_since_seen > 0:
        if not policy.is_allowed(accessory.unique_id):
            return PruneAction.DISALLOWED
        return PruneAction.KEEP_UNSEEN

    return PruneAction.NONE


class PruningPolicy:
    def __init__(self, policy: AllowListPolicy) -> None:
        self.policy = policy

    def sweep(self, cache: AccessoryCache, retention: RetentionPolicy) -> SweepResult:
        result = SweepResult()
        for accessory in cache:
            action = evaluate(accessory, retention, self.policy)
            context = accessory.context

            if action.prunes:
                self._log_prune(action, accessory)
                cache.discard(accessory.uuid)
                result.add(EffectKind.UNREGISTER, accessory)
            elif action is PruneAction.KEEP_UNSEEN:
                logger.warning(
                    "Continuing to register cached accessory %s despite not being "
                    "seen for %d restart(s) (unique_id=%s, ip=%s)",
                    context.display_name,
                    context.restarts_since_seen,
                    accessory.unique_id,
                    context.cached_ip_address,
                )
                result.add(EffectKind.UPDATE, accessory)
                result.unseen += 1
        return result

    @staticmethod
    def _log_prune(action: PruneAction, accessory: Accessory) -> None:
        args: tuple[object, ...] = (accessory.context.display_name,)
        if action is PruneAction.MISSING:
            args += (accessory.context.restarts_since_seen,)
        elif action is PruneAction.DISALLOWED:
            args += (accessory.unique_id,)
        logger.warning(_PRUNE_MESSAGES[action], *args)
