from __future__ import annotations

import enum
from dataclasses import dataclass, field

from lightsync.models.accessory import Accessory


class EffectKind(enum.Enum):
    REGISTER = "register"
    UPDATE = "update"
    UNREGISTER = "unregister"


@dataclass(frozen=True)
class Effect:
    kind: EffectKind
    accessory: Accessory


@dataclass
class _EffectLog:
    effects: list[Effect] = field(default_factory=list)

    def add(self, kind: EffectKind, accessory: Accessory) -> None:
        self.effects.append(Effect(kind, accessory))

    def _of(self, kind: EffectKind) -> list[Accessory]:
        return [effect.accessory for effect in self.effects if effect.kind is kind]

    @property
    def to_register(self) -> list[Accessory]:
        return self._of(EffectKind.REGISTER)

    @property
    def to_update(self) -> list[Accessory]:
        return self._of(EffectKind.UPDATE)

    @property
    def to_unregister(self) -> list[Accessory]:
        return self._of(EffectKind.UNREGISTER)


@dataclass
class ReconciliationResult(_EffectLog):
    """Registry effects for the discovered devices, in discovery order."""

    registered: int = 0
    new: int = 0
    unseen: int = 0
    failed: list[str] = field(default_factory=list)  # unique ids


@dataclass
class SweepResult(_EffectLog):
    """Registry effects produced by the pruning sweep."""

    unseen: int = 0


@dataclass(frozen=True)
class RunSummary:
    registered: int
    new: int
    unseen: int

    @property
    def cached_seen(self) -> int:
        return self.registered - self.new - self.unseen

    @classmethod
    def combine(
        cls, reconciliation: ReconciliationResult, sweep: SweepResult
    ) -> RunSummary:
        # accessories kept despite not being seen still count as registered
        return cls(
            registered=reconciliation.registered + sweep.unseen,
            new=reconciliation.new,
            unseen=reconciliation.unseen + sweep.unseen,
        )
