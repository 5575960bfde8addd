"""Combat domain models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

from dungeon.core.types import TurnOwner
from dungeon.domain.entities import EnemyInstance

CombatOutcome = Literal["victory", "defeat", "escaped"]
EnemyAction = Literal["attack", "special"]


@dataclass(slots=True)
class CombatState:
    """Tracks one encounter between the player and a single enemy."""

    enemy: EnemyInstance
    turn_owner: TurnOwner = "player"
    turn_count: int = 0
    log: List[str] = field(default_factory=list)
    log_size: int = 8
    outcome: CombatOutcome | None = None

    @property
    def is_over(self) -> bool:
        return self.outcome is not None

    def add_log(self, message: str) -> None:
        self.log.append(message)
        if len(self.log) > self.log_size:
            del self.log[: len(self.log) - self.log_size]


@dataclass(frozen=True, slots=True)
class AttackResult:
    """Result of a single resolved attack."""

    hit: bool
    damage: int
    action: EnemyAction = "attack"
