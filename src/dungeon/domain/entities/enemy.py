"""Enemy runtime models."""
from __future__ import annotations

from dataclasses import dataclass

from dungeon.core.types import PathId
from dungeon.domain.defs import ItemDef


@dataclass(slots=True)
class EnemyInstance:
    """Represents a spawned enemy ready for one encounter."""

    id: str
    enemy_id: str
    name: str
    path: PathId
    level: int
    max_health: int
    health: int
    strength: float
    defense: float
    agility: float
    xp_reward: int
    loot: tuple[ItemDef, ...] = ()
    is_boss: bool = False

    @property
    def is_alive(self) -> bool:
        return self.health > 0
