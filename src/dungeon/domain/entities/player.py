"""Player model."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from dungeon.core.types import PathId
from dungeon.domain.inventory import Inventory

from .stats import StatBlock


@dataclass(slots=True)
class Player:
    """The adventurer. Replaced wholesale when a new game starts."""

    id: str
    base_stats: StatBlock
    inventory: Inventory
    health: int = 100
    max_health: int = 100
    level: int = 1
    xp: int = 0
    stat_points: int = 0
    temp_stats: Dict[str, int] = field(default_factory=dict)
    chosen_path: PathId | None = None

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    @property
    def health_ratio(self) -> float:
        if self.max_health <= 0:
            return 0.0
        return self.health / self.max_health
