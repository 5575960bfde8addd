"""Enemy template definitions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from dungeon.core.types import PathId


@dataclass(frozen=True, slots=True)
class EnemyGrowthDef:
    """Base values or per-level increments for the scalable enemy numbers."""

    health: float
    strength: float
    defense: float
    agility: float
    xp_reward: float


@dataclass(frozen=True, slots=True)
class EnemyDef:
    """Level-parameterised enemy template."""

    id: str
    name: str
    path: PathId
    base: EnemyGrowthDef
    per_level: EnemyGrowthDef
    loot_item_ids: Tuple[str, ...] = ()
