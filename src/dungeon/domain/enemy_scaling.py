"""Deterministic enemy stat scaling helpers."""
from __future__ import annotations

import math
from dataclasses import dataclass

from dungeon.domain.defs import EnemyDef

# Every number grows linearly from its base: value = base + per_level * level.
# Combat stats keep fractional growth; health and XP reward are floored.


@dataclass(frozen=True, slots=True)
class ScaledEnemyStats:
    max_health: int
    strength: float
    defense: float
    agility: float
    xp_reward: int


def _scale(base: float, per_level: float, level: int) -> float:
    return base + per_level * level


def scale_enemy_stats(enemy_def: EnemyDef, *, level: int) -> ScaledEnemyStats:
    level = max(0, level)
    base = enemy_def.base
    growth = enemy_def.per_level
    return ScaledEnemyStats(
        max_health=max(1, math.floor(_scale(base.health, growth.health, level))),
        strength=_scale(base.strength, growth.strength, level),
        defense=_scale(base.defense, growth.defense, level),
        agility=_scale(base.agility, growth.agility, level),
        xp_reward=math.floor(_scale(base.xp_reward, growth.xp_reward, level)),
    )
