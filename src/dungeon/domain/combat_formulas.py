"""Pure stat, damage and dodge formulas for players and enemies."""
from __future__ import annotations

import math
from typing import Dict, Union

from dungeon.core.rng import RNG
from dungeon.domain.entities import EnemyInstance, Player

Combatant = Union[Player, EnemyInstance]

DEFENSE_MITIGATION = 0.5
MIN_DAMAGE = 1

PLAYER_STRENGTH_MULTIPLIER = 2
PLAYER_VARIANCE = (-2, 3)
SPECIAL_INTELLIGENCE_MULTIPLIER = 1.5
SPECIAL_VARIANCE = (-3, 5)
ENEMY_STRENGTH_MULTIPLIER = 1.5
ENEMY_VARIANCE = (-2, 2)

PLAYER_DODGE_PER_AGILITY = 0.02
PLAYER_DODGE_CAP = 0.4
ENEMY_DODGE_PER_AGILITY = 0.015
ENEMY_DODGE_CAP = 0.3

ESCAPE_CHANCE_PER_AGILITY = 0.02


def effective_stats(combatant: Combatant) -> Dict[str, float]:
    """Base stats plus equipped and temporary bonuses (players) or raw stats (enemies)."""
    if isinstance(combatant, Player):
        return combatant.base_stats.combined(
            combatant.inventory.equipped_bonus_stats(),
            combatant.temp_stats,
        )
    return {
        "strength": combatant.strength,
        "defense": combatant.defense,
        "agility": combatant.agility,
    }


def apply_damage(combatant: Combatant, raw_amount: int) -> int:
    """Mitigate ``raw_amount`` by defense, subtract it from health and return what landed."""
    mitigation = math.floor(effective_stats(combatant)["defense"] * DEFENSE_MITIGATION)
    final_damage = max(MIN_DAMAGE, raw_amount - mitigation)
    combatant.health = max(0, combatant.health - final_damage)
    return final_damage


def player_base_damage(player: Player, rng: RNG) -> int:
    strength = effective_stats(player)["strength"]
    variance = rng.randint(*PLAYER_VARIANCE)
    return max(MIN_DAMAGE, math.floor(strength * PLAYER_STRENGTH_MULTIPLIER + variance))


def player_special_damage(player: Player, rng: RNG) -> int:
    stats = effective_stats(player)
    base = stats["strength"] + stats["intelligence"] * SPECIAL_INTELLIGENCE_MULTIPLIER
    variance = rng.randint(*SPECIAL_VARIANCE)
    return max(MIN_DAMAGE, math.floor(base + variance))


def enemy_damage(enemy: EnemyInstance, rng: RNG) -> int:
    base = effective_stats(enemy)["strength"] * ENEMY_STRENGTH_MULTIPLIER
    variance = rng.randint(*ENEMY_VARIANCE)
    return max(MIN_DAMAGE, math.floor(base + variance))


def dodge_chance(combatant: Combatant) -> float:
    agility = effective_stats(combatant)["agility"]
    if isinstance(combatant, Player):
        return min(PLAYER_DODGE_CAP, agility * PLAYER_DODGE_PER_AGILITY)
    return min(ENEMY_DODGE_CAP, agility * ENEMY_DODGE_PER_AGILITY)


def escape_chance(player: Player, base_chance: float) -> float:
    agility = effective_stats(player)["agility"]
    return min(1.0, base_chance + agility * ESCAPE_CHANCE_PER_AGILITY)
