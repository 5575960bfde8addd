"""Experience curve and level-up rules."""
from __future__ import annotations

import math

from dungeon.domain.entities import Player


def xp_for_level(level: int, multiplier: int = 100) -> int:
    """Cumulative experience required to reach ``level``."""
    return math.floor(multiplier * math.pow(level, 1.5))


def level_up(player: Player, *, stat_points: int = 3, health_gain: int = 10) -> None:
    """+1 level, +stat points, +1 to each base stat, more max health, full heal."""
    player.level += 1
    player.stat_points += stat_points
    for stat in player.base_stats.as_dict():
        player.base_stats.increase(stat, 1)
    player.max_health += health_gain
    player.health = player.max_health
