"""Experience, level-up and stat point allocation for the player."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from dungeon.core.config import DEFAULT_CONFIG, GameConfig
from dungeon.core.types import STAT_NAMES
from dungeon.domain.entities import Player
from dungeon.domain.leveling import level_up, xp_for_level

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AllocationResult:
    success: bool
    message: str
    stat_points: int


class LevelingService:
    """Applies the experience curve and spends unallocated stat points."""

    def __init__(self, *, config: GameConfig = DEFAULT_CONFIG) -> None:
        self._config = config

    def xp_to_next(self, player: Player) -> int:
        return xp_for_level(player.level + 1, self._config.xp_curve_multiplier)

    def add_xp(self, player: Player, amount: int) -> int:
        """Grant experience and return how many levels were gained."""
        player.xp += max(0, amount)
        levels = 0
        while player.xp >= self.xp_to_next(player):
            self.level_up(player)
            levels += 1
        return levels

    def level_up(self, player: Player) -> None:
        level_up(
            player,
            stat_points=self._config.stat_points_per_level,
            health_gain=self._config.health_per_level,
        )
        logger.debug("Player reached level %d (%d stat points)", player.level, player.stat_points)

    def allocate_stat(self, player: Player, stat: str) -> AllocationResult:
        if stat not in STAT_NAMES:
            return AllocationResult(
                success=False,
                message="Invalid stat selection.",
                stat_points=player.stat_points,
            )
        if player.stat_points <= 0:
            return AllocationResult(
                success=False,
                message="No stat points available.",
                stat_points=player.stat_points,
            )
        player.base_stats.increase(stat, 1)
        player.stat_points -= 1
        return AllocationResult(success=True, message=f"+1 {stat}", stat_points=player.stat_points)
