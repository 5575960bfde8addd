"""Progression cursor and the nodes it yields."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from dungeon.core.types import PathId
from dungeon.domain.defs import ScenarioChoiceDef
from dungeon.domain.entities import EnemyInstance


@dataclass(slots=True)
class ProgressionCursor:
    """Position within the chosen path; only ever moves forward."""

    path: PathId | None = None
    index: int = 0

    def reset(self) -> None:
        self.path = None
        self.index = 0


@dataclass(frozen=True, slots=True)
class ScenarioNode:
    """A narrative scenario with choices, or a combat encounter with a fresh enemy."""

    title: str
    description: str
    choices: Tuple[ScenarioChoiceDef, ...] = ()
    scenario_id: str | None = None
    enemy: EnemyInstance | None = None

    @property
    def is_combat(self) -> bool:
        return self.enemy is not None

    @property
    def is_boss(self) -> bool:
        return self.enemy is not None and self.enemy.is_boss
