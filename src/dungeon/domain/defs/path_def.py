"""Path sequence definitions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple

from dungeon.core.types import PathId

PathStepKind = Literal["scenario", "combat", "boss"]


@dataclass(frozen=True, slots=True)
class PathStepDef:
    kind: PathStepKind
    scenario_id: str | None = None


@dataclass(frozen=True, slots=True)
class PathDef:
    """Fixed ordered sequence of steps for one branch of the dungeon."""

    id: PathId
    name: str
    steps: Tuple[PathStepDef, ...]
    enemy_pool: Tuple[str, ...]
    boss_id: str
