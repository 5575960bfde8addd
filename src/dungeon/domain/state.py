"""Domain-level state tracking."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

from dungeon.core.rng import RNG
from dungeon.core.types import GamePhase
from dungeon.domain.battle_models import CombatState
from dungeon.domain.entities import Player
from dungeon.domain.progression import ProgressionCursor, ScenarioNode

Continuation = Literal["advance", "victory"]


@dataclass
class GameState:
    """Everything the controller owns for one session."""

    seed: int
    rng: RNG
    phase: GamePhase = "menu"
    player: Player | None = None
    cursor: ProgressionCursor = field(default_factory=ProgressionCursor)
    current_node: ScenarioNode | None = None
    combat: CombatState | None = None
    message_log: List[str] = field(default_factory=list)
    choice_selection: int = 0
    inventory_selection: int = 0
    stat_selection: int = 0
    return_phase: GamePhase | None = None
    pending_continuation: Continuation | None = None
    pending_enemy_turn: bool = False
    enemy_turn_elapsed_ms: float = 0.0
    enemy_turn_ticket: int = 0
    result_text: str | None = None
