"""UI-agnostic controllers for game flow orchestration."""
from __future__ import annotations

from .game_controller import (
    COMBAT_OPTIONS,
    EnemyView,
    GameController,
    GameSnapshot,
    NodeView,
    PlayerView,
    build_game_controller,
)

__all__ = [
    "COMBAT_OPTIONS",
    "EnemyView",
    "GameController",
    "GameSnapshot",
    "NodeView",
    "PlayerView",
    "build_game_controller",
]
