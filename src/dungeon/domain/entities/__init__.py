"""Runtime entity exports."""

from .enemy import EnemyInstance
from .player import Player
from .stats import StatBlock

__all__ = [
    "EnemyInstance",
    "Player",
    "StatBlock",
]
