"""Factory helpers for runtime entities."""

from .enemy_factory import create_enemy_instance
from .id_factory import make_instance_id
from .player_factory import STARTING_ITEM_IDS, create_new_player

__all__ = [
    "STARTING_ITEM_IDS",
    "create_enemy_instance",
    "create_new_player",
    "make_instance_id",
]
