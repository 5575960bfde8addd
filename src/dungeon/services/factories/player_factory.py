"""Factory for creating a fresh player."""
from __future__ import annotations

from typing import Sequence

from dungeon.core.config import DEFAULT_CONFIG, GameConfig
from dungeon.core.rng import RNG
from dungeon.data.repositories import ItemsRepository
from dungeon.domain.entities import Player, StatBlock
from dungeon.domain.inventory import Inventory
from dungeon.services.errors import FactoryError

from .id_factory import make_instance_id

STARTING_ITEM_IDS: tuple[str, ...] = ("rusty_dagger", "health_potion")


def create_new_player(
    items_repo: ItemsRepository,
    rng: RNG,
    *,
    config: GameConfig = DEFAULT_CONFIG,
    starting_item_ids: Sequence[str] = STARTING_ITEM_IDS,
) -> Player:
    """Level 1 adventurer with uniform base stats and the starter kit held (not equipped)."""
    inventory = Inventory(capacity=config.inventory_slots)
    for item_id in starting_item_ids:
        try:
            item = items_repo.get(item_id)
        except KeyError as exc:
            raise FactoryError(f"Starting item '{item_id}' not found.") from exc
        inventory.add(item)

    return Player(
        id=make_instance_id("player", rng),
        base_stats=StatBlock.uniform(config.starting_stat),
        inventory=inventory,
        health=config.starting_health,
        max_health=config.starting_health,
    )
