"""Factory for creating enemy instances from level-scaled templates."""
from __future__ import annotations

from dungeon.core.rng import RNG
from dungeon.data.repositories import EnemiesRepository, ItemsRepository
from dungeon.domain.enemy_scaling import scale_enemy_stats
from dungeon.domain.entities import EnemyInstance
from dungeon.services.errors import FactoryError

from .id_factory import make_instance_id


def create_enemy_instance(
    enemy_id: str,
    *,
    level: int,
    enemies_repo: EnemiesRepository,
    items_repo: ItemsRepository,
    rng: RNG,
    is_boss: bool = False,
) -> EnemyInstance:
    """Instantiate an enemy at ``level`` with full health and resolved loot templates."""
    try:
        enemy_def = enemies_repo.get(enemy_id)
    except KeyError as exc:
        raise FactoryError(f"Enemy '{enemy_id}' not found.") from exc

    try:
        loot = tuple(items_repo.get(item_id) for item_id in enemy_def.loot_item_ids)
    except KeyError as exc:
        raise FactoryError(f"Loot item {exc} not found for enemy '{enemy_id}'.") from exc

    scaled = scale_enemy_stats(enemy_def, level=level)
    return EnemyInstance(
        id=make_instance_id("enemy", rng),
        enemy_id=enemy_def.id,
        name=enemy_def.name,
        path=enemy_def.path,
        level=level,
        max_health=scaled.max_health,
        health=scaled.max_health,
        strength=scaled.strength,
        defense=scaled.defense,
        agility=scaled.agility,
        xp_reward=scaled.xp_reward,
        loot=loot,
        is_boss=is_boss,
    )
