"""Enemies repository with loot reference validation."""
from __future__ import annotations

from typing import Dict

from dungeon.core.types import PATH_IDS
from dungeon.data.errors import DataReferenceError, DataValidationError
from dungeon.data.repositories.base import RepositoryBase
from dungeon.data.repositories.items_repo import ItemsRepository
from dungeon.domain.defs import EnemyDef, EnemyGrowthDef

_GROWTH_FIELDS = ("health", "strength", "defense", "agility", "xp_reward")


class EnemiesRepository(RepositoryBase[EnemyDef]):
    """Loads level-scaled enemy templates and ensures their loot exists."""

    def __init__(self, items_repo: ItemsRepository | None = None, base_path=None) -> None:
        super().__init__("enemies.json", base_path)
        self._items_repo = items_repo or ItemsRepository(base_path=base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, EnemyDef]:
        item_ids = {item.id for item in self._items_repo.all()}

        enemies: Dict[str, EnemyDef] = {}
        for raw_id, payload in raw.items():
            context = f"enemy '{raw_id}'"
            enemy_data = self._require_mapping(payload, context)
            path = self._require_str(enemy_data.get("path"), f"{context} path")
            if path not in PATH_IDS:
                raise DataValidationError(f"{context} path must be one of {list(PATH_IDS)}.")
            loot = self._require_str_list(enemy_data.get("loot", []), f"{context} loot")
            for item_id in loot:
                if item_id not in item_ids:
                    raise DataReferenceError(f"{context} loot references missing item '{item_id}'.")
            enemies[raw_id] = EnemyDef(
                id=raw_id,
                name=self._require_str(enemy_data.get("name"), f"{context} name"),
                path=path,  # type: ignore[arg-type]
                base=self._parse_growth(enemy_data.get("base"), f"{context} base"),
                per_level=self._parse_growth(enemy_data.get("per_level"), f"{context} per_level"),
                loot_item_ids=tuple(loot),
            )
        return enemies

    def _parse_growth(self, raw_growth: object, context: str) -> EnemyGrowthDef:
        growth = self._require_mapping(raw_growth, context)
        missing = [name for name in _GROWTH_FIELDS if name not in growth]
        if missing:
            raise DataValidationError(f"{context} missing fields: {missing}")
        values = {name: self._require_number(growth[name], f"{context}.{name}") for name in _GROWTH_FIELDS}
        return EnemyGrowthDef(**values)
