"""Items repository."""
from __future__ import annotations

from typing import Dict, List

from dungeon.core.types import STAT_NAMES
from dungeon.data.errors import DataValidationError
from dungeon.data.repositories.base import RepositoryBase
from dungeon.domain.defs import ConsumableEffect, EffectDef, EquippableEffect, ItemDef

_CATEGORIES = {"weapon", "armor", "consumable", "artifact"}
_CONSUMABLE_KINDS = {"restore_health", "temp_stat"}


class ItemsRepository(RepositoryBase[ItemDef]):
    """Loads and validates item templates."""

    def __init__(self, base_path=None) -> None:
        super().__init__("items.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, ItemDef]:
        items: Dict[str, ItemDef] = {}
        for raw_id, payload in raw.items():
            context = f"item '{raw_id}'"
            item_data = self._require_mapping(payload, context)
            name = self._require_str(item_data.get("name"), f"{context} name")
            description = self._require_str(item_data.get("description", ""), f"{context} description")
            category = self._require_str(item_data.get("category"), f"{context} category")
            if category not in _CATEGORIES:
                raise DataValidationError(f"{context} category '{category}' is not one of {sorted(_CATEGORIES)}.")

            if category == "consumable":
                if "bonuses" in item_data:
                    raise DataValidationError(f"{context} is consumable and cannot declare bonuses.")
                effect = ConsumableEffect(effects=tuple(self._parse_effects(item_data.get("effects"), context)))
            else:
                if "effects" in item_data:
                    raise DataValidationError(f"{context} is equippable and cannot declare effects.")
                effect = EquippableEffect(bonuses=self._parse_bonuses(item_data.get("bonuses", {}), context))

            items[raw_id] = ItemDef(
                id=raw_id,
                name=name,
                category=category,  # type: ignore[arg-type]
                description=description,
                effect=effect,
            )
        return items

    def _parse_bonuses(self, raw_bonuses: object, context: str) -> Dict[str, int]:
        bonus_data = self._require_mapping(raw_bonuses, f"{context} bonuses")
        bonuses: Dict[str, int] = {}
        for stat, amount in bonus_data.items():
            if stat not in STAT_NAMES:
                raise DataValidationError(f"{context} bonuses reference unknown stat '{stat}'.")
            bonuses[stat] = self._require_int(amount, f"{context} bonuses.{stat}")
        return bonuses

    def _parse_effects(self, raw_effects: object, context: str) -> List[EffectDef]:
        if not isinstance(raw_effects, list) or not raw_effects:
            raise DataValidationError(f"{context} effects must be a non-empty list.")
        effects: List[EffectDef] = []
        for index, entry in enumerate(raw_effects):
            effect_context = f"{context} effects[{index}]"
            effect_data = self._require_mapping(entry, effect_context)
            kind = self._require_str(effect_data.get("kind"), f"{effect_context} kind")
            if kind not in _CONSUMABLE_KINDS:
                raise DataValidationError(f"{effect_context} has unknown kind '{kind}'.")
            amount = self._require_int(effect_data.get("amount"), f"{effect_context} amount")
            stat = None
            if kind == "temp_stat":
                stat = self._require_str(effect_data.get("stat"), f"{effect_context} stat")
                if stat not in STAT_NAMES:
                    raise DataValidationError(f"{effect_context} references unknown stat '{stat}'.")
            effects.append(EffectDef(kind=kind, amount=amount, stat=stat))
        return effects
