"""Item definition structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Tuple, Union

from dungeon.core.types import ItemCategory

from .effect_def import EffectDef


@dataclass(frozen=True, slots=True)
class EquippableEffect:
    """Static stat bonuses applied while the item sits in an equip slot."""

    bonuses: Mapping[str, int] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ConsumableEffect:
    """One-shot effects applied to the player when the item is used."""

    effects: Tuple[EffectDef, ...] = ()


ItemEffect = Union[EquippableEffect, ConsumableEffect]


@dataclass(frozen=True, slots=True, eq=False)
class ItemDef:
    """Immutable item template shared by every inventory that holds it.

    Equality is identity: two references to the same template compare equal,
    which is what inventory removal relies on.
    """

    id: str
    name: str
    category: ItemCategory
    description: str
    effect: ItemEffect

    @property
    def is_consumable(self) -> bool:
        return isinstance(self.effect, ConsumableEffect)

    @property
    def bonuses(self) -> Mapping[str, int]:
        if isinstance(self.effect, EquippableEffect):
            return self.effect.bonuses
        return {}
