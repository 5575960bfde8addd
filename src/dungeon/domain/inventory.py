"""Bounded item list with one equip slot per equippable category."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal

from dungeon.core.types import EQUIP_SLOTS
from dungeon.domain.defs import ItemDef

EquipFailureReason = Literal["not_held", "not_equippable"]


def _default_equip_slots() -> Dict[str, ItemDef | None]:
    return {slot: None for slot in EQUIP_SLOTS}


@dataclass(frozen=True, slots=True)
class EquipResult:
    """Outcome of an equip attempt."""

    success: bool
    item: ItemDef
    replaced: ItemDef | None = None
    reason: EquipFailureReason | None = None


@dataclass(slots=True)
class Inventory:
    """Held (unequipped) items plus the weapon/armor/artifact slots.

    An item sitting in a slot is never also present in ``items``.
    """

    capacity: int = 15
    items: List[ItemDef] = field(default_factory=list)
    equipped: Dict[str, ItemDef | None] = field(default_factory=_default_equip_slots)

    @property
    def is_full(self) -> bool:
        return len(self.items) >= self.capacity

    def add(self, item: ItemDef) -> bool:
        if self.is_full:
            return False
        self.items.append(item)
        return True

    def remove(self, item: ItemDef) -> bool:
        for index, held in enumerate(self.items):
            if held is item:
                del self.items[index]
                return True
        return False

    def contains(self, item: ItemDef) -> bool:
        return any(held is item for held in self.items)

    def equip(self, item: ItemDef) -> EquipResult:
        if item.category not in self.equipped:
            return EquipResult(success=False, item=item, reason="not_equippable")
        if not self.remove(item):
            return EquipResult(success=False, item=item, reason="not_held")
        # Held list has room for the previous occupant now.
        previous = self.equipped[item.category]
        if previous is not None:
            self.items.append(previous)
        self.equipped[item.category] = item
        return EquipResult(success=True, item=item, replaced=previous)

    def unequip(self, slot: str) -> bool:
        item = self.equipped.get(slot)
        if item is None:
            return False
        if not self.add(item):
            return False
        self.equipped[slot] = None
        return True

    def equipped_bonus_stats(self) -> Dict[str, int]:
        totals: Dict[str, int] = {}
        for item in self.equipped.values():
            if item is None:
                continue
            for stat, amount in item.bonuses.items():
                totals[stat] = totals.get(stat, 0) + amount
        return totals
