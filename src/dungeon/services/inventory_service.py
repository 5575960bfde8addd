"""Inventory and equipment orchestration services."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from dungeon.domain.defs import ItemDef
from dungeon.domain.entities import Player
from dungeon.domain.item_effects import apply_item_effects

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HeldItemView:
    index: int
    item_id: str
    name: str
    category: str
    description: str


@dataclass(frozen=True, slots=True)
class EquipSlotView:
    slot: str
    item_id: str | None
    item_name: str | None


@dataclass(frozen=True, slots=True)
class InventoryEvent:
    """Base class for inventory/equipment events."""

    message: str


@dataclass(frozen=True, slots=True)
class ItemUsedEvent(InventoryEvent):
    item_id: str
    item_name: str


@dataclass(frozen=True, slots=True)
class ItemEquippedEvent(InventoryEvent):
    item_id: str
    item_name: str
    slot: str
    replaced_item_id: str | None = None


@dataclass(frozen=True, slots=True)
class ItemUnequippedEvent(InventoryEvent):
    item_id: str
    item_name: str
    slot: str


@dataclass(frozen=True, slots=True)
class ItemReceivedEvent(InventoryEvent):
    item_id: str
    item_name: str


@dataclass(frozen=True, slots=True)
class InventoryFailedEvent(InventoryEvent):
    reason: str


class InventoryService:
    """Service responsible for item use, equipment changes and item grants."""

    def list_held_items(self, player: Player) -> List[HeldItemView]:
        return [
            HeldItemView(
                index=index,
                item_id=item.id,
                name=item.name,
                category=item.category,
                description=item.description,
            )
            for index, item in enumerate(player.inventory.items)
        ]

    def list_equip_slots(self, player: Player) -> List[EquipSlotView]:
        return [
            EquipSlotView(
                slot=slot,
                item_id=item.id if item else None,
                item_name=item.name if item else None,
            )
            for slot, item in player.inventory.equipped.items()
        ]

    def activate_item(self, player: Player, item: ItemDef) -> InventoryEvent:
        """Use a consumable or equip anything else."""
        if item.is_consumable:
            return self.use_item(player, item)
        return self.equip_item(player, item)

    def use_item(self, player: Player, item: ItemDef) -> InventoryEvent:
        if not player.inventory.contains(item):
            return InventoryFailedEvent(message=f"{item.name} is not in your pack.", reason="not_held")
        result = apply_item_effects(player, item)
        if not result.applied:
            return InventoryFailedEvent(message=f"{item.name} cannot be used.", reason="not_consumable")
        player.inventory.remove(item)
        logger.debug("Used %s: %s", item.id, result.message)
        return ItemUsedEvent(message=result.message or f"Used {item.name}", item_id=item.id, item_name=item.name)

    def equip_item(self, player: Player, item: ItemDef) -> InventoryEvent:
        result = player.inventory.equip(item)
        if not result.success:
            if result.reason == "not_equippable":
                return InventoryFailedEvent(message=f"{item.name} cannot be equipped.", reason="not_equippable")
            return InventoryFailedEvent(message=f"{item.name} is not in your pack.", reason="not_held")
        message = f"Equipped {item.name}"
        if result.replaced is not None:
            message += f" (stowed {result.replaced.name})"
        return ItemEquippedEvent(
            message=message,
            item_id=item.id,
            item_name=item.name,
            slot=item.category,
            replaced_item_id=result.replaced.id if result.replaced else None,
        )

    def unequip_slot(self, player: Player, slot: str) -> InventoryEvent:
        item = player.inventory.equipped.get(slot)
        if item is None:
            return InventoryFailedEvent(message=f"Nothing equipped in {slot}.", reason="slot_empty")
        if not player.inventory.unequip(slot):
            return InventoryFailedEvent(message="Your pack is full.", reason="inventory_full")
        return ItemUnequippedEvent(message=f"Unequipped {item.name}", item_id=item.id, item_name=item.name, slot=slot)

    def give_item(self, player: Player, item: ItemDef) -> InventoryEvent:
        if not player.inventory.add(item):
            return InventoryFailedEvent(
                message=f"Your pack is full. {item.name} was left behind.",
                reason="inventory_full",
            )
        return ItemReceivedEvent(message=f"Found: {item.name}", item_id=item.id, item_name=item.name)
