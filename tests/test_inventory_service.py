from dungeon.core.rng import RNG
from dungeon.data.repositories import ItemsRepository
from dungeon.domain.entities import Player
from dungeon.services.factories import create_new_player
from dungeon.services.inventory_service import (
    InventoryFailedEvent,
    InventoryService,
    ItemEquippedEvent,
    ItemReceivedEvent,
    ItemUnequippedEvent,
    ItemUsedEvent,
)


def _make_player(items_repo: ItemsRepository) -> Player:
    return create_new_player(items_repo, RNG(1))


def test_list_views() -> None:
    service = InventoryService()
    player = _make_player(ItemsRepository())

    held = service.list_held_items(player)
    slots = service.list_equip_slots(player)

    assert [(view.index, view.item_id) for view in held] == [(0, "rusty_dagger"), (1, "health_potion")]
    assert [view.slot for view in slots] == ["weapon", "armor", "artifact"]
    assert all(view.item_id is None for view in slots)


def test_activate_uses_consumable() -> None:
    items = ItemsRepository()
    service = InventoryService()
    player = _make_player(items)
    player.health = 50

    event = service.activate_item(player, player.inventory.items[1])

    assert isinstance(event, ItemUsedEvent)
    assert event.message == "Restored 30 HP"
    assert player.health == 80
    assert [item.id for item in player.inventory.items] == ["rusty_dagger"]


def test_activate_equips_and_reports_swap() -> None:
    items = ItemsRepository()
    service = InventoryService()
    player = _make_player(items)
    service.activate_item(player, player.inventory.items[0])
    service.give_item(player, items.get("iron_sword"))

    event = service.activate_item(player, player.inventory.items[-1])

    assert isinstance(event, ItemEquippedEvent)
    assert event.message == "Equipped Iron Sword (stowed Rusty Dagger)"
    assert event.replaced_item_id == "rusty_dagger"
    assert player.inventory.equipped["weapon"].id == "iron_sword"


def test_equip_unheld_item_fails() -> None:
    items = ItemsRepository()
    service = InventoryService()
    player = _make_player(items)

    event = service.equip_item(player, items.get("chainmail"))

    assert isinstance(event, InventoryFailedEvent)
    assert event.reason == "not_held"
    assert player.inventory.equipped["armor"] is None


def test_unequip_slot() -> None:
    items = ItemsRepository()
    service = InventoryService()
    player = _make_player(items)
    service.equip_item(player, player.inventory.items[0])

    event = service.unequip_slot(player, "weapon")

    assert isinstance(event, ItemUnequippedEvent)
    assert player.inventory.equipped["weapon"] is None
    assert isinstance(service.unequip_slot(player, "weapon"), InventoryFailedEvent)


def test_give_item_respects_capacity() -> None:
    items = ItemsRepository()
    service = InventoryService()
    player = _make_player(items)
    player.inventory.capacity = 3

    received = service.give_item(player, items.get("lucky_coin"))
    rejected = service.give_item(player, items.get("ancient_tome"))

    assert isinstance(received, ItemReceivedEvent)
    assert received.message == "Found: Lucky Coin"
    assert isinstance(rejected, InventoryFailedEvent)
    assert rejected.message == "Your pack is full. Ancient Tome was left behind."
    assert len(player.inventory.items) == 3
