from dungeon.domain.defs import ConsumableEffect, EffectDef, EquippableEffect, ItemDef
from dungeon.domain.inventory import Inventory


def _make_item(item_id: str, category: str = "weapon", **bonuses: int) -> ItemDef:
    if category == "consumable":
        effect = ConsumableEffect(effects=(EffectDef(kind="restore_health", amount=30),))
    else:
        effect = EquippableEffect(bonuses=bonuses)
    return ItemDef(id=item_id, name=item_id.replace("_", " ").title(), category=category, description="", effect=effect)


def test_add_respects_capacity() -> None:
    inventory = Inventory(capacity=2)
    assert inventory.add(_make_item("a"))
    assert inventory.add(_make_item("b"))
    assert inventory.is_full
    assert not inventory.add(_make_item("c"))
    assert len(inventory.items) == 2


def test_remove_matches_identity_not_id() -> None:
    first = _make_item("health_potion", "consumable")
    second = _make_item("health_potion", "consumable")
    inventory = Inventory(items=[first, second])

    assert inventory.remove(second)
    assert inventory.items == [first]
    assert inventory.items[0] is first
    assert not inventory.remove(second)


def test_equip_moves_item_out_of_held_list() -> None:
    sword = _make_item("iron_sword", strength=5)
    inventory = Inventory(items=[sword])

    result = inventory.equip(sword)

    assert result.success
    assert result.replaced is None
    assert inventory.equipped["weapon"] is sword
    assert inventory.items == []


def test_equip_swaps_previous_back_into_pack() -> None:
    dagger = _make_item("rusty_dagger", strength=2)
    sword = _make_item("iron_sword", strength=5)
    inventory = Inventory(items=[dagger, sword])
    inventory.equip(dagger)

    result = inventory.equip(sword)

    assert result.success
    assert result.replaced is dagger
    assert inventory.equipped["weapon"] is sword
    assert inventory.items == [dagger]


def test_equip_swap_when_pack_full_keeps_both_items() -> None:
    dagger = _make_item("rusty_dagger", strength=2)
    sword = _make_item("iron_sword", strength=5)
    inventory = Inventory(capacity=2, items=[dagger])
    inventory.equip(dagger)
    inventory.add(sword)
    inventory.add(_make_item("leather_armor", "armor", defense=3))
    assert inventory.is_full

    result = inventory.equip(sword)

    assert result.success
    assert inventory.equipped["weapon"] is sword
    assert any(item is dagger for item in inventory.items)
    assert len(inventory.items) == 2


def test_equip_rejects_unheld_and_consumables() -> None:
    inventory = Inventory()
    sword = _make_item("iron_sword", strength=5)
    potion = _make_item("health_potion", "consumable")
    inventory.add(potion)

    assert inventory.equip(sword).reason == "not_held"
    assert inventory.equip(potion).reason == "not_equippable"
    assert inventory.equipped["weapon"] is None
    assert inventory.items == [potion]


def test_equip_then_unequip_round_trip() -> None:
    armor = _make_item("chainmail", "armor", defense=6)
    inventory = Inventory(items=[armor])
    inventory.equip(armor)

    assert inventory.unequip("armor")
    assert inventory.equipped["armor"] is None
    assert inventory.items == [armor]


def test_unequip_fails_when_pack_full() -> None:
    armor = _make_item("chainmail", "armor", defense=6)
    inventory = Inventory(capacity=1, items=[armor])
    inventory.equip(armor)
    inventory.add(_make_item("iron_sword", strength=5))

    assert not inventory.unequip("armor")
    assert inventory.equipped["armor"] is armor
    assert not inventory.unequip("weapon")


def test_equipped_bonus_stats_sums_slots() -> None:
    sword = _make_item("flame_blade", strength=8, intelligence=3)
    tome = _make_item("ancient_tome", "artifact", intelligence=4)
    inventory = Inventory(items=[sword, tome])
    inventory.equip(sword)
    inventory.equip(tome)

    assert inventory.equipped_bonus_stats() == {"strength": 8, "intelligence": 7}
