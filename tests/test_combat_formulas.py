from dungeon.domain.combat_formulas import (
    apply_damage,
    dodge_chance,
    effective_stats,
    enemy_damage,
    escape_chance,
    player_base_damage,
    player_special_damage,
)
from dungeon.domain.defs import EquippableEffect, ItemDef
from dungeon.domain.entities import EnemyInstance, Player, StatBlock
from dungeon.domain.inventory import Inventory
from tests.helpers.scripted_rng import ScriptedRNG


def _make_player(stat: int = 5) -> Player:
    return Player(id="player_1", base_stats=StatBlock.uniform(stat), inventory=Inventory())


def _make_enemy(**overrides: int) -> EnemyInstance:
    values = dict(max_health=30, health=30, strength=4, defense=4, agility=4, xp_reward=20)
    values.update(overrides)
    return EnemyInstance(id="enemy_1", enemy_id="goblin", name="Goblin", path="light", level=1, **values)


def test_effective_stats_with_no_gear_match_base() -> None:
    player = _make_player(10)
    assert effective_stats(player)["strength"] == 10


def test_effective_stats_include_gear_and_temp() -> None:
    player = _make_player(5)
    sword = ItemDef(
        id="iron_sword",
        name="Iron Sword",
        category="weapon",
        description="",
        effect=EquippableEffect(bonuses={"strength": 5}),
    )
    player.inventory.add(sword)
    player.inventory.equip(sword)
    player.temp_stats["strength"] = 5

    stats = effective_stats(player)
    assert stats["strength"] == 15
    assert stats["defense"] == 5


def test_player_base_damage_range() -> None:
    player = _make_player(10)
    assert player_base_damage(player, ScriptedRNG(ints=[-2])) == 18
    assert player_base_damage(player, ScriptedRNG(ints=[3])) == 23


def test_player_damage_never_below_one() -> None:
    player = _make_player(0)
    assert player_base_damage(player, ScriptedRNG(ints=[-2])) == 1
    assert player_special_damage(player, ScriptedRNG(ints=[-3])) == 1


def test_special_damage_uses_intelligence() -> None:
    player = _make_player(5)
    # 5 + 5 * 1.5 + 0 = 12.5 -> 12
    assert player_special_damage(player, ScriptedRNG(ints=[0])) == 12


def test_enemy_damage_floors_scaled_strength() -> None:
    enemy = _make_enemy(strength=5)
    # 5 * 1.5 + 1 = 8.5 -> 8
    assert enemy_damage(enemy, ScriptedRNG(ints=[1])) == 8


def test_apply_damage_mitigates_by_half_defense() -> None:
    enemy = _make_enemy(defense=4)
    dealt = apply_damage(enemy, 5)
    assert dealt == 3
    assert enemy.health == 27


def test_apply_damage_minimum_one_and_clamped() -> None:
    enemy = _make_enemy(defense=40, health=2)
    assert apply_damage(enemy, 1) == 1
    assert apply_damage(enemy, 1) == 1
    assert apply_damage(enemy, 1) == 1
    assert enemy.health == 0


def test_dodge_caps() -> None:
    assert dodge_chance(_make_player(1000)) == 0.4
    assert dodge_chance(_make_enemy(agility=1000)) == 0.3
    assert dodge_chance(_make_player(5)) == 5 * 0.02


def test_escape_chance_formula() -> None:
    assert escape_chance(_make_player(5), 0.3) == 0.3 + 5 * 0.02
    assert escape_chance(_make_player(1000), 0.3) == 1.0
