import pytest

from dungeon.core.rng import RNG
from dungeon.data.repositories import ItemsRepository
from dungeon.domain.defs import ScenarioChoiceDef, ScenarioEffectDef, ScenarioOutcomeDef
from dungeon.domain.entities import Player, StatBlock
from dungeon.domain.inventory import Inventory
from dungeon.domain.state import GameState
from dungeon.services.errors import NoActivePlayerError
from dungeon.services.inventory_service import InventoryService
from dungeon.services.leveling_service import LevelingService
from dungeon.services.scenario_service import ScenarioService
from tests.helpers.scripted_rng import ScriptedRNG


def _make_service() -> ScenarioService:
    return ScenarioService(
        ItemsRepository(),
        leveling_service=LevelingService(),
        inventory_service=InventoryService(),
    )


def _make_state(rng: RNG | None = None, capacity: int = 15) -> GameState:
    player = Player(id="player_1", base_stats=StatBlock.uniform(5), inventory=Inventory(capacity=capacity))
    return GameState(seed=1, rng=rng or RNG(1), player=player)


def _choice(message: str, *effects: ScenarioEffectDef) -> ScenarioChoiceDef:
    return ScenarioChoiceDef(label="Choice", message=message, effects=effects)


def _effect(effect_type: str, **data: object) -> ScenarioEffectDef:
    return ScenarioEffectDef(type=effect_type, data=data)


def test_set_path_records_choice_and_resets_cursor() -> None:
    state = _make_state()
    state.cursor.index = 3

    _make_service().apply_choice(state, _choice("Light!", _effect("set_path", path="light")))

    assert state.player.chosen_path == "light"
    assert state.cursor.path == "light"
    assert state.cursor.index == 0


def test_lose_health_formats_message_and_floors_at_one() -> None:
    state = _make_state(ScriptedRNG(ints=[15]))
    state.player.health = 10

    outcome = _make_service().apply_choice(
        state,
        _choice("-{health_lost} HP", _effect("lose_health", min=10, max=20)),
    )

    assert outcome.message == "-15 HP"
    assert state.player.health == 1


def test_stat_effects() -> None:
    state = _make_state()

    _make_service().apply_choice(
        state,
        _choice(
            "Stronger",
            _effect("add_base_stat", stat="strength", amount=3),
            _effect("add_temp_stat", stat="defense", amount=3),
        ),
    )

    assert state.player.base_stats.strength == 8
    assert state.player.temp_stats == {"defense": 3}


def test_give_item_reports_full_pack() -> None:
    state = _make_state(capacity=0)

    outcome = _make_service().apply_choice(state, _choice("Loot!", _effect("give_item", item="flame_blade")))

    assert state.player.inventory.items == []
    assert outcome.messages == ["Loot!", "Your pack is full. Flame Blade was left behind."]


def test_give_item_adds_template() -> None:
    state = _make_state()

    _make_service().apply_choice(state, _choice("Loot!", _effect("give_item", item="flame_blade")))

    assert [item.id for item in state.player.inventory.items] == ["flame_blade"]


def test_give_exp_reports_levels_gained() -> None:
    state = _make_state()
    state.player.xp = 270

    outcome = _make_service().apply_choice(state, _choice("+30 XP", _effect("give_exp", amount=30)))

    assert outcome.levels_gained == 1
    assert state.player.level == 2
    assert state.player.xp == 300


def test_chance_branches_override_message() -> None:
    choice = _choice(
        "You search.",
        _effect(
            "chance",
            probability=0.6,
            success=ScenarioOutcomeDef(
                effects=(_effect("give_item", item="health_potion"),),
                message="You found a Health Potion!",
            ),
            failure=ScenarioOutcomeDef(message="You found nothing of value."),
        ),
    )

    lucky = _make_state(ScriptedRNG(floats=[0.1]))
    assert _make_service().apply_choice(lucky, choice).message == "You found a Health Potion!"
    assert [item.id for item in lucky.player.inventory.items] == ["health_potion"]

    unlucky = _make_state(ScriptedRNG(floats=[0.9]))
    assert _make_service().apply_choice(unlucky, choice).message == "You found nothing of value."
    assert unlucky.player.inventory.items == []


def test_stat_check_uses_effective_stats() -> None:
    choice = _choice(
        "You try to slip past.",
        _effect(
            "stat_check",
            stat="agility",
            minimum=10,
            success=ScenarioOutcomeDef(effects=(_effect("give_exp", amount=50),), message="Unseen."),
            failure=ScenarioOutcomeDef(message="Spotted."),
        ),
    )
    service = _make_service()

    state = _make_state()
    assert service.apply_choice(state, choice).message == "Spotted."
    assert state.player.xp == 0

    state = _make_state()
    state.player.temp_stats["agility"] = 5
    assert service.apply_choice(state, choice).message == "Unseen."
    assert state.player.xp == 50


def test_unknown_effect_is_ignored() -> None:
    state = _make_state()
    outcome = _make_service().apply_choice(state, _choice("Nothing happens.", _effect("summon_dragon")))
    assert outcome.message == "Nothing happens."


def test_apply_choice_requires_player() -> None:
    state = GameState(seed=1, rng=RNG(1))
    with pytest.raises(NoActivePlayerError):
        _make_service().apply_choice(state, _choice("x"))
