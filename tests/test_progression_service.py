from dungeon.core.rng import RNG
from dungeon.data.repositories import EnemiesRepository, ItemsRepository, PathsRepository, ScenariosRepository
from dungeon.domain.progression import ProgressionCursor
from dungeon.services.progression_service import ProgressionService


def _make_service() -> ProgressionService:
    items = ItemsRepository()
    return ProgressionService(ScenariosRepository(), PathsRepository(), EnemiesRepository(items), items)


def test_no_path_returns_entry_without_advancing() -> None:
    service = _make_service()
    cursor = ProgressionCursor()

    node = service.get_next_node(cursor, 1, RNG(1))

    assert node is not None
    assert node.scenario_id == "dungeon_entrance"
    assert [choice.label for choice in node.choices] == ["Take the Path of Light", "Take the Path of Shadow"]
    assert cursor.index == 0


def test_light_path_sequence() -> None:
    service = _make_service()
    cursor = ProgressionCursor(path="light")
    rng = RNG(5)

    nodes = [service.get_next_node(cursor, 1, rng) for _ in range(5)]

    assert nodes[0].scenario_id == "light_shrine"
    assert nodes[1].is_combat and not nodes[1].is_boss
    assert nodes[1].enemy.enemy_id in ("goblin", "corrupted_knight")
    assert nodes[1].title == "Enemy Encounter!"
    assert nodes[2].scenario_id == "light_treasure"
    assert nodes[3].is_combat
    assert nodes[4].is_boss
    assert nodes[4].enemy.enemy_id == "light_guardian"
    assert nodes[4].description == "The Light Guardian emerges!"


def test_boss_scaled_one_level_above_player() -> None:
    service = _make_service()
    cursor = ProgressionCursor(path="shadow", index=4)

    boss = service.get_next_node(cursor, 3, RNG(2)).enemy

    assert boss.level == 4
    assert boss.is_boss
    # 100 + 12 * 4
    assert boss.max_health == 148
    # 10 + 2.5 * 4
    assert boss.strength == 20


def test_generic_enemy_scaled_to_player_level() -> None:
    service = _make_service()
    cursor = ProgressionCursor(path="shadow", index=1)

    enemy = service.get_next_node(cursor, 2, RNG(9)).enemy

    assert enemy.level == 2
    assert enemy.enemy_id in ("shadow_beast", "dark_mage")


def test_completion_signal_never_advances_past_end() -> None:
    service = _make_service()
    cursor = ProgressionCursor(path="light", index=5)

    assert service.get_next_node(cursor, 1, RNG(1)) is None
    assert service.get_next_node(cursor, 1, RNG(1)) is None
    assert cursor.index == 5


def test_cursor_never_revisits_index() -> None:
    service = _make_service()
    cursor = ProgressionCursor(path="light")
    rng = RNG(11)
    seen = []
    while service.get_next_node(cursor, 1, rng) is not None:
        seen.append(cursor.index)

    assert seen == [1, 2, 3, 4, 5]
