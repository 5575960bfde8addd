from dungeon.core.config import GameConfig
from dungeon.domain.entities import Player, StatBlock
from dungeon.domain.inventory import Inventory
from dungeon.domain.leveling import level_up, xp_for_level
from dungeon.services.leveling_service import LevelingService


def _make_player() -> Player:
    return Player(id="player_1", base_stats=StatBlock.uniform(5), inventory=Inventory())


def test_xp_curve() -> None:
    assert xp_for_level(1) == 100
    assert xp_for_level(2) == 282
    assert xp_for_level(3) == 519


def test_level_up_shape() -> None:
    player = _make_player()
    player.health = 12

    level_up(player)

    assert player.level == 2
    assert player.stat_points == 3
    assert player.base_stats.as_dict() == {"strength": 6, "defense": 6, "agility": 6, "intelligence": 6}
    assert player.max_health == 110
    assert player.health == 110


def test_add_xp_below_threshold_does_not_level() -> None:
    service = LevelingService()
    player = _make_player()

    assert service.add_xp(player, 281) == 0
    assert player.level == 1
    assert service.xp_to_next(player) == 282


def test_add_xp_levels_once_per_threshold() -> None:
    service = LevelingService()
    player = _make_player()

    assert service.add_xp(player, 600) == 2
    assert player.level == 3
    assert player.stat_points == 6
    assert player.max_health == 120


def test_level_rules_follow_config() -> None:
    service = LevelingService(config=GameConfig(stat_points_per_level=5, health_per_level=20))
    player = _make_player()

    service.level_up(player)

    assert player.stat_points == 5
    assert player.max_health == 120


def test_allocate_stat() -> None:
    service = LevelingService()
    player = _make_player()
    player.stat_points = 1

    result = service.allocate_stat(player, "agility")

    assert result.success
    assert result.message == "+1 agility"
    assert player.base_stats.agility == 6
    assert player.stat_points == 0


def test_allocate_stat_without_points_fails() -> None:
    service = LevelingService()
    player = _make_player()

    result = service.allocate_stat(player, "strength")

    assert not result.success
    assert result.message == "No stat points available."
    assert player.base_stats.strength == 5
    assert player.stat_points == 0


def test_allocate_unknown_stat_fails() -> None:
    service = LevelingService()
    player = _make_player()
    player.stat_points = 2

    result = service.allocate_stat(player, "luck")

    assert not result.success
    assert player.stat_points == 2
