"""Walks the chosen path and materialises its scenario and combat nodes."""
from __future__ import annotations

import logging

from dungeon.core.rng import RNG
from dungeon.data.repositories import EnemiesRepository, ItemsRepository, PathsRepository, ScenariosRepository
from dungeon.domain.defs import ScenarioDef
from dungeon.domain.progression import ProgressionCursor, ScenarioNode
from dungeon.services.factories import create_enemy_instance

logger = logging.getLogger(__name__)

ENTRY_SCENARIO_ID = "dungeon_entrance"
BOSS_LEVEL_BONUS = 1


class ProgressionService:
    """Sequencer for the fixed Light/Shadow step lists."""

    def __init__(
        self,
        scenarios_repo: ScenariosRepository,
        paths_repo: PathsRepository,
        enemies_repo: EnemiesRepository,
        items_repo: ItemsRepository,
        *,
        entry_scenario_id: str = ENTRY_SCENARIO_ID,
    ) -> None:
        self._scenarios_repo = scenarios_repo
        self._paths_repo = paths_repo
        self._enemies_repo = enemies_repo
        self._items_repo = items_repo
        self._entry_scenario_id = entry_scenario_id

    def entry_node(self) -> ScenarioNode:
        return self._scenario_node(self._scenarios_repo.get(self._entry_scenario_id))

    def get_next_node(self, cursor: ProgressionCursor, player_level: int, rng: RNG) -> ScenarioNode | None:
        """Return the node at the cursor and advance it, or None once the path is complete.

        Before a path is chosen the entry scenario is returned and the cursor
        does not move.
        """
        if cursor.path is None:
            return self.entry_node()

        path = self._paths_repo.get(cursor.path)
        if cursor.index >= len(path.steps):
            return None

        step = path.steps[cursor.index]
        cursor.index += 1
        logger.debug("Path %s step %d/%d: %s", path.id, cursor.index, len(path.steps), step.kind)

        if step.kind == "combat":
            enemy_id = rng.choice(path.enemy_pool)
            enemy = create_enemy_instance(
                enemy_id,
                level=player_level,
                enemies_repo=self._enemies_repo,
                items_repo=self._items_repo,
                rng=rng,
            )
            return ScenarioNode(
                title="Enemy Encounter!",
                description=f"A {enemy.name} blocks your path!",
                enemy=enemy,
            )
        if step.kind == "boss":
            boss = create_enemy_instance(
                path.boss_id,
                level=player_level + BOSS_LEVEL_BONUS,
                enemies_repo=self._enemies_repo,
                items_repo=self._items_repo,
                rng=rng,
                is_boss=True,
            )
            return ScenarioNode(
                title="BOSS BATTLE!",
                description=f"The {boss.name} emerges!",
                enemy=boss,
            )
        assert step.scenario_id is not None
        return self._scenario_node(self._scenarios_repo.get(step.scenario_id))

    @staticmethod
    def _scenario_node(scenario: ScenarioDef) -> ScenarioNode:
        return ScenarioNode(
            title=scenario.title,
            description=scenario.description,
            choices=scenario.choices,
            scenario_id=scenario.id,
        )
