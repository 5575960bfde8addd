"""UI-agnostic root state machine driving a whole playthrough."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Callable, Mapping, Tuple

from dungeon.core.config import DEFAULT_CONFIG, GameConfig
from dungeon.core.rng import RNG
from dungeon.core.types import STAT_NAMES, GamePhase, TurnOwner
from dungeon.data.repositories import EnemiesRepository, ItemsRepository, PathsRepository, ScenariosRepository
from dungeon.domain.combat_formulas import effective_stats
from dungeon.domain.entities import Player
from dungeon.domain.state import Continuation, GameState
from dungeon.services.combat_service import CombatService
from dungeon.services.errors import NoActivePlayerError
from dungeon.services.factories import create_new_player
from dungeon.services.inventory_service import EquipSlotView, HeldItemView, InventoryService
from dungeon.services.leveling_service import LevelingService
from dungeon.services.progression_service import ProgressionService
from dungeon.services.scenario_service import ScenarioService

logger = logging.getLogger(__name__)

Scheduler = Callable[[int, Callable[[], object]], object]

COMBAT_OPTIONS: Tuple[str, ...] = ("Attack", "Special Attack", "Use Item", "Escape")
INPUT_ALIASES = {"open-inventory": "toggle-inventory"}
KNOWN_INPUTS = frozenset({"up", "down", "confirm", "cancel", "toggle-inventory"})


# -----------------------
# Snapshot Views
# -----------------------
@dataclass(frozen=True, slots=True)
class PlayerView:
    level: int
    xp: int
    xp_to_next: int
    health: int
    max_health: int
    stats: Mapping[str, int]
    base_stats: Mapping[str, int]
    temp_stats: Mapping[str, int]
    stat_points: int
    chosen_path: str | None
    held_items: Tuple[HeldItemView, ...]
    equipped: Tuple[EquipSlotView, ...]
    inventory_capacity: int


@dataclass(frozen=True, slots=True)
class NodeView:
    title: str
    description: str
    choice_labels: Tuple[str, ...]
    is_combat: bool
    is_boss: bool


@dataclass(frozen=True, slots=True)
class EnemyView:
    name: str
    level: int
    health: int
    max_health: int
    is_boss: bool


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Read-only picture of the game handed to renderers."""

    phase: GamePhase
    player: PlayerView | None
    node: NodeView | None
    enemy: EnemyView | None
    combat_log: Tuple[str, ...]
    message_log: Tuple[str, ...]
    choice_selection: int
    inventory_selection: int
    stat_selection: int
    combat_options: Tuple[str, ...]
    stat_names: Tuple[str, ...]
    turn_owner: TurnOwner | None
    enemy_turn_pending: bool
    result_text: str | None


class GameController:
    """
    Root state machine for one session.

    The controller owns the game state and processes one input event at a
    time to completion. It never renders or prompts; presentation layers read
    :meth:`snapshot` and feed semantic events to :meth:`handle_input`.

    Enemy turns are deferred: when the enemy owns the turn a pending flag is
    raised and resolved either by the injected ``scheduler`` or by
    :meth:`update` once ``enemy_turn_delay_ms`` has elapsed.
    """

    def __init__(
        self,
        *,
        state: GameState,
        items_repo: ItemsRepository,
        combat_service: CombatService,
        inventory_service: InventoryService,
        leveling_service: LevelingService,
        scenario_service: ScenarioService,
        progression_service: ProgressionService,
        config: GameConfig = DEFAULT_CONFIG,
        scheduler: Scheduler | None = None,
    ) -> None:
        self.state = state
        self._items_repo = items_repo
        self._combat = combat_service
        self._inventory = inventory_service
        self._leveling = leveling_service
        self._scenarios = scenario_service
        self._progression = progression_service
        self._config = config
        self._scheduler = scheduler

    # -----------------------
    # Public API
    # -----------------------
    def handle_input(self, event: str) -> None:
        """Apply one semantic input event to the current phase."""
        event = INPUT_ALIASES.get(event, event)
        if event not in KNOWN_INPUTS:
            raise ValueError(f"Unknown input event '{event}'.")

        phase = self.state.phase
        if phase == "menu":
            if event == "confirm":
                self.start_game()
        elif phase == "scenario":
            self._handle_scenario_input(event)
        elif phase == "combat":
            self._handle_combat_input(event)
        elif phase == "inventory":
            self._handle_inventory_input(event)
        elif phase == "levelUp":
            self._handle_level_up_input(event)
        elif phase == "exploring":
            self._handle_exploring_input(event)
        elif phase in ("gameOver", "victory"):
            if event == "confirm":
                self.reset()

    def update(self, delta_ms: float) -> bool:
        """Advance the enemy-turn timer; returns True when an enemy turn was resolved."""
        if not self.state.pending_enemy_turn or self._scheduler is not None:
            return False
        self.state.enemy_turn_elapsed_ms += max(0.0, delta_ms)
        if self.state.enemy_turn_elapsed_ms < self._config.enemy_turn_delay_ms:
            return False
        return self.resolve_pending_enemy_turn()

    def resolve_pending_enemy_turn(self) -> bool:
        """Run the deferred enemy turn if the encounter still calls for one."""
        state = self.state
        if not state.pending_enemy_turn:
            return False
        state.pending_enemy_turn = False
        state.enemy_turn_elapsed_ms = 0.0

        combat = state.combat
        player = state.player
        if state.phase != "combat" or combat is None or player is None:
            logger.debug("Discarding enemy turn outside of combat (phase=%s)", state.phase)
            return False
        if combat.is_over or combat.turn_owner != "enemy":
            logger.debug("Discarding stale enemy turn")
            return False
        if self._combat.resolve_outcome(combat, player) is not None:
            self._check_combat_end()
            return False

        self._combat.enemy_turn(combat, player, state.rng)
        self._combat.end_turn(combat)
        self._check_combat_end()
        return True

    def start_game(self) -> None:
        state = self.state
        state.player = create_new_player(self._items_repo, state.rng, config=self._config)
        state.cursor.reset()
        state.message_log.clear()
        state.combat = None
        state.result_text = None
        state.pending_continuation = None
        state.pending_enemy_turn = False
        state.current_node = self._progression.entry_node()
        state.choice_selection = 0
        self._set_phase("scenario")

    def reset(self) -> None:
        state = self.state
        state.player = None
        state.cursor.reset()
        state.current_node = None
        state.combat = None
        state.message_log.clear()
        state.result_text = None
        state.return_phase = None
        state.pending_continuation = None
        state.pending_enemy_turn = False
        state.enemy_turn_elapsed_ms = 0.0
        state.choice_selection = 0
        state.inventory_selection = 0
        state.stat_selection = 0
        self._set_phase("menu")

    def snapshot(self) -> GameSnapshot:
        state = self.state
        combat = state.combat
        return GameSnapshot(
            phase=state.phase,
            player=self._player_view(),
            node=self._node_view(),
            enemy=(
                EnemyView(
                    name=combat.enemy.name,
                    level=combat.enemy.level,
                    health=combat.enemy.health,
                    max_health=combat.enemy.max_health,
                    is_boss=combat.enemy.is_boss,
                )
                if combat is not None
                else None
            ),
            combat_log=tuple(combat.log) if combat is not None else (),
            message_log=tuple(state.message_log),
            choice_selection=state.choice_selection,
            inventory_selection=state.inventory_selection,
            stat_selection=state.stat_selection,
            combat_options=COMBAT_OPTIONS,
            stat_names=STAT_NAMES,
            turn_owner=combat.turn_owner if combat is not None else None,
            enemy_turn_pending=state.pending_enemy_turn,
            result_text=state.result_text,
        )

    # -----------------------
    # Phase Handlers
    # -----------------------
    def _handle_scenario_input(self, event: str) -> None:
        state = self.state
        node = state.current_node
        if node is None:
            return
        if node.is_combat:
            if event == "confirm":
                self._enter_combat()
            return

        if event == "up":
            state.choice_selection = max(0, state.choice_selection - 1)
        elif event == "down":
            state.choice_selection = min(len(node.choices) - 1, state.choice_selection + 1)
        elif event == "toggle-inventory":
            self._open_inventory()
        elif event == "confirm" and node.choices:
            choice = node.choices[state.choice_selection]
            outcome = self._scenarios.apply_choice(state, choice)
            for message in outcome.messages:
                self._add_message(message)
            state.choice_selection = 0
            if outcome.levels_gained:
                self._enter_level_up("advance")
            else:
                self._advance()

    def _handle_combat_input(self, event: str) -> None:
        state = self.state
        combat = state.combat
        player = self._require_player()
        if combat is None:
            return
        if state.pending_enemy_turn or combat.turn_owner != "player" or combat.is_over:
            logger.debug("Dropping combat input '%s' outside the player's turn", event)
            return

        if event == "up":
            state.choice_selection = max(0, state.choice_selection - 1)
        elif event == "down":
            state.choice_selection = min(len(COMBAT_OPTIONS) - 1, state.choice_selection + 1)
        elif event == "confirm":
            action = COMBAT_OPTIONS[state.choice_selection]
            if action == "Attack":
                self._combat.player_attack(combat, player, state.rng)
                self._combat.end_turn(combat)
            elif action == "Special Attack":
                self._combat.player_special_attack(combat, player, state.rng)
                self._combat.end_turn(combat)
            elif action == "Use Item":
                self._open_inventory()
                return
            else:
                if self._combat.attempt_escape(combat, player, state.rng):
                    self._finish_escape()
                    return
                self._combat.end_turn(combat)
            self._check_combat_end()

    def _handle_inventory_input(self, event: str) -> None:
        state = self.state
        player = self._require_player()
        items = player.inventory.items
        if event == "up":
            state.inventory_selection = max(0, state.inventory_selection - 1)
        elif event == "down":
            state.inventory_selection = max(0, min(len(items) - 1, state.inventory_selection + 1))
        elif event == "confirm":
            if not 0 <= state.inventory_selection < len(items):
                return
            result = self._inventory.activate_item(player, items[state.inventory_selection])
            self._add_message(result.message)
            state.inventory_selection = max(0, min(state.inventory_selection, len(items) - 1))
        elif event in ("cancel", "toggle-inventory"):
            self._set_phase(state.return_phase or "exploring")
            state.return_phase = None

    def _handle_level_up_input(self, event: str) -> None:
        state = self.state
        player = self._require_player()
        if player.stat_points <= 0:
            if event == "confirm":
                self._set_phase("exploring")
            return

        if event == "up":
            state.stat_selection = max(0, state.stat_selection - 1)
        elif event == "down":
            state.stat_selection = min(len(STAT_NAMES) - 1, state.stat_selection + 1)
        elif event == "confirm":
            result = self._leveling.allocate_stat(player, STAT_NAMES[state.stat_selection])
            self._add_message(result.message)
            if result.success and result.stat_points == 0:
                self._add_message("All stat points allocated!")

    def _handle_exploring_input(self, event: str) -> None:
        if event == "toggle-inventory":
            self._open_inventory()
        elif event == "confirm":
            continuation = self.state.pending_continuation or "advance"
            self.state.pending_continuation = None
            self._continue(continuation)

    # -----------------------
    # Combat Flow
    # -----------------------
    def _enter_combat(self) -> None:
        state = self.state
        node = state.current_node
        player = self._require_player()
        if node is None or node.enemy is None:
            return
        state.combat = self._combat.start_combat(player, node.enemy)
        state.choice_selection = 0
        self._set_phase("combat")
        if state.combat.turn_owner == "enemy":
            self._schedule_enemy_turn()

    def _check_combat_end(self) -> None:
        state = self.state
        combat = state.combat
        player = self._require_player()
        if combat is None:
            return
        outcome = self._combat.resolve_outcome(combat, player)
        if outcome == "victory":
            self._finish_victory()
        elif outcome == "defeat":
            self._game_over()
        elif combat.turn_owner == "enemy":
            self._schedule_enemy_turn()

    def _schedule_enemy_turn(self) -> None:
        state = self.state
        if state.pending_enemy_turn:
            return
        state.pending_enemy_turn = True
        state.enemy_turn_elapsed_ms = 0.0
        state.enemy_turn_ticket += 1
        if self._scheduler is not None:
            self._scheduler(
                self._config.enemy_turn_delay_ms,
                partial(self._resolve_scheduled_enemy_turn, state.enemy_turn_ticket),
            )

    def _resolve_scheduled_enemy_turn(self, ticket: int) -> bool:
        # Callbacks from an earlier turn or an earlier game carry an old ticket.
        if ticket != self.state.enemy_turn_ticket:
            logger.debug("Discarding scheduled enemy turn %d (current %d)", ticket, self.state.enemy_turn_ticket)
            return False
        return self.resolve_pending_enemy_turn()

    def _finish_victory(self) -> None:
        state = self.state
        player = self._require_player()
        combat = state.combat
        assert combat is not None
        enemy = combat.enemy

        self._add_message(f"Victory! +{enemy.xp_reward} XP")
        levels = self._leveling.add_xp(player, enemy.xp_reward)
        if enemy.loot:
            loot = state.rng.choice(enemy.loot)
            self._add_message(self._inventory.give_item(player, loot).message)
        player.temp_stats.clear()
        logger.debug("Defeated %s; levels gained: %d", enemy.name, levels)

        continuation: Continuation = "victory" if enemy.is_boss else "advance"
        state.combat = None
        if levels:
            self._enter_level_up(continuation)
        else:
            self._continue(continuation)

    def _finish_escape(self) -> None:
        state = self.state
        player = self._require_player()
        combat = state.combat
        assert combat is not None
        self._add_message(f"You escaped from {combat.enemy.name}.")
        player.temp_stats.clear()
        state.combat = None
        self._advance()

    # -----------------------
    # Progression
    # -----------------------
    def _enter_level_up(self, continuation: Continuation) -> None:
        player = self._require_player()
        self.state.pending_continuation = continuation
        self.state.stat_selection = 0
        self._add_message(f"Level up! You are now level {player.level}.")
        self._set_phase("levelUp")

    def _continue(self, continuation: Continuation) -> None:
        if continuation == "victory":
            self._victory()
        else:
            self._advance()

    def _advance(self) -> None:
        state = self.state
        player = self._require_player()
        node = self._progression.get_next_node(state.cursor, player.level, state.rng)
        if node is None:
            self._victory()
            return
        state.current_node = node
        state.choice_selection = 0
        self._set_phase("scenario")

    def _open_inventory(self) -> None:
        self.state.return_phase = self.state.phase
        self.state.inventory_selection = 0
        self._set_phase("inventory")

    def _game_over(self) -> None:
        player = self._require_player()
        self.state.result_text = f"You were defeated at level {player.level}"
        self._set_phase("gameOver")

    def _victory(self) -> None:
        player = self._require_player()
        path_name = "Light" if player.chosen_path == "light" else "Shadow"
        self.state.result_text = f"Victory! You conquered the Path of {path_name} at level {player.level}!"
        self._set_phase("victory")

    # -----------------------
    # Helpers
    # -----------------------
    def _set_phase(self, phase: GamePhase) -> None:
        if phase != self.state.phase:
            logger.debug("Phase %s -> %s", self.state.phase, phase)
        self.state.phase = phase

    def _add_message(self, message: str) -> None:
        log = self.state.message_log
        log.append(message)
        if len(log) > self._config.message_log_size:
            del log[: len(log) - self._config.message_log_size]

    def _require_player(self) -> Player:
        if self.state.player is None:
            raise NoActivePlayerError("No active game.")
        return self.state.player

    def _player_view(self) -> PlayerView | None:
        player = self.state.player
        if player is None:
            return None
        return PlayerView(
            level=player.level,
            xp=player.xp,
            xp_to_next=self._leveling.xp_to_next(player),
            health=player.health,
            max_health=player.max_health,
            stats=effective_stats(player),
            base_stats=player.base_stats.as_dict(),
            temp_stats=dict(player.temp_stats),
            stat_points=player.stat_points,
            chosen_path=player.chosen_path,
            held_items=tuple(self._inventory.list_held_items(player)),
            equipped=tuple(self._inventory.list_equip_slots(player)),
            inventory_capacity=player.inventory.capacity,
        )

    def _node_view(self) -> NodeView | None:
        node = self.state.current_node
        if node is None:
            return None
        return NodeView(
            title=node.title,
            description=node.description,
            choice_labels=tuple(choice.label for choice in node.choices),
            is_combat=node.is_combat,
            is_boss=node.is_boss,
        )


def build_game_controller(
    seed: int,
    *,
    config: GameConfig | None = None,
    definitions_path: Path | str | None = None,
    scheduler: Scheduler | None = None,
) -> GameController:
    """Wire repositories and services into a controller sitting at the menu."""
    config = config or DEFAULT_CONFIG
    items_repo = ItemsRepository(base_path=definitions_path)
    enemies_repo = EnemiesRepository(items_repo, base_path=definitions_path)
    scenarios_repo = ScenariosRepository(base_path=definitions_path)
    paths_repo = PathsRepository(base_path=definitions_path)

    inventory_service = InventoryService()
    leveling_service = LevelingService(config=config)
    scenario_service = ScenarioService(
        items_repo,
        leveling_service=leveling_service,
        inventory_service=inventory_service,
    )
    progression_service = ProgressionService(scenarios_repo, paths_repo, enemies_repo, items_repo)

    return GameController(
        state=GameState(seed=seed, rng=RNG(seed)),
        items_repo=items_repo,
        combat_service=CombatService(config=config),
        inventory_service=inventory_service,
        leveling_service=leveling_service,
        scenario_service=scenario_service,
        progression_service=progression_service,
        config=config,
        scheduler=scheduler,
    )
