"""Applies scenario choices to the player and game state."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from dungeon.core.types import PATH_IDS
from dungeon.data.repositories import ItemsRepository
from dungeon.domain.combat_formulas import effective_stats
from dungeon.domain.defs import ScenarioChoiceDef, ScenarioEffectDef, ScenarioOutcomeDef
from dungeon.domain.entities import Player
from dungeon.domain.state import GameState
from dungeon.services.errors import NoActivePlayerError
from dungeon.services.inventory_service import InventoryEvent, InventoryFailedEvent, InventoryService
from dungeon.services.leveling_service import LevelingService

logger = logging.getLogger(__name__)

KNOWN_EFFECT_TYPES = frozenset(
    {
        "set_path",
        "lose_health",
        "restore_health",
        "add_base_stat",
        "add_temp_stat",
        "give_item",
        "give_exp",
        "chance",
        "stat_check",
    }
)


class _TemplateValues(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


@dataclass(slots=True)
class ChoiceOutcome:
    """Result returned after applying a choice."""

    message: str
    notes: List[str] = field(default_factory=list)
    levels_gained: int = 0
    inventory_events: List[InventoryEvent] = field(default_factory=list)

    @property
    def messages(self) -> List[str]:
        return [self.message, *self.notes]


@dataclass(slots=True)
class _EffectContext:
    values: Dict[str, object] = field(default_factory=dict)
    message_override: str | None = None
    notes: List[str] = field(default_factory=list)
    levels_gained: int = 0
    inventory_events: List[InventoryEvent] = field(default_factory=list)


class ScenarioService:
    """Interprets the typed effects attached to scenario choices."""

    def __init__(
        self,
        items_repo: ItemsRepository,
        *,
        leveling_service: LevelingService,
        inventory_service: InventoryService,
    ) -> None:
        self._items_repo = items_repo
        self._leveling_service = leveling_service
        self._inventory_service = inventory_service

    def apply_choice(self, state: GameState, choice: ScenarioChoiceDef) -> ChoiceOutcome:
        if state.player is None:
            raise NoActivePlayerError("Cannot apply a scenario choice before a game has started.")
        context = _EffectContext()
        self._apply_effects(choice.effects, state, state.player, context)
        template = context.message_override or choice.message
        message = template.format_map(_TemplateValues(context.values))
        logger.debug("Choice '%s' applied: %s", choice.label, message)
        return ChoiceOutcome(
            message=message,
            notes=context.notes,
            levels_gained=context.levels_gained,
            inventory_events=context.inventory_events,
        )

    def _apply_effects(
        self,
        effects: Sequence[ScenarioEffectDef],
        state: GameState,
        player: Player,
        context: _EffectContext,
    ) -> None:
        for effect in effects:
            self._apply_effect(effect, state, player, context)

    def _apply_effect(
        self,
        effect: ScenarioEffectDef,
        state: GameState,
        player: Player,
        context: _EffectContext,
    ) -> None:
        data = effect.data
        if effect.type == "set_path":
            path = str(data.get("path"))
            if path not in PATH_IDS:
                raise ValueError(f"Unknown path '{path}'.")
            player.chosen_path = path  # type: ignore[assignment]
            state.cursor.path = path  # type: ignore[assignment]
            state.cursor.index = 0
        elif effect.type == "lose_health":
            amount = state.rng.randint(int(data.get("min", 0)), int(data.get("max", 0)))
            player.health = max(1, player.health - amount)
            context.values["health_lost"] = amount
        elif effect.type == "restore_health":
            amount = int(data.get("amount", 0))
            before = player.health
            player.health = min(player.max_health, player.health + amount)
            context.values["health_restored"] = player.health - before
        elif effect.type == "add_base_stat":
            player.base_stats.increase(str(data.get("stat")), int(data.get("amount", 0)))
        elif effect.type == "add_temp_stat":
            stat = str(data.get("stat"))
            player.temp_stats[stat] = player.temp_stats.get(stat, 0) + int(data.get("amount", 0))
        elif effect.type == "give_item":
            item = self._items_repo.get(str(data.get("item")))
            event = self._inventory_service.give_item(player, item)
            context.inventory_events.append(event)
            if isinstance(event, InventoryFailedEvent):
                context.notes.append(event.message)
        elif effect.type == "give_exp":
            amount = int(data.get("amount", 0))
            context.levels_gained += self._leveling_service.add_xp(player, amount)
            context.values["xp_gained"] = amount
        elif effect.type == "chance":
            succeeded = state.rng.chance(float(data.get("probability", 0.0)))
            self._apply_branch(data, succeeded, state, player, context)
        elif effect.type == "stat_check":
            stat_value = effective_stats(player).get(str(data.get("stat")), 0)
            succeeded = stat_value >= int(data.get("minimum", 0))
            self._apply_branch(data, succeeded, state, player, context)
        else:
            logger.warning("Ignoring unknown scenario effect type '%s'", effect.type)

    def _apply_branch(
        self,
        data: Dict[str, object],
        succeeded: bool,
        state: GameState,
        player: Player,
        context: _EffectContext,
    ) -> None:
        outcome = data.get("success" if succeeded else "failure")
        if not isinstance(outcome, ScenarioOutcomeDef):
            return
        self._apply_effects(outcome.effects, state, player, context)
        if outcome.message is not None:
            context.message_override = outcome.message
