"""Combat service resolving one-on-one encounters."""
from __future__ import annotations

import logging
import math

from dungeon.core.config import DEFAULT_CONFIG, GameConfig
from dungeon.core.rng import RNG
from dungeon.domain.battle_models import AttackResult, CombatOutcome, CombatState, EnemyAction
from dungeon.domain.combat_formulas import (
    apply_damage,
    dodge_chance,
    effective_stats,
    enemy_damage,
    escape_chance,
    player_base_damage,
    player_special_damage,
)
from dungeon.domain.entities import EnemyInstance, Player

logger = logging.getLogger(__name__)

SPECIAL_DODGE_FACTOR = 0.5
ENEMY_SPECIAL_MULTIPLIER = 1.5
ENEMY_SPECIAL_DODGE_FACTOR = 0.7
LOW_HEALTH_RATIO = 0.3
HIGH_HEALTH_RATIO = 0.7
LOW_HEALTH_ATTACK_CHANCE = 0.7
HIGH_HEALTH_SPECIAL_CHANCE = 0.3


class CombatService:
    """Turn ordering and action resolution for a player against a single enemy.

    Actions never flip turn ownership themselves; callers end the turn with
    :meth:`end_turn` once an action has been resolved.
    """

    def __init__(self, *, config: GameConfig = DEFAULT_CONFIG) -> None:
        self._config = config

    # -----------------------
    # Encounter Lifecycle
    # -----------------------
    def start_combat(self, player: Player, enemy: EnemyInstance) -> CombatState:
        combat = CombatState(enemy=enemy, log_size=self._config.combat_log_size)
        combat.add_log(f"Combat started with {enemy.name}!")
        if effective_stats(enemy)["agility"] > effective_stats(player)["agility"]:
            combat.turn_owner = "enemy"
            combat.add_log(f"{enemy.name} strikes first!")
        logger.debug("Combat with %s (level %d), first turn: %s", enemy.name, enemy.level, combat.turn_owner)
        return combat

    def end_turn(self, combat: CombatState) -> None:
        combat.turn_owner = "enemy" if combat.turn_owner == "player" else "player"
        combat.turn_count += 1

    def resolve_outcome(self, combat: CombatState, player: Player) -> CombatOutcome | None:
        """Record and return victory/defeat once either side has no health left."""
        if combat.outcome is not None:
            return combat.outcome
        if not combat.enemy.is_alive:
            combat.outcome = "victory"
        elif not player.is_alive:
            combat.outcome = "defeat"
        return combat.outcome

    # -----------------------
    # Player Actions
    # -----------------------
    def player_attack(self, combat: CombatState, player: Player, rng: RNG) -> AttackResult:
        enemy = combat.enemy
        damage = player_base_damage(player, rng)
        if rng.chance(dodge_chance(enemy)):
            combat.add_log(f"{enemy.name} dodged your attack!")
            return AttackResult(hit=False, damage=0)
        dealt = apply_damage(enemy, damage)
        combat.add_log(f"You dealt {dealt} damage to {enemy.name}!")
        return AttackResult(hit=True, damage=dealt)

    def player_special_attack(self, combat: CombatState, player: Player, rng: RNG) -> AttackResult:
        enemy = combat.enemy
        damage = player_special_damage(player, rng)
        if rng.chance(dodge_chance(enemy) * SPECIAL_DODGE_FACTOR):
            combat.add_log(f"{enemy.name} dodged your special attack!")
            return AttackResult(hit=False, damage=0, action="special")
        dealt = apply_damage(enemy, damage)
        combat.add_log(f"Your special attack dealt {dealt} damage!")
        return AttackResult(hit=True, damage=dealt, action="special")

    def attempt_escape(self, combat: CombatState, player: Player, rng: RNG) -> bool:
        if rng.chance(escape_chance(player, self._config.escape_base_chance)):
            combat.add_log("You successfully escaped!")
            combat.outcome = "escaped"
            return True
        combat.add_log("Escape failed!")
        return False

    # -----------------------
    # Enemy AI
    # -----------------------
    def choose_enemy_action(self, enemy: EnemyInstance, player: Player, rng: RNG) -> EnemyAction:
        """Fixed heuristic: hold back when the player is weak, gamble on a special when healthy."""
        ratio = player.health_ratio
        roll = rng.random()
        if ratio < LOW_HEALTH_RATIO and roll < LOW_HEALTH_ATTACK_CHANCE:
            return "attack"
        if ratio > HIGH_HEALTH_RATIO and roll < HIGH_HEALTH_SPECIAL_CHANCE:
            return "special"
        return "attack"

    def enemy_turn(self, combat: CombatState, player: Player, rng: RNG) -> AttackResult:
        enemy = combat.enemy
        action = self.choose_enemy_action(enemy, player, rng)
        if action == "special":
            damage = math.floor(enemy_damage(enemy, rng) * ENEMY_SPECIAL_MULTIPLIER)
            if rng.chance(dodge_chance(player) * ENEMY_SPECIAL_DODGE_FACTOR):
                combat.add_log(f"You dodged {enemy.name}'s special attack!")
                return AttackResult(hit=False, damage=0, action="special")
            dealt = apply_damage(player, damage)
            combat.add_log(f"{enemy.name}'s special attack dealt {dealt} damage!")
            return AttackResult(hit=True, damage=dealt, action="special")

        damage = enemy_damage(enemy, rng)
        if rng.chance(dodge_chance(player)):
            combat.add_log(f"You dodged {enemy.name}'s attack!")
            return AttackResult(hit=False, damage=0)
        dealt = apply_damage(player, damage)
        combat.add_log(f"{enemy.name} dealt {dealt} damage!")
        return AttackResult(hit=True, damage=dealt)
