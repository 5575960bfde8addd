"""Pure helpers for applying consumable item effects to the player."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from dungeon.domain.defs import ConsumableEffect, ItemDef
from dungeon.domain.entities import Player


@dataclass(slots=True)
class ItemEffectResult:
    """Summary of what a consumable changed."""

    applied: bool = False
    health_delta: int = 0
    temp_stat_deltas: dict[str, int] = field(default_factory=dict)
    messages: List[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return ", ".join(self.messages)


def apply_item_effects(player: Player, item: ItemDef) -> ItemEffectResult:
    """Apply a consumable's one-shot effects; non-consumables do nothing."""

    result = ItemEffectResult()
    if not isinstance(item.effect, ConsumableEffect):
        return result

    result.applied = True
    for effect in item.effect.effects:
        if effect.kind == "restore_health":
            before = player.health
            player.health = min(player.max_health, player.health + max(0, effect.amount))
            result.health_delta += player.health - before
            result.messages.append(f"Restored {player.health - before} HP")
        elif effect.kind == "temp_stat" and effect.stat:
            player.temp_stats[effect.stat] = player.temp_stats.get(effect.stat, 0) + effect.amount
            result.temp_stat_deltas[effect.stat] = (
                result.temp_stat_deltas.get(effect.stat, 0) + effect.amount
            )
            result.messages.append(f"{effect.stat.capitalize()} increased by {effect.amount}")

    return result
