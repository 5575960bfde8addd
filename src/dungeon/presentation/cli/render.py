"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
import textwrap
from typing import Iterable, List, Sequence

from dungeon.services.controllers import GameSnapshot, PlayerView

_BOX_WIDTH = 60


def debug_enabled() -> bool:
    """Return True only when DUNGEON_DEBUG is explicitly set to '1'."""
    return os.getenv("DUNGEON_DEBUG") == "1"


def wrap_text(text: str, width: int = _BOX_WIDTH, *, indent_continuation: bool = True) -> list[str]:
    """
    Wrap text on word boundaries.

    Bullet-prefixed lines keep their ``- `` marker on the first line only; with
    ``indent_continuation`` the following lines are indented by two spaces.
    """
    if not text or width <= 0:
        return [text] if text else [""]
    prefix = "- " if text.startswith("- ") else ""
    body = text[len(prefix):]
    lines = textwrap.wrap(
        body,
        width=width - len(prefix),
        break_long_words=False,
        break_on_hyphens=False,
    ) or [""]
    indent = "  " if indent_continuation else ""
    return [prefix + lines[0]] + [indent + line for line in lines[1:]]


def render_heading(title: str) -> str:
    return f"\n=== {title} ==="


def render_options(options: Sequence[str], selected: int) -> List[str]:
    """Options with a cursor marker on the selected entry."""
    return [f"{'>' if idx == selected else ' '} {label}" for idx, label in enumerate(options)]


def render_bar(current: int, maximum: int, width: int = 20) -> str:
    if maximum <= 0:
        return "[" + " " * width + "]"
    filled = max(0, min(width, round(width * current / maximum)))
    return "[" + "#" * filled + "-" * (width - filled) + "]"


def render_player_status(player: PlayerView) -> List[str]:
    stats = "  ".join(f"{name[:3].upper()} {value}" for name, value in player.stats.items())
    return [
        f"Level {player.level}  XP {player.xp}/{player.xp_to_next}",
        f"HP {render_bar(player.health, player.max_health)} {player.health}/{player.max_health}",
        stats,
    ]


def render_bullet_lines(lines: Iterable[str]) -> List[str]:
    rendered: List[str] = []
    for line in lines:
        rendered.extend(wrap_text(f"- {line}"))
    return rendered


def format_snapshot(snapshot: GameSnapshot, *, debug: bool = False) -> List[str]:
    """Turn a controller snapshot into the lines of one screen."""
    lines: List[str] = []
    phase = snapshot.phase

    if phase == "menu":
        lines.append(render_heading("Dungeon Paths"))
        lines.append("Choose between Light and Shadow. Press enter to begin.")
        return lines
    if phase in ("gameOver", "victory"):
        lines.append(render_heading("GAME OVER" if phase == "gameOver" else "VICTORY!"))
        if snapshot.result_text:
            lines.append(snapshot.result_text)
        lines.append("Press enter to return to the menu.")
        return lines

    if snapshot.player is not None:
        lines.extend(render_player_status(snapshot.player))

    if phase == "scenario" and snapshot.node is not None:
        lines.append(render_heading(snapshot.node.title))
        lines.extend(wrap_text(snapshot.node.description, indent_continuation=False))
        if snapshot.node.is_combat:
            lines.append("Press enter to fight.")
        else:
            lines.extend(render_options(snapshot.node.choice_labels, snapshot.choice_selection))
    elif phase == "combat" and snapshot.enemy is not None:
        enemy = snapshot.enemy
        lines.append(render_heading("BOSS" if enemy.is_boss else "Combat"))
        hp = f"{enemy.health}/{enemy.max_health}"
        if debug:
            hp += f" (turn: {snapshot.turn_owner})"
        lines.append(f"{enemy.name} (Lv {enemy.level}) {render_bar(enemy.health, enemy.max_health)} {hp}")
        lines.extend(render_bullet_lines(snapshot.combat_log))
        if snapshot.enemy_turn_pending or snapshot.turn_owner == "enemy":
            lines.append("Enemy turn...")
        else:
            lines.extend(render_options(snapshot.combat_options, snapshot.choice_selection))
    elif phase == "inventory" and snapshot.player is not None:
        player = snapshot.player
        lines.append(render_heading(f"Inventory ({len(player.held_items)}/{player.inventory_capacity})"))
        for slot in player.equipped:
            lines.append(f"{slot.slot.capitalize()}: {slot.item_name or '-'}")
        if player.held_items:
            labels = [f"{item.name} ({item.category})" for item in player.held_items]
            lines.extend(render_options(labels, snapshot.inventory_selection))
        else:
            lines.append("Your pack is empty.")
    elif phase == "levelUp" and snapshot.player is not None:
        player = snapshot.player
        lines.append(render_heading("LEVEL UP!"))
        lines.append(f"Stat points: {player.stat_points}")
        if player.stat_points > 0:
            labels = [f"{name.capitalize()}: {player.base_stats[name]}" for name in snapshot.stat_names]
            lines.extend(render_options(labels, snapshot.stat_selection))
        else:
            lines.append("Press enter to continue.")
    elif phase == "exploring":
        lines.append(render_heading("Exploring"))
        lines.append("Press enter to press on, or i to open your pack.")

    if snapshot.message_log:
        lines.append(render_heading("Log"))
        lines.extend(render_bullet_lines(snapshot.message_log))
    return lines
