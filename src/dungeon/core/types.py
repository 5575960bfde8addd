"""Shared type aliases for the core and domain layers."""
from typing import Literal

GamePhase = Literal[
    "menu",
    "exploring",
    "scenario",
    "combat",
    "inventory",
    "levelUp",
    "gameOver",
    "victory",
]
InputEvent = Literal["up", "down", "confirm", "cancel", "toggle-inventory"]
PathId = Literal["light", "shadow"]
ItemCategory = Literal["weapon", "armor", "consumable", "artifact"]
TurnOwner = Literal["player", "enemy"]

STAT_NAMES: tuple[str, ...] = ("strength", "defense", "agility", "intelligence")
EQUIP_SLOTS: tuple[str, ...] = ("weapon", "armor", "artifact")
PATH_IDS: tuple[str, ...] = ("light", "shadow")

__all__ = [
    "EQUIP_SLOTS",
    "GamePhase",
    "InputEvent",
    "ItemCategory",
    "PATH_IDS",
    "PathId",
    "STAT_NAMES",
    "TurnOwner",
]
