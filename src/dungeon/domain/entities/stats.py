"""Stat models for runtime entities."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping

from dungeon.core.types import STAT_NAMES


@dataclass(slots=True)
class StatBlock:
    """The four named player stats."""

    strength: int = 0
    defense: int = 0
    agility: int = 0
    intelligence: int = 0

    def get(self, stat: str) -> int:
        if stat not in STAT_NAMES:
            raise KeyError(stat)
        return getattr(self, stat)

    def increase(self, stat: str, amount: int = 1) -> None:
        setattr(self, stat, self.get(stat) + amount)

    def as_dict(self) -> Dict[str, int]:
        return {stat: getattr(self, stat) for stat in STAT_NAMES}

    def combined(self, *deltas: Mapping[str, int]) -> Dict[str, int]:
        """Return these stats plus every delta mapping; missing keys count as 0."""
        total = self.as_dict()
        for delta in deltas:
            for stat in STAT_NAMES:
                total[stat] += delta.get(stat, 0)
        return total

    @classmethod
    def uniform(cls, value: int) -> "StatBlock":
        return cls(strength=value, defense=value, agility=value, intelligence=value)
