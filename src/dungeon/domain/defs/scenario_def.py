"""Scenario definition structures used by the runtime."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass(frozen=True, slots=True)
class ScenarioEffectDef:
    """Single effect entry attached to a choice or branch outcome."""

    type: str
    data: Dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ScenarioOutcomeDef:
    """Branch of a ``chance`` or ``stat_check`` effect."""

    effects: Tuple[ScenarioEffectDef, ...] = ()
    message: str | None = None


@dataclass(frozen=True, slots=True)
class ScenarioChoiceDef:
    """Represents a selectable choice on a scenario node."""

    label: str
    message: str
    effects: Tuple[ScenarioEffectDef, ...] = ()


@dataclass(frozen=True, slots=True)
class ScenarioDef:
    """Fully parsed narrative scenario."""

    id: str
    title: str
    description: str
    choices: Tuple[ScenarioChoiceDef, ...] = ()
