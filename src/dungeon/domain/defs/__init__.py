"""Domain definition exports."""

from .effect_def import EffectDef
from .enemy_def import EnemyDef, EnemyGrowthDef
from .item_def import ConsumableEffect, EquippableEffect, ItemDef, ItemEffect
from .path_def import PathDef, PathStepDef, PathStepKind
from .scenario_def import ScenarioChoiceDef, ScenarioDef, ScenarioEffectDef, ScenarioOutcomeDef

__all__ = [
    "ConsumableEffect",
    "EffectDef",
    "EnemyDef",
    "EnemyGrowthDef",
    "EquippableEffect",
    "ItemDef",
    "ItemEffect",
    "PathDef",
    "PathStepDef",
    "PathStepKind",
    "ScenarioChoiceDef",
    "ScenarioDef",
    "ScenarioEffectDef",
    "ScenarioOutcomeDef",
]
