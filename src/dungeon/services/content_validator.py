"""Static validation of the scenario catalog, path sequences and loot tables."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from dungeon.core.types import PATH_IDS, STAT_NAMES
from dungeon.domain.defs import EnemyDef, ItemDef, PathDef, ScenarioDef, ScenarioEffectDef, ScenarioOutcomeDef
from dungeon.services.scenario_service import KNOWN_EFFECT_TYPES

Severity = str

MIN_CHOICES = 2
MAX_CHOICES = 3
_STAT_EFFECT_TYPES = {"add_base_stat", "add_temp_stat", "stat_check"}


@dataclass(frozen=True, slots=True)
class Issue:
    severity: Severity
    code: str
    message: str
    context: dict[str, str]


def format_issue(issue: Issue) -> str:
    context = " ".join(f"{key}={value}" for key, value in issue.context.items())
    suffix = f" ({context})" if context else ""
    return f"[{issue.severity}] {issue.code}: {issue.message}{suffix}"


def has_errors(issues: Iterable[Issue]) -> bool:
    return any(issue.severity == "ERROR" for issue in issues)


def validate_content(
    scenarios: Mapping[str, ScenarioDef],
    paths: Mapping[str, PathDef],
    enemies: Mapping[str, EnemyDef],
    items: Mapping[str, ItemDef],
    *,
    entry_scenario_id: str,
) -> list[Issue]:
    issues: list[Issue] = []

    if entry_scenario_id not in scenarios:
        issues.append(
            Issue(
                severity="ERROR",
                code="MISSING_ENTRY_SCENARIO",
                message="Entry scenario is not defined.",
                context={"scenario_id": entry_scenario_id},
            )
        )
    else:
        _validate_entry_paths(scenarios[entry_scenario_id], issues)

    for scenario in scenarios.values():
        _validate_scenario(scenario, items, issues, allow_set_path=scenario.id == entry_scenario_id)

    for path_id in PATH_IDS:
        if path_id not in paths:
            issues.append(
                Issue(
                    severity="ERROR",
                    code="MISSING_PATH",
                    message="Path sequence is not defined.",
                    context={"path_id": path_id},
                )
            )
    for path in paths.values():
        _validate_path(path, scenarios, enemies, issues)

    for enemy in enemies.values():
        for item_id in enemy.loot_item_ids:
            if item_id not in items:
                issues.append(
                    Issue(
                        severity="ERROR",
                        code="MISSING_LOOT_ITEM",
                        message="Enemy loot references a missing item.",
                        context={"enemy_id": enemy.id, "item_id": item_id},
                    )
                )

    _warn_on_unused_scenarios(scenarios, paths, entry_scenario_id, issues)
    return issues


def _validate_entry_paths(entry: ScenarioDef, issues: list[Issue]) -> None:
    chosen = {
        effect.data.get("path")
        for choice in entry.choices
        for effect in choice.effects
        if effect.type == "set_path"
    }
    for path_id in PATH_IDS:
        if path_id not in chosen:
            issues.append(
                Issue(
                    severity="ERROR",
                    code="PATH_NOT_OFFERED",
                    message="Entry scenario offers no choice leading to this path.",
                    context={"scenario_id": entry.id, "path_id": path_id},
                )
            )


def _validate_scenario(
    scenario: ScenarioDef,
    items: Mapping[str, ItemDef],
    issues: list[Issue],
    *,
    allow_set_path: bool,
) -> None:
    if not MIN_CHOICES <= len(scenario.choices) <= MAX_CHOICES:
        issues.append(
            Issue(
                severity="ERROR",
                code="CHOICE_COUNT",
                message=f"Scenario must offer {MIN_CHOICES}-{MAX_CHOICES} choices.",
                context={"scenario_id": scenario.id, "count": str(len(scenario.choices))},
            )
        )
    for choice_index, choice in enumerate(scenario.choices):
        _validate_effects(
            choice.effects,
            scenario.id,
            f"choices[{choice_index}].effects",
            items,
            issues,
            allow_set_path=allow_set_path,
        )


def _validate_effects(
    effects: Sequence[ScenarioEffectDef],
    scenario_id: str,
    field_path: str,
    items: Mapping[str, ItemDef],
    issues: list[Issue],
    *,
    allow_set_path: bool,
) -> None:
    for effect_index, effect in enumerate(effects):
        effect_path = f"{field_path}[{effect_index}]"
        context = {"scenario_id": scenario_id, "field_path": effect_path}
        if effect.type not in KNOWN_EFFECT_TYPES:
            issues.append(
                Issue(
                    severity="WARN",
                    code="UNKNOWN_EFFECT_TYPE",
                    message="Effect type is not recognized by runtime and will be ignored.",
                    context=context,
                )
            )
            continue
        if effect.type in _STAT_EFFECT_TYPES and effect.data.get("stat") not in STAT_NAMES:
            issues.append(
                Issue(
                    severity="ERROR",
                    code="UNKNOWN_STAT",
                    message="Effect references an unknown stat.",
                    context={**context, "stat": str(effect.data.get("stat"))},
                )
            )
        if effect.type == "give_item" and effect.data.get("item") not in items:
            issues.append(
                Issue(
                    severity="ERROR",
                    code="MISSING_ITEM",
                    message="Effect grants an item that is not defined.",
                    context={**context, "item_id": str(effect.data.get("item"))},
                )
            )
        if effect.type == "set_path" and effect.data.get("path") not in PATH_IDS:
            issues.append(
                Issue(
                    severity="ERROR",
                    code="UNKNOWN_PATH",
                    message="Effect selects an unknown path.",
                    context={**context, "path_id": str(effect.data.get("path"))},
                )
            )
        if effect.type == "set_path" and not allow_set_path:
            issues.append(
                Issue(
                    severity="ERROR",
                    code="SET_PATH_OUTSIDE_ENTRY",
                    message="Only the entry scenario may choose a path.",
                    context=context,
                )
            )
        for branch in ("success", "failure"):
            outcome = effect.data.get(branch)
            if isinstance(outcome, ScenarioOutcomeDef):
                _validate_effects(
                    outcome.effects,
                    scenario_id,
                    f"{effect_path}.{branch}.effects",
                    items,
                    issues,
                    allow_set_path=allow_set_path,
                )


def _validate_path(
    path: PathDef,
    scenarios: Mapping[str, ScenarioDef],
    enemies: Mapping[str, EnemyDef],
    issues: list[Issue],
) -> None:
    if not path.steps or path.steps[-1].kind != "boss":
        issues.append(
            Issue(
                severity="ERROR",
                code="PATH_MISSING_BOSS",
                message="Path sequence must end with a boss encounter.",
                context={"path_id": path.id},
            )
        )
    for index, step in enumerate(path.steps):
        if step.kind == "scenario" and step.scenario_id not in scenarios:
            issues.append(
                Issue(
                    severity="ERROR",
                    code="MISSING_SCENARIO",
                    message="Path step references a missing scenario.",
                    context={"path_id": path.id, "step": str(index), "scenario_id": str(step.scenario_id)},
                )
            )
    for enemy_id in (*path.enemy_pool, path.boss_id):
        if enemy_id not in enemies:
            issues.append(
                Issue(
                    severity="ERROR",
                    code="MISSING_ENEMY",
                    message="Path references a missing enemy template.",
                    context={"path_id": path.id, "enemy_id": enemy_id},
                )
            )
        elif enemies[enemy_id].path != path.id:
            issues.append(
                Issue(
                    severity="WARN",
                    code="ENEMY_PATH_MISMATCH",
                    message="Enemy template belongs to a different path.",
                    context={"path_id": path.id, "enemy_id": enemy_id},
                )
            )


def _warn_on_unused_scenarios(
    scenarios: Mapping[str, ScenarioDef],
    paths: Mapping[str, PathDef],
    entry_scenario_id: str,
    issues: list[Issue],
) -> None:
    used = {entry_scenario_id}
    for path in paths.values():
        used.update(step.scenario_id for step in path.steps if step.scenario_id)
    for scenario_id in sorted(set(scenarios) - used):
        issues.append(
            Issue(
                severity="WARN",
                code="UNREACHABLE_SCENARIO",
                message="Scenario is not referenced by any path.",
                context={"scenario_id": scenario_id},
            )
        )
