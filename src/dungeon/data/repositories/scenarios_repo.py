"""Repository for narrative scenario definitions."""
from __future__ import annotations

from typing import Dict, List

from dungeon.data.errors import DataValidationError
from dungeon.data.repositories.base import RepositoryBase
from dungeon.domain.defs import ScenarioChoiceDef, ScenarioDef, ScenarioEffectDef, ScenarioOutcomeDef

BRANCH_KEYS = ("success", "failure")


class ScenariosRepository(RepositoryBase[ScenarioDef]):
    """Loads scenario nodes and validates their structure."""

    def __init__(self, base_path=None) -> None:
        super().__init__("scenarios.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, ScenarioDef]:
        scenarios: Dict[str, ScenarioDef] = {}
        for scenario_id, payload in raw.items():
            context = f"scenario '{scenario_id}'"
            scenario_data = self._require_mapping(payload, context)
            scenarios[scenario_id] = ScenarioDef(
                id=scenario_id,
                title=self._require_str(scenario_data.get("title"), f"{context} title"),
                description=self._require_str(scenario_data.get("description"), f"{context} description"),
                choices=tuple(self._parse_choices(scenario_data.get("choices"), scenario_id)),
            )
        return scenarios

    def _parse_choices(self, raw_choices: object, scenario_id: str) -> List[ScenarioChoiceDef]:
        if not isinstance(raw_choices, list) or not raw_choices:
            raise DataValidationError(f"scenario '{scenario_id}' choices must be a non-empty list.")
        choices: List[ScenarioChoiceDef] = []
        for index, entry in enumerate(raw_choices):
            choice_ctx = f"scenario '{scenario_id}' choices[{index}]"
            choice_data = self._require_mapping(entry, choice_ctx)
            choices.append(
                ScenarioChoiceDef(
                    label=self._require_str(choice_data.get("label"), f"{choice_ctx} label"),
                    message=self._require_str(choice_data.get("message"), f"{choice_ctx} message"),
                    effects=tuple(self._parse_effects(choice_data.get("effects"), f"{choice_ctx} effects")),
                )
            )
        return choices

    def _parse_effects(self, raw_effects: object, context: str) -> List[ScenarioEffectDef]:
        if raw_effects is None:
            return []
        if not isinstance(raw_effects, list):
            raise DataValidationError(f"{context} must be a list if provided.")
        effects: List[ScenarioEffectDef] = []
        for index, entry in enumerate(raw_effects):
            effect_ctx = f"{context}[{index}]"
            effect_data = self._require_mapping(entry, effect_ctx)
            effect_type = self._require_str(effect_data.get("type"), f"{effect_ctx} type")
            payload: Dict[str, object] = {}
            for key, value in effect_data.items():
                if key == "type":
                    continue
                if key in BRANCH_KEYS:
                    payload[key] = self._parse_outcome(value, f"{effect_ctx} {key}")
                else:
                    payload[key] = value
            effects.append(ScenarioEffectDef(type=effect_type, data=payload))
        return effects

    def _parse_outcome(self, raw_outcome: object, context: str) -> ScenarioOutcomeDef:
        outcome_data = self._require_mapping(raw_outcome, context)
        message = outcome_data.get("message")
        if message is not None:
            message = self._require_str(message, f"{context} message")
        return ScenarioOutcomeDef(
            effects=tuple(self._parse_effects(outcome_data.get("effects"), f"{context} effects")),
            message=message,
        )
