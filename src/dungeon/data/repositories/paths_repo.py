"""Repository for the Light and Shadow path sequences."""
from __future__ import annotations

from typing import Dict, List

from dungeon.core.types import PATH_IDS
from dungeon.data.errors import DataValidationError
from dungeon.data.repositories.base import RepositoryBase
from dungeon.domain.defs import PathDef, PathStepDef

_STEP_KINDS = {"scenario", "combat", "boss"}


class PathsRepository(RepositoryBase[PathDef]):
    """Loads path step sequences keyed by path id."""

    def __init__(self, base_path=None) -> None:
        super().__init__("paths.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, PathDef]:
        paths: Dict[str, PathDef] = {}
        for path_id, payload in raw.items():
            context = f"path '{path_id}'"
            if path_id not in PATH_IDS:
                raise DataValidationError(f"{context} is not one of {list(PATH_IDS)}.")
            path_data = self._require_mapping(payload, context)
            enemy_pool = self._require_str_list(path_data.get("enemy_pool"), f"{context} enemy_pool")
            if not enemy_pool:
                raise DataValidationError(f"{context} enemy_pool must not be empty.")
            paths[path_id] = PathDef(
                id=path_id,  # type: ignore[arg-type]
                name=self._require_str(path_data.get("name"), f"{context} name"),
                steps=tuple(self._parse_steps(path_data.get("steps"), context)),
                enemy_pool=tuple(enemy_pool),
                boss_id=self._require_str(path_data.get("boss"), f"{context} boss"),
            )
        return paths

    def _parse_steps(self, raw_steps: object, context: str) -> List[PathStepDef]:
        if not isinstance(raw_steps, list) or not raw_steps:
            raise DataValidationError(f"{context} steps must be a non-empty list.")
        steps: List[PathStepDef] = []
        for index, entry in enumerate(raw_steps):
            step_ctx = f"{context} steps[{index}]"
            step_data = self._require_mapping(entry, step_ctx)
            kind = self._require_str(step_data.get("kind"), f"{step_ctx} kind")
            if kind not in _STEP_KINDS:
                raise DataValidationError(f"{step_ctx} kind '{kind}' is not one of {sorted(_STEP_KINDS)}.")
            scenario_id = None
            if kind == "scenario":
                scenario_id = self._require_str(step_data.get("scenario"), f"{step_ctx} scenario")
            steps.append(PathStepDef(kind=kind, scenario_id=scenario_id))  # type: ignore[arg-type]
        return steps
