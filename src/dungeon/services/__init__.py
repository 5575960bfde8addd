"""Service layer exports."""

from .errors import FactoryError, NoActivePlayerError
from .combat_service import CombatService
from .content_validator import Issue, format_issue, has_errors, validate_content
from .inventory_service import InventoryService
from .leveling_service import AllocationResult, LevelingService
from .progression_service import ENTRY_SCENARIO_ID, ProgressionService
from .scenario_service import ChoiceOutcome, ScenarioService

__all__ = [
    "FactoryError",
    "NoActivePlayerError",
    "CombatService",
    "Issue",
    "format_issue",
    "has_errors",
    "validate_content",
    "InventoryService",
    "AllocationResult",
    "LevelingService",
    "ENTRY_SCENARIO_ID",
    "ProgressionService",
    "ChoiceOutcome",
    "ScenarioService",
]
