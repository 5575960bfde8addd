"""Repository exports."""

from .enemies_repo import EnemiesRepository
from .items_repo import ItemsRepository
from .paths_repo import PathsRepository
from .scenarios_repo import ScenariosRepository

__all__ = [
    "EnemiesRepository",
    "ItemsRepository",
    "PathsRepository",
    "ScenariosRepository",
]
