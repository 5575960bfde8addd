"""Game tunables and per-user config persistence."""
from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Dict


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Numeric rules shared by the engine services."""

    inventory_slots: int = 15
    stat_points_per_level: int = 3
    xp_curve_multiplier: int = 100
    escape_base_chance: float = 0.3
    enemy_turn_delay_ms: int = 800
    combat_log_size: int = 8
    message_log_size: int = 5
    starting_health: int = 100
    starting_stat: int = 5
    health_per_level: int = 10


DEFAULT_CONFIG = GameConfig()


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "DungeonPaths"
        return Path.home() / "DungeonPaths"
    return Path.home() / ".config" / "dungeon_paths"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def _coerce_overrides(raw: Dict[str, object]) -> Dict[str, object]:
    overrides: Dict[str, object] = {}
    for field_def in fields(GameConfig):
        if field_def.name not in raw:
            continue
        value = raw[field_def.name]
        default = getattr(DEFAULT_CONFIG, field_def.name)
        # bool is an int subclass; never accept it for numeric tunables
        if isinstance(value, bool):
            continue
        if isinstance(default, float) and isinstance(value, (int, float)):
            overrides[field_def.name] = float(value)
        elif isinstance(default, int) and isinstance(value, int):
            overrides[field_def.name] = value
    return overrides


def load_config(path: Path | None = None) -> GameConfig:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return DEFAULT_CONFIG
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return DEFAULT_CONFIG
    if not isinstance(raw, dict):
        return DEFAULT_CONFIG
    return replace(DEFAULT_CONFIG, **_coerce_overrides(raw))


def save_config(config: GameConfig, path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(asdict(config), indent=2, sort_keys=True), encoding="utf-8")
