"""Console-driven UI loop for Dungeon Paths."""
from __future__ import annotations

import logging
import secrets
import time
from typing import Dict

from dungeon.core.config import GameConfig, load_config
from dungeon.core.types import InputEvent
from dungeon.data.repositories import EnemiesRepository, ItemsRepository, PathsRepository, ScenariosRepository
from dungeon.services import ENTRY_SCENARIO_ID, format_issue, validate_content
from dungeon.services.controllers import GameController, build_game_controller

from .render import debug_enabled, format_snapshot

logger = logging.getLogger(__name__)

_MAX_RANDOM_SEED = 2**31 - 1

COMMANDS: Dict[str, InputEvent] = {
    "w": "up",
    "s": "down",
    "": "confirm",
    "i": "toggle-inventory",
    "x": "cancel",
}


def main() -> None:
    """Start the interactive CLI session."""
    if debug_enabled():
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
        _report_content_issues()
    config = load_config()
    seed = _prompt_seed()
    controller = build_game_controller(seed, config=config)
    print(f"Game started with seed: {seed}")
    print("Controls: w/s move, enter confirms, i toggles the pack, x goes back, q quits.")
    try:
        _run_loop(controller, config)
    except (KeyboardInterrupt, EOFError):
        print()
    print("Goodbye!")


def _report_content_issues() -> None:
    items = ItemsRepository()
    issues = validate_content(
        {scenario.id: scenario for scenario in ScenariosRepository().all()},
        {path.id: path for path in PathsRepository().all()},
        {enemy.id: enemy for enemy in EnemiesRepository(items).all()},
        {item.id: item for item in items.all()},
        entry_scenario_id=ENTRY_SCENARIO_ID,
    )
    for issue in issues:
        logger.warning(format_issue(issue))


def _prompt_seed() -> int:
    while True:
        raw_value = input("Enter seed (blank for random): ").strip()
        if not raw_value:
            return secrets.randbelow(_MAX_RANDOM_SEED)
        try:
            return int(raw_value)
        except ValueError:
            print("Invalid seed. Please enter a valid integer.")


def _run_loop(controller: GameController, config: GameConfig) -> None:
    debug = debug_enabled()
    while True:
        snapshot = controller.snapshot()
        print("\n".join(format_snapshot(snapshot, debug=debug)))
        if snapshot.enemy_turn_pending:
            time.sleep(config.enemy_turn_delay_ms / 1000)
            controller.update(config.enemy_turn_delay_ms)
            continue
        command = input("> ").strip().lower()
        if command == "q":
            return
        event = parse_command(command)
        if event is None:
            print("Unknown command.")
            continue
        controller.handle_input(event)


def parse_command(command: str) -> InputEvent | None:
    """Map a typed command to an input event, or None when it is not bound."""
    return COMMANDS.get(command.strip().lower())
