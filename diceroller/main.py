"""
Demo entry point for the dice roller.

Loads the presets and roll log from a JSON store, rolls every featured
preset plus the custom die, and prints the outcomes and the resulting log.

Run with `python -m diceroller.main [store.json]`.
"""

import logging
import sys
from pathlib import Path

from diceroller.core.logging import setup_logging
from diceroller.core.random_source import SystemRandomSource
from diceroller.core.sheets import (
    print_outcome_sheet,
    print_preset_sheet,
    print_roll_log_sheet,
)
from diceroller.core.storage import JsonFileStore
from diceroller.core.utils import cprint, crule
from diceroller.history.roll_log import RollLog
from diceroller.presets.registry import PresetRegistry
from diceroller.rolls.engine import resolve


def main(store_path: Path) -> None:
    """
    Rolls the featured presets and the custom die once each.

    Args:
        store_path (Path): Location of the JSON store.

    """
    store = JsonFileStore(store_path)
    registry = PresetRegistry(store=store)
    registry.load()
    log = RollLog(store=store)
    log.load()
    rng = SystemRandomSource()

    crule("Presets", style="bold green")
    print_preset_sheet(registry)

    crule("Rolling featured presets", style="bold green")
    for preset in registry.featured():
        outcome = resolve(preset.config, rng)
        print_outcome_sheet(log.append(outcome, label=preset.name, category=preset.category))

    custom = resolve(registry.custom_die_config(), rng)
    print_outcome_sheet(log.append(custom, label=f"Custom d{registry.custom_die_sides}"))

    cprint()
    print_roll_log_sheet(log, limit=10)


def cli() -> None:
    setup_logging(logging.INFO)
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("diceroller.json")
    try:
        main(path)
    except KeyboardInterrupt:
        cprint("")
        crule("Interrupted", style="bold red")


if __name__ == "__main__":
    cli()
