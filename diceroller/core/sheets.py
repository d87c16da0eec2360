"""
Module for printing roll outcomes, the roll log, and presets in a formatted way.
"""

from rich.padding import Padding
from rich.table import Table

from diceroller.history.roll_log import LoggedRoll, RollLog
from diceroller.presets.registry import PresetRegistry
from diceroller.rolls.roll_outcome import RollOutcome

from .utils import cprint, crule, modifier_to_string


def _join(values: tuple[int, ...]) -> str:
    return ", ".join(str(value) for value in values)


def outcome_to_string(outcome: RollOutcome) -> str:
    """
    Converts an outcome to a formatted markup string.

    Args:
        outcome (RollOutcome): The outcome to format.

    Returns:
        str: Markup showing the expression, the result, and every roll bucket.

    """
    sheet = f"[bold]{outcome.config.expression}[/] = [bold blue]{outcome.final_result}[/]"
    sheet += f" [dim][{_join(outcome.used_rolls)}][/]"
    if outcome.dropped_rolls:
        sheet += f" [red](dropped: {_join(outcome.dropped_rolls)})[/]"
    if outcome.rerolled_rolls:
        sheet += f" [yellow](rerolled: {_join(outcome.rerolled_rolls)})[/]"
    return sheet


def print_outcome_sheet(logged: LoggedRoll, padding: int = 2) -> None:
    """
    Prints the details of a logged roll.

    Args:
        logged (LoggedRoll): The logged roll to display.
        padding (int): Left padding for the output. Defaults to 2.

    """
    outcome = logged.outcome
    title = logged.label or outcome.config.expression
    sheet = f"{logged.category.emoji} {logged.category.colorize(title)}: "
    sheet += outcome_to_string(outcome)
    if outcome.modifier:
        sheet += (
            f"\n  Base: {outcome.base_total} | Modifier: {modifier_to_string(outcome.modifier)}"
        )
    if logged.note:
        sheet += f'\n  [italic]"{logged.note}"[/]'
    cprint(Padding(sheet, (0, padding)))


def print_roll_log_sheet(log: RollLog, limit: int | None = None) -> None:
    """
    Prints the roll log, most recent first.

    Args:
        log (RollLog): The log to display.
        limit (int | None): Maximum number of entries to show. Defaults to all.

    """
    entries = log.list()
    if limit is not None:
        entries = entries[:limit]
    crule(f"Roll Log ({len(log)} rolls)", style="bold green")
    if not entries:
        cprint(Padding("[dim]No rolls yet.[/]", (0, 2)))
        return
    for logged in entries:
        print_outcome_sheet(logged)


def print_preset_sheet(registry: PresetRegistry) -> None:
    """
    Prints every preset in iteration order, marking featured and built-in ones.

    Args:
        registry (PresetRegistry): The registry to display.

    """
    featured_ids = [preset.id for preset in registry.featured()]
    table = Table(title="Presets", show_lines=False)
    table.add_column("Name", style="bold")
    table.add_column("Roll")
    table.add_column("Category")
    table.add_column("Tags", style="dim")
    table.add_column("Featured", justify="center")
    table.add_column("Built-in", justify="center")
    for preset in registry.list_all():
        slot = (
            str(featured_ids.index(preset.id) + 1) if preset.id in featured_ids else ""
        )
        table.add_row(
            preset.name,
            str(preset.config),
            preset.category.colored_name,
            ", ".join(preset.tags),
            slot,
            "✔" if preset.built_in else "",
        )
    cprint(table)
    cprint(f"  Custom die: [bold]d{registry.custom_die_sides}[/]")
