"""
Constants and enumerations for the dice roller.

Defines the conventional die families, the rule toggles understood by the
resolution engine, the roll categories used to tag log entries, and the
fixed capacities shared by the roll log and the preset registry.
"""

from enum import Enum

# Maximum number of entries kept by the roll log.
LOG_CAPACITY = 100

# Default number of featured preset slots.
DEFAULT_FEATURED_SLOTS = 4

# Upper bound for the configurable number of featured slots.
MAX_FEATURED_SLOTS = 12

# Default size of the freeform custom die.
DEFAULT_CUSTOM_DIE_SIDES = 6

# Smallest die that can be rolled.
MIN_DIE_SIDES = 2


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").lower().capitalize()


class DiceType(NiceEnum):
    """Defines the conventional die families."""

    D4 = 4
    D6 = 6
    D8 = 8
    D10 = 10
    D12 = 12
    D20 = 20
    D100 = 100

    @property
    def sides(self) -> int:
        """Returns the number of sides of this die."""
        return self.value

    @property
    def label(self) -> str:
        return f"d{self.value}"


class AdvantageMode(NiceEnum):
    """Defines whether a roll is made with advantage or disadvantage."""

    OFF = "OFF"
    ADVANTAGE = "ADVANTAGE"
    DISADVANTAGE = "DISADVANTAGE"


class ClampDirection(NiceEnum):
    """Defines which side of the die range a per-die clamp bounds."""

    MIN = "MIN"
    MAX = "MAX"


class SelectionAction(NiceEnum):
    """Defines what happens to the dice picked by a selection rule."""

    DROP = "DROP"
    REROLL = "REROLL"


class SelectionTarget(NiceEnum):
    """Defines which extreme of the pool a selection rule picks from."""

    LOWEST = "LOWEST"
    HIGHEST = "HIGHEST"


class RollCategory(NiceEnum):
    """Defines the category tag attached to a logged roll."""

    GENERAL = "GENERAL"
    ATTACK = "ATTACK"
    DAMAGE = "DAMAGE"
    HEALING = "HEALING"
    SAVING_THROW = "SAVING_THROW"
    SKILL_CHECK = "SKILL_CHECK"
    INITIATIVE = "INITIATIVE"
    ABILITY_CHECK = "ABILITY_CHECK"

    @property
    def color(self) -> str:
        """Returns the color string associated with this category."""
        return {
            RollCategory.DAMAGE: "bold red",
            RollCategory.HEALING: "bold green",
        }.get(self, "bold blue")

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this category."""
        return {
            RollCategory.ATTACK: "⚔️",
            RollCategory.DAMAGE: "💥",
            RollCategory.HEALING: "💚",
            RollCategory.SAVING_THROW: "🛡️",
            RollCategory.SKILL_CHECK: "🎯",
            RollCategory.INITIATIVE: "⏱️",
            RollCategory.ABILITY_CHECK: "💪",
        }.get(self, "🎲")

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies category color formatting to a message."""
        return f"[{self.color}]{message}[/]"
