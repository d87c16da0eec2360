"""
Built-in presets shipped with the roller.
"""

from diceroller.core.constants import (
    AdvantageMode,
    DiceType,
    RollCategory,
    SelectionAction,
    SelectionTarget,
)
from diceroller.rolls.roll_config import (
    AdvantageRollConfig,
    DropOrReroll,
    StandardRollConfig,
)

from .preset import Preset


def built_in_presets() -> list[Preset]:
    """
    Creates the built-in presets.

    Identifiers are fixed so that persisted orderings and featured slots keep
    pointing at the same built-ins across sessions.

    Returns:
        list[Preset]: One single-die preset per conventional die, followed by
            a few common rule combinations.

    """
    presets = [
        Preset(
            id=f"builtin-{dice_type.label}",
            name=dice_type.label,
            config=StandardRollConfig(die_sides=dice_type.sides),
            tags=["basic"],
            built_in=True,
        )
        for dice_type in DiceType
    ]
    presets += [
        Preset(
            id="builtin-ability-score",
            name="Ability Score",
            config=StandardRollConfig(
                die_sides=6,
                dice_count=4,
                drop_or_reroll=DropOrReroll(
                    action=SelectionAction.DROP,
                    target=SelectionTarget.LOWEST,
                    count=1,
                ),
            ),
            category=RollCategory.ABILITY_CHECK,
            tags=["character"],
            built_in=True,
        ),
        Preset(
            id="builtin-attack-advantage",
            name="Attack (Advantage)",
            config=AdvantageRollConfig(die_sides=20, mode=AdvantageMode.ADVANTAGE),
            category=RollCategory.ATTACK,
            tags=["combat"],
            built_in=True,
        ),
        Preset(
            id="builtin-attack-disadvantage",
            name="Attack (Disadvantage)",
            config=AdvantageRollConfig(die_sides=20, mode=AdvantageMode.DISADVANTAGE),
            category=RollCategory.ATTACK,
            tags=["combat"],
            built_in=True,
        ),
    ]
    return presets
