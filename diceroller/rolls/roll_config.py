"""
Roll configuration module.

Defines the immutable inputs of the resolution engine. A configuration is
either a standard roll (any number of dice, with optional per-die clamp and
drop/reroll rule) or an advantage roll (exactly two dice, keep the higher or
lower), so rule combinations that cannot be resolved together cannot be
expressed.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from diceroller.core.constants import (
    MIN_DIE_SIDES,
    AdvantageMode,
    ClampDirection,
    SelectionAction,
    SelectionTarget,
)


class PerDieClamp(BaseModel):
    """Floor or ceiling applied to every individual die result."""

    model_config = ConfigDict(frozen=True)

    direction: ClampDirection = Field(
        description="MIN raises low results, MAX lowers high results.",
    )
    offset: int = Field(
        0,
        description="Shift of the bound: MIN clamps to 1+offset, MAX to sides+offset.",
    )

    def bound(self, sides: int) -> int:
        """
        Returns the value results are clamped to on a die of the given size.

        Args:
            sides (int): The number of sides of the die.

        Returns:
            int: The clamp bound.

        """
        if self.direction == ClampDirection.MIN:
            return 1 + self.offset
        return sides + self.offset

    def apply(self, value: int, sides: int) -> int:
        """Clamps a single die result."""
        bound = self.bound(sides)
        if self.direction == ClampDirection.MIN:
            return max(value, bound)
        return min(value, bound)

    def __str__(self) -> str:
        return f"{self.direction.name.lower()} {self.offset:+d}"


class DropOrReroll(BaseModel):
    """Selection rule removing the lowest or highest dice of a pool."""

    model_config = ConfigDict(frozen=True)

    action: SelectionAction = Field(
        description="Whether selected dice are dropped or rerolled.",
    )
    target: SelectionTarget = Field(
        description="Whether the lowest or highest dice are selected.",
    )
    count: int = Field(
        1,
        ge=0,
        description="How many dice are selected.",
    )
    reroll_floor: int = Field(
        0,
        description="Replacement dice must exceed this value when rerolling until above it.",
    )
    reroll_until_above_floor: bool = Field(
        False,
        description="Keep redrawing a replacement die until it exceeds reroll_floor.",
    )

    def __str__(self) -> str:
        text = f"{self.action.name.lower()} {self.target.name.lower()} {self.count}"
        if self.action == SelectionAction.REROLL and self.reroll_until_above_floor:
            text += f" until > {self.reroll_floor}"
        return text


def format_dice_expr(dice_count: int, die_sides: int, modifier: int) -> str:
    """
    Formats dice notation such as `4d6` or `1d20+3`.

    Args:
        dice_count (int): The number of dice.
        die_sides (int): The number of sides of each die.
        modifier (int): The flat modifier.

    Returns:
        str: The formatted notation.

    """
    if modifier == 0:
        return f"{dice_count}d{die_sides}"
    return f"{dice_count}d{die_sides}{modifier:+d}"


def highest_reachable(sides: int, clamp: PerDieClamp | None) -> int:
    """Highest value a die can show once the clamp has been applied."""
    if clamp is None:
        return sides
    if clamp.direction == ClampDirection.MIN:
        return max(sides, clamp.bound(sides))
    return min(sides, clamp.bound(sides))


class StandardRollConfig(BaseModel):
    """Rolls `dice_count` dice with optional per-die clamp and drop/reroll rule."""

    model_config = ConfigDict(frozen=True)

    roll_kind: Literal["standard"] = "standard"

    die_sides: int = Field(
        ge=MIN_DIE_SIDES,
        description="Number of sides of each die.",
    )
    dice_count: int = Field(
        1,
        ge=1,
        description="Number of dice rolled.",
    )
    modifier: int = Field(
        0,
        description="Flat bonus or penalty added to the total.",
    )
    per_die_clamp: PerDieClamp | None = Field(
        None,
        description="Optional floor or ceiling applied to each die.",
    )
    drop_or_reroll: DropOrReroll | None = Field(
        None,
        description="Optional rule dropping or rerolling the extreme dice.",
    )

    @property
    def advantage_mode(self) -> AdvantageMode:
        return AdvantageMode.OFF

    def model_post_init(self, _: Any) -> None:
        """
        Ensures the selection rule leaves at least one die and can terminate.

        Raises:
            ValueError: If the drop/reroll rule is inconsistent with the pool.

        """
        rule = self.drop_or_reroll
        if rule is None:
            return
        if rule.count >= self.dice_count:
            raise ValueError(
                f"Cannot {rule.action.name.lower()} {rule.count} of {self.dice_count} dice."
            )
        if (
            rule.action == SelectionAction.REROLL
            and rule.reroll_until_above_floor
            and rule.count > 0
            and rule.reroll_floor >= highest_reachable(self.die_sides, self.per_die_clamp)
        ):
            raise ValueError(
                f"Reroll floor {rule.reroll_floor} can never be exceeded on a d{self.die_sides}."
            )

    @property
    def expression(self) -> str:
        return format_dice_expr(self.dice_count, self.die_sides, self.modifier)

    def __str__(self) -> str:
        text = self.expression
        if self.per_die_clamp:
            text += f" (clamp {self.per_die_clamp})"
        if self.drop_or_reroll:
            text += f" ({self.drop_or_reroll})"
        return text


class AdvantageRollConfig(BaseModel):
    """Rolls two dice and keeps the higher (advantage) or lower (disadvantage)."""

    model_config = ConfigDict(frozen=True)

    roll_kind: Literal["advantage"] = "advantage"

    die_sides: int = Field(
        ge=MIN_DIE_SIDES,
        description="Number of sides of both dice.",
    )
    modifier: int = Field(
        0,
        description="Flat bonus or penalty added to the kept die.",
    )
    mode: AdvantageMode = Field(
        AdvantageMode.ADVANTAGE,
        description="Which of the two dice is kept.",
    )

    def model_post_init(self, _: Any) -> None:
        """Ensures the mode actually selects one of the two dice."""
        if self.mode == AdvantageMode.OFF:
            raise ValueError("An advantage roll needs ADVANTAGE or DISADVANTAGE mode.")

    @property
    def dice_count(self) -> int:
        return 2

    @property
    def advantage_mode(self) -> AdvantageMode:
        return self.mode

    @property
    def per_die_clamp(self) -> None:
        return None

    @property
    def drop_or_reroll(self) -> None:
        return None

    @property
    def expression(self) -> str:
        return format_dice_expr(1, self.die_sides, self.modifier)

    def __str__(self) -> str:
        return f"{self.expression} ({self.mode.display_name.lower()})"


RollConfig = Annotated[
    Union[StandardRollConfig, AdvantageRollConfig],
    Field(discriminator="roll_kind"),
]


def make_roll_config(
    die_sides: int,
    dice_count: int = 1,
    modifier: int = 0,
    advantage_mode: AdvantageMode = AdvantageMode.OFF,
    per_die_clamp: PerDieClamp | None = None,
    drop_or_reroll: DropOrReroll | None = None,
) -> StandardRollConfig | AdvantageRollConfig:
    """
    Builds a roll configuration from the flat set of rule toggles.

    An active advantage mode takes precedence: the result rolls exactly two
    dice and the dice count, clamp, and drop/reroll toggles are ignored.

    Args:
        die_sides (int): Number of sides of each die.
        dice_count (int): Number of dice for a standard roll.
        modifier (int): Flat bonus or penalty.
        advantage_mode (AdvantageMode): Advantage toggle.
        per_die_clamp (PerDieClamp | None): Optional per-die clamp.
        drop_or_reroll (DropOrReroll | None): Optional selection rule.

    Returns:
        StandardRollConfig | AdvantageRollConfig: The matching configuration.

    Raises:
        ValueError: If the resulting configuration is invalid.

    """
    if advantage_mode != AdvantageMode.OFF:
        return AdvantageRollConfig(
            die_sides=die_sides,
            modifier=modifier,
            mode=advantage_mode,
        )
    return StandardRollConfig(
        die_sides=die_sides,
        dice_count=dice_count,
        modifier=modifier,
        per_die_clamp=per_die_clamp,
        drop_or_reroll=drop_or_reroll,
    )
