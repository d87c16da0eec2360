"""
Roll outcome module.

Defines the immutable, auditable result produced by the resolution engine.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from .roll_config import RollConfig


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RollOutcome(BaseModel):
    """
    Fully specified result of resolving one roll configuration.

    Every die drawn appears in `all_raw_rolls` in draw order, before any
    clamp. The clamped values are then split between the dice that were
    summed (`used_rolls`), removed without replacement (`dropped_rolls`), and
    removed and replaced (`rerolled_rolls`). Equal values may repeat, so the
    last two are stored as tuples rather than sets. When rerolling until above
    a floor, each rejected replacement is itself rerolled and recorded too.
    """

    model_config = ConfigDict(frozen=True)

    config: RollConfig = Field(
        description="The configuration that was resolved.",
    )
    all_raw_rolls: tuple[int, ...] = Field(
        default_factory=tuple,
        description="Every die drawn, in draw order, before clamping.",
    )
    used_rolls: tuple[int, ...] = Field(
        default_factory=tuple,
        description="Dice summed into the base total.",
    )
    dropped_rolls: tuple[int, ...] = Field(
        default_factory=tuple,
        description="Dice removed without replacement.",
    )
    rerolled_rolls: tuple[int, ...] = Field(
        default_factory=tuple,
        description=(
            "Dice removed and replaced by a fresh draw, including rejected"
            " replacements when rerolling until above the floor."
        ),
    )
    base_total: int = Field(
        description="Sum of the used rolls.",
    )
    final_result: int = Field(
        description="Base total plus the modifier.",
    )
    timestamp: datetime = Field(
        default_factory=utc_now,
        description="When the roll was resolved.",
    )

    @property
    def modifier(self) -> int:
        return self.config.modifier

    def describe(self) -> str:
        """
        Builds a one-line human readable summary of the roll.

        Returns:
            str: Summary such as `4d6+2 = 13 [2, 5, 4] (dropped: 1)`.

        """
        summary = f"{self.config.expression} = {self.final_result} [{_join(self.used_rolls)}]"
        if self.dropped_rolls:
            summary += f" (dropped: {_join(self.dropped_rolls)})"
        if self.rerolled_rolls:
            summary += f" (rerolled: {_join(self.rerolled_rolls)})"
        return summary

    def __str__(self) -> str:
        return self.describe()


def _join(values: tuple[int, ...]) -> str:
    return ", ".join(str(value) for value in values)
