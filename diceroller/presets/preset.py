"""
Preset module.

A preset is a named, reusable roll configuration ("quick roll").
"""

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from diceroller.core.constants import RollCategory
from diceroller.rolls.roll_config import RollConfig


def new_preset_id() -> str:
    return uuid4().hex


class Preset(BaseModel):
    """Named wrapper around a roll configuration."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        default_factory=new_preset_id,
        description="Stable identifier of the preset.",
    )
    name: str = Field(
        min_length=1,
        description="Name shown to the user.",
    )
    config: RollConfig = Field(
        description="The roll configuration resolved when the preset is used.",
    )
    category: RollCategory = Field(
        RollCategory.GENERAL,
        description="Category tag given to rolls made from this preset.",
    )
    tags: list[str] = Field(
        default_factory=list,
        description="Free-form tags used to group presets.",
    )
    built_in: bool = Field(
        False,
        description="Built-in presets ship with the roller and cannot be removed.",
    )

    def __str__(self) -> str:
        return f"{self.name} ({self.config})"
