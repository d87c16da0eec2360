"""
Roll resolution module for the dice roller.

This module contains the roll configuration models, the roll outcome model,
and the resolution engine turning the former into the latter.
"""

from .roll_config import (
    AdvantageRollConfig,
    DropOrReroll,
    PerDieClamp,
    RollConfig,
    StandardRollConfig,
    format_dice_expr,
    make_roll_config,
)
from .roll_outcome import RollOutcome
from .engine import (
    apply_clamp,
    resolve,
    select_extremes,
    validate_config,
)

__all__ = [
    # Import from roll_config.py
    "AdvantageRollConfig",
    "DropOrReroll",
    "PerDieClamp",
    "RollConfig",
    "StandardRollConfig",
    "format_dice_expr",
    "make_roll_config",
    # Import from roll_outcome.py
    "RollOutcome",
    # Import from engine.py
    "apply_clamp",
    "resolve",
    "select_extremes",
    "validate_config",
]
