"""
Core system module for the dice roller.

This module contains the fundamental components shared by the roll engine,
the roll log, and the preset registry: constants, error handling, logging,
random sources, storage, and settings.
"""

from .constants import (
    LOG_CAPACITY,
    DEFAULT_FEATURED_SLOTS,
    DEFAULT_CUSTOM_DIE_SIDES,
    MIN_DIE_SIDES,
    AdvantageMode,
    ClampDirection,
    DiceType,
    RollCategory,
    SelectionAction,
    SelectionTarget,
)
from .error_handling import (
    ERROR_HANDLER,
    ErrorHandler,
    ErrorSeverity,
    RollConfigError,
)
from .random_source import (
    RandomSource,
    SequenceRandomSource,
    SystemRandomSource,
)
from .settings import Settings
from .storage import (
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
)

__all__ = [
    # Import from constants.py
    "LOG_CAPACITY",
    "DEFAULT_FEATURED_SLOTS",
    "DEFAULT_CUSTOM_DIE_SIDES",
    "MIN_DIE_SIDES",
    "AdvantageMode",
    "ClampDirection",
    "DiceType",
    "RollCategory",
    "SelectionAction",
    "SelectionTarget",
    # Import from error_handling.py
    "ERROR_HANDLER",
    "ErrorHandler",
    "ErrorSeverity",
    "RollConfigError",
    # Import from random_source.py
    "RandomSource",
    "SequenceRandomSource",
    "SystemRandomSource",
    # Import from settings.py
    "Settings",
    # Import from storage.py
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
]
