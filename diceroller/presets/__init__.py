"""
Preset module for the dice roller.

This module contains the preset model, the built-in presets, and the
registry managing the full preset list and its featured subset.
"""

from .preset import Preset
from .defaults import built_in_presets
from .registry import PresetRegistry

__all__ = [
    "Preset",
    "built_in_presets",
    "PresetRegistry",
]
