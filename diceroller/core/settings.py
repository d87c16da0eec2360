"""
Explicit settings object shared by the preset registry and the roll log.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
    DEFAULT_CUSTOM_DIE_SIDES,
    DEFAULT_FEATURED_SLOTS,
    MAX_FEATURED_SLOTS,
    MIN_DIE_SIDES,
)
from .error_handling import ensure_int_in_range
from .logging import log_debug
from .storage import KeyValueStore

SETTINGS_KEY = "settings"


class Settings(BaseModel):
    """User-adjustable settings persisted alongside the registry."""

    model_config = ConfigDict(validate_assignment=True)

    custom_die_sides: int = Field(
        DEFAULT_CUSTOM_DIE_SIDES,
        ge=MIN_DIE_SIDES,
        description="Number of sides of the freeform custom die.",
    )
    featured_slots: int = Field(
        DEFAULT_FEATURED_SLOTS,
        ge=1,
        le=MAX_FEATURED_SLOTS,
        description="Number of featured preset slots.",
    )

    @classmethod
    def load(cls, store: KeyValueStore) -> "Settings":
        """
        Loads settings from a store, correcting invalid values.

        Missing or malformed entries fall back to their defaults, so this
        never raises because of stored data.

        Args:
            store (KeyValueStore): The store to read from.

        Returns:
            Settings: The loaded settings.

        """
        data: Any = store.get(SETTINGS_KEY)
        if not isinstance(data, dict):
            log_debug("No stored settings, using defaults")
            return cls()
        return cls(
            custom_die_sides=ensure_int_in_range(
                data.get("custom_die_sides", DEFAULT_CUSTOM_DIE_SIDES),
                "custom_die_sides",
                MIN_DIE_SIDES,
                default=DEFAULT_CUSTOM_DIE_SIDES,
            ),
            featured_slots=ensure_int_in_range(
                data.get("featured_slots", DEFAULT_FEATURED_SLOTS),
                "featured_slots",
                1,
                MAX_FEATURED_SLOTS,
                default=DEFAULT_FEATURED_SLOTS,
            ),
        )

    def save(self, store: KeyValueStore) -> None:
        """Writes the settings to a store."""
        store.set(SETTINGS_KEY, self.model_dump(mode="json"))
