"""
Preset registry module.

Owns the ordered collection of presets (built-in and user-created), the
small ordered array of featured presets, and the settings that go with
them. All mutations go through the registry's methods; callers only ever
receive copies of its lists.
"""

from typing import Any

from catchery import log_warning
from pydantic import TypeAdapter

from diceroller.core.error_handling import ERROR_HANDLER, ErrorSeverity
from diceroller.core.logging import log_debug, log_info
from diceroller.core.settings import Settings
from diceroller.core.storage import KeyValueStore
from diceroller.rolls.roll_config import StandardRollConfig

from .defaults import built_in_presets
from .preset import Preset

PRESETS_KEY = "presets"

_PRESET_LIST_ADAPTER = TypeAdapter(list[Preset])


class PresetRegistry:
    """
    Ordered collection of presets with a featured subset.

    The featured array holds at most `settings.featured_slots` presets and is
    never empty while the registry holds presets: when it would be, it is
    seeded with the first presets of the full list.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        store: KeyValueStore | None = None,
        defaults: list[Preset] | None = None,
    ) -> None:
        """
        Initialize the registry with its default presets.

        Args:
            settings (Settings | None):
                Settings holding the featured slot count and custom die size.
            store (KeyValueStore | None):
                Optional store used by `load` and `save`.
            defaults (list[Preset] | None):
                Presets the registry starts from and falls back to. Defaults
                to the built-in presets.

        """
        self.settings = settings or Settings()
        self.store = store
        self._defaults = list(defaults) if defaults is not None else built_in_presets()
        self._presets: list[Preset] = list(self._defaults)
        self._featured: list[str] = []
        self._seed_featured()

    # ---- Queries ----

    def list_all(self) -> list[Preset]:
        """Returns every preset in iteration order."""
        return list(self._presets)

    def get(self, preset_id: str) -> Preset | None:
        """Returns the preset with the given identifier, or None."""
        for preset in self._presets:
            if preset.id == preset_id:
                return preset
        return None

    def featured(self) -> list[Preset]:
        """Returns the featured presets in slot order."""
        presets = [self.get(preset_id) for preset_id in self._featured]
        return [preset for preset in presets if preset is not None]

    def __len__(self) -> int:
        return len(self._presets)

    # ---- Mutations ----

    def add_custom(self, preset: Preset) -> Preset:
        """
        Adds a user-created preset at the end of the list.

        Args:
            preset (Preset): The preset to add. Its built-in flag is cleared.

        Returns:
            Preset: The stored preset.

        Raises:
            ValueError: If a preset with the same identifier already exists.

        """
        if self.get(preset.id) is not None:
            raise ValueError(f"Duplicate preset id: {preset.id}")
        if preset.built_in:
            preset = preset.model_copy(update={"built_in": False})
        self._presets.append(preset)
        self._seed_featured()
        log_debug("Added preset", {"id": preset.id, "name": preset.name})
        self._autosave()
        return preset

    def remove_custom(self, preset_id: str) -> bool:
        """
        Removes a user-created preset.

        Built-in presets are never removed.

        Args:
            preset_id (str): Identifier of the preset to remove.

        Returns:
            bool: True if a preset was removed, False otherwise.

        """
        preset = self.get(preset_id)
        if preset is None:
            return False
        if preset.built_in:
            log_warning(
                f"Refusing to remove built-in preset '{preset.name}'",
                {"id": preset_id},
            )
            return False
        self._presets.remove(preset)
        self._featured = [pid for pid in self._featured if pid != preset_id]
        self._seed_featured()
        log_debug("Removed preset", {"id": preset_id, "name": preset.name})
        self._autosave()
        return True

    def set_featured(self, preset: Preset, slot_index: int) -> None:
        """
        Places a preset in a featured slot.

        An index past the end of the featured array appends to it; once the
        array holds `featured_slots` presets, such an index replaces the last
        slot. A preset that is already featured moves to the new slot and the
        presets between its old and new slots shift over by one.

        Args:
            preset (Preset): The preset to feature. Must be in the registry.
            slot_index (int): The target slot.

        Raises:
            KeyError: If the preset is not in the registry.
            ValueError: If the slot index is negative.

        """
        if self.get(preset.id) is None:
            raise KeyError(f"Unknown preset: {preset.id}")
        if slot_index < 0:
            raise ValueError(f"Invalid featured slot: {slot_index}")
        featured = list(self._featured)
        slots = self.settings.featured_slots
        if preset.id in featured:
            featured.remove(preset.id)
            featured.insert(min(slot_index, len(featured)), preset.id)
        elif slot_index < len(featured):
            featured[slot_index] = preset.id
        elif len(featured) < slots:
            featured.append(preset.id)
        else:
            featured[slots - 1] = preset.id
        self._featured = featured[:slots]
        self._autosave()

    def reorder(self, new_order: list[str]) -> None:
        """
        Changes the iteration order of the full preset list.

        The featured array is not affected.

        Args:
            new_order (list[str]): Every preset identifier, in the new order.

        Raises:
            ValueError: If `new_order` is not a permutation of the current identifiers.

        """
        by_id = {preset.id: preset for preset in self._presets}
        if len(new_order) != len(by_id) or set(new_order) != set(by_id):
            raise ValueError("New order must list every preset exactly once")
        self._presets = [by_id[preset_id] for preset_id in new_order]
        self._autosave()

    # ---- Settings ----

    @property
    def custom_die_sides(self) -> int:
        return self.settings.custom_die_sides

    @custom_die_sides.setter
    def custom_die_sides(self, sides: int) -> None:
        # Settings validates on assignment and rejects sizes below two.
        self.settings.custom_die_sides = sides
        self._autosave()

    def set_featured_slots(self, slots: int) -> None:
        """
        Changes the number of featured slots, dropping presets beyond it.

        Args:
            slots (int): The new number of slots.

        """
        self.settings.featured_slots = slots
        self._featured = self._featured[:slots]
        self._seed_featured()
        self._autosave()

    def custom_die_config(self, dice_count: int = 1, modifier: int = 0) -> StandardRollConfig:
        """
        Builds a configuration rolling the freeform custom die.

        Args:
            dice_count (int): Number of custom dice to roll.
            modifier (int): Flat bonus or penalty.

        Returns:
            StandardRollConfig: The configuration.

        """
        return StandardRollConfig(
            die_sides=self.custom_die_sides,
            dice_count=dice_count,
            modifier=modifier,
        )

    # ---- Persistence ----

    def snapshot(self) -> dict[str, Any]:
        """
        Serializes the registry into JSON-compatible data.

        Built-in presets are stored by identifier only.

        Returns:
            dict[str, Any]: The custom presets, the full order, and the featured identifiers.

        """
        custom = [preset for preset in self._presets if not preset.built_in]
        return {
            "custom": _PRESET_LIST_ADAPTER.dump_python(custom, mode="json"),
            "order": [preset.id for preset in self._presets],
            "featured": list(self._featured),
        }

    def restore(self, data: Any) -> bool:
        """
        Rebuilds the registry from a snapshot.

        Undecodable data resets the registry to its default presets
        instead of raising.

        Args:
            data (Any): A snapshot as returned by `snapshot`, or None.

        Returns:
            bool: True if the snapshot was decoded, False otherwise.

        """
        self._presets = list(self._defaults)
        self._featured = []
        decoded = True
        if data is not None:
            decoded = ERROR_HANDLER.safe_execute(
                lambda: self._apply_snapshot(data),
                False,
                "Failed to decode presets",
                ErrorSeverity.MEDIUM,
            )
            if not decoded:
                log_warning("Presets could not be decoded, using defaults", {"key": PRESETS_KEY})
                self._presets = list(self._defaults)
                self._featured = []
        self._seed_featured()
        return decoded

    def load(self) -> None:
        """Loads settings and presets from the attached store, if any."""
        if self.store is None:
            return
        self.settings = Settings.load(self.store)
        self.restore(self.store.get(PRESETS_KEY))
        log_info(
            "Presets loaded",
            {"presets": len(self._presets), "featured": len(self._featured)},
        )

    def save(self) -> None:
        """Writes settings and presets to the attached store, if any."""
        if self.store is None:
            return
        self.settings.save(self.store)
        self.store.set(PRESETS_KEY, self.snapshot())

    def _apply_snapshot(self, data: dict[str, Any]) -> bool:
        custom = _PRESET_LIST_ADAPTER.validate_python(data.get("custom", []))
        default_ids = {preset.id for preset in self._presets}
        presets = self._presets + [
            preset.model_copy(update={"built_in": False})
            for preset in custom
            if preset.id not in default_ids
        ]
        by_id = {preset.id: preset for preset in presets}
        if len(by_id) != len(presets):
            raise ValueError("Duplicate preset identifiers in snapshot")
        # Known identifiers in stored order, then anything the stored order missed.
        order = [pid for pid in data.get("order", []) if pid in by_id]
        order += [preset.id for preset in presets if preset.id not in order]
        self._presets = [by_id[pid] for pid in dict.fromkeys(order)]
        featured = [pid for pid in data.get("featured", []) if pid in by_id]
        self._featured = list(dict.fromkeys(featured))[: self.settings.featured_slots]
        return True

    def _seed_featured(self) -> None:
        if self._featured or not self._presets:
            return
        self._featured = [
            preset.id for preset in self._presets[: self.settings.featured_slots]
        ]

    def _autosave(self) -> None:
        if self.store is not None:
            self.save()
