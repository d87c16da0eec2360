"""
Roll log module.

Keeps a bounded, most-recent-first history of resolved rolls together with
the label, category, and note the caller attached to each of them.
"""

from __future__ import annotations

from collections import deque
from typing import Any

from catchery import log_warning
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from diceroller.core.constants import LOG_CAPACITY, RollCategory
from diceroller.core.error_handling import ERROR_HANDLER, ErrorSeverity
from diceroller.core.logging import log_debug
from diceroller.core.storage import KeyValueStore
from diceroller.rolls.roll_outcome import RollOutcome

ROLL_LOG_KEY = "roll_log"


class LoggedRoll(BaseModel):
    """A roll outcome plus the descriptive metadata shown in the log."""

    model_config = ConfigDict(frozen=True)

    outcome: RollOutcome = Field(
        description="The resolved roll.",
    )
    label: str = Field(
        "",
        description="Short label, usually the preset name.",
    )
    category: RollCategory = Field(
        RollCategory.GENERAL,
        description="Category tag of the roll.",
    )
    note: str = Field(
        "",
        description="Free-text note.",
    )

    def describe(self) -> str:
        """Returns the outcome summary prefixed with the label, if any."""
        if self.label:
            return f"{self.label}: {self.outcome.describe()}"
        return self.outcome.describe()


_SNAPSHOT_ADAPTER = TypeAdapter(list[LoggedRoll])


class RollLog:
    """
    Append-only history of at most `LOG_CAPACITY` rolls.

    Entries are evicted oldest first once the capacity is reached. When a
    store is attached, every mutation is saved to it.
    """

    def __init__(self, store: KeyValueStore | None = None) -> None:
        """
        Initialize an empty roll log.

        Args:
            store (KeyValueStore | None):
                Optional store used by `load` and `save`.

        """
        self.store = store
        # Oldest entry on the left, newest on the right.
        self._entries: deque[LoggedRoll] = deque(maxlen=LOG_CAPACITY)

    @property
    def capacity(self) -> int:
        return LOG_CAPACITY

    def __len__(self) -> int:
        return len(self._entries)

    def append(
        self,
        entry: RollOutcome | LoggedRoll,
        label: str = "",
        category: RollCategory = RollCategory.GENERAL,
        note: str = "",
    ) -> LoggedRoll:
        """
        Adds a roll to the log, evicting the oldest entry when full.

        Args:
            entry (RollOutcome | LoggedRoll):
                The outcome to record, or an already wrapped entry (in which
                case the metadata arguments are ignored).
            label (str): Label shown with the roll.
            category (RollCategory): Category tag of the roll.
            note (str): Free-text note.

        Returns:
            LoggedRoll: The stored entry.

        """
        if isinstance(entry, LoggedRoll):
            logged = entry
        else:
            logged = LoggedRoll(outcome=entry, label=label, category=category, note=note)
        if len(self._entries) == LOG_CAPACITY:
            log_debug("Roll log full, evicting oldest entry")
        self._entries.append(logged)
        self._autosave()
        return logged

    def list(self) -> list[LoggedRoll]:
        """Returns every entry, most recent first."""
        return list(reversed(self._entries))

    def latest(self) -> LoggedRoll | None:
        """Returns the most recent entry, or None if the log is empty."""
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        """Removes every entry."""
        self._entries.clear()
        self._autosave()

    # ---- Persistence ----

    def snapshot(self) -> list[dict[str, Any]]:
        """
        Serializes the log into JSON-compatible data.

        Returns:
            list[dict[str, Any]]: The entries, most recent first.

        """
        return _SNAPSHOT_ADAPTER.dump_python(self.list(), mode="json")

    def restore(self, data: Any) -> bool:
        """
        Replaces the log contents with a previously taken snapshot.

        Undecodable data leaves the log empty instead of raising.

        Args:
            data (Any): A snapshot as returned by `snapshot`, or None.

        Returns:
            bool: True if the snapshot was decoded, False otherwise.

        """
        self._entries.clear()
        if data is None:
            return True
        entries = ERROR_HANDLER.safe_execute(
            lambda: _SNAPSHOT_ADAPTER.validate_python(data),
            None,
            "Failed to decode roll log",
            ErrorSeverity.MEDIUM,
        )
        if entries is None:
            log_warning("Roll log could not be decoded, starting empty", {"key": ROLL_LOG_KEY})
            return False
        # Snapshots are newest first; keep only the newest LOG_CAPACITY entries.
        for logged in reversed(entries[:LOG_CAPACITY]):
            self._entries.append(logged)
        return True

    def load(self) -> None:
        """Loads the log from the attached store, if any."""
        if self.store is None:
            return
        self.restore(self.store.get(ROLL_LOG_KEY))
        log_debug("Roll log loaded", {"entries": len(self._entries)})

    def save(self) -> None:
        """Writes the log to the attached store, if any."""
        if self.store is None:
            return
        self.store.set(ROLL_LOG_KEY, self.snapshot())

    def _autosave(self) -> None:
        if self.store is not None:
            self.save()
