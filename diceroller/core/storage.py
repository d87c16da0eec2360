"""
Key-value storage backends used to persist settings, presets, and the roll log.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

from catchery import log_warning


class KeyValueStore(Protocol):
    """Minimal persistence contract: JSON-compatible values stored by key."""

    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, value: Any) -> None: ...


class MemoryStore:
    """In-memory store, mostly useful for tests and throwaway sessions."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self.data: dict[str, Any] = dict(data or {})

    def get(self, key: str) -> Any | None:
        return self.data.get(key)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value


class JsonFileStore:
    """
    Stores every key in a single JSON document on disk.

    The document is read lazily on first access. A missing file starts an
    empty store; an unreadable one is reported and treated as empty, so a
    corrupt file never prevents the roller from starting.
    """

    def __init__(self, path: Path | str) -> None:
        """
        Initialize the store.

        Args:
            path (Path | str):
                Location of the JSON document.

        """
        self.path = Path(path)
        self._data: dict[str, Any] | None = None

    def _load(self) -> dict[str, Any]:
        if self._data is not None:
            return self._data
        self._data = {}
        if not self.path.exists():
            return self._data
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"Expected object, got {type(data).__name__}")
            self._data = data
        except (OSError, json.JSONDecodeError, ValueError) as e:
            log_warning(
                f"Could not read store file, starting empty: {e}",
                {"path": str(self.path)},
            )
        return self._data

    def get(self, key: str) -> Any | None:
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self._write(data)

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write to a sibling temp file then swap, so readers never see a half-written document.
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
