"""
Random sources used to draw die results.
"""

import random
from collections.abc import Iterable
from typing import Protocol


class RandomSource(Protocol):
    """Anything that can draw a uniform integer from an inclusive range."""

    def randint(self, low: int, high: int) -> int: ...


class SystemRandomSource:
    """Pseudo-random source backed by `random.Random`, optionally seeded."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        return self._random.randint(low, high)


class SequenceRandomSource:
    """
    Replays a fixed sequence of values, one per draw.

    Used to reproduce a recorded roll or to drive the engine in tests. Each
    value must lie within the range requested by the draw that consumes it.
    """

    def __init__(self, values: Iterable[int]) -> None:
        self._values = list(values)
        self._position = 0

    @property
    def consumed(self) -> int:
        """Number of values drawn so far."""
        return self._position

    @property
    def remaining(self) -> int:
        """Number of values not yet drawn."""
        return len(self._values) - self._position

    def randint(self, low: int, high: int) -> int:
        if self._position >= len(self._values):
            raise IndexError(
                f"Random sequence exhausted after {self._position} draws"
            )
        value = self._values[self._position]
        if not low <= value <= high:
            raise ValueError(
                f"Sequence value {value} at position {self._position} "
                f"is outside [{low}, {high}]"
            )
        self._position += 1
        return value
