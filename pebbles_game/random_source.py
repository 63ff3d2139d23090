"""Entropy for the game: who moves first and the opponent's random picks.

The game core only ever calls `next()`; hosts decide where the numbers come
from. Tests inject a `SequenceRandomSource` so every draw is known up front.
"""

from __future__ import annotations

import os
import random
from collections.abc import Iterable
from typing import Protocol

_U32 = 2**32


class RandomSource(Protocol):
    def next(self) -> int:  # pragma: no cover
        """Return a non-negative integer."""
        ...


class SystemRandomSource:
    def __init__(self) -> None:
        self._rng = random.SystemRandom()

    def next(self) -> int:
        return self._rng.randrange(_U32)


class SeededRandomSource:
    """Reproducible draws for local runs and debugging."""

    def __init__(self, seed: int) -> None:
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def next(self) -> int:
        return self._rng.randrange(_U32)


class SequenceRandomSource:
    """Replays a fixed list of draws, wrapping around when exhausted."""

    def __init__(self, values: Iterable[int]) -> None:
        self._values = list(values)
        if not self._values:
            raise ValueError("At least one value is required")
        if any(v < 0 for v in self._values):
            raise ValueError("Values must be non-negative")
        self._idx = 0

    @property
    def calls(self) -> int:
        return self._idx

    def next(self) -> int:
        value = self._values[self._idx % len(self._values)]
        self._idx += 1
        return value


def random_source_from_env() -> RandomSource:
    seed = os.environ.get("PEBBLES_RANDOM_SEED")
    if seed:
        return SeededRandomSource(int(seed))
    return SystemRandomSource()
