"""
Deterministic RNG - Seeded random source shared by every generator.

The only source of randomness in mission generation. A generator built from
the same seed string yields the same sequence for the same calls, on every
platform and in every process (CPython hashes string seeds with SHA-512,
independent of PYTHONHASHSEED).

Integer draws go through next_int() so that choice() and shuffle() consume
exactly one float per draw.
"""

from __future__ import annotations
from typing import Sequence, TypeVar
import math
import random
import uuid

T = TypeVar("T")


class DeterministicRNG:
    """Seeded pseudo-random source with the primitives generators need."""

    def __init__(self, seed: str):
        self.seed = seed
        self._random = random.Random(seed)

    def next(self) -> float:
        """Raw float in [0, 1)."""
        return self._random.random()

    def next_int(self, low: int, high: int) -> int:
        """Integer in [low, high], both inclusive."""
        return math.floor(self.next() * (high - low + 1)) + low

    def choice(self, items: Sequence[T]) -> T:
        """Pick one element uniformly."""
        if not items:
            raise ValueError("Cannot choose from an empty sequence")
        return items[self.next_int(0, len(items) - 1)]

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a Fisher-Yates shuffled copy; the input is left untouched."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.next_int(0, i)
            result[i], result[j] = result[j], result[i]
        return result

    def derive(self, suffix: str) -> DeterministicRNG:
        """New generator for a sub-seed (seed + suffix)."""
        return DeterministicRNG(self.seed + suffix)


def generate_seed() -> str:
    """Fresh 6-character shareable seed (not reproducible by design)."""
    return uuid.uuid4().hex[:6].upper()
