"""
Deterministic pseudo-random source for slot-level pricing decisions.

The recurrence and its constants are fixed: historically persisted prices
were produced with them, and re-pricing an old quote must reproduce the same
draws. Arithmetic is done in IEEE doubles with a truncating modulo, the same
semantics the platform has always used, so large or negative seeds also
reproduce.
"""

from __future__ import annotations

import math

MULTIPLIER = 9301
INCREMENT = 49297
MODULUS = 233280


class SeededGenerator:
    """Linear congruential generator. One instance per pricing call; never shared."""

    def __init__(self, seed: int):
        self._seed = float(seed)

    def next(self) -> float:
        """Advance the state and return a float in [0, 1) for non-negative seeds."""
        self._seed = math.fmod(self._seed * MULTIPLIER + INCREMENT, MODULUS)
        return self._seed / MODULUS

    def range(self, minimum: int, maximum: int) -> int:
        """Integer in [minimum, maximum], inclusive. Consumes one draw."""
        return minimum + math.floor(self.next() * (maximum - minimum + 1))
