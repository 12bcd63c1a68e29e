"""Seeded pseudo-random stream for reproducible grid initialization.

A 32-bit linear congruential generator (Numerical Recipes constants). All
state derives from the seed and prior outputs, so one seed always yields the
same sequence regardless of platform or NumPy version.
"""

from __future__ import annotations

_MULTIPLIER = 1664525
_INCREMENT = 1013904223
_MODULUS = 2**32


class SeededRandom:
    """Deterministic generator of floats in ``[0, 1)``."""

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        # Negative seeds map onto distinct unsigned states.
        self._state = seed % _MODULUS

    def next(self) -> float:
        """Advance the state and return the next value in ``[0, 1)``."""
        self._state = (self._state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return self._state / _MODULUS


def create_random(seed: int) -> SeededRandom:
    """Create a generator for ``seed``."""
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise ValueError(f"seed must be an integer value, got {seed!r}")
    return SeededRandom(seed)
