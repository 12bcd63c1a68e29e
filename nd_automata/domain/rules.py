"""Birth/survival rule normalization and evaluation.

A :class:`~nd_automata.config.types.RuleSpec` may express thresholds as
absolute neighbor counts or as fractions of the maximum neighbor count.
:func:`normalize_rule` resolves both into one :class:`Rule` of absolute
counts, which the stepper then evaluates per cell or per array.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from nd_automata.config.types import RelativeThreshold, RuleSpec, Threshold


@dataclass(frozen=True)
class Rule:
    """Normalized rule: absolute neighbor counts that birth or sustain a cell."""

    birth: frozenset[int]
    survival: frozenset[int]
    max_neighbors: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "birth", frozenset(self.birth))
        object.__setattr__(self, "survival", frozenset(self.survival))
        if self.max_neighbors < 0:
            raise ValueError("max_neighbors must be >= 0")


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer; exact halves move away from zero."""
    magnitude = math.floor(abs(value) + 0.5)
    return int(math.copysign(magnitude, value))


def _resolve(threshold: Threshold, max_neighbors: int) -> int:
    if isinstance(threshold, RelativeThreshold):
        fraction = threshold.relative
        if isinstance(fraction, bool) or not isinstance(fraction, (int, float)):
            raise ValueError(f"relative threshold must be numeric, got {fraction!r}")
        if not math.isfinite(fraction) or not 0.0 <= fraction <= 1.0:
            raise ValueError(f"relative threshold must be in [0.0, 1.0], got {fraction!r}")
        return round_half_away_from_zero(fraction * max_neighbors)
    if isinstance(threshold, bool) or not isinstance(threshold, int):
        raise ValueError(f"absolute threshold must be an integer value, got {threshold!r}")
    if threshold < 0:
        raise ValueError(f"absolute threshold must be >= 0, got {threshold}")
    return threshold


def create_rule(birth: Iterable[int], survival: Iterable[int], max_neighbors: int) -> Rule:
    """Build a rule directly from absolute neighbor counts."""
    return Rule(
        birth=frozenset(_resolve(count, max_neighbors) for count in birth),
        survival=frozenset(_resolve(count, max_neighbors) for count in survival),
        max_neighbors=max_neighbors,
    )


def normalize_rule(spec: RuleSpec, max_neighbors: int) -> Rule:
    """Resolve absolute and relative thresholds against ``max_neighbors``."""
    return Rule(
        birth=frozenset(_resolve(t, max_neighbors) for t in spec.birth),
        survival=frozenset(_resolve(t, max_neighbors) for t in spec.survival),
        max_neighbors=max_neighbors,
    )


def should_be_alive(is_alive: bool, neighbor_count: int, rule: Rule) -> bool:
    """Next state of one cell."""
    if is_alive:
        return neighbor_count in rule.survival
    return neighbor_count in rule.birth


def next_states(alive: np.ndarray, counts: np.ndarray, rule: Rule) -> np.ndarray:
    """Vectorized :func:`should_be_alive` over matching arrays; returns ``uint8``."""
    birth = np.fromiter(rule.birth, dtype=np.int64, count=len(rule.birth))
    survival = np.fromiter(rule.survival, dtype=np.int64, count=len(rule.survival))
    alive_mask = alive.astype(bool)
    survives = alive_mask & np.isin(counts, survival)
    born = ~alive_mask & np.isin(counts, birth)
    return (survives | born).astype(np.uint8)
