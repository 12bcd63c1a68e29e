"""Temporal metrics over sampled series: tail periodicity, growth, trends, hash cycles."""

from __future__ import annotations

import math
import statistics
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from nd_automata.config.constants import (
    EXPLOSIVE_EARLY_FRACTION,
    EXPLOSIVE_GROWTH_RATIO,
    EXPLOSIVE_LATE_FRACTION,
    EXPLOSIVE_MIN_RISE_FRACTION,
    EXPLOSIVE_MIN_SAMPLES,
    EXPLOSIVE_TAIL_MIN_RISE_FRACTION,
    MIN_TAIL_LENGTH,
    TAIL_WINDOW_START_FRACTION,
)

T = TypeVar("T")

_ENTROPY_STEP_TOLERANCE = 0.001


class PopulationTrend(Enum):
    GROWING = "growing"
    SHRINKING = "shrinking"
    STABLE = "stable"
    OSCILLATING = "oscillating"


class EntropyTrend(Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"
    FLUCTUATING = "fluctuating"


@dataclass(frozen=True)
class HashCycle:
    """A repeated state found in a hash series."""

    period: int
    first_occurrence: int


def tail_window(series: Sequence[T], start_fraction: float = TAIL_WINDOW_START_FRACTION) -> list[T]:
    """Samples from ``floor(start_fraction * n)`` to the end."""
    return list(series[int(len(series) * start_fraction) :])


def find_period(series: Sequence[object], min_length: int = MIN_TAIL_LENGTH) -> int | None:
    """Smallest exact period of ``series``, or ``None``.

    A period ``p`` in ``1..len(series)//2`` holds when every sample equals the
    one ``p`` positions later. Series shorter than ``min_length`` have none.
    """
    n = len(series)
    if n < min_length:
        return None
    for period in range(1, n // 2 + 1):
        if all(series[i] == series[i + period] for i in range(n - period)):
            return period
    return None


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def is_sustained_growth(populations: Sequence[int]) -> bool:
    """True when the population climbs clearly and mostly monotonically.

    Requires enough samples, a late mean (final 20%) above the early mean
    (first half) by the growth ratio, and rising steps dominating the non-flat
    steps so brief local dips do not disqualify a run. The tail window must
    still be climbing as well: mostly rising steps and a higher second half,
    so growth that has levelled off into a noisy plateau does not count.
    """
    n = len(populations)
    if n < EXPLOSIVE_MIN_SAMPLES:
        return False
    early = populations[: int(n * EXPLOSIVE_EARLY_FRACTION)]
    late = populations[int(n * EXPLOSIVE_LATE_FRACTION) :]
    if not early or not late:
        return False
    if _mean(late) <= EXPLOSIVE_GROWTH_RATIO * _mean(early):
        return False
    if not _mostly_rising(populations, EXPLOSIVE_MIN_RISE_FRACTION):
        return False

    tail = tail_window(populations)
    if not _mostly_rising(tail, EXPLOSIVE_TAIL_MIN_RISE_FRACTION):
        return False
    half = len(tail) // 2
    return _mean(tail[half:]) > _mean(tail[:half])


def _mostly_rising(values: Sequence[int], min_fraction: float) -> bool:
    rises, falls = _count_moves(values)
    if rises + falls == 0:
        return False
    return rises / (rises + falls) >= min_fraction


def _count_moves(values: Sequence[float], tolerance: float = 0.0) -> tuple[int, int]:
    increasing = 0
    decreasing = 0
    for prev, curr in zip(values, values[1:]):
        if curr > prev + tolerance:
            increasing += 1
        elif curr < prev - tolerance:
            decreasing += 1
    return increasing, decreasing


def population_trend(populations: Sequence[int]) -> PopulationTrend:
    """Direction of the population over the tail window.

    A coefficient of variation above 0.3 reads as oscillation; otherwise a net
    direction covering more than 60% of the moves reads as growth or decline.
    """
    tail = tail_window(populations)
    if len(tail) < 2:
        return PopulationTrend.STABLE
    mean = _mean(tail)
    std = math.sqrt(statistics.pvariance(tail))
    cov = std / mean if mean > 0 else 0.0
    if cov > 0.3:
        return PopulationTrend.OSCILLATING
    increasing, decreasing = _count_moves(tail)
    total = increasing + decreasing
    strength = abs(increasing - decreasing) / total if total else 0.0
    if strength > 0.6:
        return PopulationTrend.GROWING if increasing > decreasing else PopulationTrend.SHRINKING
    return PopulationTrend.STABLE


def entropy_trend(entropies: Sequence[float]) -> EntropyTrend:
    """Direction of the spatial entropy over the tail window."""
    tail = tail_window(entropies)
    if len(tail) < 2:
        return EntropyTrend.STABLE
    if math.sqrt(statistics.pvariance(tail)) > 0.1:
        return EntropyTrend.FLUCTUATING
    increasing, decreasing = _count_moves(tail, _ENTROPY_STEP_TOLERANCE)
    total = increasing + decreasing
    if total == 0:
        return EntropyTrend.STABLE
    ratio = increasing / total
    if ratio > 0.7:
        return EntropyTrend.INCREASING
    if ratio < 0.3:
        return EntropyTrend.DECREASING
    return EntropyTrend.STABLE


def _verify_cycle(hashes: Sequence[int], start: int, period: int) -> bool:
    # Too short to see two full periods: accept the single repeat.
    if start + 2 * period > len(hashes):
        return True
    return all(hashes[start + i] == hashes[start + period + i] for i in range(period))


def detect_hash_cycle(hashes: Sequence[int], window: int | None = None) -> HashCycle | None:
    """First verified repeat among the last ``window`` state hashes.

    Each hash is compared against its most recent earlier occurrence inside the
    window; the gap is the period.
    """
    search = len(hashes) if window is None else window
    start = max(0, len(hashes) - search)
    last_seen: dict[int, int] = {}
    for i in range(start, len(hashes)):
        value = hashes[i]
        previous = last_seen.get(value)
        if previous is not None:
            period = i - previous
            if period > 0 and _verify_cycle(hashes, previous, period):
                return HashCycle(period=period, first_occurrence=previous)
        last_seen[value] = i
    return None
