"""Outcome summary builder for seed sweeps.

Functions here build the aggregate payload persisted as
``logs/outcome_summary.json`` after a sweep.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from nd_automata.config.types import ExperimentResult, Outcome
from nd_automata.io.schemas import SWEEP_SCHEMA_VERSION


def _percentile_pre_sorted(sorted_values: list[float], q: float) -> float | None:
    """Compute percentile in [0, 1] with linear interpolation on pre-sorted values."""
    if not sorted_values:
        return None
    if len(sorted_values) == 1:
        return sorted_values[0]

    pos = (len(sorted_values) - 1) * q
    lo = int(pos)
    hi = min(lo + 1, len(sorted_values) - 1)
    fraction = pos - lo
    return sorted_values[lo] * (1.0 - fraction) + sorted_values[hi] * fraction


def _mean(values: list[float]) -> float | None:
    if not values:
        return None
    return sum(values) / len(values)


def build_outcome_summary(results: Sequence[ExperimentResult]) -> dict[str, Any]:
    """Outcome counts and rates plus final-population statistics over a sweep."""
    runs = len(results)
    counts = {outcome.value: 0 for outcome in Outcome}
    for result in results:
        counts[result.outcome.value] += 1
    populations = sorted(float(r.final_population) for r in results)

    return {
        "schema_version": SWEEP_SCHEMA_VERSION,
        "runs": runs,
        "outcome_counts": counts,
        "outcome_rates": {key: (count / runs if runs else 0.0) for key, count in counts.items()},
        "final_population_mean": _mean(populations),
        "final_population_p25": _percentile_pre_sorted(populations, 0.25),
        "final_population_p50": _percentile_pre_sorted(populations, 0.50),
        "final_population_p75": _percentile_pre_sorted(populations, 0.75),
    }
