"""Tests for nd_automata.experiments.summaries module."""

from __future__ import annotations

import pytest

from nd_automata.config.types import (
    ExperimentConfig,
    ExperimentResult,
    NeighborhoodSpec,
    Outcome,
    RuleSpec,
)
from nd_automata.experiments.summaries import _percentile_pre_sorted, build_outcome_summary

_CONFIG = ExperimentConfig(
    dimensions=(4, 4),
    neighborhood=NeighborhoodSpec(),
    rule=RuleSpec(birth=(3,), survival=(2, 3)),
    steps=1,
    initial_density=0.5,
)


def _result(outcome: Outcome, final_population: int) -> ExperimentResult:
    return ExperimentResult(
        outcome=outcome, final_population=final_population, metrics_history=(), config=_CONFIG
    )


def test_percentile_interpolates() -> None:
    assert _percentile_pre_sorted([], 0.5) is None
    assert _percentile_pre_sorted([3.0], 0.75) == 3.0
    assert _percentile_pre_sorted([0.0, 10.0], 0.25) == pytest.approx(2.5)


def test_outcome_summary_counts_and_rates() -> None:
    results = [
        _result(Outcome.EXTINCT, 0),
        _result(Outcome.STABLE, 10),
        _result(Outcome.STABLE, 20),
        _result(Outcome.EXPLOSIVE, 30),
    ]
    summary = build_outcome_summary(results)
    assert summary["runs"] == 4
    assert summary["outcome_counts"] == {
        "extinct": 1,
        "stable": 2,
        "oscillating": 0,
        "explosive": 1,
    }
    assert summary["outcome_rates"]["stable"] == 0.5
    assert summary["final_population_mean"] == 15.0
    assert summary["final_population_p50"] == pytest.approx(15.0)
    assert summary["final_population_p25"] == pytest.approx(7.5)


def test_outcome_summary_empty() -> None:
    summary = build_outcome_summary([])
    assert summary["runs"] == 0
    assert summary["outcome_rates"]["extinct"] == 0.0
    assert summary["final_population_mean"] is None
