"""Tests for nd_automata.experiments.experiment module."""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from nd_automata.config.types import (
    EnhancedMetrics,
    ExperimentConfig,
    Metrics,
    NeighborhoodSpec,
    NeighborhoodType,
    Outcome,
    RelativeThreshold,
    RuleSpec,
)
from nd_automata.domain.classifier import multi_metric_classifier, simple_classifier
from nd_automata.domain.grid import Grid, initialize_random
from nd_automata.domain.neighborhood import generate_neighborhood
from nd_automata.domain.rng import create_random
from nd_automata.domain.rules import create_rule
from nd_automata.experiments.experiment import run_experiment
from nd_automata.simulation.step import evolve_enhanced

CONWAY = RuleSpec(birth=(3,), survival=(2, 3))


def _config(**overrides: object) -> ExperimentConfig:
    params: dict[str, object] = {
        "dimensions": (10, 10),
        "neighborhood": NeighborhoodSpec(),
        "rule": CONWAY,
        "steps": 30,
        "initial_density": 0.3,
    }
    params.update(overrides)
    return ExperimentConfig(**params)  # type: ignore[arg-type]


class TestRunExperimentScenarios:
    def test_empty_conway_grid_goes_extinct(self) -> None:
        result = run_experiment(_config(initial_density=0.0, steps=50))
        assert result.outcome is Outcome.EXTINCT
        assert result.final_population == 0
        assert len(result.metrics_history) == 50
        assert all(m.population == 0 for m in result.metrics_history)

    def test_full_grid_with_saturated_survival_stays_full(self) -> None:
        config = _config(initial_density=1.0, rule=RuleSpec(survival=(8,)), steps=10)
        result = run_experiment(config)
        assert result.final_population == 100
        assert all(m.population == 100 for m in result.metrics_history)
        assert result.outcome is Outcome.OSCILLATING

    def test_full_grid_under_conway_dies_at_once(self) -> None:
        result = run_experiment(_config(initial_density=1.0, steps=5))
        first = result.metrics_history[0]
        assert first.deaths == 100
        assert first.population == 0
        assert result.outcome is Outcome.EXTINCT

    def test_metrics_interval_selects_steps(self) -> None:
        result = run_experiment(_config(steps=20, metrics_interval=5))
        assert [m.step for m in result.metrics_history] == [5, 10, 15, 20]

    def test_history_length_is_steps_over_interval(self) -> None:
        result = run_experiment(_config(steps=23, metrics_interval=4))
        assert len(result.metrics_history) == 23 // 4

    def test_zero_steps_gives_empty_history(self) -> None:
        result = run_experiment(_config(steps=0))
        assert result.metrics_history == ()
        assert result.outcome is Outcome.EXTINCT

    def test_final_population_matches_last_sample(self) -> None:
        result = run_experiment(_config(steps=40, metrics_interval=10))
        assert result.final_population == result.metrics_history[-1].population

    def test_final_population_is_final_grid_when_last_step_unsampled(self) -> None:
        sampled = run_experiment(_config(steps=7, metrics_interval=1))
        sparse = run_experiment(_config(steps=7, metrics_interval=3))
        assert sparse.final_population == sampled.metrics_history[-1].population


class TestRunExperimentDeterminism:
    def test_same_config_same_history(self) -> None:
        config = _config(dimensions=(8, 8, 8), seed=99, steps=15)
        a = run_experiment(config)
        b = run_experiment(config)
        assert a.metrics_history == b.metrics_history
        assert a.outcome is b.outcome

    def test_unset_seed_defaults_to_42(self) -> None:
        assert run_experiment(_config()).metrics_history == run_experiment(
            _config(seed=42)
        ).metrics_history

    def test_different_seeds_differ(self) -> None:
        a = run_experiment(_config(seed=1, steps=5))
        b = run_experiment(_config(seed=2, steps=5))
        assert a.metrics_history != b.metrics_history

    def test_first_step_starts_from_seeded_grid(self) -> None:
        grid = Grid((10, 10))
        initialize_random(grid, 0.3, create_random(42))
        result = run_experiment(_config(steps=1))
        first = result.metrics_history[0]
        assert first.population - grid.count_population() == first.delta


class TestRunExperimentContract:
    def test_config_returned_unchanged(self) -> None:
        config = _config()
        result = run_experiment(config)
        assert result.config is config
        assert result.config.seed is None
        assert result.config.metrics_interval is None
        assert result.config.neighborhood.radius is None

    def test_delta_is_births_minus_deaths(self) -> None:
        result = run_experiment(_config(steps=25))
        history = result.metrics_history
        for metrics in history:
            assert metrics.delta == metrics.births - metrics.deaths
            assert 0.0 <= metrics.density <= 1.0
        for prev, curr in zip(history, history[1:]):
            assert curr.population - prev.population == curr.delta

    def test_enhanced_metrics_collected_on_request(self) -> None:
        result = run_experiment(_config(steps=5), enhanced_metrics=True)
        assert all(isinstance(m, EnhancedMetrics) for m in result.metrics_history)

    def test_plain_metrics_by_default(self) -> None:
        result = run_experiment(_config(steps=5))
        assert not any(isinstance(m, EnhancedMetrics) for m in result.metrics_history)

    def test_custom_classifier_receives_full_history(self) -> None:
        seen: list[int] = []

        def classifier(history: Sequence[Metrics]) -> Outcome:
            seen.append(len(history))
            return Outcome.STABLE

        result = run_experiment(_config(steps=12, metrics_interval=3), classifier)
        assert seen == [4]
        assert result.outcome is Outcome.STABLE

    def test_multi_metric_classifier_pluggable(self) -> None:
        result = run_experiment(
            _config(initial_density=0.0, steps=10),
            simple_classifier(multi_metric_classifier),
            enhanced_metrics=True,
        )
        assert result.outcome is Outcome.EXTINCT

    def test_multi_metric_adapter_collects_enhanced_metrics_itself(self) -> None:
        result = run_experiment(_config(steps=10), simple_classifier(multi_metric_classifier))
        assert len(result.metrics_history) == 10
        assert all(isinstance(m, EnhancedMetrics) for m in result.metrics_history)
        assert result.outcome in set(Outcome)

    def test_sparse_enhanced_samples_match_stepwise_evolution(self) -> None:
        result = run_experiment(_config(steps=12, metrics_interval=4), enhanced_metrics=True)
        grid = Grid((10, 10))
        initialize_random(grid, 0.3, create_random(42))
        offsets = generate_neighborhood((10, 10), NeighborhoodSpec())
        rule = create_rule(birth=[3], survival=[2, 3], max_neighbors=8)
        expected: list[EnhancedMetrics] = []
        for step in range(1, 13):
            grid, metrics = evolve_enhanced(grid, rule, offsets, step)
            if step % 4 == 0:
                expected.append(metrics)
        assert list(result.metrics_history) == expected

    def test_three_dimensional_relative_rule(self) -> None:
        config = _config(
            dimensions=(6, 6, 6),
            neighborhood=NeighborhoodSpec(NeighborhoodType.VON_NEUMANN),
            rule=RuleSpec(birth=(RelativeThreshold(0.5),), survival=(2, RelativeThreshold(0.5))),
            steps=10,
        )
        result = run_experiment(config)
        assert len(result.metrics_history) == 10
        assert result.outcome in set(Outcome)

    def test_to_dict_is_json_shaped(self) -> None:
        payload = run_experiment(_config(steps=3)).to_dict()
        assert set(payload) == {"outcome", "final_population", "metrics_history", "config"}
        assert len(payload["metrics_history"]) == 3

    def test_invalid_relative_threshold_raises(self) -> None:
        config = _config(rule=RuleSpec(birth=(RelativeThreshold(1.5),)))
        with pytest.raises(ValueError, match="relative threshold"):
            run_experiment(config)
