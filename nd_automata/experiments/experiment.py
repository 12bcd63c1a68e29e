"""Single-run orchestration: seed a grid, evolve it, sample metrics, classify."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from nd_automata.config.constants import (
    DEFAULT_METRICS_INTERVAL,
    DEFAULT_NEIGHBORHOOD_RADIUS,
    DEFAULT_SEED,
)
from nd_automata.config.types import ExperimentConfig, ExperimentResult, Metrics, Outcome
from nd_automata.domain.classifier import OutcomeClassifier, hash_based_classifier
from nd_automata.domain.grid import Grid, initialize_random
from nd_automata.domain.neighborhood import generate_neighborhood, get_max_neighbors
from nd_automata.domain.rng import create_random
from nd_automata.domain.rules import normalize_rule
from nd_automata.simulation.step import compute_step_metrics, enhance_metrics, evolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _EffectiveSettings:
    """Defaults resolved for one run; the caller's config is never rewritten."""

    seed: int
    metrics_interval: int
    radius: int

    @classmethod
    def resolve(cls, config: ExperimentConfig) -> _EffectiveSettings:
        return cls(
            seed=config.seed if config.seed is not None else DEFAULT_SEED,
            metrics_interval=(
                config.metrics_interval
                if config.metrics_interval is not None
                else DEFAULT_METRICS_INTERVAL
            ),
            radius=(
                config.neighborhood.radius
                if config.neighborhood.radius is not None
                else DEFAULT_NEIGHBORHOOD_RADIUS
            ),
        )


def run_experiment(
    config: ExperimentConfig,
    classifier: OutcomeClassifier | Callable[[Sequence[Metrics]], Outcome] = hash_based_classifier,
    *,
    enhanced_metrics: bool = False,
) -> ExperimentResult:
    """Run one experiment end to end and classify its sampled history.

    Metrics are sampled after step ``s`` (1-based) whenever
    ``s % metrics_interval == 0``, so ``len(metrics_history) == steps //
    metrics_interval``. With ``enhanced_metrics=True`` every sample also
    carries entropy and a state hash, which the multi-metric classifier needs.
    Identical configs always yield identical results. Metrics, including the
    entropy and hash, are only computed on sampled steps.

    Classifiers that carry a truthy ``requires_enhanced_metrics`` attribute,
    such as the :func:`~nd_automata.domain.classifier.simple_classifier`
    adapter, get enhanced samples without the flag being passed.
    """
    settings = _EffectiveSettings.resolve(config)
    logger.debug(
        "run start dimensions=%s steps=%d seed=%d interval=%d",
        config.dimensions,
        config.steps,
        settings.seed,
        settings.metrics_interval,
    )

    grid = Grid(config.dimensions)
    initialize_random(grid, config.initial_density, create_random(settings.seed))

    offsets = generate_neighborhood(config.dimensions, config.neighborhood)
    max_neighbors = get_max_neighbors(
        config.dimensions, config.neighborhood.type, settings.radius
    )
    rule = normalize_rule(config.rule, max_neighbors)
    collect_enhanced = enhanced_metrics or bool(
        getattr(classifier, "requires_enhanced_metrics", False)
    )

    history: list[Metrics] = []
    for step in range(1, config.steps + 1):
        previous = grid
        grid = evolve(grid, rule, offsets)
        if step % settings.metrics_interval != 0:
            continue
        metrics = compute_step_metrics(previous, grid, step)
        if collect_enhanced:
            metrics = enhance_metrics(metrics, grid)
        history.append(metrics)

    outcome = classifier(history)
    final_population = grid.count_population()
    logger.debug(
        "run finish outcome=%s final_population=%d samples=%d",
        outcome.value,
        final_population,
        len(history),
    )
    return ExperimentResult(
        outcome=outcome,
        final_population=final_population,
        metrics_history=tuple(history),
        config=config,
    )
