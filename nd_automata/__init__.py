"""Deterministic n-dimensional cellular automata with outcome classification."""

from nd_automata.config.types import (
    EnhancedMetrics,
    ExperimentConfig,
    ExperimentResult,
    Metrics,
    NeighborhoodSpec,
    NeighborhoodType,
    Outcome,
    RelativeThreshold,
    RuleSpec,
    SeedSweepConfig,
)
from nd_automata.domain.classifier import (
    ClassificationResult,
    OutcomeClassifier,
    WolframClass,
    hash_based_classifier,
    multi_metric_classifier,
    simple_classifier,
)
from nd_automata.domain.grid import Grid, initialize_random
from nd_automata.domain.neighborhood import generate_neighborhood, get_max_neighbors
from nd_automata.domain.rng import SeededRandom, create_random
from nd_automata.domain.rules import Rule, create_rule, normalize_rule, should_be_alive
from nd_automata.experiments.experiment import run_experiment
from nd_automata.experiments.sweep import run_seed_sweep
from nd_automata.metrics.spatial import hamming_distance, spatial_entropy, state_hash
from nd_automata.simulation.step import evolve, evolve_enhanced, evolve_with_metrics

__all__ = [
    "ClassificationResult",
    "EnhancedMetrics",
    "ExperimentConfig",
    "ExperimentResult",
    "Grid",
    "Metrics",
    "NeighborhoodSpec",
    "NeighborhoodType",
    "Outcome",
    "OutcomeClassifier",
    "RelativeThreshold",
    "Rule",
    "RuleSpec",
    "SeedSweepConfig",
    "SeededRandom",
    "WolframClass",
    "create_random",
    "create_rule",
    "evolve",
    "evolve_enhanced",
    "evolve_with_metrics",
    "generate_neighborhood",
    "get_max_neighbors",
    "hamming_distance",
    "hash_based_classifier",
    "initialize_random",
    "multi_metric_classifier",
    "normalize_rule",
    "run_experiment",
    "run_seed_sweep",
    "should_be_alive",
    "simple_classifier",
    "spatial_entropy",
    "state_hash",
]
