"""Domain layer: random stream, grid, neighborhoods, rules, and classifiers."""

from nd_automata.domain.classifier import (
    ClassificationDetails,
    ClassificationResult,
    OutcomeClassifier,
    WolframClass,
    hash_based_classifier,
    multi_metric_classifier,
    simple_classifier,
)
from nd_automata.domain.grid import Grid, compute_strides, create_grid, initialize_random
from nd_automata.domain.neighborhood import generate_neighborhood, get_max_neighbors
from nd_automata.domain.rng import SeededRandom, create_random
from nd_automata.domain.rules import (
    Rule,
    create_rule,
    next_states,
    normalize_rule,
    round_half_away_from_zero,
    should_be_alive,
)

__all__ = [
    "ClassificationDetails",
    "ClassificationResult",
    "Grid",
    "OutcomeClassifier",
    "Rule",
    "SeededRandom",
    "WolframClass",
    "compute_strides",
    "create_grid",
    "create_random",
    "create_rule",
    "generate_neighborhood",
    "get_max_neighbors",
    "hash_based_classifier",
    "initialize_random",
    "multi_metric_classifier",
    "next_states",
    "normalize_rule",
    "round_half_away_from_zero",
    "should_be_alive",
    "simple_classifier",
]
