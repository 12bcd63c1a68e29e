"""Configuration layer: constants and typed config dataclasses."""

from nd_automata.config.constants import (
    DEFAULT_METRICS_INTERVAL,
    DEFAULT_NEIGHBORHOOD_RADIUS,
    DEFAULT_SEED,
    MAX_EXPERIMENT_WORK_UNITS,
)
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
    Threshold,
    normalize_dimensions,
)

__all__ = [
    "DEFAULT_METRICS_INTERVAL",
    "DEFAULT_NEIGHBORHOOD_RADIUS",
    "DEFAULT_SEED",
    "EnhancedMetrics",
    "ExperimentConfig",
    "ExperimentResult",
    "MAX_EXPERIMENT_WORK_UNITS",
    "Metrics",
    "NeighborhoodSpec",
    "NeighborhoodType",
    "Outcome",
    "RelativeThreshold",
    "RuleSpec",
    "SeedSweepConfig",
    "Threshold",
    "normalize_dimensions",
]
