"""Centralized constants for simulation runs and outcome classification.

Defaults and classifier thresholds that appear across multiple modules are
defined here. Consuming modules should import from this module rather than
defining their own inline literals.
"""

from __future__ import annotations

DEFAULT_SEED = 42
"""Seed used when an experiment config leaves ``seed`` unset."""

DEFAULT_METRICS_INTERVAL = 1
"""Sample metrics every N steps when ``metrics_interval`` is unset."""

DEFAULT_NEIGHBORHOOD_RADIUS = 1
"""Neighborhood range used when a neighborhood spec leaves it unset."""

TAIL_WINDOW_START_FRACTION = 0.7
"""The tail window starts at this fraction of the history (the final ~30%)."""

MIN_TAIL_LENGTH = 3
"""Shortest tail window on which period detection is attempted."""

EXPLOSIVE_MIN_SAMPLES = 10
"""Shortest history on which the sustained-growth test is attempted."""

EXPLOSIVE_EARLY_FRACTION = 0.5
"""Leading fraction of the history averaged as the growth baseline."""

EXPLOSIVE_LATE_FRACTION = 0.8
"""Samples from this fraction onwards are averaged as the late level."""

EXPLOSIVE_GROWTH_RATIO = 1.2
"""Late mean must exceed the early mean by this factor to count as growth."""

EXPLOSIVE_MIN_RISE_FRACTION = 0.6
"""Minimum share of rising steps among all non-flat steps."""

EXPLOSIVE_TAIL_MIN_RISE_FRACTION = 0.6
"""Minimum share of rising steps within the tail window; a levelled-off tail fails it."""

MULTI_METRIC_CYCLE_MIN_WINDOW = 10
"""Smallest state-hash window searched for cycles by the multi-metric classifier."""

MULTI_METRIC_GROWTH_RATIO = 1.5
"""Late/early population ratio the multi-metric classifier treats as explosive."""

MAX_EXPERIMENT_WORK_UNITS = 5_000_000_000
"""Safety cap on cells x neighbors x steps x seeds across one sweep."""
