"""Simulation engine: synchronous generation stepping and per-step metrics."""

from nd_automata.simulation.step import (
    compute_step_metrics,
    count_live_neighbors,
    enhance_metrics,
    evolve,
    evolve_enhanced,
    evolve_with_metrics,
)

__all__ = [
    "compute_step_metrics",
    "count_live_neighbors",
    "enhance_metrics",
    "evolve",
    "evolve_enhanced",
    "evolve_with_metrics",
]
