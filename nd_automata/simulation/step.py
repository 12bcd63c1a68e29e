"""One synchronous generation plus the metrics sampled from it.

Neighbor counts come from shifting the whole n-d array once per offset with
:func:`numpy.roll`, which wraps every axis toroidally. Each step writes into a
fresh :class:`~nd_automata.domain.grid.Grid`; the input is only read.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from nd_automata.config.types import EnhancedMetrics, Metrics
from nd_automata.domain.grid import Grid
from nd_automata.domain.rules import Rule, next_states
from nd_automata.metrics.spatial import spatial_entropy, state_hash

Offset = Sequence[int]


def count_live_neighbors(grid: Grid, offsets: Sequence[Offset]) -> np.ndarray:
    """Live-neighbor count for every cell, shaped like ``grid.dimensions``."""
    cells = grid.cells.reshape(grid.dimensions)
    counts = np.zeros(grid.dimensions, dtype=np.int32)
    axes = tuple(range(grid.ndim))
    for offset in offsets:
        # result[x] = cells[x + offset]
        counts += np.roll(cells, shift=tuple(-c for c in offset), axis=axes)
    return counts


def evolve(grid: Grid, rule: Rule, offsets: Sequence[Offset]) -> Grid:
    """Return the next generation; ``grid`` is left untouched."""
    counts = count_live_neighbors(grid, offsets)
    nxt = Grid(grid.dimensions)
    nxt.cells[:] = next_states(grid.cells, counts.reshape(-1), rule)
    return nxt


def compute_step_metrics(previous: Grid, current: Grid, step: int) -> Metrics:
    """Population statistics for the transition ``previous -> current``."""
    if previous.dimensions != current.dimensions:
        raise ValueError("previous and current grids must share dimensions")
    prev = previous.cells.astype(bool)
    curr = current.cells.astype(bool)
    births = int(np.count_nonzero(curr & ~prev))
    deaths = int(np.count_nonzero(prev & ~curr))
    population = int(np.count_nonzero(curr))
    return Metrics(
        population=population,
        density=population / current.size,
        births=births,
        deaths=deaths,
        delta=births - deaths,
        step=step,
    )


def evolve_with_metrics(
    grid: Grid, rule: Rule, offsets: Sequence[Offset], step: int
) -> tuple[Grid, Metrics]:
    nxt = evolve(grid, rule, offsets)
    return nxt, compute_step_metrics(grid, nxt, step)


def enhance_metrics(base: Metrics, grid: Grid) -> EnhancedMetrics:
    """Extend ``base`` with the spatial entropy and state hash of ``grid``."""
    return EnhancedMetrics(
        population=base.population,
        density=base.density,
        births=base.births,
        deaths=base.deaths,
        delta=base.delta,
        step=base.step,
        entropy=spatial_entropy(grid),
        state_hash=state_hash(grid),
    )


def evolve_enhanced(
    grid: Grid, rule: Rule, offsets: Sequence[Offset], step: int
) -> tuple[Grid, EnhancedMetrics]:
    """As :func:`evolve_with_metrics`, adding spatial entropy and the state hash."""
    nxt, base = evolve_with_metrics(grid, rule, offsets, step)
    return nxt, enhance_metrics(base, nxt)
