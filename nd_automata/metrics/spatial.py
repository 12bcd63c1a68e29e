"""Spatial metrics over one grid: binary entropy, state hash, Hamming distance."""

from __future__ import annotations

import math

import numpy as np

from nd_automata.domain.grid import Grid

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
_MASK_32 = 0xFFFFFFFF


def binary_entropy(p: float) -> float:
    """Shannon entropy in bits of a Bernoulli(p) variable; 0 at p in {0, 1}."""
    if p <= 0.0 or p >= 1.0:
        return 0.0
    return -p * math.log2(p) - (1.0 - p) * math.log2(1.0 - p)


def spatial_entropy(grid: Grid) -> float:
    """Binary entropy of the live-cell density, in [0, 1]."""
    if grid.size == 0:
        return 0.0
    return binary_entropy(grid.count_population() / grid.size)


def state_hash(grid: Grid) -> int:
    """32-bit FNV-1a hash of the cell buffer in index order.

    Equal grids always hash equal; distinct grids may collide. Not suitable
    for anything security related.
    """
    h = FNV_OFFSET_BASIS
    for byte in grid.cells.tobytes():
        h ^= byte
        h = (h * FNV_PRIME) & _MASK_32
    return h


def hamming_distance(a: Grid, b: Grid) -> int:
    """Number of cells whose states differ between two same-shaped grids."""
    if a.dimensions != b.dimensions:
        raise ValueError(
            f"grid dimensions differ: {a.dimensions} vs {b.dimensions}"
        )
    return int(np.count_nonzero(a.cells != b.cells))
