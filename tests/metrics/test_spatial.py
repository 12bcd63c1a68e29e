"""Tests for nd_automata.metrics.spatial module."""

from __future__ import annotations

import pytest

from nd_automata.domain.grid import Grid
from nd_automata.metrics.spatial import (
    binary_entropy,
    hamming_distance,
    spatial_entropy,
    state_hash,
)


def test_binary_entropy_endpoints_and_peak() -> None:
    assert binary_entropy(0.0) == 0.0
    assert binary_entropy(1.0) == 0.0
    assert binary_entropy(0.5) == pytest.approx(1.0)
    assert binary_entropy(0.25) == pytest.approx(0.8112781244591328)


def test_spatial_entropy_of_grids() -> None:
    empty = Grid((4, 4))
    assert spatial_entropy(empty) == 0.0
    full = Grid.from_cells((2, 2), [1, 1, 1, 1])
    assert spatial_entropy(full) == 0.0
    half = Grid.from_cells((2, 2), [1, 0, 1, 0])
    assert spatial_entropy(half) == pytest.approx(1.0)


class TestStateHash:
    def test_fnv1a_of_single_zero_byte(self) -> None:
        assert state_hash(Grid((1,))) == 0x050C5D1F

    def test_equal_grids_hash_equal(self) -> None:
        a = Grid.from_cells((3, 3), [0, 1, 0, 1, 1, 0, 0, 0, 1])
        assert state_hash(a) == state_hash(a.clone())

    def test_single_cell_change_alters_hash(self) -> None:
        grid = Grid((5, 5, 5))
        before = state_hash(grid)
        grid.set((2, 3, 4), 1)
        assert state_hash(grid) != before

    def test_fits_in_32_bits(self) -> None:
        grid = Grid.from_cells((4, 4), [1, 0] * 8)
        assert 0 <= state_hash(grid) < 2**32


class TestHammingDistance:
    def test_identical_grids(self) -> None:
        grid = Grid.from_cells((2, 3), [1, 0, 1, 0, 1, 0])
        assert hamming_distance(grid, grid.clone()) == 0

    def test_counts_differing_cells(self) -> None:
        a = Grid.from_cells((2, 3), [1, 0, 1, 0, 1, 0])
        b = Grid.from_cells((2, 3), [0, 0, 1, 1, 1, 1])
        assert hamming_distance(a, b) == 3

    def test_shape_mismatch_rejected(self) -> None:
        with pytest.raises(ValueError, match="dimensions differ"):
            hamming_distance(Grid((2, 3)), Grid((3, 2)))
