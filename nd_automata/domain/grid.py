"""N-dimensional toroidal grid with flat row-major storage.

Cells live in a contiguous ``numpy.uint8`` buffer (0 dead, 1 alive) whose
length is always the product of the dimensions. A coordinate maps to a flat
offset through the row-major strides; indexing never wraps, callers wrap
first with :meth:`Grid.wrap`.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from nd_automata.config.types import normalize_dimensions
from nd_automata.domain.rng import SeededRandom

Coordinate = Sequence[int]


def compute_strides(dimensions: Sequence[int]) -> tuple[int, ...]:
    """Row-major strides; the last axis has stride 1."""
    strides = [1] * len(dimensions)
    stride = 1
    for axis in range(len(dimensions) - 1, -1, -1):
        strides[axis] = stride
        stride *= dimensions[axis]
    return tuple(strides)


class Grid:
    """Binary cell states on a torus of arbitrary dimensionality."""

    __slots__ = ("dimensions", "strides", "size", "cells")

    def __init__(self, dimensions: Sequence[int]) -> None:
        self.dimensions: tuple[int, ...] = normalize_dimensions(dimensions)
        self.strides: tuple[int, ...] = compute_strides(self.dimensions)
        self.size: int = int(np.prod(self.dimensions, dtype=np.int64))
        self.cells: np.ndarray = np.zeros(self.size, dtype=np.uint8)

    @classmethod
    def from_cells(cls, dimensions: Sequence[int], cells: Sequence[int] | np.ndarray) -> Grid:
        """Build a grid from a flat buffer in :meth:`index` order.

        The buffer is copied. Raises :exc:`ValueError` if its length does not
        match the product of ``dimensions`` or it holds values other than 0/1.
        """
        grid = cls(dimensions)
        buffer = np.asarray(cells).reshape(-1)
        if buffer.shape[0] != grid.size:
            raise ValueError(
                f"cell buffer length {buffer.shape[0]} does not match grid size {grid.size}"
            )
        if buffer.size and not np.isin(buffer, (0, 1)).all():
            raise ValueError("cell values must be 0 or 1")
        grid.cells[:] = buffer
        return grid

    @property
    def ndim(self) -> int:
        return len(self.dimensions)

    def index(self, coord: Coordinate) -> int:
        """Flat offset of an in-bounds coordinate."""
        if len(coord) != len(self.dimensions):
            raise ValueError(
                f"coordinate has {len(coord)} components, grid has {len(self.dimensions)}"
            )
        offset = 0
        for value, size, stride in zip(coord, self.dimensions, self.strides):
            if not 0 <= value < size:
                raise IndexError(f"coordinate {tuple(coord)} out of range for {self.dimensions}")
            offset += value * stride
        return offset

    def wrap(self, coord: Coordinate) -> tuple[int, ...]:
        """Reduce a coordinate of any magnitude onto the torus."""
        if len(coord) != len(self.dimensions):
            raise ValueError(
                f"coordinate has {len(coord)} components, grid has {len(self.dimensions)}"
            )
        return tuple(((c % d) + d) % d for c, d in zip(coord, self.dimensions))

    def get(self, coord: Coordinate) -> int:
        return int(self.cells[self.index(coord)])

    def set(self, coord: Coordinate, value: int) -> None:
        if value not in (0, 1):
            raise ValueError(f"cell value must be 0 or 1, got {value!r}")
        self.cells[self.index(coord)] = value

    def clone(self) -> Grid:
        """Independent deep copy."""
        copy = Grid(self.dimensions)
        copy.cells[:] = self.cells
        return copy

    def count_population(self) -> int:
        return int(self.cells.sum(dtype=np.int64))

    def as_array(self) -> np.ndarray:
        """Read-only n-d view shaped like ``dimensions``."""
        view = self.cells.reshape(self.dimensions)
        view.flags.writeable = False
        return view

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.dimensions == other.dimensions and np.array_equal(self.cells, other.cells)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid(dimensions={self.dimensions}, population={self.count_population()})"


def create_grid(dimensions: Sequence[int]) -> Grid:
    """Create an all-dead grid."""
    return Grid(dimensions)


def initialize_random(grid: Grid, density: float, rng: SeededRandom) -> None:
    """Mark each cell alive with probability ``density``, in buffer order.

    Consumes exactly one draw per cell so the result depends only on the seed,
    the density and the grid size.
    """
    if not 0.0 <= density <= 1.0:
        raise ValueError("density must be in [0.0, 1.0]")
    cells = grid.cells
    for i in range(grid.size):
        cells[i] = 1 if rng.next() < density else 0
