"""Neighbor offset generation for Moore and von Neumann neighborhoods.

Offsets are enumerated over the hypercube ``[-r, r]^ndim`` with an odometer
(first axis slowest, last axis fastest), so deep dimensionalities never
recurse. The zero vector is always excluded.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from nd_automata.config.constants import DEFAULT_NEIGHBORHOOD_RADIUS
from nd_automata.config.types import NeighborhoodSpec, NeighborhoodType, normalize_dimensions

Offset = tuple[int, ...]


def _check_radius(radius: int) -> int:
    if isinstance(radius, bool) or not isinstance(radius, int):
        raise ValueError(f"neighborhood range must be an integer value, got {radius!r}")
    if radius < 1:
        raise ValueError("neighborhood range must be >= 1")
    return radius


def _iter_hypercube(ndim: int, radius: int) -> Iterator[Offset]:
    """Yield every vector in ``[-radius, radius]^ndim`` in lexicographic order."""
    digits = [-radius] * ndim
    while True:
        yield tuple(digits)
        axis = ndim - 1
        while axis >= 0:
            if digits[axis] < radius:
                digits[axis] += 1
                break
            digits[axis] = -radius
            axis -= 1
        if axis < 0:
            return


def _within(offset: Offset, neighborhood_type: NeighborhoodType, radius: int) -> bool:
    if not any(offset):
        return False
    if neighborhood_type is NeighborhoodType.MOORE:
        return max(abs(c) for c in offset) <= radius
    return sum(abs(c) for c in offset) <= radius


def generate_neighborhood(dimensions: Sequence[int], spec: NeighborhoodSpec) -> tuple[Offset, ...]:
    """Return the neighbor offsets for ``spec`` on a grid of ``dimensions``.

    The result length always equals :func:`get_max_neighbors` for the same
    arguments.
    """
    ndim = len(normalize_dimensions(dimensions))
    radius = _check_radius(
        spec.radius if spec.radius is not None else DEFAULT_NEIGHBORHOOD_RADIUS
    )
    return tuple(
        offset for offset in _iter_hypercube(ndim, radius) if _within(offset, spec.type, radius)
    )


def get_max_neighbors(
    dimensions: Sequence[int],
    neighborhood_type: NeighborhoodType | str,
    radius: int = DEFAULT_NEIGHBORHOOD_RADIUS,
) -> int:
    """Count of neighbor offsets for the topology, dimensionality and range."""
    ndim = len(normalize_dimensions(dimensions))
    neighborhood_type = NeighborhoodType(neighborhood_type)
    radius = _check_radius(radius)
    if neighborhood_type is NeighborhoodType.MOORE:
        return (2 * radius + 1) ** ndim - 1
    if radius == 1:
        return 2 * ndim
    return sum(
        1 for offset in _iter_hypercube(ndim, radius) if _within(offset, neighborhood_type, radius)
    )
