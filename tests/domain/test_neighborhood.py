"""Tests for nd_automata.domain.neighborhood module."""

from __future__ import annotations

import pytest

from nd_automata.config.types import NeighborhoodSpec, NeighborhoodType
from nd_automata.domain.neighborhood import generate_neighborhood, get_max_neighbors

MOORE = NeighborhoodType.MOORE
VON_NEUMANN = NeighborhoodType.VON_NEUMANN


@pytest.mark.parametrize(
    ("dims", "kind", "radius", "expected"),
    [
        ((10, 10), MOORE, 1, 8),
        ((10, 10, 10), MOORE, 1, 26),
        ((5, 5, 5, 5), MOORE, 1, 80),
        ((10, 10), MOORE, 2, 24),
        ((10, 10), VON_NEUMANN, 1, 4),
        ((10, 10, 10), VON_NEUMANN, 1, 6),
        ((5, 5, 5, 5), VON_NEUMANN, 1, 8),
        ((10, 10), VON_NEUMANN, 2, 12),
        ((10, 10, 10), VON_NEUMANN, 2, 24),
    ],
)
def test_offset_count_matches_max_neighbors(
    dims: tuple[int, ...], kind: NeighborhoodType, radius: int, expected: int
) -> None:
    offsets = generate_neighborhood(dims, NeighborhoodSpec(type=kind, radius=radius))
    assert len(offsets) == expected
    assert get_max_neighbors(dims, kind, radius) == expected


def test_default_range_is_one() -> None:
    assert len(generate_neighborhood((6, 6), NeighborhoodSpec())) == 8
    assert get_max_neighbors((6, 6), MOORE) == 8


def test_zero_vector_excluded_and_offsets_unique() -> None:
    offsets = generate_neighborhood((4, 4, 4), NeighborhoodSpec(MOORE, 2))
    assert (0, 0, 0) not in offsets
    assert len(set(offsets)) == len(offsets)
    assert all(len(offset) == 3 for offset in offsets)


def test_lexicographic_order_first_axis_slowest() -> None:
    offsets = generate_neighborhood((5, 5), NeighborhoodSpec())
    assert offsets[0] == (-1, -1)
    assert offsets[1] == (-1, 0)
    assert offsets[-1] == (1, 1)
    assert list(offsets) == sorted(offsets)


def test_von_neumann_uses_manhattan_distance() -> None:
    offsets = generate_neighborhood((9, 9), NeighborhoodSpec(VON_NEUMANN, 2))
    assert (2, 0) in offsets
    assert (1, 1) in offsets
    assert (2, 1) not in offsets
    assert all(sum(abs(c) for c in offset) <= 2 for offset in offsets)


def test_generation_is_pure() -> None:
    spec = NeighborhoodSpec(VON_NEUMANN, 3)
    assert generate_neighborhood((7, 7, 7), spec) == generate_neighborhood((7, 7, 7), spec)


def test_string_type_accepted_by_max_neighbors() -> None:
    assert get_max_neighbors((3, 3, 3), "von-neumann") == 6


def test_zero_range_rejected() -> None:
    with pytest.raises(ValueError, match="range must be >= 1"):
        get_max_neighbors((5, 5), MOORE, 0)
