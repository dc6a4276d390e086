"""
Geometry/indexing tests:
- Closed-form counts
- Cardinal <-> axial round trip
- Hexagonal footprint predicate
- Radius validation
"""

import pytest

from hexloop.core.geometry import (
    BoardDimensions, axial_to_cardinal, cardinal_to_axial, cell_count,
    is_on_board, line_count, nearest_axial, to_nominal, vert_count, from_nominal
)


@pytest.mark.parametrize("R, cells, lines, verts", [
    (0, 1, 6, 6),
    (1, 7, 30, 24),
    (2, 19, 72, 54),
    (3, 37, 132, 96),
])
def test_closed_form_counts(R, cells, lines, verts):
    assert cell_count(R) == cells
    assert line_count(R) == lines
    assert vert_count(R) == verts


def test_counts_are_distinct_per_radius():
    seen = set()
    for R in range(30):
        key = (cell_count(R), line_count(R), vert_count(R))
        assert key not in seen
        seen.add(key)


def test_dimensions():
    dims = BoardDimensions.for_radius(3)
    assert dims.S == 7
    assert dims.W == 9
    assert dims.H == 7
    assert dims.G == 63
    assert (dims.C, dims.L, dims.V) == (37, 132, 96)


@pytest.mark.parametrize("R", range(6))
def test_cardinal_axial_round_trip(R):
    dims = BoardDimensions.for_radius(R)
    for index in range(dims.G):
        col, row = cardinal_to_axial(R, index)
        assert 0 <= col < dims.W and 0 <= row < dims.H
        assert axial_to_cardinal(R, col, row) == index


@pytest.mark.parametrize("R", range(6))
def test_footprint_holds_exactly_cell_count_positions(R):
    dims = BoardDimensions.for_radius(R)
    on_board = [i for i in range(dims.G) if is_on_board(R, i)]
    assert len(on_board) == cell_count(R)

    # index and coordinate forms agree
    for index in range(dims.G):
        col, row = cardinal_to_axial(R, index)
        assert is_on_board(R, index) == is_on_board(R, col, row)


def test_padding_columns_are_off_board():
    R = 2
    dims = BoardDimensions.for_radius(R)
    for row in range(dims.H):
        assert not is_on_board(R, 0, row)
        assert not is_on_board(R, dims.W - 1, row)


def test_out_of_grid_positions_are_off_board():
    assert not is_on_board(1, -1)
    assert not is_on_board(1, 10_000)
    assert not is_on_board(1, 2, -1)
    assert not is_on_board(1, 2, 3)


def test_radius_zero_single_cell():
    dims = BoardDimensions.for_radius(0)
    assert (dims.W, dims.H) == (3, 1)
    assert [i for i in range(dims.G) if is_on_board(0, i)] == [1]


@pytest.mark.parametrize("bad", [-1, -5, 1.5, "2", True])
def test_invalid_radius_rejected(bad):
    with pytest.raises(ValueError):
        cell_count(bad)
    with pytest.raises(ValueError):
        BoardDimensions.for_radius(bad)


def test_out_of_range_indices_rejected():
    with pytest.raises(ValueError):
        cardinal_to_axial(1, 15)
    with pytest.raises(ValueError):
        axial_to_cardinal(1, 5, 0)


def test_nominal_round_trip_and_centre():
    R = 3
    assert to_nominal(R, R + 1, R) == pytest.approx((0.0, 0.0))
    for col, row in [(1, 3), (4, 0), (7, 6), (2, 5)]:
        u, v = to_nominal(R, col, row)
        assert from_nominal(R, u, v) == pytest.approx((col, row))
        assert nearest_axial(R, u, v) == (col, row)


def test_nearest_axial_snaps_points_inside_hexagon():
    R = 2
    u, v = to_nominal(R, 3, 2)
    for du, dv in [(0.3, 0.1), (-0.2, 0.3), (0.0, -0.4), (-0.4, -0.1)]:
        assert nearest_axial(R, u + du, v + dv) == (3, 2)
