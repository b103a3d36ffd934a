"""Tests for ship footprints and ability stencils."""

import numpy as np
import pytest
from navalgrid.engine.geometry import (
    AbilityKind,
    Coordinate,
    InvalidOrientation,
    Orientation,
    bounds_ok,
    generate_stencil,
    ship_cells,
)
from navalgrid.engine.ship import Ship


@pytest.mark.parametrize(
    ("orientation", "expected"),
    [
        (Orientation.HORIZONTAL, [(4, 4), (4, 5), (4, 6)]),
        (Orientation.VERTICAL, [(4, 4), (5, 4), (6, 4)]),
        (Orientation.DIAGONAL_DOWN, [(4, 4), (5, 5), (6, 6)]),
        (Orientation.DIAGONAL_UP, [(4, 4), (5, 3), (6, 2)]),
    ],
)
def test_ship_cells_follow_orientation(orientation: Orientation, expected: list) -> None:
    ship = Ship(Coordinate(4, 4), orientation)
    assert ship_cells(ship) == tuple(Coordinate(row, col) for row, col in expected)


def test_orientation_from_code() -> None:
    assert Orientation.from_code("h") is Orientation.HORIZONTAL
    assert Orientation.from_code("V") is Orientation.VERTICAL
    assert Orientation.from_code("D") is Orientation.DIAGONAL_DOWN
    assert Orientation.from_code(" a ") is Orientation.DIAGONAL_UP


def test_orientation_from_unknown_code_raises() -> None:
    with pytest.raises(InvalidOrientation):
        Orientation.from_code("X")
    with pytest.raises(ValueError):
        Orientation.from_code("")


def test_bounds_ok_checks_origin_and_last_cell() -> None:
    assert bounds_ok(Ship(Coordinate(0, 7), Orientation.HORIZONTAL), 10)
    assert not bounds_ok(Ship(Coordinate(0, 8), Orientation.HORIZONTAL), 10)
    assert not bounds_ok(Ship(Coordinate(8, 0), Orientation.VERTICAL), 10)
    assert not bounds_ok(Ship(Coordinate(-1, 0), Orientation.VERTICAL), 10)
    assert not bounds_ok(Ship(Coordinate(0, 10), Orientation.DIAGONAL_UP), 10)
    assert not bounds_ok(Ship(Coordinate(7, 8), Orientation.DIAGONAL_DOWN), 10)


def test_bounds_ok_diagonal_up_needs_room_on_the_left() -> None:
    assert bounds_ok(Ship(Coordinate(0, 2), Orientation.DIAGONAL_UP), 10)
    assert not bounds_ok(Ship(Coordinate(0, 1), Orientation.DIAGONAL_UP), 10)


def test_cross_stencil_is_center_row_and_column() -> None:
    mask = generate_stencil(AbilityKind.CROSS, 5)
    assert int(mask.sum()) == 9
    expected = {(2, j) for j in range(5)} | {(i, 2) for i in range(5)}
    assert {(int(i), int(j)) for i, j in np.argwhere(mask)} == expected


def test_diamond_stencil_is_manhattan_ball() -> None:
    mask = generate_stencil(AbilityKind.DIAMOND, 5)
    assert int(mask.sum()) == 13
    for i in range(5):
        for j in range(5):
            assert mask[i, j] == (abs(i - 2) + abs(j - 2) <= 2)


def test_cone_stencil_widens_then_stops_at_half_width() -> None:
    mask = generate_stencil(AbilityKind.CONE, 5)
    assert mask.astype(int).tolist() == [
        [0, 0, 1, 0, 0],
        [0, 1, 1, 1, 0],
        [1, 1, 1, 1, 1],
        [0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0],
    ]


def test_stencil_is_cached_and_read_only() -> None:
    first = generate_stencil(AbilityKind.DIAMOND, 5)
    assert first is generate_stencil(AbilityKind.DIAMOND, 5)
    with pytest.raises(ValueError):
        first[0, 0] = True


@pytest.mark.parametrize("size", [0, -3, 4])
def test_stencil_size_must_be_positive_odd(size: int) -> None:
    with pytest.raises(ValueError):
        generate_stencil(AbilityKind.CROSS, size)
