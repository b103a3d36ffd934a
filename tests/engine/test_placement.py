"""Tests for all-or-nothing ship placement."""

import pytest
from navalgrid.engine.geometry import AbilityKind, Coordinate, Orientation
from navalgrid.engine.grid import CellState, Grid
from navalgrid.engine.placement import RejectionReason, try_place
from navalgrid.engine.ship import Ability, Ship
from navalgrid.engine.stencil import apply_ability


def _occupied(grid: Grid) -> set[Coordinate]:
    return {
        Coordinate(row, col)
        for row, cells in enumerate(grid.snapshot())
        for col, cell in enumerate(cells)
        if cell is CellState.OCCUPIED
    }


@pytest.mark.parametrize(
    ("ship", "expected"),
    [
        (Ship(Coordinate(1, 2), Orientation.HORIZONTAL), [(1, 2), (1, 3), (1, 4)]),
        (Ship(Coordinate(4, 8), Orientation.VERTICAL), [(4, 8), (5, 8), (6, 8)]),
        (Ship(Coordinate(6, 1), Orientation.DIAGONAL_DOWN), [(6, 1), (7, 2), (8, 3)]),
        (Ship(Coordinate(2, 7), Orientation.DIAGONAL_UP), [(2, 7), (3, 6), (4, 5)]),
    ],
)
def test_placement_occupies_exactly_the_ship_cells(ship: Ship, expected: list) -> None:
    grid = Grid.create(10)
    result = try_place(grid, ship)
    assert result.committed
    assert result.rejection is None
    assert result.cells == ship.resolved_cells()
    assert _occupied(grid) == {Coordinate(row, col) for row, col in expected}
    assert grid.count(CellState.EMPTY) == 97


@pytest.mark.parametrize(
    "ship",
    [
        Ship(Coordinate(9, 9), Orientation.HORIZONTAL),
        Ship(Coordinate(8, 0), Orientation.VERTICAL),
        Ship(Coordinate(0, 1), Orientation.DIAGONAL_UP),
        Ship(Coordinate(8, 8), Orientation.DIAGONAL_DOWN),
        Ship(Coordinate(-1, 3), Orientation.HORIZONTAL),
        Ship(Coordinate(3, 10), Orientation.VERTICAL),
    ],
)
def test_out_of_bounds_ship_is_rejected_without_mutation(ship: Ship) -> None:
    grid = Grid.create(10)
    before = grid.snapshot()
    result = try_place(grid, ship)
    assert not result.committed
    assert result.rejection is RejectionReason.INVALID_BOUNDS
    assert result.cells == ()
    assert grid.snapshot() == before


def test_overlapping_ship_is_rejected_and_grid_matches_first_placement() -> None:
    first = Ship(Coordinate(3, 3), Orientation.HORIZONTAL)
    crossing = Ship(Coordinate(2, 4), Orientation.VERTICAL)

    reference = Grid.create(10)
    try_place(reference, first)

    grid = Grid.create(10)
    try_place(grid, first)
    result = try_place(grid, crossing)

    assert result.rejection is RejectionReason.OVERLAP
    assert grid.snapshot() == reference.snapshot()


def test_partial_overlap_commits_no_cells() -> None:
    grid = Grid.create(10)
    try_place(grid, Ship(Coordinate(0, 2), Orientation.VERTICAL))
    # Only the last cell of this ship collides.
    result = try_place(grid, Ship(Coordinate(2, 0), Orientation.HORIZONTAL))
    assert result.rejection is RejectionReason.OVERLAP
    assert grid.cell_at(Coordinate(2, 0)) is CellState.EMPTY
    assert grid.cell_at(Coordinate(2, 1)) is CellState.EMPTY
    assert grid.count(CellState.OCCUPIED) == 3


def test_affected_cells_block_ship_placement() -> None:
    grid = Grid.create(10)
    apply_ability(grid, Ability(AbilityKind.CROSS, Coordinate(5, 5)))
    result = try_place(grid, Ship(Coordinate(5, 0), Orientation.HORIZONTAL))
    assert result.committed
    result = try_place(grid, Ship(Coordinate(4, 2), Orientation.DIAGONAL_DOWN))
    assert result.rejection is RejectionReason.OVERLAP


def test_rejection_is_deterministic() -> None:
    grid = Grid.create(10)
    ship = Ship(Coordinate(9, 9), Orientation.VERTICAL)
    assert try_place(grid, ship) == try_place(grid, ship)
