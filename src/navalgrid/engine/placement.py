"""All-or-nothing ship placement."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .geometry import Coordinate, bounds_ok
from .grid import CellState, Grid
from .ship import Ship


class RejectionReason(Enum):
    """Why a ship could not be committed."""

    INVALID_BOUNDS = "invalid_bounds"
    OVERLAP = "overlap"


@dataclass(frozen=True)
class PlacementResult:
    """Outcome of a placement attempt."""

    ship: Ship
    cells: tuple[Coordinate, ...] = ()
    rejection: RejectionReason | None = None

    @property
    def committed(self) -> bool:
        return self.rejection is None


def try_place(grid: Grid, ship: Ship) -> PlacementResult:
    """Commit ``ship`` to ``grid`` if it fits and every target cell is empty.

    Any non-empty cell blocks the ship, including cells already marked by an
    ability. On rejection the grid is left untouched.
    """
    if not bounds_ok(ship, grid.size):
        return PlacementResult(ship, rejection=RejectionReason.INVALID_BOUNDS)

    cells = ship.resolved_cells()
    if any(grid.cell_at(cell) is not CellState.EMPTY for cell in cells):
        return PlacementResult(ship, rejection=RejectionReason.OVERLAP)

    for cell in cells:
        grid._set_cell(cell, CellState.OCCUPIED)
    return PlacementResult(ship, cells=cells)
