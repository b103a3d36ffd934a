"""Compositing ability stencils onto the grid."""

from __future__ import annotations

import numpy as np

from .geometry import Coordinate
from .grid import CellState, Grid
from .ship import Ability


def apply_ability(grid: Grid, ability: Ability) -> int:
    """Mark the cells under ``ability``'s stencil as affected.

    The stencil centre lands on the ability origin. Cells that fall off the
    grid or hold a ship are skipped. Returns the number of cells marked.
    """
    mask = ability.stencil()
    half = mask.shape[0] // 2
    top, left = ability.origin.row - half, ability.origin.col - half

    applied = 0
    for i, j in np.argwhere(mask):
        target = Coordinate(top + int(i), left + int(j))
        if not grid.in_bounds(target):
            continue
        if grid.cell_at(target) is CellState.OCCUPIED:
            continue
        grid._set_cell(target, CellState.AFFECTED)
        applied += 1
    return applied
