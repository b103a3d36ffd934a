"""Fixed-size grid of cell states."""

from __future__ import annotations

from enum import Enum
from typing import TypeAlias

import numpy as np
import numpy.typing as npt

from .geometry import Coordinate

GRID_SIZE = 10

CellArray: TypeAlias = npt.NDArray[np.int8]


class OutOfRangeCoordinate(ValueError):
    """Raised when a coordinate lies outside the grid."""


class CellState(Enum):
    """Contents of a grid cell, valued by its display code."""

    EMPTY = 0
    OCCUPIED = 3
    AFFECTED = 5


class Grid:
    """Square grid of ``CellState`` backed by a numpy array of display codes."""

    def __init__(self, size: int = GRID_SIZE) -> None:
        if size <= 0:
            raise ValueError("Grid size must be positive.")
        self._size = size
        self._cells: CellArray = np.full((size, size), CellState.EMPTY.value, dtype=np.int8)

    @classmethod
    def create(cls, size: int = GRID_SIZE) -> Grid:
        """Return an all-empty grid."""
        return cls(size)

    @property
    def size(self) -> int:
        return self._size

    def dimensions(self) -> tuple[int, int]:
        return self._size, self._size

    def in_bounds(self, coord: Coordinate) -> bool:
        return 0 <= coord.row < self._size and 0 <= coord.col < self._size

    def cell_at(self, coord: Coordinate) -> CellState:
        if not self.in_bounds(coord):
            raise OutOfRangeCoordinate(
                f"Coordinate ({coord.row},{coord.col}) is outside the {self._size}x{self._size} grid."
            )
        return CellState(int(self._cells[coord.row, coord.col]))

    def count(self, state: CellState) -> int:
        return int(np.count_nonzero(self._cells == state.value))

    def snapshot(self) -> tuple[tuple[CellState, ...], ...]:
        """Immutable row-major copy of every cell state."""
        return tuple(tuple(CellState(int(code)) for code in row) for row in self._cells)

    def as_array(self) -> CellArray:
        """Read-only copy of the display codes."""
        view = self._cells.copy()
        view.flags.writeable = False
        return view

    def _set_cell(self, coord: Coordinate, state: CellState) -> None:
        # Callers have already bounds-checked coord.
        self._cells[coord.row, coord.col] = state.value

    def __repr__(self) -> str:
        return (
            f"Grid(size={self._size}, occupied={self.count(CellState.OCCUPIED)}, "
            f"affected={self.count(CellState.AFFECTED)})"
        )
