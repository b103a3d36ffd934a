"""Pure shape geometry: ship footprints and ability stencils."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import TYPE_CHECKING, TypeAlias

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .ship import Ship

StencilMask: TypeAlias = npt.NDArray[np.bool_]


class InvalidOrientation(ValueError):
    """Raised when an orientation code does not name a known orientation."""


@dataclass(frozen=True)
class Coordinate:
    """Immutable (row, col) grid coordinate."""

    row: int
    col: int

    def offset(self, delta_row: int, delta_col: int) -> Coordinate:
        return Coordinate(self.row + delta_row, self.col + delta_col)


class Orientation(Enum):
    """Directions a linear ship can extend from its origin."""

    HORIZONTAL = "H"
    VERTICAL = "V"
    DIAGONAL_DOWN = "D"
    DIAGONAL_UP = "A"

    @classmethod
    def from_code(cls, code: str) -> Orientation:
        """Return the orientation for a single-letter code (H, V, D or A)."""
        try:
            return cls(code.strip().upper())
        except ValueError as exc:
            raise InvalidOrientation(f"Unknown orientation code: {code!r}") from exc

    @property
    def deltas(self) -> tuple[int, int]:
        """Row/column step between consecutive ship cells."""
        return _DELTAS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_DELTAS: dict[Orientation, tuple[int, int]] = {
    Orientation.HORIZONTAL: (0, 1),
    Orientation.VERTICAL: (1, 0),
    Orientation.DIAGONAL_DOWN: (1, 1),
    Orientation.DIAGONAL_UP: (1, -1),
}

_LABELS: dict[Orientation, str] = {
    Orientation.HORIZONTAL: "Horizontal",
    Orientation.VERTICAL: "Vertical",
    Orientation.DIAGONAL_DOWN: "Diagonal Down",
    Orientation.DIAGONAL_UP: "Diagonal Up",
}


class AbilityKind(Enum):
    """Area-of-effect shapes."""

    CONE = "cone"
    CROSS = "cross"
    DIAMOND = "diamond"

    @property
    def label(self) -> str:
        return self.value.title()


def _in_range(coord: Coordinate, grid_size: int) -> bool:
    return 0 <= coord.row < grid_size and 0 <= coord.col < grid_size


def ship_cells(ship: Ship) -> tuple[Coordinate, ...]:
    """Return the ship's cells in order, starting at its origin."""
    delta_row, delta_col = ship.orientation.deltas
    return tuple(
        ship.origin.offset(delta_row * index, delta_col * index) for index in range(ship.length)
    )


def bounds_ok(ship: Ship, grid_size: int) -> bool:
    """True when both the origin and the last cell of the ship lie on the grid.

    The footprint is a straight line, so checking its two ends is enough.
    """
    if not _in_range(ship.origin, grid_size):
        return False
    delta_row, delta_col = ship.orientation.deltas
    last = ship.origin.offset(delta_row * (ship.length - 1), delta_col * (ship.length - 1))
    return _in_range(last, grid_size)


def _cone_mask(size: int) -> StencilMask:
    center = size // 2
    mask = np.zeros((size, size), dtype=bool)
    for i in range(size):
        width = i + 1
        for j in range(size):
            # Second clause caps the cone at the stencil's half-width.
            mask[i, j] = abs(j - center) < width and width <= center + 1
    return mask


def _cross_mask(size: int) -> StencilMask:
    center = size // 2
    mask = np.zeros((size, size), dtype=bool)
    mask[center, :] = True
    mask[:, center] = True
    return mask


def _diamond_mask(size: int) -> StencilMask:
    center = size // 2
    rows, cols = np.indices((size, size))
    return (np.abs(rows - center) + np.abs(cols - center)) <= center


_BUILDERS = {
    AbilityKind.CONE: _cone_mask,
    AbilityKind.CROSS: _cross_mask,
    AbilityKind.DIAMOND: _diamond_mask,
}


@lru_cache(maxsize=None)
def generate_stencil(kind: AbilityKind, size: int) -> StencilMask:
    """Build the ``size`` x ``size`` boolean mask for an ability kind.

    The result is cached and read-only; copy it before modifying.
    """
    if size <= 0 or size % 2 == 0:
        raise ValueError(f"Stencil size must be a positive odd number, got {size}.")
    mask = _BUILDERS[kind](size)
    mask.flags.writeable = False
    return mask
