"""Fixed fleet and ability layout."""

from __future__ import annotations

from .geometry import AbilityKind, Coordinate, Orientation
from .grid import GRID_SIZE
from .ship import SHIP_LENGTH, STENCIL_SIZE, Ability, Ship

TOTAL_SHIPS = 4

DEFAULT_FLEET: tuple[Ship, ...] = (
    Ship(Coordinate(1, 2), Orientation.HORIZONTAL),
    Ship(Coordinate(4, 8), Orientation.VERTICAL),
    Ship(Coordinate(6, 1), Orientation.DIAGONAL_DOWN),
    Ship(Coordinate(2, 7), Orientation.DIAGONAL_UP),
)

DEFAULT_ABILITIES: tuple[Ability, ...] = (
    Ability(AbilityKind.CONE, Coordinate(2, 2)),
    Ability(AbilityKind.CROSS, Coordinate(5, 5)),
    Ability(AbilityKind.DIAMOND, Coordinate(7, 7)),
)

__all__ = [
    "DEFAULT_ABILITIES",
    "DEFAULT_FLEET",
    "GRID_SIZE",
    "SHIP_LENGTH",
    "STENCIL_SIZE",
    "TOTAL_SHIPS",
]
