"""Entity descriptors placed onto the grid."""

from __future__ import annotations

from dataclasses import dataclass

from .geometry import (
    AbilityKind,
    Coordinate,
    Orientation,
    StencilMask,
    generate_stencil,
    ship_cells,
)

SHIP_LENGTH = 3
STENCIL_SIZE = 5


@dataclass(frozen=True)
class Ship:
    """A straight ship anchored at ``origin``."""

    origin: Coordinate
    orientation: Orientation
    length: int = SHIP_LENGTH

    def __post_init__(self) -> None:
        if not isinstance(self.orientation, Orientation):
            raise TypeError(f"Expected an Orientation, got {self.orientation!r}.")
        if self.length <= 0:
            raise ValueError("Ship length must be positive.")

    def resolved_cells(self) -> tuple[Coordinate, ...]:
        """Return the ordered cells this ship covers."""
        return ship_cells(self)


@dataclass(frozen=True)
class Ability:
    """An area effect whose stencil is centred on ``origin``."""

    kind: AbilityKind
    origin: Coordinate

    def stencil(self) -> StencilMask:
        return generate_stencil(self.kind, STENCIL_SIZE)
