"""Single-pass placement session and the snapshots handed to reporters."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from navalgrid.telemetry import get_meter, get_tracer, record_placement_metric

from .geometry import Coordinate
from .grid import GRID_SIZE, CellState, Grid
from .placement import PlacementResult, RejectionReason, try_place
from .ship import Ability, Ship
from .stencil import apply_ability

logger = logging.getLogger(__name__)
tracer = get_tracer("navalgrid.engine.session")
meter = get_meter("navalgrid.engine.session")

PLACEMENT_COUNTER = meter.create_counter(
    "navalgrid_ship_placements",
    unit="1",
    description="Number of attempted ship placements",
)

ABILITY_CELL_COUNTER = meter.create_counter(
    "navalgrid_ability_cells",
    unit="1",
    description="Cells marked as affected by abilities",
)


@dataclass(frozen=True)
class PlacedShip:
    """A committed ship and the cells it resolved to."""

    number: int
    ship: Ship
    cells: tuple[Coordinate, ...]


@dataclass(frozen=True)
class RejectedShip:
    number: int
    ship: Ship
    reason: RejectionReason


@dataclass(frozen=True)
class AppliedAbility:
    ability: Ability
    applied_cell_count: int


@dataclass(frozen=True)
class PlacementReport:
    """Immutable view of a session for rendering."""

    cells: tuple[tuple[CellState, ...], ...]
    ships: tuple[PlacedShip, ...]
    rejected: tuple[RejectedShip, ...]
    abilities: tuple[AppliedAbility, ...]

    @property
    def succeeded(self) -> bool:
        return not self.rejected

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def total_cells(self) -> int:
        return sum(len(row) for row in self.cells)

    def count(self, state: CellState) -> int:
        return sum(1 for row in self.cells for cell in row if cell is state)

    @property
    def occupied_cells(self) -> int:
        return self.count(CellState.OCCUPIED)

    @property
    def affected_cells(self) -> int:
        return self.count(CellState.AFFECTED)


class PlacementSession:
    """Owns a grid and drives ship placement followed by ability application."""

    def __init__(self, size: int = GRID_SIZE) -> None:
        self.grid = Grid.create(size)
        self._ships: list[PlacedShip] = []
        self._rejected: list[RejectedShip] = []
        self._abilities: list[AppliedAbility] = []
        self._attempts = 0
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def place_ship(self, ship: Ship) -> PlacementResult:
        """Try to commit ``ship``; later ships see the cells of earlier ones."""
        self._ensure_open()
        self._attempts += 1
        number = self._attempts
        with tracer.start_as_current_span("session.place_ship") as span:
            span.set_attribute("ship.number", number)
            span.set_attribute("ship.orientation", ship.orientation.name)
            span.set_attribute("ship.origin.row", ship.origin.row)
            span.set_attribute("ship.origin.col", ship.origin.col)
            result = try_place(self.grid, ship)
            details = {
                "ship_number": number,
                "orientation": ship.orientation.name,
                "row": ship.origin.row,
                "col": ship.origin.col,
            }
            if result.rejection is None:
                self._ships.append(PlacedShip(number, ship, result.cells))
                span.set_attribute("placement.result", "committed")
                PLACEMENT_COUNTER.add(1, attributes={"result": "committed"})
                logger.info("ship_placed", extra=details)
            else:
                self._rejected.append(RejectedShip(number, ship, result.rejection))
                span.set_attribute("placement.result", result.rejection.value)
                PLACEMENT_COUNTER.add(1, attributes={"result": result.rejection.value})
                logger.warning(
                    "ship_placement_rejected",
                    extra={**details, "reason": result.rejection.value},
                )
            return result

    def apply_ability(self, ability: Ability) -> AppliedAbility:
        """Composite ``ability`` onto the grid. Never fails."""
        self._ensure_open()
        with tracer.start_as_current_span("session.apply_ability") as span:
            span.set_attribute("ability.kind", ability.kind.value)
            span.set_attribute("ability.origin.row", ability.origin.row)
            span.set_attribute("ability.origin.col", ability.origin.col)
            count = apply_ability(self.grid, ability)
            span.set_attribute("ability.cells", count)
            ABILITY_CELL_COUNTER.add(count, attributes={"kind": ability.kind.value})
            logger.info(
                "ability_applied",
                extra={
                    "kind": ability.kind.value,
                    "row": ability.origin.row,
                    "col": ability.origin.col,
                    "cells": count,
                },
            )
            applied = AppliedAbility(ability, count)
            self._abilities.append(applied)
            return applied

    def deploy(self, ships: Iterable[Ship], abilities: Iterable[Ability] = ()) -> PlacementReport:
        """Place every ship, then apply abilities if the whole fleet fits.

        Every ship is attempted even after a rejection so that all failures
        appear in the report. The session is sealed afterwards.
        """
        self._ensure_open()
        with tracer.start_as_current_span("session.deploy") as span:
            for ship in ships:
                self.place_ship(ship)
            if self._rejected:
                logger.error(
                    "fleet_incomplete",
                    extra={"placed": len(self._ships), "rejected": len(self._rejected)},
                )
            else:
                for ability in abilities:
                    self.apply_ability(ability)
            span.set_attribute("ships.placed", len(self._ships))
            span.set_attribute("ships.rejected", len(self._rejected))
            span.set_attribute("abilities.applied", len(self._abilities))
            record_placement_metric(
                "navalgrid_deployments_total", 1, {"succeeded": not self._rejected}
            )
            report = self.report()
            self._sealed = True
            return report

    def report(self) -> PlacementReport:
        return PlacementReport(
            cells=self.grid.snapshot(),
            ships=tuple(self._ships),
            rejected=tuple(self._rejected),
            abilities=tuple(self._abilities),
        )

    def _ensure_open(self) -> None:
        if self._sealed:
            raise RuntimeError("Session has already been reported and cannot be modified.")
