"""Command-line driver that places the fixed layout and prints the result."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from navalgrid.engine.geometry import Orientation
from navalgrid.engine.grid import CellState
from navalgrid.engine.layout import DEFAULT_ABILITIES, DEFAULT_FLEET, GRID_SIZE
from navalgrid.engine.placement import RejectionReason
from navalgrid.engine.session import PlacementReport, PlacementSession
from navalgrid.telemetry import init_telemetry, shutdown_telemetry

SYMBOLS = {
    CellState.EMPTY: ".",
    CellState.OCCUPIED: "S",
    CellState.AFFECTED: "*",
}

_REASONS = {
    RejectionReason.INVALID_BOUNDS: "coordinates fall outside the board",
    RejectionReason.OVERLAP: "it overlaps another ship",
}


def _cell_text(state: CellState, symbols: bool) -> str:
    return SYMBOLS[state] if symbols else str(state.value)


def format_board(report: PlacementReport, symbols: bool = False) -> str:
    if symbols:
        legend = "'.' = water | 'S' = ship | '*' = ability"
    else:
        legend = "0 = water | 3 = ship | 5 = ability"
    header = "   " + " ".join(f"{col:>2}" for col in range(report.size))
    rows = [legend, "", header]
    for index, row in enumerate(report.cells):
        rows.append(f"{index:>2} " + " ".join(f"{_cell_text(cell, symbols):>2}" for cell in row))
    return "\n".join(rows)


def format_placements(report: PlacementReport) -> str:
    lines: list[tuple[int, str]] = []
    for placed in report.ships:
        origin = placed.ship.origin
        lines.append(
            (
                placed.number,
                f"[ok] Ship {placed.number} placed at ({origin.row},{origin.col})"
                f" - {placed.ship.orientation.label}",
            )
        )
    for rejected in report.rejected:
        origin = rejected.ship.origin
        lines.append(
            (
                rejected.number,
                f"[failed] Ship {rejected.number} at ({origin.row},{origin.col})"
                f" - {rejected.ship.orientation.label}: {_REASONS[rejected.reason]}",
            )
        )
    return "\n".join(text for _, text in sorted(lines))


def format_ship_summary(report: PlacementReport) -> str:
    lines = ["=== SHIPS ==="]
    for placed in report.ships:
        cells = ", ".join(f"({cell.row},{cell.col})" for cell in placed.cells)
        lines.append(f"Ship {placed.number} ({placed.ship.orientation.label}): {cells}")
    return "\n".join(lines)


def format_ability_summary(report: PlacementReport) -> str:
    lines = ["=== ABILITIES ==="]
    for applied in report.abilities:
        origin = applied.ability.origin
        lines.append(
            f"{applied.ability.kind.label} at ({origin.row},{origin.col}):"
            f" {applied.applied_cell_count} cells affected"
        )
    return "\n".join(lines)


def format_statistics(report: PlacementReport) -> str:
    orientations = sorted(
        {placed.ship.orientation for placed in report.ships}, key=list(Orientation).index
    )
    used = ", ".join(orientation.label for orientation in orientations) or "none"
    return "\n".join(
        [
            "=== STATISTICS ===",
            f"Board: {report.size}x{report.size} ({report.total_cells} cells)",
            f"Ships placed: {len(report.ships)}",
            f"Occupied cells: {report.occupied_cells}",
            f"Affected cells: {report.affected_cells}",
            f"Orientations used: {used}",
        ]
    )


def render(report: PlacementReport, symbols: bool = False) -> str:
    """Render the full textual report for a finished session."""
    sections = ["--- PLACEMENT ---", format_placements(report)]
    if not report.succeeded:
        sections.append("\nERROR: not every ship could be placed.")
        return "\n".join(sections)
    sections.extend(
        [
            "",
            f"=== BOARD {report.size}x{report.size} ===",
            format_board(report, symbols=symbols),
            "",
            format_ship_summary(report),
        ]
    )
    if report.abilities:
        sections.extend(["", format_ability_summary(report)])
    sections.extend(["", format_statistics(report)])
    return "\n".join(sections)


def run(symbols: bool = False, abilities: bool = True) -> tuple[PlacementReport, int]:
    session = PlacementSession(GRID_SIZE)
    report = session.deploy(DEFAULT_FLEET, DEFAULT_ABILITIES if abilities else ())
    print(render(report, symbols=symbols))
    return report, 0 if report.succeeded else 1


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Place the fixed fleet and abilities on a 10x10 board and print it."
    )
    parser.add_argument(
        "--symbols", action="store_true", help="Draw cells as symbols instead of numeric codes."
    )
    parser.add_argument(
        "--no-abilities", action="store_true", help="Skip the ability phase."
    )
    parser.add_argument(
        "--telemetry",
        action="store_true",
        help="Initialise logging/tracing/metrics from NAVALGRID_* and OTEL_* variables.",
    )
    args = parser.parse_args(argv)
    if not args.telemetry:
        _, status = run(symbols=args.symbols, abilities=not args.no_abilities)
        return status

    init_telemetry()
    try:
        _, status = run(symbols=args.symbols, abilities=not args.no_abilities)
    finally:
        # Flush batched spans and periodic metrics before exit.
        shutdown_telemetry()
    return status


if __name__ == "__main__":
    sys.exit(main())
