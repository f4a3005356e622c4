"""Exit selection and solution tracing over a carved maze."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

import numpy as np

from .grid import DIRECTIONS, Cell, MazeGrid, MazeInvariantError

logger = logging.getLogger(__name__)

# Fixed probing order when walking back towards the start.
TRACE_ORDER = DIRECTIONS


@dataclass
class SolutionPath:
    """Cells on the unique route between exit and start."""

    cells: List[Cell]
    markers: np.ndarray

    @property
    def length(self) -> int:
        return len(self.cells)

    def __contains__(self, cell: object) -> bool:
        if not isinstance(cell, tuple) or len(cell) != 2:
            return False
        row, col = cell
        height, width = self.markers.shape
        return 0 <= row < height and 0 <= col < width and bool(self.markers[row, col])


def find_exit(grid: MazeGrid) -> Cell:
    """Return the first cell, in row-major order, with the greatest distance."""

    # argmax reports the first occurrence of the maximum in flattened (C) order
    flat_index = int(np.argmax(grid.distances))
    row, col = divmod(flat_index, grid.width)
    logger.debug("Exit at %s with distance %d", (row, col), grid.distances[row, col])
    return row, col


def trace_path(grid: MazeGrid, exit_cell: Cell) -> SolutionPath:
    """Walk from ``exit_cell`` back to the start along strictly decreasing distances.

    Only open passages are followed, so each step lands on the cell's parent in
    the carving tree. The returned cells run from the exit to the start.
    """

    row, col = exit_cell
    if not grid.in_bounds(row, col):
        raise ValueError(f"Exit cell {exit_cell} lies outside a {grid.height}x{grid.width} grid")

    markers = np.zeros(grid.shape, dtype=bool)
    markers[row, col] = True
    cells: List[Cell] = [(row, col)]
    distance = int(grid.distances[row, col])

    while distance > 0:
        for direction in TRACE_ORDER:
            if not grid.is_open(row, col, direction):
                continue
            nrow, ncol = grid.neighbor(row, col, direction)
            if grid.in_bounds(nrow, ncol) and grid.distances[nrow, ncol] == distance - 1:
                row, col = nrow, ncol
                break
        else:
            raise MazeInvariantError(
                f"No neighbour at distance {distance - 1} next to {(row, col)}; distance field is corrupt"
            )
        distance -= 1
        markers[row, col] = True
        cells.append((row, col))

    return SolutionPath(cells=cells, markers=markers)


__all__ = ["SolutionPath", "TRACE_ORDER", "find_exit", "trace_path"]
