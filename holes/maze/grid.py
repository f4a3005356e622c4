"""Passage and distance fields shared by the maze carving and solving steps.

Each cell stores a 4-bit passage mask (one bit per cardinal direction) and its
depth in the carving tree. A zero mask means the carver has not reached the
cell yet.
"""

from __future__ import annotations

from typing import Dict, Iterator, Tuple

import numpy as np

Cell = Tuple[int, int]

NORTH = 1
SOUTH = 2
WEST = 4
EAST = 8

DIRECTIONS: Tuple[int, ...] = (NORTH, SOUTH, WEST, EAST)

# direction -> (row offset, col offset, opposite)
_DIRECTION_TABLE: Dict[int, Tuple[int, int, int]] = {
    NORTH: (-1, 0, SOUTH),
    SOUTH: (1, 0, NORTH),
    WEST: (0, -1, EAST),
    EAST: (0, 1, WEST),
}

ROW_OFFSET: Dict[int, int] = {d: entry[0] for d, entry in _DIRECTION_TABLE.items()}
COL_OFFSET: Dict[int, int] = {d: entry[1] for d, entry in _DIRECTION_TABLE.items()}
OPPOSITE: Dict[int, int] = {d: entry[2] for d, entry in _DIRECTION_TABLE.items()}


class MazeInvariantError(RuntimeError):
    """Raised when a maze structure breaks one of its construction guarantees."""


def _check_direction_tables() -> None:
    expected = set(DIRECTIONS)
    for name, table in (("ROW_OFFSET", ROW_OFFSET), ("COL_OFFSET", COL_OFFSET), ("OPPOSITE", OPPOSITE)):
        if set(table) != expected:
            raise MazeInvariantError(f"{name} does not cover every direction")
    for direction in DIRECTIONS:
        if OPPOSITE[OPPOSITE[direction]] != direction:
            raise MazeInvariantError(f"OPPOSITE is not symmetric for direction {direction}")
        if ROW_OFFSET[direction] != -ROW_OFFSET[OPPOSITE[direction]]:
            raise MazeInvariantError(f"Row offsets disagree for direction {direction}")
        if COL_OFFSET[direction] != -COL_OFFSET[OPPOSITE[direction]]:
            raise MazeInvariantError(f"Column offsets disagree for direction {direction}")


_check_direction_tables()


class MazeGrid:
    """Mutable passage masks and tree distances for one maze."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be positive")
        self.width = int(width)
        self.height = int(height)
        self.passages = np.zeros((self.height, self.width), dtype=np.uint8)
        self.distances = np.zeros((self.height, self.width), dtype=np.int64)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.height, self.width

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def neighbor(self, row: int, col: int, direction: int) -> Cell:
        return row + ROW_OFFSET[direction], col + COL_OFFSET[direction]

    def is_visited(self, row: int, col: int) -> bool:
        return bool(self.passages[row, col])

    def is_open(self, row: int, col: int, direction: int) -> bool:
        return bool(self.passages[row, col] & direction)

    def open_passage(self, row: int, col: int, direction: int) -> Cell:
        """Carve the wall between a cell and its neighbour, setting both bits."""

        nrow, ncol = self.neighbor(row, col, direction)
        if not self.in_bounds(nrow, ncol):
            raise ValueError(f"Cannot open {direction} from {(row, col)}: neighbour is outside the grid")
        self.passages[row, col] |= direction
        self.passages[nrow, ncol] |= OPPOSITE[direction]
        return nrow, ncol

    def open_neighbors(self, row: int, col: int) -> Iterator[Cell]:
        for direction in DIRECTIONS:
            if self.is_open(row, col, direction):
                yield self.neighbor(row, col, direction)

    def edge_count(self) -> int:
        # every passage is stored twice, once per endpoint
        bits = np.unpackbits(self.passages[..., np.newaxis], axis=-1)
        return int(bits.sum()) // 2


__all__ = [
    "Cell",
    "NORTH",
    "SOUTH",
    "WEST",
    "EAST",
    "DIRECTIONS",
    "ROW_OFFSET",
    "COL_OFFSET",
    "OPPOSITE",
    "MazeGrid",
    "MazeInvariantError",
]
