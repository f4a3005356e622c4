"""Randomized backtracker that carves a perfect maze into a ``MazeGrid``."""

from __future__ import annotations

import logging
import random
from typing import Iterator, List, Tuple

from .grid import DIRECTIONS, Cell, MazeGrid

logger = logging.getLogger(__name__)


def _shuffled_directions(rng: random.Random) -> Iterator[int]:
    directions = list(DIRECTIONS)
    rng.shuffle(directions)
    return iter(directions)


def carve(grid: MazeGrid, start: Cell, rng: random.Random) -> int:
    """Carve passages outward from ``start`` and record tree depths.

    Each cell shuffles its four directions on entry and descends into the first
    unvisited in-bounds neighbour, resuming the remaining directions once that
    branch is exhausted. The explicit frame stack visits cells in the same order
    as the recursive formulation without tying call depth to grid size.

    Returns the number of passages opened.
    """

    start_row, start_col = start
    if not grid.in_bounds(start_row, start_col):
        raise ValueError(f"Start cell {start} lies outside a {grid.height}x{grid.width} grid")

    grid.distances[start_row, start_col] = 0
    stack: List[Tuple[int, int, Iterator[int]]] = [(start_row, start_col, _shuffled_directions(rng))]
    opened = 0

    while stack:
        row, col, pending = stack[-1]
        for direction in pending:
            nrow, ncol = grid.neighbor(row, col, direction)
            if grid.in_bounds(nrow, ncol) and not grid.is_visited(nrow, ncol):
                grid.open_passage(row, col, direction)
                grid.distances[nrow, ncol] = grid.distances[row, col] + 1
                opened += 1
                stack.append((nrow, ncol, _shuffled_directions(rng)))
                break
        else:
            stack.pop()

    logger.debug("Carved %d passages from %s in a %dx%d grid", opened, start, grid.height, grid.width)
    return opened


__all__ = ["carve"]
