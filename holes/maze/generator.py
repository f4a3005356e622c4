"""Maze hole generator: a random perfect maze, its exit, and the traced solution."""

from __future__ import annotations

import argparse
import logging
import random
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from ..base import AbstractHoleGenerator, PathLike
from .carve import carve
from .grid import Cell, MazeGrid
from .render import render, render_image
from .solve import SolutionPath, find_exit, trace_path

DEFAULT_WIDTH = 50
DEFAULT_HEIGHT = 50

logger = logging.getLogger(__name__)


@dataclass
class Maze:
    grid: MazeGrid
    start: Cell
    exit: Cell
    path: SolutionPath

    def render(self, *, trace: bool) -> str:
        return render(self.grid, self.start, self.exit, self.path, trace=trace)

    @property
    def unsolved(self) -> str:
        return self.render(trace=False)

    @property
    def solved(self) -> str:
        return self.render(trace=True)


def build_maze(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    *,
    rng: Optional[random.Random] = None,
    start: Optional[Cell] = None,
) -> Maze:
    """Carve a maze from a random (or given) start and solve it.

    ``rng`` is the only source of randomness; pass a seeded ``random.Random``
    for reproducible output. A fresh unseeded generator is used otherwise.
    """

    grid = MazeGrid(width, height)
    rng = rng if rng is not None else random.Random()
    if start is None:
        start_col = rng.randrange(grid.width)
        start_row = rng.randrange(grid.height)
        start = (start_row, start_col)
    carve(grid, start, rng)
    exit_cell = find_exit(grid)
    path = trace_path(grid, exit_cell)
    return Maze(grid=grid, start=start, exit=exit_cell, path=path)


def generate_maze(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    *,
    rng: Optional[random.Random] = None,
) -> Tuple[str, str]:
    """Return the ``(unsolved, solved)`` renderings of a fresh maze."""

    maze = build_maze(width, height, rng=rng)
    return maze.unsolved, maze.solved


@dataclass
class MazeHoleRecord:
    id: str
    grid_size: Tuple[int, int]
    start: Tuple[int, int]
    exit: Tuple[int, int]
    path_length: int
    passages: List[List[int]]
    input_path: str
    output_path: str
    input_image_path: Optional[str] = None
    output_image_path: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "grid_size": list(self.grid_size),
            "start": list(self.start),
            "exit": list(self.exit),
            "path_length": self.path_length,
            "passages": self.passages,
            "input_path": self.input_path,
            "output_path": self.output_path,
            "input_image_path": self.input_image_path,
            "output_image_path": self.output_image_path,
        }


class MazeGenerator(AbstractHoleGenerator[MazeHoleRecord]):
    """Generate maze holes: an unsolved picture as input, the traced one as expected output."""

    def __init__(
        self,
        output_dir: PathLike = "data/maze",
        *,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        seed: Optional[int] = None,
        render_images: bool = False,
        cell_size: int = 8,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be positive")
        if cell_size <= 0:
            raise ValueError("cell_size must be positive")
        super().__init__(output_dir)
        self.width = width
        self.height = height
        self.render_images = render_images
        self.cell_size = cell_size
        self._rng = random.Random(seed)

    def create_puzzle(self, *, puzzle_id: Optional[str] = None) -> MazeHoleRecord:
        puzzle_uuid = puzzle_id or str(uuid.uuid4())
        maze = build_maze(self.width, self.height, rng=self._rng)
        unsolved = maze.unsolved
        solved = maze.solved

        input_path = self.write_text(self.input_dir / f"{puzzle_uuid}_input.txt", unsolved)
        output_path = self.write_text(self.solution_dir / f"{puzzle_uuid}_output.txt", solved)

        input_image_path = output_image_path = None
        if self.render_images:
            input_png = self.input_dir / f"{puzzle_uuid}_input.png"
            output_png = self.solution_dir / f"{puzzle_uuid}_output.png"
            render_image(unsolved, cell_size=self.cell_size).save(input_png)
            render_image(solved, cell_size=self.cell_size).save(output_png)
            input_image_path = self.relativize_path(input_png)
            output_image_path = self.relativize_path(output_png)

        logger.debug("Created maze %s: start=%s exit=%s path=%d", puzzle_uuid, maze.start, maze.exit, maze.path.length)
        return MazeHoleRecord(
            id=puzzle_uuid,
            grid_size=(self.height, self.width),
            start=maze.start,
            exit=maze.exit,
            path_length=maze.path.length,
            passages=maze.grid.passages.tolist(),
            input_path=input_path,
            output_path=output_path,
            input_image_path=input_image_path,
            output_image_path=output_image_path,
        )


__all__ = [
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "Maze",
    "MazeGenerator",
    "MazeHoleRecord",
    "build_maze",
    "generate_maze",
]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate maze holes for the code-golf judge")
    parser.add_argument("count", type=int, help="Number of mazes to generate")
    parser.add_argument("--output-dir", type=Path, default=Path("data/maze"), help="Where to save assets")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--images", action="store_true", help="Also write PNG previews of both renderings")
    parser.add_argument("--cell-size", type=int, default=8, help="Pixels per glyph in PNG previews")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    args = _parse_args(argv)
    generator = MazeGenerator(
        output_dir=args.output_dir,
        width=args.width,
        height=args.height,
        seed=args.seed,
        render_images=args.images,
        cell_size=args.cell_size,
    )
    metadata_path = generator.output_dir / "puzzles.json"
    records = generator.generate_dataset(args.count, metadata_path=metadata_path)
    logger.info("Wrote %d mazes to %s", len(records), metadata_path)


if __name__ == "__main__":
    main()
