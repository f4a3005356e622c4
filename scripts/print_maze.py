#!/usr/bin/env python3
"""Print one maze hole: the unsolved input followed by the expected solution."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from holes.maze import build_maze
from holes.maze.generator import DEFAULT_HEIGHT, DEFAULT_WIDTH


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible maze")
    parser.add_argument(
        "--solution-only",
        action="store_true",
        help="Print only the traced solution",
    )
    return parser.parse_args()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    args = _parse_args()
    maze = build_maze(args.width, args.height, rng=random.Random(args.seed))
    logging.info("start=%s exit=%s path length=%d", maze.start, maze.exit, maze.path.length)
    if not args.solution_only:
        sys.stdout.write(maze.unsolved)
        sys.stdout.write("\n")
    sys.stdout.write(maze.solved)


if __name__ == "__main__":
    main()
