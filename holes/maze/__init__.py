"""Maze hole generation, solving and judging package."""

__all__ = [
    "MazeGrid",
    "MazeInvariantError",
    "SolutionPath",
    "Maze",
    "MazeGenerator",
    "MazeHoleRecord",
    "MazeEvaluator",
    "MazeEvaluationResult",
    "carve",
    "find_exit",
    "trace_path",
    "render",
    "render_image",
    "build_maze",
    "generate_maze",
]

from .grid import MazeGrid, MazeInvariantError
from .carve import carve
from .solve import SolutionPath, find_exit, trace_path
from .render import render, render_image
from .generator import Maze, MazeGenerator, MazeHoleRecord, build_maze, generate_maze
from .evaluator import MazeEvaluator, MazeEvaluationResult
