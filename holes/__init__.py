"""Code-golf hole generation and judging toolkit."""

__all__ = [
    "AbstractHoleGenerator",
    "AbstractHoleEvaluator",
    "MazeGenerator",
    "MazeEvaluator",
    "MazeHoleRecord",
    "MazeEvaluationResult",
    "generate_maze",
]

from .base import AbstractHoleGenerator, AbstractHoleEvaluator
from .maze import (
    MazeGenerator,
    MazeEvaluator,
    MazeHoleRecord,
    MazeEvaluationResult,
    generate_maze,
)
