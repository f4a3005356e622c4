"""Maze hole evaluator comparing a submitted solved rendering with the expected one."""

from __future__ import annotations

import argparse
import json
import logging
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Set, Tuple, Union

from ..base import AbstractHoleEvaluator, PathLike
from .render import EXIT_GLYPH, START_GLYPH, TRACK_GLYPH, WALL_GLYPH

logger = logging.getLogger(__name__)


@dataclass
class MazeEvaluationResult:
    puzzle_id: str
    exact_match: bool
    connected: bool
    stray_in_walls: bool
    mismatched_rows: List[int]
    message: str

    def to_dict(self) -> dict:
        return {
            "puzzle_id": self.puzzle_id,
            "exact_match": self.exact_match,
            "connected": self.connected,
            "stray_in_walls": self.stray_in_walls,
            "mismatched_rows": list(self.mismatched_rows),
            "message": self.message,
        }


def _find_glyph(rows: Sequence[str], glyph: str) -> Optional[Tuple[int, int]]:
    for r, line in enumerate(rows):
        c = line.find(glyph)
        if c >= 0:
            return r, c
    return None


def _split_rows(text: str) -> List[str]:
    if text.endswith("\n"):
        text = text[:-1]
    return text.split("\n")


def _find_markers(rows: Sequence[str]) -> Tuple[Optional[Tuple[int, int]], Optional[Tuple[int, int]]]:
    start = _find_glyph(rows, START_GLYPH)
    goal = _find_glyph(rows, EXIT_GLYPH)
    # a single-cell maze exits where it starts, so S covers E
    if goal is None and start == (1, 1) and len(rows) == 3 and all(len(line) == 3 for line in rows):
        goal = start
    return start, goal


class MazeEvaluator(AbstractHoleEvaluator):
    """Judge maze submissions by diffing against the stored traced rendering."""

    def evaluate(
        self,
        puzzle_id: str,
        candidate: Union[PathLike, str],
        *,
        from_file: Optional[bool] = None,
    ) -> MazeEvaluationResult:
        """Evaluate ``candidate``, either a path to a text file or the text itself.

        ``from_file`` forces the interpretation; by default a ``Path`` is read
        from disk and a ``str`` is treated as the submission text.
        """

        record = self.get_record(puzzle_id)
        expected = self.read_text(record["output_path"])
        candidate_text = self._load_candidate(candidate, from_file)

        expected_rows = _split_rows(expected)
        candidate_rows = _split_rows(candidate_text)
        mismatched = self._mismatched_rows(expected_rows, candidate_rows)
        exact_match = not mismatched

        stray_in_walls = self._has_stray_track(expected_rows, candidate_rows)
        connected = self._check_connectivity(candidate_rows)

        if exact_match:
            message = "Submission matches the expected solution."
        elif None in _find_markers(candidate_rows):
            message = "Submission is missing the start or exit marker."
        elif stray_in_walls:
            message = "Track marks overlap walls."
        elif not connected:
            message = "Track is not continuous from start to exit."
        else:
            message = f"Submission differs from the expected solution on {len(mismatched)} rows."

        logger.debug("Evaluated %s: exact=%s connected=%s", puzzle_id, exact_match, connected)
        return MazeEvaluationResult(
            puzzle_id=puzzle_id,
            exact_match=exact_match,
            connected=connected,
            stray_in_walls=stray_in_walls,
            mismatched_rows=mismatched,
            message=message,
        )

    # ------------------------------------------------------------------

    @staticmethod
    def _load_candidate(candidate: Union[PathLike, str], from_file: Optional[bool]) -> str:
        if from_file is None:
            from_file = isinstance(candidate, Path)
        if not from_file:
            return str(candidate)
        path = Path(candidate)
        if not path.exists():
            raise FileNotFoundError(f"Candidate file not found: {path}")
        return path.read_text(encoding="utf-8")

    @staticmethod
    def _mismatched_rows(expected: Sequence[str], candidate: Sequence[str]) -> List[int]:
        mismatched: List[int] = []
        for index in range(max(len(expected), len(candidate))):
            want = expected[index] if index < len(expected) else None
            got = candidate[index] if index < len(candidate) else None
            if want != got:
                mismatched.append(index)
        return mismatched

    @staticmethod
    def _has_stray_track(expected: Sequence[str], candidate: Sequence[str]) -> bool:
        for want, got in zip(expected, candidate):
            for want_glyph, got_glyph in zip(want, got):
                if got_glyph == TRACK_GLYPH and want_glyph == WALL_GLYPH:
                    return True
        return False

    @staticmethod
    def _check_connectivity(rows: Sequence[str]) -> bool:
        start, goal = _find_markers(rows)
        if start is None or goal is None:
            return False
        walkable: Set[Tuple[int, int]] = {
            (r, c)
            for r, line in enumerate(rows)
            for c, glyph in enumerate(line)
            if glyph in (TRACK_GLYPH, START_GLYPH, EXIT_GLYPH)
        }
        queue = deque([start])
        visited = {start}
        while queue:
            r, c = queue.popleft()
            if (r, c) == goal:
                return True
            for dr, dc in ((1, 0), (-1, 0), (0, 1), (0, -1)):
                nxt = (r + dr, c + dc)
                if nxt in walkable and nxt not in visited:
                    visited.add(nxt)
                    queue.append(nxt)
        return False


__all__ = ["MazeEvaluator", "MazeEvaluationResult"]


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate maze hole submissions")
    parser.add_argument("metadata", type=Path, help="Path to maze puzzles metadata JSON")
    parser.add_argument("puzzle_id", type=str, help="Identifier of the maze to evaluate")
    parser.add_argument("candidate", type=Path, help="Text file containing the submitted output")
    parser.add_argument("--base-dir", type=Path, default=None)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    evaluator = MazeEvaluator(args.metadata, base_dir=args.base_dir)
    result = evaluator.evaluate(args.puzzle_id, args.candidate, from_file=True)
    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
