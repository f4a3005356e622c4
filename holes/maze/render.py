"""Text renderings of a maze, with or without the solution traced."""

from __future__ import annotations

from typing import Dict, List, Tuple

from PIL import Image, ImageDraw

from .grid import EAST, SOUTH, Cell, MazeGrid
from .solve import SolutionPath

WALL_GLYPH = "█"
TRACK_GLYPH = "."
BLANK_GLYPH = " "
START_GLYPH = "S"
EXIT_GLYPH = "E"

WALL_COLOR = (0, 0, 0)
BLANK_COLOR = (255, 255, 255)
START_COLOR = (220, 30, 30)
EXIT_COLOR = (40, 180, 80)
TRACK_COLOR = (220, 0, 0)

GLYPH_COLORS: Dict[str, Tuple[int, int, int]] = {
    WALL_GLYPH: WALL_COLOR,
    BLANK_GLYPH: BLANK_COLOR,
    TRACK_GLYPH: TRACK_COLOR,
    START_GLYPH: START_COLOR,
    EXIT_GLYPH: EXIT_COLOR,
}


def render(
    grid: MazeGrid,
    start: Cell,
    exit_cell: Cell,
    path: SolutionPath,
    *,
    trace: bool,
) -> str:
    """Draw the maze as ``2*height + 1`` lines of ``2*width + 1`` glyphs.

    Every grid row becomes a cell line (cell glyph followed by its east boundary)
    and a wall line (south boundary followed by a wall corner). With ``trace``
    off the path is never shown, so the plain and traced pictures differ only in
    track glyphs.
    """

    track = TRACK_GLYPH if trace else BLANK_GLYPH
    markers = path.markers

    def boundary(row: int, col: int, direction: int, nrow: int, ncol: int) -> str:
        if not grid.is_open(row, col, direction):
            return WALL_GLYPH
        if markers[row, col] and markers[nrow, ncol]:
            return track
        return BLANK_GLYPH

    lines: List[str] = [WALL_GLYPH * (2 * grid.width + 1)]
    for row in range(grid.height):
        top = [WALL_GLYPH]
        bottom = [WALL_GLYPH]
        for col in range(grid.width):
            if (row, col) == start:
                cell = START_GLYPH
            elif (row, col) == exit_cell:
                cell = EXIT_GLYPH
            elif markers[row, col]:
                cell = track
            else:
                cell = BLANK_GLYPH
            top.append(cell)
            top.append(boundary(row, col, EAST, row, col + 1))
            bottom.append(boundary(row, col, SOUTH, row + 1, col))
            bottom.append(WALL_GLYPH)
        lines.append("".join(top))
        lines.append("".join(bottom))
    return "\n".join(lines) + "\n"


def render_image(text: str, *, cell_size: int = 8) -> Image.Image:
    """Rasterize a text rendering, one ``cell_size`` square per glyph."""

    if cell_size <= 0:
        raise ValueError("cell_size must be positive")
    rows = text.splitlines()
    if not rows:
        raise ValueError("Cannot rasterize an empty rendering")
    cols = max(len(line) for line in rows)

    canvas = Image.new("RGB", (cols * cell_size, len(rows) * cell_size), BLANK_COLOR)
    draw = ImageDraw.Draw(canvas)
    for r, line in enumerate(rows):
        for c, glyph in enumerate(line):
            fill = GLYPH_COLORS.get(glyph)
            if fill is None:
                raise ValueError(f"Unknown glyph {glyph!r} at row {r}, column {c}")
            if fill == BLANK_COLOR:
                continue
            left = c * cell_size
            top = r * cell_size
            draw.rectangle((left, top, left + cell_size - 1, top + cell_size - 1), fill=fill)
    return canvas


__all__ = [
    "WALL_GLYPH",
    "TRACK_GLYPH",
    "BLANK_GLYPH",
    "START_GLYPH",
    "EXIT_GLYPH",
    "GLYPH_COLORS",
    "render",
    "render_image",
]
