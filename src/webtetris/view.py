"""Presentation helpers shared by the front-ends.

Renderers receive the snapshot produced by :meth:`GameState.snapshot` plus
the score and level.  They keep no game state of their own.
"""

from __future__ import annotations

import sys
from typing import List, Optional, Sequence, TextIO

from .board import Cell


CELL_CHARS = {
    Cell.EMPTY: ".",
    Cell.FILLED: "#",
    Cell.ACTIVE: "@",
}

# CSS classes for the DOM cells of the browser front-end.
CELL_CLASSES = {
    Cell.EMPTY: "cell",
    Cell.FILLED: "cell filled",
    Cell.ACTIVE: "cell current",
}


def flatten_cells(grid: Sequence[Sequence[int]]) -> List[Cell]:
    """Return the row-major sequence of cell markers for ``grid``."""

    return [Cell(value) for row in grid for value in row]


def format_score(score: int) -> str:
    return str(score)


def format_level(level: int) -> str:
    return str(level)


def render_text(grid: Sequence[Sequence[int]]) -> str:
    """Return ``grid`` as lines of ASCII characters."""

    return "\n".join("".join(CELL_CHARS[Cell(value)] for value in row) for row in grid)


class TextView:
    """Plain-text renderer writing frames to a stream."""

    def __init__(self, stream: Optional[TextIO] = None, echo: bool = True) -> None:
        self.stream = stream or sys.stdout
        self.echo = echo
        self.frame = ""
        self.score_text = format_score(0)
        self.level_text = format_level(1)
        self.final_score: Optional[int] = None

    def render(self, grid: Sequence[Sequence[int]], score: int, level: int) -> None:
        self.frame = render_text(grid)
        self.score_text = format_score(score)
        self.level_text = format_level(level)
        if self.echo:
            print(self.frame, file=self.stream)
            print(f"Score: {self.score_text}  Level: {self.level_text}", file=self.stream)

    def game_over(self, score: int) -> None:
        self.final_score = score
        print(f"Game over! Your score: {score}", file=self.stream)
