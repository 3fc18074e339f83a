"""Utility helpers for the Tetris engine."""

from __future__ import annotations

from typing import Optional, List

from .board import Board, Cell
from .tetromino import Tetromino


# Points awarded for clearing 0-4 rows with a single piece, before the level
# multiplier is applied.
LINE_CLEAR_POINTS = (0, 40, 100, 300, 1200)
POINTS_PER_LEVEL = 1000

BASE_TICK_MS = 1000
TICK_STEP_MS = 100
MIN_TICK_MS = 100


def tick_interval_ms(level: int) -> int:
    """Return the gravity interval in milliseconds for ``level``.

    Every level shaves ``TICK_STEP_MS`` off the base interval until the
    ``MIN_TICK_MS`` floor is reached at level 9.
    """

    return max(MIN_TICK_MS, BASE_TICK_MS - level * TICK_STEP_MS)


def line_clear_points(lines: int, level: int) -> int:
    """Return the score awarded for clearing ``lines`` rows at ``level``.

    Raises:
        ValueError: If ``lines`` is not between 0 and 4.  A single tetromino
            never spans more than four rows.
    """

    if not 0 <= lines < len(LINE_CLEAR_POINTS):
        raise ValueError(f"Cannot score {lines} cleared lines")
    return LINE_CLEAR_POINTS[lines] * level


def level_for_score(score: int) -> int:
    return score // POINTS_PER_LEVEL + 1


def can_move(board: Board, tetromino: Tetromino, dx: int, dy: int) -> bool:
    """Return ``True`` if ``tetromino`` can move by ``dx`` and ``dy`` on ``board``.

    Every occupied cell of the translated piece must stay within the board's
    columns, above its bottom edge and off any filled cell.  Rows above the top
    of the board are allowed.  The check is used by the game loop to validate
    both movement and rotation attempts before they are applied.
    """

    return board.fits(tetromino.moved(dx, dy))


def render_grid(board: Board, active: Optional[Tetromino] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state (i.e. without locking the
    piece).  Locked cells are ``Cell.FILLED`` and cells covered by the active
    piece are ``Cell.ACTIVE``.
    """

    grid = [[int(cell) for cell in row] for row in board.grid]
    if active is not None:
        for r, c in active.blocks():
            if 0 <= r < board.height and 0 <= c < board.width:
                grid[r][c] = int(Cell.ACTIVE)
    return grid
