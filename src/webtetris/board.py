"""Board representation for the Tetris playfield."""

from __future__ import annotations

from enum import IntEnum

import numpy as np
from numpy.typing import NDArray

from .tetromino import Tetromino


# Dimensions of the standard Tetris board.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]


class Cell(IntEnum):
    """Values stored in the board grid and in rendered snapshots.

    ``ACTIVE`` never appears in the board itself; it only marks the falling
    piece in snapshots produced for renderers.
    """

    EMPTY = 0
    FILLED = 1
    ACTIVE = 2


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


class Board:
    """Tetris board holding the occupied cells."""

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    def reset(self) -> None:
        """Mark every cell empty."""

        self.grid = create_empty_grid()

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def fill_row(self, row: int, skip: tuple[int, ...] = ()) -> None:
        """Fill ``row`` completely except for the columns in ``skip``."""

        for col in range(self.width):
            self.set_cell(row, col, Cell.EMPTY if col in skip else Cell.FILLED)

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is empty.

        Rows above the top of the board are treated as empty so freshly
        spawned pieces may poke out of the playfield.  Every other off-board
        coordinate counts as occupied, which makes collision detection reject
        it automatically.
        """

        if row < 0 and 0 <= col < self.width:
            return True
        if 0 <= row < self.height and 0 <= col < self.width:
            return bool(self.grid[row, col] == Cell.EMPTY)
        return False

    def fits(self, tetromino: Tetromino) -> bool:
        """Return ``True`` if every block of ``tetromino`` lands on an empty cell."""

        return all(self.is_empty(row, col) for row, col in tetromino.blocks())

    def lock_piece(self, tetromino: Tetromino) -> None:
        """Lock the tetromino's blocks into the board grid.

        Blocks still above the top row are dropped.
        """

        coordinates = np.asarray(tetromino.blocks(), dtype=np.int16)
        if coordinates.size == 0:
            return

        rows, cols = coordinates.T
        visible = rows >= 0
        rows, cols = rows[visible], cols[visible]
        if np.any(rows >= self.height) or np.any(cols < 0) or np.any(cols >= self.width):
            raise IndexError("Block out of bounds")

        self.grid[rows, cols] = np.uint8(Cell.FILLED)

    def full_rows(self) -> list[int]:
        """Return the indices of rows with no empty cell, top to bottom."""

        return [int(r) for r in np.flatnonzero(np.all(self.grid != Cell.EMPTY, axis=1))]

    def clear_full_rows(self) -> int:
        """Clear completed rows and return how many were removed.

        Rows above a cleared row shift down keeping their order, and one empty
        row is inserted at the top per removed row, so the height is unchanged.
        Full rows need not be adjacent.
        """

        full_rows = np.all(self.grid != Cell.EMPTY, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.grid[~full_rows]
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
        return cleared
