"""Tetromino definitions and basic behaviour.

A piece is stored as a small occupancy matrix plus the board coordinates of
its top-left corner.  Pieces are immutable: moving or rotating one produces a
new :class:`Tetromino`, which the game state either accepts or discards.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Tuple

import numpy as np

Shape = Tuple[Tuple[int, ...], ...]


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    J = "J"
    L = "L"
    Z = "Z"
    S = "S"


# Spawn orientation of each tetromino.  Further orientations are produced on
# demand by ``rotate_shape``.
SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: ((1, 1, 1, 1),),
    TetrominoType.O: ((1, 1), (1, 1)),
    TetrominoType.T: ((1, 1, 1), (0, 1, 0)),
    TetrominoType.J: ((1, 1, 1), (1, 0, 0)),
    TetrominoType.L: ((1, 1, 1), (0, 0, 1)),
    TetrominoType.Z: ((1, 1, 0), (0, 1, 1)),
    TetrominoType.S: ((0, 1, 1), (1, 1, 0)),
}


def rotate_shape(shape: Shape) -> Shape:
    """Return ``shape`` rotated 90 degrees clockwise.

    The matrix is transposed and every resulting row reversed, so the rotation
    happens around the shape's bounding box.  No wall kick offsets are applied.
    """

    rotated = np.rot90(np.asarray(shape, dtype=np.uint8), k=-1)
    return tuple(tuple(int(v) for v in row) for row in rotated)


def shape_width(shape: Shape) -> int:
    return len(shape[0]) if shape else 0


@dataclass(frozen=True)
class Tetromino:
    """Active falling piece in the game."""

    kind: TetrominoType
    shape: Shape
    x: int = 0
    y: int = 0

    @classmethod
    def spawn(cls, kind: TetrominoType, board_width: int) -> "Tetromino":
        """Create ``kind`` horizontally centred on the top row of the board."""

        shape = SHAPES[kind]
        return cls(kind, shape, x=board_width // 2 - shape_width(shape) // 2, y=0)

    def moved(self, dx: int, dy: int) -> "Tetromino":
        """Return a copy translated by ``dx`` columns and ``dy`` rows."""

        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> "Tetromino":
        """Return a copy with the shape rotated clockwise at the same origin."""

        return replace(self, shape=rotate_shape(self.shape))

    def with_shape(self, shape: Shape) -> "Tetromino":
        return replace(self, shape=shape)

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the global ``(row, col)`` coordinates of occupied cells."""

        return [
            (self.y + r, self.x + c)
            for r, row in enumerate(self.shape)
            for c, filled in enumerate(row)
            if filled
        ]
