"""A small model-view-controller Tetris game for the browser and desktop."""

from .board import Board, Cell
from .tetromino import SHAPES, Tetromino, TetrominoType, rotate_shape
from .game_state import GameState, SessionStatus
from .controller import Command, GameController, KEY_BINDINGS
from .utils import can_move, render_grid, tick_interval_ms
from .view import TextView, flatten_cells, render_text

__all__ = [
    "Board",
    "Cell",
    "Command",
    "GameController",
    "GameState",
    "KEY_BINDINGS",
    "SHAPES",
    "SessionStatus",
    "Tetromino",
    "TetrominoType",
    "TextView",
    "can_move",
    "flatten_cells",
    "render_grid",
    "render_text",
    "rotate_shape",
    "tick_interval_ms",
]
