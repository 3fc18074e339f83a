"""High level game state container."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
import logging
import random

from .board import Board
from .tetromino import Shape, Tetromino, TetrominoType
from .utils import can_move, level_for_score, line_clear_points, render_grid


logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    NOT_STARTED = "not_started"
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass
class GameState:
    """Mutable state for a Tetris game session.

    ``rng`` supplies piece selection; pass a seeded :class:`random.Random` for
    a reproducible piece sequence.
    """

    board: Board = field(default_factory=Board)
    active: Optional[Tetromino] = None
    score: int = 0
    level: int = 1
    lines: int = 0
    pieces: int = 0
    status: SessionStatus = SessionStatus.NOT_STARTED
    rng: random.Random = field(default_factory=random.Random, repr=False)

    @property
    def game_over(self) -> bool:
        return self.status is SessionStatus.GAME_OVER

    @property
    def playing(self) -> bool:
        return self.status is SessionStatus.PLAYING and self.active is not None

    def init_board(self) -> None:
        """Reset the grid so that every cell is empty."""

        self.board.reset()

    def start(self) -> Tetromino:
        """Begin a new session and return its first piece.

        Any previous session, finished or not, is discarded.
        """

        self.init_board()
        self.score = 0
        self.level = 1
        self.lines = 0
        self.pieces = 0
        self.active = None
        self.status = SessionStatus.PLAYING
        return self.spawn_piece()

    def _random_type(self) -> TetrominoType:
        """Return a random tetromino type."""

        return self.rng.choice(list(TetrominoType))

    def spawn_piece(self) -> Tetromino:
        """Spawn and return a new active tetromino.

        The piece is centred horizontally on the top row.  Whether it actually
        fits is left to the caller.
        """

        self.active = Tetromino.spawn(self._random_type(), self.board.width)
        return self.active

    def try_move(self, dx: int, dy: int = 0, shape: Optional[Shape] = None) -> bool:
        """Move the active piece by ``(dx, dy)``, optionally swapping its shape.

        The move is committed only if every block of the candidate piece is on
        an empty cell; otherwise nothing changes and ``False`` is returned.
        """

        if not self.playing:
            return False
        candidate = self.active if shape is None else self.active.with_shape(shape)
        if not can_move(self.board, candidate, dx, dy):
            return False
        self.active = candidate.moved(dx, dy)
        return True

    def move_left(self) -> bool:
        return self.try_move(-1)

    def move_right(self) -> bool:
        return self.try_move(1)

    def rotate(self) -> bool:
        """Rotate the active piece clockwise in place.

        There are no wall kicks: a rotation that would collide is rejected and
        the piece keeps its orientation.
        """

        if not self.playing:
            return False
        return self.try_move(0, 0, self.active.rotated().shape)

    def move_down(self) -> bool:
        """Advance the active piece one row.

        Returns ``True`` while the piece is still falling.  When it cannot move
        any further it is locked into the board, full rows are cleared and
        scored, and the next piece is spawned; ``False`` is returned.  If the
        new piece does not fit the session ends.
        """

        if not self.playing:
            return False
        if self.try_move(0, 1):
            return True

        self.board.lock_piece(self.active)
        self.pieces += 1
        self.score_for(self.clear_lines())
        self.spawn_piece()
        if not can_move(self.board, self.active, 0, 0):
            self.status = SessionStatus.GAME_OVER
            logger.info("Game over. Final score: %d", self.score)
        return False

    def clear_lines(self) -> int:
        """Remove full rows from the board and return how many were removed."""

        cleared = self.board.clear_full_rows()
        if cleared:
            self.lines += cleared
            logger.debug("Cleared %d row(s)", cleared)
        return cleared

    def score_for(self, lines_cleared: int) -> int:
        """Award points for ``lines_cleared`` rows and return the new score.

        The level always follows the score: one level per thousand points.
        """

        self.score += line_clear_points(lines_cleared, self.level)
        self.level = level_for_score(self.score)
        return self.score

    def snapshot(self) -> List[List[int]]:
        """Return the board with the active piece overlaid for rendering."""

        return render_grid(self.board, self.active)
