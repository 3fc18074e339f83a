import random

import numpy as np
import pytest

from webtetris.board import Cell
from webtetris.game_state import GameState, SessionStatus
from webtetris.tetromino import SHAPES, Tetromino, TetrominoType


class FixedRng:
    """Stand-in for ``random.Random`` that always picks ``kind``."""

    def __init__(self, kind: TetrominoType) -> None:
        self.kind = kind

    def choice(self, _seq):
        return self.kind


def new_game(kind: TetrominoType = TetrominoType.I) -> GameState:
    state = GameState(rng=FixedRng(kind))
    state.start()
    return state


def drop(state: GameState) -> None:
    while state.move_down():
        pass


def test_new_state_is_not_started():
    state = GameState()
    assert state.status is SessionStatus.NOT_STARTED
    assert state.active is None
    assert state.level == 1
    assert not state.move_down()
    assert not state.rotate()
    assert not state.try_move(1)


def test_start_resets_board_and_spawns_piece():
    state = GameState(rng=random.Random(7))
    state.board.fill_row(19)
    state.score = 1500
    state.level = 2
    state.start()
    assert not state.board.grid.any()
    assert state.status is SessionStatus.PLAYING
    assert state.active is not None and state.active.y == 0
    assert (state.score, state.level) == (0, 1)


def test_seeded_rng_gives_repeatable_pieces():
    kinds = []
    for _ in range(2):
        state = GameState(rng=random.Random(42))
        state.start()
        kinds.append([state.spawn_piece().kind for _ in range(10)])
    assert kinds[0] == kinds[1]


def test_rejected_move_leaves_state_untouched():
    state = new_game()
    for _ in range(3):
        assert state.move_left()
    piece = state.active
    assert piece.x == 0
    assert not state.move_left()
    assert state.active is piece
    assert not state.board.grid.any()


def test_move_blocked_by_filled_cell():
    state = new_game()
    state.board.set_cell(0, 7, Cell.FILLED)
    piece = state.active
    assert not state.move_right()
    assert state.active is piece


def test_i_piece_falls_to_bottom_row():
    state = new_game(TetrominoType.I)
    assert (state.active.x, state.active.y) == (3, 0)
    for _ in range(19):
        assert state.try_move(0, 1)
    assert not state.try_move(0, 1)
    assert state.active.y == 19

    state.board.lock_piece(state.active)
    assert state.clear_lines() == 0
    assert [state.board.get_cell(19, c) for c in range(3, 7)] == [Cell.FILLED] * 4


def test_free_piece_rotated_four_times_returns_to_start():
    state = new_game(TetrominoType.T)
    state.active = state.active.moved(0, 8)
    start_piece = state.active
    for _ in range(4):
        assert state.rotate()
    assert state.active.shape == start_piece.shape
    assert (state.active.x, state.active.y) == (start_piece.x, start_piece.y)


def test_colliding_rotation_is_rejected():
    state = new_game(TetrominoType.I)
    state.board.set_cell(2, 3, Cell.FILLED)
    piece = state.active
    assert not state.rotate()
    assert state.active is piece
    assert state.active.shape == SHAPES[TetrominoType.I]


def test_rotation_past_the_floor_is_rejected():
    state = new_game(TetrominoType.I)
    while state.try_move(0, 1):
        pass
    assert not state.rotate()


def test_single_line_clear_scores_forty_per_level():
    state = new_game(TetrominoType.I)
    state.board.fill_row(19, skip=(3, 4, 5, 6))
    drop(state)
    assert state.lines == 1
    assert state.score == 40
    assert not state.board.grid.any()
    assert state.status is SessionStatus.PLAYING


def test_line_clear_points_scale_with_level():
    state = new_game(TetrominoType.I)
    state.score = 2000
    state.level = 3
    state.board.fill_row(19, skip=(3, 4, 5, 6))
    drop(state)
    assert state.score == 2000 + 40 * 3


def test_drops_without_clears_keep_score_and_level():
    state = new_game(TetrominoType.O)
    for _ in range(5):
        drop(state)
    assert state.pieces == 5
    assert state.score == 0
    assert state.level == 1
    assert int(np.count_nonzero(state.board.grid)) == 20


def test_level_follows_score_after_each_award():
    state = GameState()
    for lines in (4, 0, 1, 4, 3, 2, 4):
        state.score_for(lines)
        assert state.level == state.score // 1000 + 1
    assert state.level > 1


def test_score_for_rejects_impossible_counts():
    state = GameState()
    with pytest.raises(ValueError):
        state.score_for(5)


def test_blocked_spawn_ends_the_game():
    state = new_game(TetrominoType.I)
    for col in range(3, 7):
        state.board.set_cell(1, col, Cell.FILLED)

    assert not state.move_down()
    assert state.game_over
    assert state.status is SessionStatus.GAME_OVER

    grid = state.board.grid.copy()
    piece = state.active
    assert not state.move_left()
    assert not state.move_right()
    assert not state.rotate()
    assert not state.move_down()
    assert np.array_equal(state.board.grid, grid)
    assert state.active is piece


def test_start_after_game_over_plays_again():
    state = new_game(TetrominoType.I)
    for col in range(3, 7):
        state.board.set_cell(1, col, Cell.FILLED)
    state.move_down()
    assert state.game_over
    state.start()
    assert state.status is SessionStatus.PLAYING
    assert state.move_down()


def test_snapshot_overlays_active_piece_without_locking():
    state = new_game(TetrominoType.O)
    state.board.set_cell(19, 0, Cell.FILLED)
    grid = state.snapshot()
    assert len(grid) == 20 and all(len(row) == 10 for row in grid)
    assert grid[19][0] == Cell.FILLED
    assert [grid[r][c] for r in (0, 1) for c in (4, 5)] == [Cell.ACTIVE] * 4
    assert state.board.get_cell(0, 4) == Cell.EMPTY


def test_snapshot_skips_cells_above_the_board():
    state = new_game(TetrominoType.O)
    state.active = Tetromino.spawn(TetrominoType.O, 10).moved(0, -1)
    grid = state.snapshot()
    assert sum(cell == Cell.ACTIVE for row in grid for cell in row) == 2
