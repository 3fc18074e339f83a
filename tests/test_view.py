import io

from webtetris.board import Cell
from webtetris.view import TextView, flatten_cells, render_text


GRID = [
    [0, 2, 2],
    [1, 0, 1],
]


def test_flatten_cells_is_row_major():
    assert flatten_cells(GRID) == [
        Cell.EMPTY, Cell.ACTIVE, Cell.ACTIVE, Cell.FILLED, Cell.EMPTY, Cell.FILLED,
    ]


def test_render_text_marks_each_cell():
    assert render_text(GRID) == ".@@\n#.#"


def test_text_view_keeps_last_frame_and_reports_game_over():
    stream = io.StringIO()
    view = TextView(stream, echo=False)
    view.render(GRID, 140, 1)
    assert view.frame == ".@@\n#.#"
    assert (view.score_text, view.level_text) == ("140", "1")
    assert stream.getvalue() == ""

    view.game_over(140)
    assert view.final_score == 140
    assert stream.getvalue() == "Game over! Your score: 140\n"
