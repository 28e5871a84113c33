from src.nonogram.model import Puzzle
from src.nonogram.render import render
from src.nonogram.solver_core import solve
from src.utils.trace import Tracer

HEART = Puzzle(
    width=5,
    height=5,
    cols=[[2], [4], [4], [4], [2]],
    rows=[[1, 1], [5], [5], [3], [1]],
)


def test_render_solved_grid_with_margins():
    result = solve(HEART, tracer=Tracer())
    assert render(HEART, result.grid) == (
        "    24442\n"
        "1 1 XOXOX\n"
        "  5 OOOOO\n"
        "  5 OOOOO\n"
        "  3 XOOOX\n"
        "  1 XXOXX\n"
    )


def test_render_can_hide_crossed_out_cells():
    result = solve(HEART, tracer=Tracer())
    text = render(HEART, result.grid, show_crossed_out=False)
    assert text.splitlines()[1] == "1 1  O O "
    assert "X" not in text


def test_render_blank_grid_stacks_column_clues():
    puzzle = Puzzle(width=3, height=3, cols=[[1, 1], [0], [2]], rows=[[1, 1], [1], [1, 1]])
    assert render(puzzle) == (
        "    1\n"
        "    102\n"
        "1 1    \n"
        "  1    \n"
        "1 1    \n"
    )


def test_render_pads_cells_for_wide_column_clues():
    puzzle = Puzzle(width=1, height=12, cols=[[12]], rows=[[1]] * 12)
    lines = render(puzzle).splitlines()
    assert lines[0] == "  12"
    assert lines[1] == "1   "
    assert len(lines) == 13
