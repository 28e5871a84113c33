"""Integration-style tests for the top-level solve interface."""

import pytest

from solver import solve_puzzle
from src.nonogram.model import Puzzle
from src.nonogram.solver_core import SolveStatus
from src.utils.trace import Tracer


def test_solver_accepts_puzzle_record_and_text():
    record = {
        "id": "plus",
        "cols": [[1], [1], [5], [1], [1]],
        "rows": [[1], [1], [5], [1], [1]],
    }
    from_record = solve_puzzle(record, tracer=Tracer())
    assert from_record.status is SolveStatus.SOLVED
    assert from_record.as_strings()[2] == "OOOOO"
    assert from_record.as_strings()[0] == "XXOXX"

    from_text = solve_puzzle("1,1\n\n1\n\n1\n", tracer=Tracer())
    assert from_text.as_strings() == ["O"]

    puzzle = Puzzle(width=1, height=1, rows=[[0]], cols=[[0]])
    assert solve_puzzle(puzzle, tracer=Tracer()).as_strings() == ["X"]


def test_solver_rejects_other_inputs():
    with pytest.raises(TypeError):
        solve_puzzle(42)
