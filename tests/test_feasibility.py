"""Unit tests for the leftmost-placement feasibility checker."""

from itertools import product

from src.nonogram.feasibility import is_feasible, leftmost_placement, rightmost_placement
from src.nonogram.model import Cell, line_from_string, runs_of


def L(text):
    return line_from_string(text)


def _full_lines_by_runs(length):
    table = {}
    for combo in product((Cell.FILLED, Cell.EMPTY), repeat=length):
        table.setdefault(tuple(runs_of(combo)), []).append(combo)
    return table


def _has_completion(candidates, line):
    return any(
        all(known is Cell.UNKNOWN or known is value for known, value in zip(line, full))
        for full in candidates
    )


def test_leftmost_placement_on_blank_line():
    assert leftmost_placement([2, 1], L("......")) == [0, 3]


def test_leftmost_placement_jumps_over_empty_cell():
    assert leftmost_placement([2, 1], L(".X....")) == [2, 5]


def test_leftmost_placement_shifts_away_from_adjacent_filled():
    # A run ending right before a FILLED cell would merge with it.
    assert leftmost_placement([1], L(".O..")) == [1]
    assert leftmost_placement([2], L("..O.")) == [1]


def test_leftmost_placement_pulls_last_run_onto_trailing_filled():
    assert leftmost_placement([1], L("...O")) == [3]
    assert leftmost_placement([1, 1], L("O.O")) == [0, 2]


def test_leftmost_placement_repairs_earlier_run():
    # Run 1 has to move onto the FILLED cell at index 2 once run 2 is pushed past it.
    assert leftmost_placement([1, 2], L("..O.O..")) == [2, 4]


def test_leftmost_placement_reports_uncoverable_cells():
    assert leftmost_placement([2], L(".O..O")) is None
    assert leftmost_placement([0], L("..O..")) is None
    assert leftmost_placement([3], L(".X.X.")) is None


def test_rightmost_placement_mirrors_leftmost():
    assert rightmost_placement([2, 1], L("......")) == [2, 5]
    assert rightmost_placement([1, 1], L("O.O")) == [0, 2]
    assert rightmost_placement([2], L("O.X..")) == [0]
    assert rightmost_placement([2], L(".O..O")) is None


def test_zero_clue_is_feasible_only_without_filled_cells():
    assert is_feasible([0], L("X..X"))
    assert not is_feasible([0], L("X.O."))


def test_feasibility_does_not_mutate_line():
    line = L(".O..X.")
    before = list(line)
    is_feasible([2, 1], line)
    assert line == before


def test_feasibility_matches_brute_force_for_short_lines():
    for length in range(1, 8):
        table = _full_lines_by_runs(length)
        for runs, candidates in table.items():
            clues = list(runs) or [0]
            for line in product((Cell.UNKNOWN, Cell.FILLED, Cell.EMPTY), repeat=length):
                expected = _has_completion(candidates, line)
                assert is_feasible(clues, line) == expected, (clues, line)


def test_leftmost_placement_is_consistent_with_known_cells():
    for length in range(1, 7):
        for runs in _full_lines_by_runs(length):
            if not runs:
                continue
            for line in product((Cell.UNKNOWN, Cell.FILLED, Cell.EMPTY), repeat=length):
                starts = leftmost_placement(list(runs), line)
                if starts is None:
                    continue
                placed = [Cell.EMPTY] * length
                for start, size in zip(starts, runs):
                    for i in range(start, start + size):
                        placed[i] = Cell.FILLED
                assert runs_of(placed) == list(runs)
                assert all(k is Cell.UNKNOWN or k is v for k, v in zip(line, placed))
