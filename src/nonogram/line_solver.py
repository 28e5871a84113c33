"""Single-line deduction: every cell forced by one row's or column's clues alone.

`solve_line` tries a few cheap rules first and falls back to the general method,
which sets each unknown cell both ways and keeps whichever value stays feasible.
Only UNKNOWN cells are ever written; a rule that would overwrite a known cell
raises ContradictionError.
"""

from typing import Callable, List, Optional, Sequence, Tuple

from .feasibility import is_feasible
from .model import Cell, ContradictionError, Line, line_to_string, min_length, runs_of

RULE_ZERO = "zero"
RULE_DOMINANT = "dominant"
RULE_EXACT = "exact"
RULE_PARTIAL = "partial"
RULE_GENERAL = "general"


def is_fully_solved(clues: Sequence[int], line: Sequence[Cell]) -> bool:
    """
    True when the FILLED runs of `line` are exactly `clues`, in order.
    UNKNOWN cells count as gaps, so a True result means reading every UNKNOWN
    as EMPTY gives a concrete solution of the line.
    """
    return runs_of(line) == [c for c in clues if c > 0]


def _write(line: Line, index: int, value: Cell, clues: Sequence[int]) -> None:
    current = line[index]
    if current is Cell.UNKNOWN:
        line[index] = value
    elif current is not value:
        raise ContradictionError(
            f"Clues {list(clues)} force cell {index} to {value.name} but it is {current.name} "
            f"in |{line_to_string(line)}|"
        )


def _zero_clue(clues: Sequence[int], line: Line) -> bool:
    if list(clues) != [0] or all(cell is Cell.EMPTY for cell in line):
        return False
    for i in range(len(line)):
        _write(line, i, Cell.EMPTY, clues)
    return True


def _dominant_run(clues: Sequence[int], line: Line) -> bool:
    if len(clues) != 1:
        return False
    size = clues[0]
    length = len(line)
    if size * 2 <= length:
        return False
    # Leftmost and rightmost placements always share [length - size, size).
    overlap = range(length - size, size)
    if all(line[i] is Cell.FILLED for i in overlap):
        return False
    for i in overlap:
        _write(line, i, Cell.FILLED, clues)
    return True


def _exact_fit(clues: Sequence[int], line: Line) -> bool:
    if sum(clues) + len(clues) - 1 != len(line):
        return False
    index = 0
    for size in clues:
        for i in range(index, index + size):
            _write(line, i, Cell.FILLED, clues)
        if index + size < len(line):
            _write(line, index + size, Cell.EMPTY, clues)
        index += size + 1
    return True


def _partial_single_run(clues: Sequence[int], line: Line) -> bool:
    if len(clues) != 1:
        return False
    size = clues[0]
    filled = [i for i, cell in enumerate(line) if cell is Cell.FILLED]
    if not filled or len(filled) >= size:
        return False

    left_filled, right_filled = filled[0], filled[-1]
    # The single run has to cover both extremes without crossing an EMPTY cell.
    left_wall = -1
    for i in range(left_filled - 1, -1, -1):
        if line[i] is Cell.EMPTY:
            left_wall = i
            break
    right_wall = len(line)
    for i in range(right_filled + 1, len(line)):
        if line[i] is Cell.EMPTY:
            right_wall = i
            break

    earliest = max(left_wall + 1, right_filled - size + 1)
    latest = min(left_filled, right_wall - size)
    if earliest > latest:
        raise ContradictionError(
            f"Single run {size} cannot cover cells {left_filled}..{right_filled} "
            f"in |{line_to_string(line)}|"
        )

    for i in range(len(line)):
        if i < earliest or i >= latest + size:
            _write(line, i, Cell.EMPTY, clues)
        elif latest <= i < earliest + size:
            _write(line, i, Cell.FILLED, clues)
    return True


def _general(clues: Sequence[int], line: Line) -> bool:
    if not is_feasible(clues, line):
        raise ContradictionError(
            f"Clues {list(clues)} admit no arrangement of |{line_to_string(line)}|"
        )
    for i, cell in enumerate(line):
        if cell is not Cell.UNKNOWN:
            continue
        line[i] = Cell.FILLED
        if not is_feasible(clues, line):
            line[i] = Cell.EMPTY
            continue
        line[i] = Cell.EMPTY
        if not is_feasible(clues, line):
            line[i] = Cell.FILLED
            continue
        line[i] = Cell.UNKNOWN
    return True


FAST_PATHS: List[Tuple[str, Callable[[Sequence[int], Line], bool]]] = [
    (RULE_ZERO, _zero_clue),
    (RULE_DOMINANT, _dominant_run),
    (RULE_EXACT, _exact_fit),
    (RULE_PARTIAL, _partial_single_run),
]


def apply_line_rules(
    clues: Sequence[int], line: Sequence[Cell], use_fast_paths: bool = True
) -> Tuple[Optional[str], Line]:
    """
    Run the first applicable rule on a copy of `line`.
    Returns (rule name, new line); the rule name is None when the line was
    already fully determined.
    """
    work = list(line)
    if Cell.UNKNOWN not in work:
        return None, work
    if min_length(clues) > len(work):
        raise ContradictionError(f"Clues {list(clues)} do not fit a line of length {len(work)}")

    rule = RULE_GENERAL
    fired = False
    if use_fast_paths:
        for name, fast_path in FAST_PATHS:
            if fast_path(clues, work):
                rule, fired = name, True
                break
    if not fired:
        _general(clues, work)

    if Cell.UNKNOWN in work and is_fully_solved(clues, work):
        work = [Cell.EMPTY if cell is Cell.UNKNOWN else cell for cell in work]
    return rule, work


def solve_line(
    clues: Sequence[int], line: Sequence[Cell], use_fast_paths: bool = True
) -> Optional[Line]:
    """New line with every cell forced by `clues`, or None if nothing changed."""
    _, result = apply_line_rules(clues, line, use_fast_paths=use_fast_paths)
    if result == list(line):
        return None
    return result
