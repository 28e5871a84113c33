"""Feasibility of a clue sequence against a partially known line.

The check is constructive: it builds the leftmost placement of every run that agrees
with the known cells, repairing the placement whenever a FILLED cell is left
uncovered. A line is feasible exactly when such a placement exists.
"""

from typing import List, Optional, Sequence

from .model import Cell

Placement = List[int]


def _first_index(line: Sequence[Cell], value: Cell, start: int, end: int) -> Optional[int]:
    for i in range(max(start, 0), min(end, len(line))):
        if line[i] is value:
            return i
    return None


def _last_index(line: Sequence[Cell], value: Cell, start: int, end: int) -> Optional[int]:
    for i in range(min(end, len(line)) - 1, max(start, 0) - 1, -1):
        if line[i] is value:
            return i
    return None


def _fit_run(line: Sequence[Cell], length: int, start: int) -> Optional[int]:
    """
    Earliest position >= `start` where a run of `length` covers no EMPTY cell and is
    not directly followed by a FILLED cell (which would lengthen the run).
    Returns None when the run no longer fits before the end of the line.
    """
    n = len(line)
    pos = start
    while pos + length <= n:
        blocked = _last_index(line, Cell.EMPTY, pos, pos + length)
        if blocked is not None:
            # Every start up to `blocked` would still cover it.
            pos = blocked + 1
            continue
        if pos + length < n and line[pos + length] is Cell.FILLED:
            pos += 1
            continue
        return pos
    return None


def _covers_known_cells(runs: Sequence[int], starts: Sequence[int], line: Sequence[Cell]) -> bool:
    covered = [False] * len(line)
    for length, start in zip(runs, starts):
        for i in range(start, start + length):
            covered[i] = True
    for i, cell in enumerate(line):
        if cell is Cell.FILLED and not covered[i]:
            return False
        if cell is Cell.EMPTY and covered[i]:
            return False
    return True


def leftmost_placement(clues: Sequence[int], line: Sequence[Cell]) -> Optional[Placement]:
    """
    Start index of every run in the leftmost placement consistent with `line`,
    or None if no placement exists. Zero-valued clues contribute no run.
    """
    runs = [c for c in clues if c > 0]
    n = len(line)
    starts = [0] * len(runs)
    j = 0
    pos = 0

    while True:
        if j == len(runs):
            tail = starts[j - 1] + runs[j - 1] if runs else 0
            stray = _first_index(line, Cell.FILLED, tail, n)
            if stray is None:
                break
        else:
            start = _fit_run(line, runs[j], pos)
            if start is None:
                return None
            prev_end = starts[j - 1] + runs[j - 1] if j else 0
            stray = _first_index(line, Cell.FILLED, prev_end, start)
            if stray is None:
                starts[j] = start
                pos = start + runs[j] + 1
                j += 1
                continue

        # A FILLED cell sits between two runs (or after the last one): the run before
        # it has to slide right far enough to cover it.
        if j == 0:
            return None
        j -= 1
        pos = stray - runs[j] + 1

    if not _covers_known_cells(runs, starts, line):
        return None
    return starts


def rightmost_placement(clues: Sequence[int], line: Sequence[Cell]) -> Optional[Placement]:
    """Mirror of leftmost_placement: every run pushed as far right as the line allows."""
    runs = [c for c in clues if c > 0]
    n = len(line)
    mirrored = leftmost_placement(list(reversed(runs)), list(reversed(line)))
    if mirrored is None:
        return None
    return [n - (start + length) for start, length in zip(reversed(mirrored), runs)]


def is_feasible(clues: Sequence[int], line: Sequence[Cell]) -> bool:
    """True iff some assignment of the UNKNOWN cells of `line` satisfies `clues` exactly."""
    return leftmost_placement(clues, line) is not None
