"""Grid-level propagation: apply the line solver to every unsolved row and column until nothing changes."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Set

from .line_solver import apply_line_rules, is_fully_solved
from .model import Cell, ContradictionError, Grid, Line, MalformedPuzzleError, Puzzle
from src.utils.trace import Tracer, get_tracer

PassCallback = Callable[[int, Grid], None]

AXIS_COL = "col"
AXIS_ROW = "row"


class SolveStatus(Enum):
    SOLVED = "solved"
    STUCK = "stuck"


@dataclass
class SolveResult:
    status: SolveStatus
    grid: Grid
    passes: int = 0
    lines_updated: int = 0
    unsolved_rows: List[int] = field(default_factory=list)
    unsolved_cols: List[int] = field(default_factory=list)

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.SOLVED

    def as_strings(self) -> List[str]:
        return self.grid.as_strings()


def is_grid_solved(puzzle: Puzzle, grid: Grid) -> bool:
    """Every row and every column satisfies its clues."""
    for index, clues in enumerate(puzzle.rows):
        if not is_fully_solved(clues, grid.row(index)):
            return False
    for index, clues in enumerate(puzzle.cols):
        if not is_fully_solved(clues, grid.col(index)):
            return False
    return True


def solve(
    puzzle: Puzzle,
    tracer: Optional[Tracer] = None,
    on_pass: Optional[PassCallback] = None,
    use_fast_paths: bool = True,
    grid: Optional[Grid] = None,
) -> SolveResult:
    """
    Propagate single-line deductions across the whole grid.

    Each pass visits every unsolved column, then every unsolved row. The loop
    ends SOLVED once no line is left unsolved, or STUCK after a pass in which no
    line changed. `on_pass(pass_number, snapshot)` is called after every pass.
    A contradiction found along the way raises ContradictionError. A `grid`
    passed in to resume from must match the puzzle's dimensions.
    """
    tracer = tracer or get_tracer()
    if grid is None:
        grid = Grid.for_puzzle(puzzle)
    elif (grid.width, grid.height) != (puzzle.width, puzzle.height):
        raise MalformedPuzzleError(
            f"Grid is {grid.width}x{grid.height} but the puzzle is {puzzle.width}x{puzzle.height}"
        )
    unsolved_cols: Set[int] = set(range(puzzle.width))
    unsolved_rows: Set[int] = set(range(puzzle.height))
    passes = 0
    lines_updated = 0

    while unsolved_cols or unsolved_rows:
        passes += 1
        changed = 0
        for index in sorted(unsolved_cols):
            outcome = _process_line(
                puzzle.cols[index], grid.col(index), AXIS_COL, index, tracer, use_fast_paths
            )
            if outcome.updated is not None:
                grid.set_col(index, outcome.updated)
                changed += 1
            if outcome.complete:
                unsolved_cols.discard(index)
        for index in sorted(unsolved_rows):
            outcome = _process_line(
                puzzle.rows[index], grid.row(index), AXIS_ROW, index, tracer, use_fast_paths
            )
            if outcome.updated is not None:
                grid.set_row(index, outcome.updated)
                changed += 1
            if outcome.complete:
                unsolved_rows.discard(index)

        lines_updated += changed
        tracer.log_pass(
            pass_number=passes,
            lines_changed=changed,
            unsolved_lines=len(unsolved_cols) + len(unsolved_rows),
            unknown_cells=grid.unknown_count(),
        )
        if on_pass is not None:
            on_pass(passes, grid.snapshot())

        if not changed and (unsolved_cols or unsolved_rows):
            tracer.log_stuck(
                pass_number=passes,
                unsolved_lines=len(unsolved_cols) + len(unsolved_rows),
            )
            return SolveResult(
                status=SolveStatus.STUCK,
                grid=grid,
                passes=passes,
                lines_updated=lines_updated,
                unsolved_rows=sorted(unsolved_rows),
                unsolved_cols=sorted(unsolved_cols),
            )

    if not is_grid_solved(puzzle, grid):
        tracer.log_contradiction("grid", None, "All lines marked solved but the grid fails its clues")
        raise ContradictionError("All lines were marked solved but the grid does not satisfy its clues")

    tracer.log_solution_found(filled_cells=sum(r.count(Cell.FILLED) for r in grid.cells))
    return SolveResult(
        status=SolveStatus.SOLVED,
        grid=grid,
        passes=passes,
        lines_updated=lines_updated,
    )


@dataclass
class _LineOutcome:
    updated: Optional[Line] = None
    complete: bool = False


def _process_line(
    clues, line: Line, axis: str, index: int, tracer: Tracer, use_fast_paths: bool
) -> _LineOutcome:
    if Cell.UNKNOWN not in line:
        if not is_fully_solved(clues, line):
            message = f"Fully determined {axis} {index} does not match clues {list(clues)}"
            tracer.log_contradiction(axis, index, message)
            raise ContradictionError(message)
        tracer.log_line_completed(axis, index)
        return _LineOutcome(complete=True)

    try:
        rule, result = apply_line_rules(clues, line, use_fast_paths=use_fast_paths)
    except ContradictionError as exc:
        tracer.log_contradiction(axis, index, str(exc))
        raise

    if result == line:
        return _LineOutcome()

    changed = sum(1 for old, new in zip(line, result) if old is not new)
    tracer.log_line_solved(axis, index, rule=rule, cells_changed=changed)
    complete = is_fully_solved(clues, result)
    if complete:
        tracer.log_line_completed(axis, index)
    return _LineOutcome(updated=result, complete=complete)
