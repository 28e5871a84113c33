"""Nonogram core data structures: cell states, puzzle definitions and the grid."""

from dataclasses import dataclass, field
from enum import Enum
from numbers import Integral
from typing import Iterable, List, Optional, Sequence, Tuple

Clues = Tuple[int, ...]


class NonogramError(Exception):
    """Base class for every error raised by the nonogram package."""


class MalformedPuzzleError(NonogramError, ValueError):
    """A puzzle definition is inconsistent (bad sizes, or clues that cannot fit their line)."""


class ContradictionError(NonogramError, RuntimeError):
    """A line admits no arrangement at all, or a rule tried to overwrite a known cell."""


class Cell(Enum):
    UNKNOWN = " "
    FILLED = "O"
    EMPTY = "X"

    @property
    def symbol(self) -> str:
        return self.value

    @classmethod
    def from_symbol(cls, symbol: str) -> "Cell":
        for cell in cls:
            if cell.value == symbol:
                return cell
        # '.' and '?' are common spellings of an undetermined cell.
        if symbol in (".", "?"):
            return cls.UNKNOWN
        raise ValueError(f"Unknown cell symbol: {symbol!r}")


Line = List[Cell]


def min_length(clues: Sequence[int]) -> int:
    """Smallest line length that can hold `clues` (runs plus single separators)."""
    runs = [c for c in clues if c > 0]
    if not runs:
        return 0
    return sum(runs) + len(runs) - 1


def clues_fit(clues: Sequence[int], length: int) -> bool:
    if not clues:
        return False
    if any(not isinstance(c, int) or isinstance(c, bool) or c < 0 for c in clues):
        return False
    if len(clues) > 1 and 0 in clues:
        return False
    return min_length(clues) <= length


def runs_of(line: Sequence[Cell]) -> List[int]:
    """Lengths of the maximal FILLED blocks of `line`, in order."""
    runs: List[int] = []
    current = 0
    for cell in line:
        if cell is Cell.FILLED:
            current += 1
        elif current:
            runs.append(current)
            current = 0
    if current:
        runs.append(current)
    return runs


def line_from_string(text: str) -> Line:
    return [Cell.from_symbol(ch) for ch in text]


def line_to_string(line: Iterable[Cell]) -> str:
    return "".join(cell.symbol for cell in line)


def _clue_tuple(clues: Iterable) -> Clues:
    # numpy integers become plain ints; anything else is left for validation to reject.
    return tuple(
        int(c) if isinstance(c, Integral) and not isinstance(c, bool) else c for c in clues
    ) or (0,)


@dataclass(frozen=True)
class Puzzle:
    """
    Immutable puzzle definition: grid dimensions plus one clue tuple per row and column.
    Clues are validated against their line length on construction; a clue tuple that
    cannot fit raises MalformedPuzzleError.
    """

    width: int
    height: int
    rows: Tuple[Clues, ...]
    cols: Tuple[Clues, ...]
    puzzle_id: Optional[str] = None

    def __post_init__(self) -> None:
        # Accept any nested sequences; an empty clue list means an all-empty line.
        object.__setattr__(self, "rows", tuple(_clue_tuple(r) for r in self.rows))
        object.__setattr__(self, "cols", tuple(_clue_tuple(c) for c in self.cols))
        self._validate()

    def _validate(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise MalformedPuzzleError(
                f"Puzzle dimensions must be positive, got {self.width}x{self.height}"
            )
        if len(self.rows) != self.height:
            raise MalformedPuzzleError(
                f"Expected {self.height} row clues, got {len(self.rows)}"
            )
        if len(self.cols) != self.width:
            raise MalformedPuzzleError(
                f"Expected {self.width} column clues, got {len(self.cols)}"
            )
        for index, clues in enumerate(self.rows):
            if not clues_fit(clues, self.width):
                raise MalformedPuzzleError(
                    f"Row {index} clues {list(clues)} do not fit width {self.width}"
                )
        for index, clues in enumerate(self.cols):
            if not clues_fit(clues, self.height):
                raise MalformedPuzzleError(
                    f"Column {index} clues {list(clues)} do not fit height {self.height}"
                )


@dataclass
class Grid:
    """Mutable height x width cell state, addressed as grid[row][col]."""

    width: int
    height: int
    cells: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[Cell.UNKNOWN] * self.width for _ in range(self.height)]
        elif len(self.cells) != self.height or any(len(r) != self.width for r in self.cells):
            raise ValueError("Grid cells do not match the declared dimensions")

    @classmethod
    def for_puzzle(cls, puzzle: Puzzle) -> "Grid":
        return cls(width=puzzle.width, height=puzzle.height)

    def get(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def set(self, row: int, col: int, value: Cell) -> None:
        self.cells[row][col] = value

    def row(self, index: int) -> Line:
        """The live row list; mutations show up in the grid."""
        return self.cells[index]

    def set_row(self, index: int, values: Sequence[Cell]) -> None:
        if len(values) != self.width:
            raise ValueError(f"Row length {len(values)} does not match width {self.width}")
        self.cells[index][:] = list(values)

    def col(self, index: int) -> Line:
        """A fresh list gathered from the grid; write it back with set_col."""
        return [self.cells[r][index] for r in range(self.height)]

    def set_col(self, index: int, values: Sequence[Cell]) -> None:
        if len(values) != self.height:
            raise ValueError(f"Column length {len(values)} does not match height {self.height}")
        for r, value in enumerate(values):
            self.cells[r][index] = value

    def unknown_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell is Cell.UNKNOWN)

    def snapshot(self) -> "Grid":
        return Grid(width=self.width, height=self.height, cells=[list(r) for r in self.cells])

    def as_strings(self) -> List[str]:
        return [line_to_string(row) for row in self.cells]
