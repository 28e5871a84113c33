"""Text rendering of a puzzle's clue margins and current grid state.

Column clues are stacked above the grid and aligned to its top edge; row clues
sit to the left, right-aligned. Looks best with a monospaced font.
"""

from typing import List, Optional

from .model import Cell, Grid, Puzzle


def _row_label(clues) -> str:
    return " ".join(str(c) for c in clues)


def render(puzzle: Puzzle, grid: Optional[Grid] = None, show_crossed_out: bool = True) -> str:
    grid = grid or Grid.for_puzzle(puzzle)
    cell_width = max(len(str(c)) for clues in puzzle.cols for c in clues)
    margin = max(len(_row_label(clues)) for clues in puzzle.rows) + 1
    depth = max(len(clues) for clues in puzzle.cols)

    lines: List[str] = []
    for level in range(depth):
        parts = [" " * margin]
        for clues in puzzle.cols:
            offset = len(clues) - depth + level
            parts.append((str(clues[offset]) if offset >= 0 else "").rjust(cell_width))
        lines.append("".join(parts).rstrip())

    for index, clues in enumerate(puzzle.rows):
        parts = [(_row_label(clues) + " ").rjust(margin)]
        for cell in grid.row(index):
            symbol = cell.symbol
            if cell is Cell.EMPTY and not show_crossed_out:
                symbol = " "
            parts.append(symbol.rjust(cell_width))
        lines.append("".join(parts))
    return "\n".join(lines) + "\n"
