"""Top-level nonogram solve interface.

Expose `solve_puzzle(puzzle)` that accepts either a pre-built Puzzle or a raw
puzzle dictionary compatible with `src.nonogram.parser.parse_puzzle`.
"""

from typing import Any, Optional

from src.nonogram import solver_core
from src.nonogram.model import Puzzle
from src.nonogram.parser import parse_puzzle, parse_puzzle_text
from src.nonogram.solver_core import PassCallback, SolveResult
from src.utils.trace import Tracer


def solve_puzzle(
    puzzle: Any,
    tracer: Optional[Tracer] = None,
    on_pass: Optional[PassCallback] = None,
) -> SolveResult:
    """
    Solve a puzzle and return its SolveResult (status, grid, pass count).
    Accepts:
      - Puzzle instances (used directly)
      - Raw puzzle dictionaries (parsed via `parse_puzzle`)
      - Puzzle text in the size/columns/rows format
    """
    if isinstance(puzzle, Puzzle):
        definition = puzzle
    elif isinstance(puzzle, dict):
        definition = parse_puzzle(puzzle)
    elif isinstance(puzzle, str):
        definition = parse_puzzle_text(puzzle)
    else:
        raise TypeError("solve_puzzle expects a Puzzle, a puzzle dictionary or puzzle text")

    return solver_core.solve(definition, tracer=tracer, on_pass=on_pass)


__all__ = ["solve_puzzle"]
