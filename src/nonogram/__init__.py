"""Nonogram models, parsing, and line-propagation solver core."""

from .model import Cell, ContradictionError, Grid, MalformedPuzzleError, NonogramError, Puzzle
from .feasibility import is_feasible, leftmost_placement, rightmost_placement
from .line_solver import is_fully_solved, solve_line
from .solver_core import SolveResult, SolveStatus, solve
from .parser import parse_puzzle, parse_puzzle_text
from .render import render

__all__ = [
    "Cell",
    "ContradictionError",
    "Grid",
    "MalformedPuzzleError",
    "NonogramError",
    "Puzzle",
    "is_feasible",
    "leftmost_placement",
    "rightmost_placement",
    "is_fully_solved",
    "solve_line",
    "SolveResult",
    "SolveStatus",
    "solve",
    "parse_puzzle",
    "parse_puzzle_text",
    "render",
]
