"""Puzzle parser: convert puzzle text or records into Puzzle definitions.

Supports:
- the plain text format: a "width,height" line, a blank line, one comma-separated
  clue line per column, a blank line, one clue line per row
- dict records with explicit "width"/"height"/"cols"/"rows" keys, or with the
  text format stored under "puzzle"
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .model import MalformedPuzzleError, Puzzle

_SEPARATOR = re.compile(r"[,\s]+")


def parse_clue_line(raw: str) -> Tuple[int, ...]:
    """'3,1,2' (or '3 1 2') -> (3, 1, 2). An empty line is rejected."""
    tokens = [t for t in _SEPARATOR.split(raw.strip()) if t]
    if not tokens:
        raise MalformedPuzzleError("Empty clue line")
    try:
        values = tuple(int(t) for t in tokens)
    except ValueError as exc:
        raise MalformedPuzzleError(f"Clue line {raw!r} is not a list of integers") from exc
    if any(v < 0 for v in values):
        raise MalformedPuzzleError(f"Clue line {raw!r} contains a negative value")
    return values


def _split_sections(text: str) -> List[List[str]]:
    sections: List[List[str]] = []
    current: List[str] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith("#"):
            continue
        if not line:
            if current:
                sections.append(current)
                current = []
            continue
        current.append(line)
    if current:
        sections.append(current)
    return sections


def _parse_size(line: str) -> Tuple[int, int]:
    parts = [p for p in _SEPARATOR.split(line.lower().replace("x", ",")) if p]
    if len(parts) != 2:
        raise MalformedPuzzleError(f"Size line {line!r} must be 'width,height'")
    try:
        width, height = int(parts[0]), int(parts[1])
    except ValueError as exc:
        raise MalformedPuzzleError(f"Size line {line!r} must be 'width,height'") from exc
    return width, height


def parse_puzzle_text(text: str, puzzle_id: Optional[str] = None) -> Puzzle:
    sections = _split_sections(text)
    if len(sections) != 3:
        raise MalformedPuzzleError(
            f"Expected 3 sections (size, columns, rows) separated by blank lines, got {len(sections)}"
        )
    size_section, col_section, row_section = sections
    if len(size_section) != 1:
        raise MalformedPuzzleError("Size section must be a single 'width,height' line")

    width, height = _parse_size(size_section[0])
    cols = [parse_clue_line(line) for line in col_section]
    rows = [parse_clue_line(line) for line in row_section]
    return Puzzle(width=width, height=height, rows=tuple(rows), cols=tuple(cols), puzzle_id=puzzle_id)


def _as_clue(value: Any) -> int:
    if isinstance(value, bool):
        raise MalformedPuzzleError(f"Clue {value!r} is not an integer")
    try:
        clue = int(value)
    except (TypeError, ValueError) as exc:
        raise MalformedPuzzleError(f"Clue {value!r} is not an integer") from exc
    # int() truncates floats; 2.0 is fine, 2.7 is not.
    if clue != value:
        raise MalformedPuzzleError(f"Clue {value!r} is not an integer")
    return clue


def _coerce_clues(value: Any) -> Tuple[int, ...]:
    if isinstance(value, str):
        if not value.strip():
            return (0,)
        return parse_clue_line(value)
    if hasattr(value, "tolist"):
        value = value.tolist()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = [value]
    if not isinstance(value, Sequence):
        raise MalformedPuzzleError(f"Cannot read clues from {value!r}")
    clues = tuple(_as_clue(v) for v in value)
    if any(v < 0 for v in clues):
        raise MalformedPuzzleError(f"Clues {list(clues)} contain a negative value")
    return clues or (0,)


def _coerce_clue_list(value: Any, label: str) -> List[Tuple[int, ...]]:
    if hasattr(value, "tolist"):
        value = value.tolist()
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise MalformedPuzzleError(f"'{label}' must be a list of clue lists")
    return [_coerce_clues(v) for v in value]


def parse_puzzle(puzzle_json: Dict[str, Any]) -> Puzzle:
    """Build a Puzzle from a raw record (see module docstring for accepted shapes)."""
    puzzle_id = puzzle_json.get("id")
    puzzle_id = str(puzzle_id) if puzzle_id is not None else None

    text = puzzle_json.get("puzzle")
    if isinstance(text, str) and text.strip():
        return parse_puzzle_text(text, puzzle_id=puzzle_id)

    cols_value = puzzle_json.get("cols", puzzle_json.get("columns"))
    rows_value = puzzle_json.get("rows")
    if cols_value is None or rows_value is None:
        raise MalformedPuzzleError("Puzzle record needs either 'puzzle' text or 'cols' and 'rows'")

    cols = _coerce_clue_list(cols_value, "cols")
    rows = _coerce_clue_list(rows_value, "rows")
    try:
        width = int(puzzle_json.get("width", len(cols)))
        height = int(puzzle_json.get("height", len(rows)))
    except (TypeError, ValueError) as exc:
        raise MalformedPuzzleError("'width' and 'height' must be integers") from exc
    return Puzzle(width=width, height=height, rows=tuple(rows), cols=tuple(cols), puzzle_id=puzzle_id)


def puzzle_to_record(puzzle: Puzzle) -> Dict[str, Any]:
    """Plain-JSON form of a Puzzle, accepted back by parse_puzzle."""
    return {
        "id": puzzle.puzzle_id,
        "width": puzzle.width,
        "height": puzzle.height,
        "cols": [list(c) for c in puzzle.cols],
        "rows": [list(r) for r in puzzle.rows],
    }
