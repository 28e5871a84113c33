"""CLI entrypoint: load puzzle(s), run solver, and report results."""

import argparse
import csv
import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from solver import solve_puzzle
from src.nonogram.loader import PUZZLE_SUFFIXES, load_puzzles
from src.nonogram.model import Grid, Puzzle
from src.nonogram.parser import parse_puzzle
from src.nonogram.render import render
from src.nonogram.solver_core import SolveResult
from src.utils.io import save_json
from src.utils.trace import get_tracer, reset_tracer


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Solve nonogram puzzles by line propagation")
    parser.add_argument("input", type=Path, help="Path to a puzzle file or a directory of puzzles")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional path to write results (.json for JSON, anything else for CSV)",
    )
    parser.add_argument(
        "--trace-dir",
        type=Path,
        default=None,
        help="Optional directory that receives one trace CSV per puzzle.",
    )
    parser.add_argument(
        "--step",
        action="store_true",
        help="Print the grid after every pass and wait for Enter before continuing.",
    )
    parser.add_argument(
        "--hide-crossed-out",
        action="store_true",
        help="Render EMPTY cells as blanks instead of 'X'.",
    )
    parser.add_argument("--quiet", action="store_true", help="Do not print rendered grids.")
    return parser.parse_args(argv)


def format_solution(result: Optional[SolveResult]) -> Dict[str, Any]:
    if result is None:
        return {"status": "error", "rows": []}
    return {"status": result.status.value, "rows": result.as_strings()}


def make_step_printer(
    puzzle: Puzzle,
    show_crossed_out: bool = True,
    wait: Callable[[str], Any] = input,
) -> Callable[[int, Grid], None]:
    """Pass callback that prints the grid and pauses, like stepping through the solve by hand."""

    def _on_pass(pass_number: int, grid: Grid) -> None:
        print(f"\n~~~~~~~~~~~~ pass {pass_number} ~~~~~~~~~~~~\n")
        print(render(puzzle, grid, show_crossed_out=show_crossed_out))
        wait("Press Enter to continue...")

    return _on_pass


def collect_puzzles(input_path: Path) -> List[Dict[str, Any]]:
    if input_path.is_file():
        return load_puzzles(str(input_path))
    if input_path.is_dir():
        puzzles = []
        for file_path in sorted(input_path.iterdir()):
            if file_path.suffix in PUZZLE_SUFFIXES:
                puzzles.extend(load_puzzles(str(file_path)))
        return puzzles
    raise ValueError(f"Input path {input_path} is neither file nor directory")


def write_results_csv(results, output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "status", "grid_solution", "steps"])

        for r in results:
            writer.writerow([
                r["id"],
                r["grid_solution"]["status"],
                json.dumps(r["grid_solution"]["rows"], ensure_ascii=False, separators=(",", ":")),
                r["steps"]
            ])


def main(argv=None):
    args = parse_args(argv)
    puzzles = collect_puzzles(args.input)
    results = []
    show_crossed_out = not args.hide_crossed_out

    for record in puzzles:
        reset_tracer()
        tracer = get_tracer()
        puzzle_id = record.get("id", "unknown")

        try:
            puzzle = parse_puzzle(record)
            on_pass = make_step_printer(puzzle, show_crossed_out) if args.step else None
            result = solve_puzzle(puzzle, tracer=tracer, on_pass=on_pass)
            summary = tracer.summary()

            if not args.quiet:
                print(f"{puzzle_id}: {result.status.value} after {result.passes} pass(es)")
                print(render(puzzle, result.grid, show_crossed_out=show_crossed_out))
            if args.trace_dir:
                tracer.to_csv(args.trace_dir / f"{puzzle_id}.csv")

            results.append({
                "id": puzzle_id,
                "grid_solution": format_solution(result),
                "steps": summary["num_line_updates"],
            })
        except Exception as e:
            print(f"ERROR: Failed to solve puzzle {puzzle_id}: {e}")
            results.append({
                "id": puzzle_id,
                "grid_solution": format_solution(None),
                "steps": -1
            })

    if args.output:
        if args.output.suffix == ".json":
            save_json(args.output, results)
        else:
            write_results_csv(results, args.output)
    else:
        print(results)
    return results


if __name__ == "__main__":
    main()
