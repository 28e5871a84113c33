"""Batch-parse a puzzle collection and write a JSON summary.

    python -m src.nonogram.batch_parse --input puzzles/ --solve
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Any, Dict, List

from tqdm import tqdm

from .loader import PUZZLE_SUFFIXES, load_puzzles
from .model import NonogramError
from .parser import parse_puzzle, puzzle_to_record
from .solver_core import solve
from src.utils.io import save_json
from src.utils.trace import Tracer

DEFAULT_DATA_PATH = "puzzles"


def collect_records(input_path: Path) -> List[Dict[str, Any]]:
    if input_path.is_dir():
        records: List[Dict[str, Any]] = []
        for file_path in sorted(input_path.iterdir()):
            if file_path.suffix in PUZZLE_SUFFIXES:
                records.extend(load_puzzles(str(file_path)))
        return records
    return load_puzzles(str(input_path))


def summarize(records: List[Dict[str, Any]], try_solve: bool = False, sample_n: int = 0):
    """Parse every record; return (summary rows, fully serialized sample, error count)."""
    summary = []
    sample = []
    errors = 0

    for idx, record in enumerate(tqdm(records, desc="Parsing", unit="puzzle")):
        pid = record.get("id", f"row_{idx}")
        try:
            puzzle = parse_puzzle(record)
        except NonogramError as e:
            errors += 1
            summary.append({"id": pid, "error": str(e)})
            continue

        entry: Dict[str, Any] = {
            "id": pid,
            "width": puzzle.width,
            "height": puzzle.height,
        }
        if try_solve:
            try:
                result = solve(puzzle, tracer=Tracer(enabled=False))
                entry["status"] = result.status.value
                entry["passes"] = result.passes
            except NonogramError as e:
                errors += 1
                entry["error"] = str(e)
        summary.append(entry)
        if len(sample) < sample_n:
            sample.append(puzzle_to_record(puzzle))

    return summary, sample, errors


def main(argv=None):
    ap = argparse.ArgumentParser(description="Batch-parse nonogram puzzle files.")
    ap.add_argument(
        "--input",
        default=os.environ.get("NONOGRAM_DATA_PATH", DEFAULT_DATA_PATH),
        help="Puzzle file or directory (default: $NONOGRAM_DATA_PATH or ./puzzles)",
    )
    ap.add_argument("--solve", action="store_true", help="Also run the solver and record solved/stuck")
    ap.add_argument("--max", type=int, default=0, help="Max number of puzzles to process (0 = all)")
    ap.add_argument("--out-summary", default="parsed_puzzles_summary.json",
                    help="Output path for summary JSON")
    ap.add_argument("--out-sample", default="parsed_puzzles_sample.json",
                    help="Output path for sample JSON of normalized puzzles")
    ap.add_argument("--sample-n", type=int, default=5,
                    help="Number of puzzles to fully serialize to --out-sample")
    args = ap.parse_args(argv)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: {input_path} not found")
        sys.exit(1)

    print(f"Loading: {input_path}")
    records = collect_records(input_path)
    if not records:
        print("No puzzles loaded. Check format and path.")
        sys.exit(1)

    if args.max > 0:
        records = records[:args.max]

    summary, sample, errors = summarize(records, try_solve=args.solve, sample_n=args.sample_n)
    save_json(Path(args.out_summary), summary)
    save_json(Path(args.out_sample), sample)

    ok = sum(1 for s in summary if "error" not in s)
    print(f"Done. Parsed OK: {ok}/{len(summary)}. Errors: {errors}")
    print(f"- Summary: {args.out_summary}")
    print(f"- Sample puzzles: {args.out_sample} (first {args.sample_n})")


if __name__ == "__main__":
    main()
