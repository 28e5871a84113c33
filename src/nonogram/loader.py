import json
import os
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from src.utils.io import load_json

TEXT_SUFFIXES = (".txt", ".non")
PUZZLE_SUFFIXES = TEXT_SUFFIXES + (".json", ".jsonl", ".parquet")


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads puzzles from a file. Handles .txt/.non, .json, .jsonl and .parquet formats.
    Returns a list of raw puzzle dictionaries for `parse_puzzle`.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    stem = Path(file_path).stem

    def _plain(value: Any) -> Any:
        # Parquet hands back numpy arrays for list columns.
        if isinstance(value, dict):
            return {k: _plain(v) for k, v in value.items()}
        if hasattr(value, "tolist"):
            return _plain(value.tolist())
        if isinstance(value, (list, tuple)):
            return [_plain(v) for v in value]
        return value

    def _normalize_record(record: Dict[str, Any], position: int) -> Dict[str, Any]:
        record = _plain(record)
        if record.get("id") in (None, ""):
            record["id"] = stem if position == 0 else f"{stem}_{position}"
        return record

    def _from_lines(lines) -> List[Dict[str, Any]]:
        data = []
        for line in lines:
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(obj, dict):
                data.append(_normalize_record(obj, len(data)))
        return data

    # Case 1: plain text puzzle, one per file
    if file_path.endswith(TEXT_SUFFIXES):
        with open(file_path, "r", encoding="utf-8") as f:
            return [{"id": stem, "puzzle": f.read()}]

    # Case 2: Parquet File (Binary)
    if file_path.endswith(".parquet"):
        try:
            df = pd.read_parquet(file_path)
        except Exception as e:
            print(f"Error reading parquet: {e}")
            return []
        records = df.to_dict(orient="records")
        return [_normalize_record(r, i) for i, r in enumerate(records)]

    # Case 3: JSON File (Text; array or object)
    if file_path.endswith(".json"):
        try:
            payload = load_json(Path(file_path))
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL; fall back to line-delimited parsing.
            with open(file_path, "r", encoding="utf-8") as f:
                return _from_lines(f)
        if isinstance(payload, list):
            dicts = [p for p in payload if isinstance(p, dict)]
            return [_normalize_record(p, i) for i, p in enumerate(dicts)]
        if isinstance(payload, dict):
            return [_normalize_record(payload, 0)]
        return []

    # Case 4: JSONL File (Text)
    with open(file_path, "r", encoding="utf-8") as f:
        return _from_lines(f)
