import json
from pathlib import Path

from run import collect_puzzles, format_solution, main, make_step_printer, write_results_csv
from src.nonogram.model import Puzzle
from src.nonogram.solver_core import solve
from src.utils.trace import Tracer

TINY = "1,1\n\n1\n\n1\n"
AMBIGUOUS = "2,2\n\n1\n1\n\n1\n1\n"


def _write(directory: Path, name: str, text: str) -> Path:
    path = directory / name
    path.write_text(text)
    return path


def test_format_solution_solved():
    result = solve(Puzzle(width=1, height=1, rows=[[1]], cols=[[1]]), tracer=Tracer())
    grid = format_solution(result)
    assert grid == {"status": "solved", "rows": ["O"]}


def test_format_solution_error():
    assert format_solution(None) == {"status": "error", "rows": []}


def test_main_single_file(tmp_path, capsys):
    path = _write(tmp_path, "tiny.txt", TINY)
    results = main([str(path)])
    assert results == [{"id": "tiny", "grid_solution": {"status": "solved", "rows": ["O"]}, "steps": 1}]
    out = capsys.readouterr().out
    assert "tiny: solved after 1 pass(es)" in out


def test_main_directory_input(tmp_path):
    _write(tmp_path, "a.txt", TINY)
    _write(tmp_path, "b.txt", AMBIGUOUS)
    _write(tmp_path, "notes.md", "not a puzzle")
    results = main([str(tmp_path), "--quiet"])
    assert [r["id"] for r in results] == ["a", "b"]
    assert results[1]["grid_solution"]["status"] == "stuck"


def test_main_malformed_puzzle_is_reported(tmp_path, capsys):
    path = _write(tmp_path, "bad.txt", "1,1\n\n2\n\n1\n")
    results = main([str(path), "--quiet"])
    assert results[0]["steps"] == -1
    assert results[0]["grid_solution"]["status"] == "error"
    assert "ERROR: Failed to solve puzzle bad" in capsys.readouterr().out


def test_csv_output(tmp_path):
    path = _write(tmp_path, "puzzle_csv.txt", TINY)
    output_path = tmp_path / "out.csv"
    main([str(path), "--output", str(output_path), "--quiet"])

    content = output_path.read_text()
    assert "id,status,grid_solution,steps" in content
    assert "puzzle_csv,solved" in content


def test_json_output_and_traces(tmp_path):
    path = _write(tmp_path, "tiny.txt", TINY)
    output_path = tmp_path / "out.json"
    trace_dir = tmp_path / "traces"
    main([str(path), "--output", str(output_path), "--trace-dir", str(trace_dir), "--quiet"])

    payload = json.loads(output_path.read_text())
    assert payload[0]["grid_solution"]["status"] == "solved"
    assert (trace_dir / "tiny.csv").exists()


def test_write_results_csv(tmp_path):
    output_path = tmp_path / "results.csv"
    write_results_csv(
        [{"id": "p", "grid_solution": {"status": "stuck", "rows": ["  "]}, "steps": 0}],
        output_path,
    )
    lines = output_path.read_text().splitlines()
    assert lines[1] == 'p,stuck,"[""  ""]",0'


def test_step_printer_pauses_after_each_pass(capsys):
    puzzle = Puzzle(width=1, height=1, rows=[[1]], cols=[[1]])
    prompts = []
    on_pass = make_step_printer(puzzle, wait=prompts.append)
    solve(puzzle, tracer=Tracer(), on_pass=on_pass)
    assert len(prompts) == 1
    assert "pass 1" in capsys.readouterr().out


def test_collect_puzzles_rejects_missing_path(tmp_path):
    try:
        collect_puzzles(tmp_path / "missing")
    except ValueError as exc:
        assert "neither file nor directory" in str(exc)
    else:
        raise AssertionError("expected ValueError")
