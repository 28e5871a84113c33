import json

from src.nonogram.batch_parse import collect_records, main, summarize


def test_summarize_reports_errors_and_status(tmp_path):
    (tmp_path / "ok.txt").write_text("1,1\n\n1\n\n1\n")
    (tmp_path / "bad.txt").write_text("1,1\n\n3\n\n1\n")
    records = collect_records(tmp_path)

    summary, sample, errors = summarize(records, try_solve=True, sample_n=1)
    by_id = {entry["id"]: entry for entry in summary}
    assert errors == 1
    assert "error" in by_id["bad"]
    assert by_id["ok"]["status"] == "solved"
    assert sample == [{"id": "ok", "width": 1, "height": 1, "cols": [[1]], "rows": [[1]]}]


def test_main_writes_summary_files(tmp_path, monkeypatch):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "set.json").write_text(json.dumps([
        {"id": "one", "cols": [[1]], "rows": [[1]]},
        {"id": "two", "cols": [[1], [1]], "rows": [[1], [1]]},
    ]))
    monkeypatch.setenv("NONOGRAM_DATA_PATH", str(data_dir))
    out_summary = tmp_path / "summary.json"
    out_sample = tmp_path / "sample.json"

    main(["--solve", "--out-summary", str(out_summary), "--out-sample", str(out_sample)])

    summary = json.loads(out_summary.read_text())
    assert [entry["status"] for entry in summary] == ["solved", "stuck"]
    assert len(json.loads(out_sample.read_text())) == 2
