"""Tests for the spreadsheet to JSONL knowledge base tool."""

import json

import pytest

pd = pytest.importorskip("pandas")

import build_kb  # noqa: E402


def _write_csv(path, rows):
    pd.DataFrame(rows).to_csv(path, index=False)
    return path


class TestBuildKb:
    """Tests for scripts/build_kb.py."""

    def test_converts_rows_in_order(self, tmp_path):
        src = _write_csv(
            tmp_path / "kb.csv",
            [
                {"id": 1, "question": "What is React?", "answer": "A UI library.", "category": "React", "tags": "React, UI"},
                {"id": 2, "question": "What is Docker?", "answer": "Containers.", "category": "DevOps", "tags": "docker"},
            ],
        )
        out = tmp_path / "kb.jsonl"
        assert build_kb.main(["--input", str(src), "--output", str(out)]) == 0

        records = [json.loads(line) for line in out.read_text(encoding="utf-8").splitlines()]
        assert [r["id"] for r in records] == ["1", "2"]
        assert records[0]["tags"] == ["react", "ui"]
        assert "code" not in records[0]

    def test_keeps_code_column(self, tmp_path):
        src = _write_csv(
            tmp_path / "kb.csv",
            [{"id": "a", "question": "Q?", "answer": "A.", "category": "C", "tags": "x", "code": "print(1)"}],
        )
        out = tmp_path / "kb.jsonl"
        assert build_kb.main(["--input", str(src), "--output", str(out)]) == 0
        assert json.loads(out.read_text(encoding="utf-8"))["code"] == "print(1)"

    def test_rejects_duplicate_ids(self, tmp_path, capsys):
        src = _write_csv(
            tmp_path / "kb.csv",
            [
                {"id": "a", "question": "Q?", "answer": "A.", "category": "C", "tags": "x"},
                {"id": "a", "question": "Q2?", "answer": "A2.", "category": "C", "tags": "y"},
            ],
        )
        assert build_kb.main(["--input", str(src), "--output", str(tmp_path / "kb.jsonl")]) == 1
        assert "Duplicate" in capsys.readouterr().err

    def test_missing_input(self, tmp_path):
        assert build_kb.main(["--input", str(tmp_path / "none.csv")]) == 1
