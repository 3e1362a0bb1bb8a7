"""
Convert an authored spreadsheet of help entries into the knowledge base JSONL.

Input assumptions:
- One .xlsx or .csv file, one row per entry, in priority order (earlier rows win
  when several entries match a question).
- Columns: id, question, answer, category, tags, and optionally code.
- tags is a comma-separated list, e.g. "react, hooks, usestate".

Output JSONL schema (one object per line):
{
  "id": str,
  "question": str,
  "answer": str,
  "category": str,
  "tags": [str, ...],
  "code": str   (only when present)
}

Usage:
  python scripts/build_kb.py --input kb.xlsx --output src/helpdesk/data/knowledge_base.jsonl
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List

import pandas as pd

from helpdesk.errors import KnowledgeBaseError
from helpdesk.loader import load_knowledge_base


def _to_str(x: object) -> str:
    if x is None:
        return ""
    if isinstance(x, float) and pd.isna(x):
        return ""
    return str(x).strip()


def _split_tags(raw: str) -> List[str]:
    return [tag.strip().lower() for tag in raw.split(",") if tag.strip()]


def build_records(df: pd.DataFrame) -> List[Dict]:
    records: List[Dict] = []
    for _, row in df.iterrows():
        record = {
            "id": _to_str(row.get("id")),
            "question": _to_str(row.get("question")),
            "answer": _to_str(row.get("answer")),
            "category": _to_str(row.get("category")),
            "tags": _split_tags(_to_str(row.get("tags"))),
        }
        # Numeric ids come back from pandas as floats.
        if record["id"].endswith(".0") and record["id"][:-2].isdigit():
            record["id"] = record["id"][:-2]
        code = _to_str(row.get("code"))
        if code:
            record["code"] = code
        records.append(record)
    return records


def read_sheet(path: Path) -> pd.DataFrame:
    if path.suffix.lower() == ".csv":
        return pd.read_csv(path)
    return pd.read_excel(path)


def write_jsonl(records: List[Dict], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as w:
        for obj in records:
            json.dump(obj, w, ensure_ascii=False)
            w.write("\n")


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Convert an XLSX/CSV sheet into knowledge base JSONL.")
    parser.add_argument("--input", required=True, help="Spreadsheet with id, question, answer, category, tags columns")
    parser.add_argument("--output", default="knowledge_base.jsonl", help="Output JSONL file path")
    args = parser.parse_args(argv)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Input not found: {input_path}", file=sys.stderr)
        return 1

    records = build_records(read_sheet(input_path))
    output_path = Path(args.output)
    write_jsonl(records, output_path)

    try:
        entries = load_knowledge_base(str(output_path))
    except KnowledgeBaseError as exc:
        print(f"Invalid knowledge base: {exc}", file=sys.stderr)
        return 1

    print(f"Wrote {len(entries)} entries to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
