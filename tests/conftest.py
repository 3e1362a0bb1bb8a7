import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from helpdesk.config import load_config
from helpdesk.engine import HelpDeskEngine
from helpdesk.loader import load_knowledge_base
from helpdesk.types import KnowledgeEntry


def make_entry(entry_id: str, tags, question: str = "", answer: str = "", category: str = "General") -> KnowledgeEntry:
    return KnowledgeEntry(
        id=entry_id,
        question=question or f"Question {entry_id}?",
        answer=answer or f"Answer {entry_id}.",
        category=category,
        tags=tuple(tags),
    )


def write_jsonl(path: Path, records: List[Dict[str, Any]]) -> Path:
    with path.open("w", encoding="utf-8") as f:
        for record in records:
            f.write(json.dumps(record) + "\n")
    return path


@pytest.fixture(scope="session")
def default_config() -> Dict[str, Any]:
    return load_config()


@pytest.fixture(scope="session")
def default_entries(default_config):
    return load_knowledge_base(default_config["knowledge_base"]["source"])


@pytest.fixture
def engine(default_config, default_entries) -> HelpDeskEngine:
    """Engine over the shipped KB with a deterministic fallback pick."""
    return HelpDeskEngine.from_config(default_config, entries=default_entries, choice=lambda pool: pool[0])


@pytest.fixture
def instant_engine(default_config, default_entries) -> HelpDeskEngine:
    config = dict(default_config, scheduler={"min_delay_ms": 0, "max_delay_ms": 0})
    return HelpDeskEngine.from_config(config, entries=default_entries)
