import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from .errors import ConfigError, KnowledgeBaseError
from .types import KeywordRule, KnowledgeEntry, Link

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "question", "answer", "category")


def load_knowledge_base(path: str) -> Tuple[KnowledgeEntry, ...]:
    data_path = Path(path)
    if not data_path.exists():
        raise FileNotFoundError(f"Knowledge base not found: {data_path}")

    entries: List[KnowledgeEntry] = []
    with data_path.open("r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as exc:
                raise KnowledgeBaseError(f"{data_path}:{line_no}: invalid JSON ({exc.msg})") from exc
            entries.append(parse_entry(record, where=f"{data_path}:{line_no}"))

    validated = validate_knowledge_base(entries)
    logger.info("Loaded %d knowledge base entries from %s", len(validated), data_path)
    return validated


def parse_entry(record: Dict[str, Any], where: str = "entry") -> KnowledgeEntry:
    if not isinstance(record, dict):
        raise KnowledgeBaseError(f"{where}: expected an object, got {type(record).__name__}")
    for name in REQUIRED_FIELDS:
        value = record.get(name)
        if not isinstance(value, str) or not value.strip():
            raise KnowledgeBaseError(f"{where}: missing or empty '{name}'")

    raw_tags = record.get("tags")
    if not raw_tags or not isinstance(raw_tags, list):
        raise KnowledgeBaseError(f"{where}: entry '{record['id']}' has no tags")
    tags = tuple(str(tag).strip().lower() for tag in raw_tags)
    if any(not tag for tag in tags):
        raise KnowledgeBaseError(f"{where}: entry '{record['id']}' has a blank tag")

    raw_links = record.get("links") or []
    if not isinstance(raw_links, list):
        raise KnowledgeBaseError(f"{where}: entry '{record['id']}' links must be a list")
    links = []
    for idx, link in enumerate(raw_links):
        if not isinstance(link, dict) or any(
            not isinstance(link.get(key), str) or not link[key].strip() for key in ("text", "url")
        ):
            raise KnowledgeBaseError(f"{where}: entry '{record['id']}' links[{idx}] needs 'text' and 'url'")
        links.append(Link(text=link["text"], url=link["url"]))

    return KnowledgeEntry(
        id=record["id"],
        question=record["question"],
        answer=record["answer"],
        category=record["category"],
        tags=tags,
        code=record.get("code") or None,
        links=tuple(links),
    )


def validate_knowledge_base(entries: Iterable[KnowledgeEntry]) -> Tuple[KnowledgeEntry, ...]:
    """Check KB invariants and freeze the order.

    Entry ids must be unique and every entry needs at least one non-blank
    tag. Tags are matched against lowercased input, so they must already be
    lowercase and trimmed. A bad KB is a startup failure, never a
    request-time one.
    """
    seen = set()
    frozen = tuple(entries)
    for entry in frozen:
        if entry.id in seen:
            raise KnowledgeBaseError(f"Duplicate knowledge base id: {entry.id!r}")
        seen.add(entry.id)
        if not entry.tags or any(not tag.strip() for tag in entry.tags):
            raise KnowledgeBaseError(f"Entry {entry.id!r} needs non-empty tags")
        for tag in entry.tags:
            if tag != tag.strip().lower():
                raise KnowledgeBaseError(f"Entry {entry.id!r} tag {tag!r} must be lowercase and trimmed")
    return frozen


def build_keyword_rules(records: Sequence[Dict[str, Any]]) -> Tuple[KeywordRule, ...]:
    rules: List[KeywordRule] = []
    for idx, record in enumerate(records):
        raw = record.get("keywords")
        if not isinstance(raw, list):
            raise ConfigError(f"keyword_rules[{idx}] keywords must be a list")
        keywords = tuple(str(k).strip().lower() for k in raw)
        if not keywords or any(not k for k in keywords):
            raise ConfigError(f"keyword_rules[{idx}] needs at least one non-empty keyword")
        rules.append(KeywordRule(keywords=keywords, response=record.get("response", "")))
    return tuple(rules)
