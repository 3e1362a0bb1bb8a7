from typing import List, Optional, Sequence

from .types import KnowledgeEntry

ALL_CATEGORIES = "all"


def entry_contains(entry: KnowledgeEntry, needle: str) -> bool:
    return (
        needle in entry.question.lower()
        or needle in entry.answer.lower()
        or any(needle in tag.lower() for tag in entry.tags)
    )


def search(
    query: str,
    entries: Sequence[KnowledgeEntry],
    category: Optional[str] = None,
) -> List[KnowledgeEntry]:
    """Browse-view filter: substring match on question, answer and tags.

    The query is only lowercased, so an empty query keeps every entry.
    Results stay in KB order.
    """
    needle = query.lower()
    wanted = category.lower() if category and category.lower() != ALL_CATEGORIES else None
    results: List[KnowledgeEntry] = []
    for entry in entries:
        if wanted is not None and entry.category.lower() != wanted:
            continue
        if entry_contains(entry, needle):
            results.append(entry)
    return results


def categories(entries: Sequence[KnowledgeEntry]) -> List[str]:
    seen: List[str] = []
    for entry in entries:
        if entry.category not in seen:
            seen.append(entry.category)
    return seen
