from typing import Optional, Sequence

from .types import KnowledgeEntry


def question_prefix(entry: KnowledgeEntry, prefix_len: int = 10) -> str:
    return entry.question.lower()[:prefix_len]


def entry_matches(normalized: str, entry: KnowledgeEntry, prefix_len: int = 10) -> bool:
    if any(tag in normalized for tag in entry.tags):
        return True
    return question_prefix(entry, prefix_len) in normalized


def match_entry(
    normalized: str,
    entries: Sequence[KnowledgeEntry],
    prefix_len: int = 10,
) -> Optional[KnowledgeEntry]:
    """Return the first entry, in KB order, whose tags or question prefix occur in the input.

    First match wins: a short tag on an early entry shadows more specific
    entries further down, so KB order decides priority.
    """
    for entry in entries:
        if entry_matches(normalized, entry, prefix_len):
            return entry
    return None
