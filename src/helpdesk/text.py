from typing import Iterable


def normalize_text(text: str) -> str:
    # Inner whitespace and punctuation are kept; tags may contain both.
    return text.strip().lower()


def is_blank(text: str) -> bool:
    return not text or not text.strip()


def contains_any(text: str, needles: Iterable[str]) -> bool:
    return any(needle in text for needle in needles)
