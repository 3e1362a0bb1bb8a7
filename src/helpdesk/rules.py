from typing import Optional, Sequence

from .text import contains_any
from .types import KeywordRule


def find_rule(normalized: str, rules: Sequence[KeywordRule]) -> Optional[KeywordRule]:
    for rule in rules:
        if contains_any(normalized, rule.keywords):
            return rule
    return None


def dispatch(normalized: str, rules: Sequence[KeywordRule]) -> Optional[str]:
    rule = find_rule(normalized, rules)
    if rule is None:
        return None
    return rule.response
