import logging
import random
from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence

from .config import (
    DEFAULT_MAX_DELAY_MS,
    DEFAULT_MIN_DELAY_MS,
    DEFAULT_QUESTION_PREFIX_LEN,
    delay_range,
    load_config,
    resolve_kb_source,
    section,
    validate_config,
)
from .fallback import ChoiceFn, FallbackSelector
from .loader import build_keyword_rules, load_knowledge_base, validate_knowledge_base
from .matcher import match_entry
from .rules import dispatch
from .scheduler import ResponseScheduler, SleepFn
from .search import categories, search
from .text import is_blank, normalize_text
from .types import (
    KIND_FALLBACK,
    KIND_KB,
    KIND_RULE,
    ClassificationResult,
    KeywordRule,
    KnowledgeEntry,
)

logger = logging.getLogger(__name__)

DEFAULT_GREETING = "Hi! I'm your learning assistant. Ask me anything about programming!"


class HelpDeskEngine:
    """Two-tier classifier over a fixed knowledge base.

    Tier 1 scans the KB for a tag or question-prefix hit, tier 2 scans the
    keyword rules, and the fallback pool answers everything else. Both tiers
    stop at the first hit in declaration order. The engine keeps no state
    between calls.
    """

    def __init__(
        self,
        entries: Sequence[KnowledgeEntry],
        rules: Sequence[KeywordRule],
        fallback: FallbackSelector,
        question_prefix_len: int = DEFAULT_QUESTION_PREFIX_LEN,
        min_delay_ms: float = DEFAULT_MIN_DELAY_MS,
        max_delay_ms: float = DEFAULT_MAX_DELAY_MS,
        greeting: str = DEFAULT_GREETING,
    ) -> None:
        self.entries = validate_knowledge_base(entries)
        self.rules = tuple(rules)
        self.fallback = fallback
        self.question_prefix_len = question_prefix_len
        self.min_delay_ms = min_delay_ms
        self.max_delay_ms = max_delay_ms
        self.greeting = greeting

    @classmethod
    def from_config(
        cls,
        config: Dict[str, Any],
        entries: Optional[Sequence[KnowledgeEntry]] = None,
        choice: Optional[ChoiceFn] = None,
    ) -> "HelpDeskEngine":
        validate_config(config)
        if entries is None:
            entries = load_knowledge_base(str(resolve_kb_source(config)))
        rules = build_keyword_rules(config.get("keyword_rules", []))
        fallback = FallbackSelector(config.get("fallback_responses", []), choice=choice)
        min_delay, max_delay = delay_range(config)
        return cls(
            entries,
            rules,
            fallback,
            question_prefix_len=section(config, "knowledge_base").get(
                "question_prefix_len", DEFAULT_QUESTION_PREFIX_LEN
            ),
            min_delay_ms=min_delay,
            max_delay_ms=max_delay,
            greeting=config.get("greeting", DEFAULT_GREETING),
        )

    def classify(self, text: str) -> Optional[ClassificationResult]:
        if is_blank(text):
            return None
        normalized = normalize_text(text)

        entry = match_entry(normalized, self.entries, self.question_prefix_len)
        if entry is not None:
            logger.debug("KB hit %s for %r", entry.id, normalized)
            return ClassificationResult(kind=KIND_KB, text=entry.answer, entry=entry)

        response = dispatch(normalized, self.rules)
        if response is not None:
            logger.debug("Keyword rule hit for %r", normalized)
            return ClassificationResult(kind=KIND_RULE, text=response)

        logger.debug("No match for %r, using fallback", normalized)
        return ClassificationResult(kind=KIND_FALLBACK, text=self.fallback.select())

    def search(self, query: str, category: Optional[str] = None) -> List[KnowledgeEntry]:
        return search(query, self.entries, category=category)

    def categories(self) -> List[str]:
        return categories(self.entries)

    def get_entry(self, entry_id: str) -> Optional[KnowledgeEntry]:
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def create_scheduler(
        self,
        rng: Optional[random.Random] = None,
        sleep: Optional[SleepFn] = None,
    ) -> ResponseScheduler:
        return ResponseScheduler(self.classify, self.min_delay_ms, self.max_delay_ms, rng=rng, sleep=sleep)


def load_engine(config_path: Optional[str] = None, data_path: Optional[str] = None) -> HelpDeskEngine:
    config = load_config(config_path)
    entries = load_knowledge_base(data_path) if data_path else None
    return HelpDeskEngine.from_config(config, entries=entries)


@lru_cache(maxsize=1)
def get_default_engine() -> HelpDeskEngine:
    return load_engine()
