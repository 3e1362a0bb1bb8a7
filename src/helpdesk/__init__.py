"""Knowledge retrieval and response engine for the tutorial site's help widget."""

from .engine import HelpDeskEngine, get_default_engine, load_engine
from .errors import ConfigError, KnowledgeBaseError, ResponsePendingError
from .scheduler import ResponseScheduler
from .types import ClassificationResult, ConversationMessage, KeywordRule, KnowledgeEntry

__all__ = [
    "ClassificationResult",
    "ConfigError",
    "ConversationMessage",
    "HelpDeskEngine",
    "KeywordRule",
    "KnowledgeBaseError",
    "KnowledgeEntry",
    "ResponsePendingError",
    "ResponseScheduler",
    "get_default_engine",
    "load_engine",
]
