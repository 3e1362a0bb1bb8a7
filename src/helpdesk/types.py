import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

KIND_KB = "kb"
KIND_RULE = "rule"
KIND_FALLBACK = "fallback"

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"


@dataclass(frozen=True)
class Link:
    text: str
    url: str


@dataclass(frozen=True)
class KnowledgeEntry:
    id: str
    question: str
    answer: str
    category: str
    tags: Tuple[str, ...]
    code: Optional[str] = None
    links: Tuple[Link, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "question": self.question,
            "answer": self.answer,
            "category": self.category,
            "tags": list(self.tags),
        }
        if self.code:
            data["code"] = self.code
        if self.links:
            data["links"] = [{"text": link.text, "url": link.url} for link in self.links]
        return data


@dataclass(frozen=True)
class KeywordRule:
    keywords: Tuple[str, ...]
    response: str


@dataclass(frozen=True)
class ClassificationResult:
    kind: str
    text: str
    entry: Optional[KnowledgeEntry] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"kind": self.kind, "text": self.text}
        if self.entry is not None:
            data["entry"] = self.entry.to_dict()
        return data


@dataclass
class ConversationMessage:
    id: str
    role: str
    content: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, role: str, content: str) -> "ConversationMessage":
        return cls(id=uuid.uuid4().hex, role=role, content=content)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "role": self.role,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }
