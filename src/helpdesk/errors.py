class KnowledgeBaseError(ValueError):
    """Raised when the knowledge base fails validation at load time."""


class ConfigError(ValueError):
    """Raised for an unusable engine configuration."""


class ResponsePendingError(RuntimeError):
    """Raised when a new input is submitted while a response is still pending."""
