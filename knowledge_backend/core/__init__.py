"""
Core business logic module.

Contains the exception hierarchy, the source registry, the document
processing tasks and the grounded prompt.
"""

from knowledge_backend.core.exceptions import (
    ConfigurationError,
    EmbeddingError,
    ExtractionError,
    GenerationError,
    KnowledgeBaseError,
    SourceNotFoundError,
    StoreUnavailableError,
    UpstreamRateLimitedError,
    ValidationError,
)

__all__ = [
    "KnowledgeBaseError",
    "ValidationError",
    "ConfigurationError",
    "StoreUnavailableError",
    "UpstreamRateLimitedError",
    "SourceNotFoundError",
    "ExtractionError",
    "EmbeddingError",
    "GenerationError",
]
