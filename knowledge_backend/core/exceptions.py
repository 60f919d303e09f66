"""
Exception hierarchy for the knowledge base backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class KnowledgeBaseError(Exception):
    """Base exception for all knowledge base errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(KnowledgeBaseError):
    """Raised when a required field is missing or empty."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConfigurationError(KnowledgeBaseError):
    """Raised when a required credential or setting is missing."""

    pass


class StoreUnavailableError(KnowledgeBaseError):
    """Raised when the vector store is unreachable or a collection operation fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize store error.

        Args:
            message: Error message
            operation: Operation that failed (exists, create, delete, upsert, query)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class UpstreamRateLimitedError(KnowledgeBaseError):
    """Raised when the embedding or generation service throttles a request."""

    def __init__(
        self,
        message: str,
        service: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if service:
            details["service"] = service
        super().__init__(message, details)


class SourceNotFoundError(KnowledgeBaseError):
    """Raised when a source id is not in the registry."""

    def __init__(self, source_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize source not found error.

        Args:
            source_id: ID of the missing source
            details: Additional context
        """
        details = details or {}
        details["source_id"] = source_id
        self.source_id = source_id
        super().__init__(f"Source not found: {source_id}", details)


class ExtractionError(KnowledgeBaseError):
    """Raised when text cannot be extracted from a PDF or web page."""

    def __init__(
        self,
        message: str,
        origin: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize extraction error.

        Args:
            message: Error message
            origin: File name or URL that failed
            details: Additional context
        """
        details = details or {}
        if origin:
            details["origin"] = origin
        super().__init__(message, details)


class EmbeddingError(KnowledgeBaseError):
    """Raised when embedding generation fails."""

    pass


class GenerationError(KnowledgeBaseError):
    """Raised when the chat model fails to produce a completion."""

    pass
