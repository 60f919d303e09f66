"""Logging, correlation ids and request logging middleware."""

from knowledge_backend.observability.correlation import get_correlation_id, set_correlation_id
from knowledge_backend.observability.logger import configure_logging

__all__ = ["configure_logging", "get_correlation_id", "set_correlation_id"]
