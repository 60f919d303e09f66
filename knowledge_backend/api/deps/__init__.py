"""FastAPI dependency providers."""

from knowledge_backend.api.deps.dependencies import (
    ServiceCache,
    get_chat_service,
    get_collection_manager,
    get_ingestion_service,
    get_service_cache,
    get_settings_dependency,
    get_source_service,
)

__all__ = [
    "ServiceCache",
    "get_service_cache",
    "get_settings_dependency",
    "get_collection_manager",
    "get_ingestion_service",
    "get_chat_service",
    "get_source_service",
]
