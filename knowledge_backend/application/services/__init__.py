"""
Application services.

CollectionManager owns the vector collection; IngestionService, ChatService
and SourceService orchestrate the registry, tasks and collection.
"""

from knowledge_backend.application.services.chat_service import ChatService
from knowledge_backend.application.services.collection_manager import CollectionManager
from knowledge_backend.application.services.ingestion_service import IngestionService
from knowledge_backend.application.services.source_service import SourceService

__all__ = ["CollectionManager", "IngestionService", "ChatService", "SourceService"]
