"""
Dependency injection container.

Factory functions for FastAPI dependencies. All services share one
registry and one collection manager for the lifetime of the process.

Dependencies: knowledge_backend.configs, knowledge_backend.application, knowledge_backend.boundary
System role: DI container for service injection
"""

from functools import lru_cache
import threading

from knowledge_backend.application.services import (
    ChatService,
    CollectionManager,
    IngestionService,
    SourceService,
)
from knowledge_backend.configs import Settings, get_settings
from knowledge_backend.core.document_processing.tasks import ChunkingTask, EmbeddingTask, ParsingTask
from knowledge_backend.core.rag_query import GenerationTask
from knowledge_backend.core.source_registry import SourceRegistry


class ServiceCache:
    """
    Container for cached service instances.

    Lazy construction runs under a re-entrant lock; sync dependencies resolve
    in the thread pool.    """

    def __init__(self, settings: Settings | None = None):
        self._lock = threading.RLock()
        self._settings = settings
        self._registry = None
        self._collection_store = None
        self._collection_manager = None
        self._embedding_task = None
        self._generation_task = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def registry(self) -> SourceRegistry:
        """Get the process-wide source registry."""
        with self._lock:
            if self._registry is None:
                self._registry = SourceRegistry()
            return self._registry

    @property
    def collection_store(self):
        """Get cached collection store."""
        with self._lock:
            if self._collection_store is None:
                from knowledge_backend.boundary.vdb.vector_store_factory import get_collection_store
                self._collection_store = get_collection_store(self.settings.vector_store)
            return self._collection_store

    @property
    def collection_manager(self) -> CollectionManager:
        """Get cached collection manager (owns the collection lock)."""
        with self._lock:
            if self._collection_manager is None:
                from knowledge_backend.boundary.vdb.vector_schemas import CollectionSpec

                vector_settings = self.settings.vector_store
                self._collection_manager = CollectionManager(
                    store=self.collection_store,
                    spec=CollectionSpec(
                        name=vector_settings.collection_name,
                        dimension=self.settings.llm.embedding_dimension,
                        distance=vector_settings.distance,
                    ),
                    timeout=vector_settings.timeout,
                )
            return self._collection_manager

    @property
    def embedding_task(self) -> EmbeddingTask:
        with self._lock:
            if self._embedding_task is None:
                llm = self.settings.llm
                self._embedding_task = EmbeddingTask(
                    model=llm.embedding_model,
                    dimension=llm.embedding_dimension,
                    api_key=llm.google_api_key,
                    timeout=llm.request_timeout,
                )
            return self._embedding_task

    @property
    def generation_task(self) -> GenerationTask:
        with self._lock:
            if self._generation_task is None:
                llm = self.settings.llm
                self._generation_task = GenerationTask(
                    model=llm.chat_model,
                    temperature=llm.temperature,
                    api_key=llm.google_api_key,
                    timeout=llm.request_timeout,
                )
            return self._generation_task

    def clear(self) -> None:
        """Clear all cached instances, including the registry."""
        with self._lock:
            self._registry = None
            self._collection_store = None
            self._collection_manager = None
            self._embedding_task = None
            self._generation_task = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_collection_manager() -> CollectionManager:
    return get_service_cache().collection_manager


def get_ingestion_service() -> IngestionService:
    """
    Get ingestion service instance.

    Returns:
        IngestionService: Ingestion coordinator bound to the shared registry and collection
    """
    cache = get_service_cache()
    ingestion = cache.settings.ingestion
    return IngestionService(
        registry=cache.registry,
        collection=cache.collection_manager,
        chunking_task=ChunkingTask(
            chunk_size=ingestion.chunk_size,
            chunk_overlap=ingestion.chunk_overlap,
        ),
        embedding_task=cache.embedding_task,
        parsing_task=ParsingTask(fetch_timeout=ingestion.fetch_timeout),
        excerpt_length=ingestion.excerpt_length,
    )


def get_chat_service() -> ChatService:
    """
    Get chat service instance.

    Returns:
        ChatService: Retrieval and grounded generation over the shared collection
    """
    cache = get_service_cache()
    return ChatService(
        registry=cache.registry,
        collection=cache.collection_manager,
        embedding_task=cache.embedding_task,
        generation_task=cache.generation_task,
        top_k=cache.settings.vector_store.top_k,
    )


def get_source_service() -> SourceService:
    cache = get_service_cache()
    return SourceService(registry=cache.registry, collection=cache.collection_manager)
