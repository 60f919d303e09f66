"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory collection store, fake embeddings, mocked generation,
wired services and sample sources.
Dependencies: pytest, langchain_core
System role: Test infrastructure and fixture management
"""

from datetime import datetime, timezone
import math
from unittest.mock import AsyncMock

from langchain_core.embeddings import DeterministicFakeEmbedding
import pytest

from knowledge_backend.application.services import (
    ChatService,
    CollectionManager,
    IngestionService,
    SourceService,
)
from knowledge_backend.boundary.vdb.collection_store import CollectionStore
from knowledge_backend.boundary.vdb.vector_schemas import (
    CollectionSpec,
    VectorRecord,
    VectorSearchResult,
)
from knowledge_backend.core.document_processing.tasks import ChunkingTask, EmbeddingTask, ParsingTask
from knowledge_backend.core.exceptions import StoreUnavailableError
from knowledge_backend.core.rag_query import GenerationTask
from knowledge_backend.core.source_registry import SourceRegistry
from knowledge_backend.models.source import Source, SourceType

DIMENSION = 8
COLLECTION = "test-collection"


class InMemoryCollectionStore(CollectionStore):
    """Dict-backed store with cosine scoring and switchable failures."""

    backend = "memory"

    def __init__(self) -> None:
        self.collections: dict[str, tuple[CollectionSpec, dict[str, VectorRecord]]] = {}
        self.calls: list[str] = []
        self.fail_on: set[str] = set()

    def _maybe_fail(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise StoreUnavailableError(f"{operation} failed", operation=operation)

    def describe_collection(self, name):
        self._maybe_fail("describe")
        entry = self.collections.get(name)
        return entry[0] if entry else None

    def create_collection(self, spec):
        self._maybe_fail("create")
        self.collections[spec.name] = (spec, {})

    def delete_collection(self, name):
        self._maybe_fail("delete")
        self.collections.pop(name, None)

    def upsert(self, name, records):
        self._maybe_fail("upsert")
        _, stored = self.collections[name]
        for record in records:
            stored[record.id] = record

    def query(self, name, embedding, k):
        self._maybe_fail("query")
        _, stored = self.collections[name]

        def cosine(a, b):
            norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
            return sum(x * y for x, y in zip(a, b)) / norm if norm else 0.0

        ranked = sorted(stored.values(), key=lambda r: cosine(r.embedding, embedding), reverse=True)
        return [
            VectorSearchResult(id=r.id, content=r.content, metadata=r.metadata, score=cosine(r.embedding, embedding))
            for r in ranked[:k]
        ]

    def records(self, name=COLLECTION) -> list[VectorRecord]:
        return list(self.collections[name][1].values()) if name in self.collections else []


@pytest.fixture
def collection_spec() -> CollectionSpec:
    return CollectionSpec(name=COLLECTION, dimension=DIMENSION, distance="cosine")


@pytest.fixture
def memory_store() -> InMemoryCollectionStore:
    return InMemoryCollectionStore()


@pytest.fixture
def collection_manager(memory_store, collection_spec) -> CollectionManager:
    return CollectionManager(store=memory_store, spec=collection_spec, timeout=5.0)


@pytest.fixture
def fake_embeddings() -> DeterministicFakeEmbedding:
    return DeterministicFakeEmbedding(size=DIMENSION)


@pytest.fixture
def embedding_task(fake_embeddings) -> EmbeddingTask:
    return EmbeddingTask(dimension=DIMENSION, timeout=5.0, embeddings=fake_embeddings)


@pytest.fixture
def mock_generation_task() -> AsyncMock:
    """Generation task returning a fixed completion."""
    task = AsyncMock(spec=GenerationTask)
    task.generate.return_value = "Grounded answer."
    return task


@pytest.fixture
def registry() -> SourceRegistry:
    return SourceRegistry()


@pytest.fixture
def ingestion_service(registry, collection_manager, embedding_task) -> IngestionService:
    return IngestionService(
        registry=registry,
        collection=collection_manager,
        chunking_task=ChunkingTask(chunk_size=100, chunk_overlap=20),
        embedding_task=embedding_task,
        parsing_task=ParsingTask(),
    )


@pytest.fixture
def chat_service(registry, collection_manager, embedding_task, mock_generation_task) -> ChatService:
    return ChatService(
        registry=registry,
        collection=collection_manager,
        embedding_task=embedding_task,
        generation_task=mock_generation_task,
        top_k=5,
    )


@pytest.fixture
def source_service(registry, collection_manager) -> SourceService:
    return SourceService(registry=registry, collection=collection_manager)


def make_source(source_id: str = "source_1", title: str = "Notes", type_: SourceType = SourceType.TEXT) -> Source:
    return Source(
        id=source_id,
        type=type_,
        title=title,
        excerpt="Some notes",
        ingested_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )


@pytest.fixture
def sample_source() -> Source:
    return make_source()


@pytest.fixture
def source_factory():
    return make_source
