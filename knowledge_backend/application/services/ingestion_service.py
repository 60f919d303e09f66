"""
Ingestion service.

Turns normalized text into stored vectors and a registry entry. A source is
registered only after all of its chunks were embedded and written.

Dependencies: knowledge_backend.core.document_processing.tasks, knowledge_backend.application.services.collection_manager
System role: Ingestion coordinator for PDF, text and URL sources
"""

import logging
import uuid

from fastapi.concurrency import run_in_threadpool

from knowledge_backend.application.services.collection_manager import CollectionManager
from knowledge_backend.boundary.vdb.vector_schemas import VectorRecord
from knowledge_backend.core.document_processing.tasks import ChunkingTask, EmbeddingTask, ParsingTask
from knowledge_backend.core.exceptions import ValidationError
from knowledge_backend.core.source_registry import SourceRegistry
from knowledge_backend.models.source import (
    Source,
    SourceMetadata,
    SourceType,
    make_excerpt,
    new_source_id,
    utc_now,
)

logger = logging.getLogger(__name__)


def _require(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required", field=field)
    return value


def _require_all(message: str, **fields: str | None) -> None:
    for field, value in fields.items():
        if value is None or not value.strip():
            raise ValidationError(message, field=field)


class IngestionService:
    """Coordinate extraction, chunking, embedding, storage and registration."""

    def __init__(
        self,
        registry: SourceRegistry,
        collection: CollectionManager,
        chunking_task: ChunkingTask,
        embedding_task: EmbeddingTask,
        parsing_task: ParsingTask,
        excerpt_length: int = 200,
    ) -> None:
        self._registry = registry
        self._collection = collection
        self._chunking_task = chunking_task
        self._embedding_task = embedding_task
        self._parsing_task = parsing_task
        self._excerpt_length = excerpt_length

    async def ingest(self, text: str, metadata: SourceMetadata) -> Source:
        """
        Ingest one source.

        Flow:
        1. Validate text and title
        2. Ensure the collection exists
        3. Chunk and embed the text
        4. Upsert every chunk in one batch
        5. Register the source

        Args:
            text: Normalized text
            metadata: Type, title and optional origin

        Returns:
            Source: The registered entry

        Raises:
            ValidationError: Empty text or title
            ConfigurationError: Missing embedding credential
            UpstreamRateLimitedError: Embedding service throttled
            EmbeddingError: Embedding failure
            StoreUnavailableError: Collection failure
        """
        _require(text, "content")
        _require(metadata.title, "title")

        await self._collection.ensure_collection()

        source_id = new_source_id()
        ingested_at = utc_now()
        chunks = self._chunking_task.chunk(text)
        logger.info(
            f"{__name__}:ingest - Split source into {len(chunks)} chunks",
            extra={"source_id": source_id, "type": metadata.type.value},
        )

        vectors = await self._embedding_task.embed_texts(chunks)

        records = [
            VectorRecord(
                id=str(uuid.uuid4()),
                embedding=vector,
                content=chunk,
                metadata={
                    "source_id": source_id,
                    "type": metadata.type.value,
                    "title": metadata.title,
                    "origin": metadata.origin,
                    "chunk_index": index,
                    "chunk_count": len(chunks),
                    "ingested_at": ingested_at.isoformat(),
                },
            )
            for index, (chunk, vector) in enumerate(zip(chunks, vectors))
        ]
        await self._collection.upsert(records)

        # Vectors stored; a failure past this point leaves them unlisted.
        source = Source(
            id=source_id,
            type=metadata.type,
            title=metadata.title,
            origin=metadata.origin,
            excerpt=make_excerpt(text, self._excerpt_length),
            ingested_at=ingested_at,
        )
        self._registry.add(source)

        logger.info(
            f"{__name__}:ingest - Ingested source",
            extra={"source_id": source_id, "chunks": len(records), "total_sources": len(self._registry)},
        )
        return source

    async def ingest_text(self, title: str | None, content: str | None) -> Source:
        _require_all("Title and content are required", title=title, content=content)
        return await self.ingest(content, SourceMetadata(type=SourceType.TEXT, title=title))

    async def ingest_pdf(self, file_path: str, filename: str) -> Source:
        """
        Extract and ingest a PDF file.

        Args:
            file_path: Local path of the uploaded file
            filename: Original file name, used as title

        Raises:
            ExtractionError: When the PDF cannot be read
        """
        text = await run_in_threadpool(self._parsing_task.parse_pdf, file_path)
        return await self.ingest(text, SourceMetadata(type=SourceType.PDF, title=filename))

    async def ingest_url(self, title: str | None, url: str | None) -> Source:
        """
        Fetch and ingest a web page.

        Raises:
            ValidationError: Missing title or url
            ExtractionError: When the page cannot be fetched or has no text
        """
        _require_all("Title and URL are required", title=title, url=url)
        url = url.strip()
        text = await run_in_threadpool(self._parsing_task.fetch_url, url)
        return await self.ingest(text, SourceMetadata(type=SourceType.URL, title=title, origin=url))
