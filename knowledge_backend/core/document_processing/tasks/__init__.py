"""
Ingestion pipeline tasks.

ParsingTask -> ChunkingTask -> EmbeddingTask
"""

from knowledge_backend.core.document_processing.tasks.chunking_task import ChunkingTask
from knowledge_backend.core.document_processing.tasks.embedding_task import EmbeddingTask
from knowledge_backend.core.document_processing.tasks.parsing_task import ParsingTask

__all__ = ["ParsingTask", "ChunkingTask", "EmbeddingTask"]
