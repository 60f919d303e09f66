"""
Chat service for grounded Q&A.

Embeds the question, retrieves the nearest fragments, assembles the grounded
prompt and asks the chat model. Reads the registry and the collection but
never modifies them.

Dependencies: knowledge_backend.core.rag_query, knowledge_backend.core.document_processing.tasks
System role: Retrieval and prompt assembly orchestration
"""

import logging

from knowledge_backend.application.services.collection_manager import CollectionManager
from knowledge_backend.core.document_processing.tasks import EmbeddingTask
from knowledge_backend.core.exceptions import ValidationError
from knowledge_backend.core.rag_query import GenerationTask, build_rag_messages
from knowledge_backend.core.source_registry import SourceRegistry
from knowledge_backend.models.chat import GroundedAnswer

logger = logging.getLogger(__name__)


class ChatService:
    """
    Chat service for knowledge base questions.

    Every answer is built from the current registry snapshot and the top-k
    fragments of the collection.
    """

    def __init__(
        self,
        registry: SourceRegistry,
        collection: CollectionManager,
        embedding_task: EmbeddingTask,
        generation_task: GenerationTask,
        top_k: int = 5,
    ) -> None:
        """
        Initialize chat service.

        Args:
            registry: Source registry (read only)
            collection: Collection manager used for retrieval
            embedding_task: Question embedding
            generation_task: Chat model wrapper
            top_k: Fragments retrieved per question
        """
        self._registry = registry
        self._collection = collection
        self._embedding_task = embedding_task
        self._generation_task = generation_task
        self._top_k = top_k

    async def answer(self, question: str | None) -> GroundedAnswer:
        """
        Answer a question from the knowledge base.

        Flow:
        1. Validate the question
        2. Embed it
        3. Retrieve the top-k fragments
        4. Build [system, human] messages
        5. Generate the completion

        Returns:
            GroundedAnswer: Completion text and the fragments it was grounded on

        Raises:
            ValidationError: Empty question
            ConfigurationError: Missing credential
            UpstreamRateLimitedError: Embedding or generation throttled
            EmbeddingError: Question embedding failed
            StoreUnavailableError: Retrieval failed
            GenerationError: Completion failed
        """
        if question is None or not question.strip():
            raise ValidationError("Message is required", field="message")

        vector = await self._embedding_task.embed_query(question)
        fragments = await self._collection.query(vector, k=self._top_k)

        sources = self._registry.list_sources()
        messages = build_rag_messages(question, sources, fragments)
        logger.info(
            f"{__name__}:answer - Prompt assembled",
            extra={"fragments": len(fragments), "sources": len(sources)},
        )

        text = await self._generation_task.generate(messages)
        return GroundedAnswer(text=text, sources=fragments)
