"""
Embedding generation task using Google Gemini embeddings.

Embeds chunk texts and questions at a fixed dimensionality. The embeddings
client is built on first use so that a missing credential only fails the
requests that need it.

Dependencies: langchain_google_genai, knowledge_backend.boundary.vdb.embeddings_wrapper
System role: Third stage of document ingestion pipeline, first stage of retrieval
"""

import asyncio
import logging
from typing import Any

from langchain_core.embeddings import Embeddings
from pydantic import SecretStr

from knowledge_backend.boundary.vdb.embeddings_wrapper import FixedDimensionEmbeddings
from knowledge_backend.core.concurrency import call_with_timeout
from knowledge_backend.core.exceptions import (
    ConfigurationError,
    EmbeddingError,
    UpstreamRateLimitedError,
)

logger = logging.getLogger(__name__)

RATE_LIMIT_MARKERS = ("resource_exhausted", "rate limit", "ratelimit", "quota", "429")


def is_rate_limited(error: Exception) -> bool:
    """Whether an upstream SDK error signals throttling."""
    for attr in ("status_code", "code", "status"):
        value = getattr(error, attr, None)
        if value == 429 or str(value).upper() == "RESOURCE_EXHAUSTED":
            return True
    message = f"{type(error).__name__} {error}".lower()
    return any(marker in message for marker in RATE_LIMIT_MARKERS)


class EmbeddingTask:
    """Generate embeddings with Google Gemini at a fixed output dimension."""

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        dimension: int = 1024,
        api_key: SecretStr | None = None,
        timeout: float = 60.0,
        embeddings: Embeddings | None = None,
    ) -> None:
        """
        Initialize embedding task.

        Args:
            model: Google embedding model ID
            dimension: Vector length every call must return
            api_key: Google API key; None defers the failure to the first call
            timeout: Seconds allowed per embedding call
            embeddings: Pre-built embeddings (tests, alternative providers)
        """
        self._model = model
        self._dimension = dimension
        self._api_key = api_key
        self._timeout = timeout
        self._embeddings = embeddings

    @property
    def dimension(self) -> int:
        return self._dimension

    def _get_embeddings(self) -> Embeddings:
        if self._embeddings is None:
            if self._api_key is None or not self._api_key.get_secret_value().strip():
                raise ConfigurationError(
                    "GOOGLE_API_KEY is not configured",
                    details={"service": "embedding"},
                )
            logger.info(
                f"{__name__}:_get_embeddings - Creating FixedDimensionEmbeddings with "
                f"model={self._model}, dimension={self._dimension}"
            )
            self._embeddings = FixedDimensionEmbeddings(
                model=self._model,
                google_api_key=self._api_key,
                output_dimensionality=self._dimension,
            )
        return self._embeddings

    async def _call(self, func, arg: Any, operation: str):
        try:
            return await call_with_timeout(func, arg, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise EmbeddingError(
                f"Embedding request timed out after {self._timeout}s",
                details={"operation": operation},
            ) from e
        except Exception as e:
            if is_rate_limited(e):
                raise UpstreamRateLimitedError(
                    f"Embedding service rate limited: {e}",
                    service="embedding",
                ) from e
            raise EmbeddingError(f"Failed to generate embeddings: {e}", details={"operation": operation}) from e

    def _check_dimension(self, vectors: list[list[float]]) -> None:
        for vector in vectors:
            if len(vector) != self._dimension:
                raise EmbeddingError(
                    f"Embedding has {len(vector)} dimensions, expected {self._dimension}",
                    details={"expected": self._dimension, "actual": len(vector)},
                )

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """
        Embed chunk texts.

        Args:
            texts: Chunk texts in document order

        Returns:
            list[list[float]]: One vector per text, same order

        Raises:
            ConfigurationError: When no API key is configured
            UpstreamRateLimitedError: When the service throttles the request
            EmbeddingError: On any other failure, timeout or wrong dimension
        """
        if not texts:
            return []

        embeddings = self._get_embeddings()
        vectors = await self._call(embeddings.embed_documents, texts, "embed_texts")
        if len(vectors) != len(texts):
            raise EmbeddingError(f"Expected {len(texts)} embeddings, got {len(vectors)}")
        self._check_dimension(vectors)

        logger.info(f"{__name__}:embed_texts - Embedded {len(texts)} chunks")
        return vectors

    async def embed_query(self, text: str) -> list[float]:
        """
        Embed a question.

        Raises:
            ConfigurationError: When no API key is configured
            UpstreamRateLimitedError: When the service throttles the request
            EmbeddingError: On any other failure, timeout or wrong dimension
        """
        embeddings = self._get_embeddings()
        vector = await self._call(embeddings.embed_query, text, "embed_query")
        self._check_dimension([vector])
        return vector
