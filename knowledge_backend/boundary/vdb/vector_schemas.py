"""
Vector database schemas.

Pydantic models for vector operations (collection fingerprint, records, results).
Used for type-safe vector store interactions.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any, Literal
import uuid

from pydantic import BaseModel, Field

DistanceMetric = Literal["cosine", "euclidean"]


class CollectionSpec(BaseModel):
    """
    Fingerprint of the vector collection.

    Fixed for the lifetime of a collection; changing it requires a reset.
    """

    name: str = Field(description="Collection name")
    dimension: int = Field(ge=1, description="Embedding vector length")
    distance: DistanceMetric = Field(default="cosine", description="Distance metric")

    def matches(self, other: "CollectionSpec") -> bool:
        return self.dimension == other.dimension and self.distance == other.distance


class VectorRecord(BaseModel):
    """One embedded chunk to be written to the collection."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Record identifier")
    embedding: list[float] = Field(description="Chunk embedding vector")
    content: str = Field(description="Chunk text content")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="source_id, type, title, origin, chunk_index, chunk_count, ingested_at",
    )


class VectorSearchResult(BaseModel):
    """Single result from vector search."""

    id: str = Field(description="Record identifier")
    content: str = Field(description="Chunk text content")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Chunk metadata")
    score: float = Field(description="Similarity for cosine, distance for euclidean")
