"""
Chat domain models and schemas.

Request/response schemas for grounded question answering.

Dependencies: pydantic
System role: Chat API contracts
"""

from typing import Any

from pydantic import BaseModel, Field

from knowledge_backend.boundary.vdb.vector_schemas import VectorSearchResult


class ChatRequest(BaseModel):
    """Request schema for chat messages."""

    message: str | None = Field(default=None, description="User question")


class RetrievedFragment(BaseModel):
    """A retrieved chunk returned to the caller for citation."""

    page_content: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    score: float

    @classmethod
    def from_search_result(cls, result: VectorSearchResult) -> "RetrievedFragment":
        return cls(page_content=result.content, metadata=result.metadata, score=result.score)


class ChatResponse(BaseModel):
    """Response schema for chat messages."""

    message: str
    response: str
    sources: list[RetrievedFragment]


class GroundedAnswer(BaseModel):
    """Completion text plus the fragments it was grounded on, nearest first."""

    text: str
    sources: list[VectorSearchResult] = Field(default_factory=list)
