"""
Health and diagnostics endpoints.

Routes: GET /test, GET /test-vector-store

Dependencies: knowledge_backend.application.services.collection_manager
System role: Liveness and vector store diagnostics
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from knowledge_backend.api.deps import get_collection_manager
from knowledge_backend.api.error_handling import handle_diagnostic_errors
from knowledge_backend.application.services import CollectionManager
from knowledge_backend.models.common import MessageResponse


class VectorStoreStatusResponse(BaseModel):
    """Vector store diagnostics."""

    message: str
    backend: str
    collection: str
    exists: bool
    dimension: int
    distance: str


router = APIRouter(tags=["health"])


@router.get("/test", response_model=MessageResponse)
async def test() -> MessageResponse:
    """Basic liveness check."""
    return MessageResponse(message="Server is working!")


@router.get("/test-vector-store", response_model=VectorStoreStatusResponse)
@handle_diagnostic_errors
async def test_vector_store(
    collection: CollectionManager = Depends(get_collection_manager),
) -> VectorStoreStatusResponse:
    """Report the collection's existence and fingerprint; 503 when the store is unreachable."""
    info = await collection.describe()
    return VectorStoreStatusResponse(message="Vector store connection successful", **info)
