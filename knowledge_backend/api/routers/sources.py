"""
Source management endpoints.

Routes:
    GET    /api/sources-context
    DELETE /api/sources/clear
    DELETE /api/sources/{source_id}

Dependencies: knowledge_backend.application.services.source_service
System role: Source registry HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from knowledge_backend.api.deps import get_source_service
from knowledge_backend.api.error_handling import handle_ingestion_errors
from knowledge_backend.application.services import SourceService
from knowledge_backend.models.sources import (
    ClearSourcesResponse,
    RemoveSourceResponse,
    SourcesContextResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sources"])


@router.get("/sources-context", response_model=SourcesContextResponse, response_model_by_alias=True)
async def get_sources_context(
    source_service: SourceService = Depends(get_source_service),
) -> SourcesContextResponse:
    """List every registered source in insertion order."""
    sources = source_service.list_sources()
    return SourcesContextResponse(total_sources=len(sources), sources=sources)


# Declared before /sources/{source_id} so "clear" is not captured as an id.
@router.delete("/sources/clear", response_model=ClearSourcesResponse, response_model_by_alias=True)
@handle_ingestion_errors
async def clear_sources(
    source_service: SourceService = Depends(get_source_service),
) -> ClearSourcesResponse:
    """
    Reset the vector collection and empty the registry.

    Raises:
        HTTPException(500): Collection reset failed (registry left unchanged)
    """
    removed = await source_service.clear_all()
    logger.info(f"{__name__}:clear_sources - Cleared {removed} sources")
    return ClearSourcesResponse(
        message="All sources and embeddings cleared successfully",
        total_sources=0,
    )


@router.delete("/sources/{source_id}", response_model=RemoveSourceResponse, response_model_by_alias=True)
@handle_ingestion_errors
async def remove_source(
    source_id: str,
    source_service: SourceService = Depends(get_source_service),
) -> RemoveSourceResponse:
    """
    Unlist one source. Its vectors remain in the collection.

    Raises:
        HTTPException(404): Unknown source id
    """
    removed = source_service.remove_source(source_id)
    return RemoveSourceResponse(
        message="Source removed successfully",
        removed_source=removed,
        total_sources=source_service.count(),
    )
