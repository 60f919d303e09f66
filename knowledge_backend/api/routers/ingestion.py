"""
Ingestion endpoints.

Routes:
    POST /api/embed-pdf   (multipart field "pdf")
    POST /api/embed-text  ({title, content})
    POST /api/embed-url   ({title, url})

Dependencies: knowledge_backend.application.services.ingestion_service
System role: Ingestion HTTP API
"""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from knowledge_backend.api.deps import get_ingestion_service, get_settings_dependency
from knowledge_backend.api.error_handling import handle_ingestion_errors
from knowledge_backend.api.routers.router_utils.document_utils import (
    cleanup_temp_file,
    save_upload_to_temp,
)
from knowledge_backend.application.services import IngestionService
from knowledge_backend.configs import Settings
from knowledge_backend.models.ingestion import EmbedResponse, EmbedTextRequest, EmbedUrlRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ingestion"])


@router.post("/embed-pdf", response_model=EmbedResponse, response_model_by_alias=True)
@handle_ingestion_errors
async def embed_pdf(
    pdf: UploadFile | None = File(default=None),
    ingestion_service: IngestionService = Depends(get_ingestion_service),
    settings: Settings = Depends(get_settings_dependency),
) -> EmbedResponse:
    """
    Upload a PDF and add it to the knowledge base.

    The uploaded file is written to a temporary directory that is removed on
    every path.

    Raises:
        HTTPException(400): No file uploaded
        HTTPException(500): Extraction, embedding or store failure
    """
    if pdf is None or not pdf.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No PDF uploaded")

    file_path = await save_upload_to_temp(pdf, settings.ingestion.upload_dir)
    try:
        source = await ingestion_service.ingest_pdf(file_path, pdf.filename)
    finally:
        cleanup_temp_file(file_path)

    return EmbedResponse(message="PDF embedded successfully!", source=source)


@router.post("/embed-text", response_model=EmbedResponse, response_model_by_alias=True)
@handle_ingestion_errors
async def embed_text(
    request: EmbedTextRequest,
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> EmbedResponse:
    """
    Add raw text to the knowledge base.

    Raises:
        HTTPException(400): Missing title or content
        HTTPException(500): Embedding or store failure
    """
    source = await ingestion_service.ingest_text(request.title, request.content)
    return EmbedResponse(message="Text embedded successfully!", source=source)


@router.post("/embed-url", response_model=EmbedResponse, response_model_by_alias=True)
@handle_ingestion_errors
async def embed_url(
    request: EmbedUrlRequest,
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> EmbedResponse:
    """
    Fetch a web page and add it to the knowledge base.

    Raises:
        HTTPException(400): Missing title or url
        HTTPException(500): Fetch, extraction, embedding or store failure
    """
    source = await ingestion_service.ingest_url(request.title, request.url)
    return EmbedResponse(message="URL embedded successfully!", source=source)
