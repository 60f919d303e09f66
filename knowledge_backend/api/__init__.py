"""
HTTP API.

Routers, dependency wiring and error mapping.
"""

from fastapi import APIRouter

from knowledge_backend.api.routers import chat_router, ingestion_router, sources_router

api_router = APIRouter(prefix="/api")
api_router.include_router(sources_router)
api_router.include_router(ingestion_router)
api_router.include_router(chat_router)

__all__ = ["api_router"]
