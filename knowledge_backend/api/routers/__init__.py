"""API routers."""

from knowledge_backend.api.routers.chat import router as chat_router
from knowledge_backend.api.routers.health import router as health_router
from knowledge_backend.api.routers.ingestion import router as ingestion_router
from knowledge_backend.api.routers.sources import router as sources_router

__all__ = ["chat_router", "health_router", "ingestion_router", "sources_router"]
