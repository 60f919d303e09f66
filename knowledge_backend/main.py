"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, uvicorn, knowledge_backend.api, knowledge_backend.observability, knowledge_backend.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from knowledge_backend import __version__
from knowledge_backend.api import api_router
from knowledge_backend.api.deps import get_service_cache
from knowledge_backend.api.error_handling import register_exception_handlers
from knowledge_backend.api.routers import health_router
from knowledge_backend.configs import get_settings
from knowledge_backend.observability.logger import configure_logging
from knowledge_backend.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging on startup and drops every cached service (the source
    registry included) on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.effective_log_level)
    logger.info("Application startup: logging configured")

    if not settings.llm.has_credential:
        logger.warning(
            "GOOGLE_API_KEY is not set; ingestion and chat requests will fail until it is configured"
        )
    logger.info(
        "Vector store configured",
        extra={
            "store_type": settings.vector_store.store_type,
            "collection": settings.vector_store.collection_name,
        },
    )

    yield

    get_service_cache().clear()
    logger.info("Application shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Personal Knowledge Base API",
        description="Ingest PDFs, text and web pages, then ask grounded questions about them",
        version=__version__,
        lifespan=lifespan,
    )

    # Added first = innermost; correlation wraps request logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(api_router)

    return app


app = create_app()


def run() -> None:
    """Run the API with uvicorn using the configured host and port."""
    settings = get_settings()
    uvicorn.run(app, host=settings.server.host, port=settings.server.port)


if __name__ == "__main__":
    run()
