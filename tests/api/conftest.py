"""
API test fixtures.

Builds the full application with services bound to the in-memory store.
"""

from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest

from knowledge_backend.api.deps import (
    get_chat_service,
    get_collection_manager,
    get_ingestion_service,
    get_settings_dependency,
    get_source_service,
)
from knowledge_backend.configs import Settings
from knowledge_backend.configs.ingestion import IngestionSettings
from knowledge_backend.main import create_app


@pytest.fixture
def app(
    tmp_path,
    ingestion_service,
    chat_service,
    source_service,
    collection_manager,
) -> FastAPI:
    """Create FastAPI test application with service overrides."""
    app = create_app()
    settings = Settings(ingestion=IngestionSettings(upload_dir=str(tmp_path / "uploads")))
    app.dependency_overrides[get_ingestion_service] = lambda: ingestion_service
    app.dependency_overrides[get_chat_service] = lambda: chat_service
    app.dependency_overrides[get_source_service] = lambda: source_service
    app.dependency_overrides[get_collection_manager] = lambda: collection_manager
    app.dependency_overrides[get_settings_dependency] = lambda: settings
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Provide TestClient for the FastAPI app."""
    return TestClient(app)
