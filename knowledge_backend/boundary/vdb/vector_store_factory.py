"""
Vector store factory for selecting between FAISS (local) and S3 Vectors (remote).

Depends on VECTOR_STORE_STORE_TYPE environment variable.
Provides consistent interface regardless of underlying implementation.

Dependencies: knowledge_backend.boundary.vdb, knowledge_backend.configs
System role: Vector store instantiation and selection
"""

import logging

from knowledge_backend.boundary.vdb.collection_store import CollectionStore
from knowledge_backend.boundary.vdb.faiss_collection_store import FAISSCollectionStore
from knowledge_backend.boundary.vdb.s3_vectors_collection_store import S3VectorsCollectionStore
from knowledge_backend.configs.vector_store import VectorStoreSettings
from knowledge_backend.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def get_collection_store(settings: VectorStoreSettings) -> CollectionStore:
    """
    Build the collection store selected by configuration.

    Args:
        settings: Vector store settings

    Returns:
        CollectionStore: FAISSCollectionStore or S3VectorsCollectionStore

    Raises:
        ConfigurationError: If store_type is invalid
    """
    store_type = settings.store_type.lower()

    if store_type == "faiss":
        logger.info(f"{__name__}:get_collection_store - Creating FAISS store (dir={settings.index_dir})")
        return FAISSCollectionStore(index_dir=settings.index_dir)

    if store_type == "s3":
        logger.info(f"{__name__}:get_collection_store - Creating S3 Vectors store (bucket={settings.bucket})")
        secret = settings.secret_access_key.get_secret_value() if settings.secret_access_key else None
        return S3VectorsCollectionStore(
            vectors_bucket=settings.bucket,
            region=settings.region,
            endpoint_url=settings.url,
            access_key_id=settings.access_key_id,
            secret_access_key=secret,
        )

    raise ConfigurationError(
        f"Invalid vector store type: {store_type}. Must be 'faiss' or 's3'.",
        details={"store_type": store_type},
    )
