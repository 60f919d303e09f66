"""
Vector database boundary.

Collection stores (local FAISS, Amazon S3 Vectors), their shared schemas and
the fixed-dimension embeddings adapter.
"""

from knowledge_backend.boundary.vdb.collection_store import CollectionStore
from knowledge_backend.boundary.vdb.vector_schemas import (
    CollectionSpec,
    VectorRecord,
    VectorSearchResult,
)

__all__ = ["CollectionStore", "CollectionSpec", "VectorRecord", "VectorSearchResult"]
