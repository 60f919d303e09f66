"""
Collection store interface.

Synchronous contract implemented by every vector backend. Callers run these
methods in the thread pool under the collection lock.

Dependencies: knowledge_backend.boundary.vdb.vector_schemas
System role: Seam between the collection manager and concrete vector backends
"""

from abc import ABC, abstractmethod

from knowledge_backend.boundary.vdb.vector_schemas import (
    CollectionSpec,
    VectorRecord,
    VectorSearchResult,
)


class CollectionStore(ABC):
    """Named vector collections with a fixed dimension and distance metric."""

    backend: str = "unknown"

    @abstractmethod
    def describe_collection(self, name: str) -> CollectionSpec | None:
        """
        Look up a collection.

        Returns:
            CollectionSpec | None: Stored fingerprint, or None when the collection is absent

        Raises:
            StoreUnavailableError: When the backend cannot be reached
        """

    @abstractmethod
    def create_collection(self, spec: CollectionSpec) -> None:
        """Create an empty collection with the given fingerprint."""

    @abstractmethod
    def delete_collection(self, name: str) -> None:
        """Delete a collection and every vector in it. Absent collections are ignored."""

    @abstractmethod
    def upsert(self, name: str, records: list[VectorRecord]) -> None:
        """Write records, replacing any with the same id."""

    @abstractmethod
    def query(self, name: str, embedding: list[float], k: int) -> list[VectorSearchResult]:
        """Return up to k nearest records, nearest first."""
