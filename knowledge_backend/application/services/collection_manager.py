"""
Collection lifecycle manager.

Owns the single vector collection: creates it on demand with the configured
fingerprint, resets it, and serializes every store call behind one lock.

Dependencies: knowledge_backend.boundary.vdb, knowledge_backend.core.concurrency
System role: Only component allowed to talk to the collection store
"""

import asyncio
from contextlib import asynccontextmanager
import logging
from typing import Any, Callable

from knowledge_backend.boundary.vdb.collection_store import CollectionStore
from knowledge_backend.boundary.vdb.vector_schemas import (
    CollectionSpec,
    VectorRecord,
    VectorSearchResult,
)
from knowledge_backend.core.concurrency import start_in_threadpool
from knowledge_backend.core.exceptions import KnowledgeBaseError, StoreUnavailableError

logger = logging.getLogger(__name__)


class CollectionManager:
    """
    Lifecycle and access control for the vector collection.

    Existence checks, create, reset, upsert and query all run under the
    collection lock, so a reset never interleaves with a write or a search.
    A store call that outlives its timeout keeps the lock until its worker
    thread returns.
    """

    def __init__(self, store: CollectionStore, spec: CollectionSpec, timeout: float = 30.0) -> None:
        """
        Initialize collection manager.

        Args:
            store: Collection store backend
            spec: Configured collection fingerprint
            timeout: Seconds allowed per store call
        """
        self._store = store
        self._spec = spec
        self._timeout = timeout
        self._lock = asyncio.Lock()
        self._in_flight: asyncio.Future | None = None

    @property
    def spec(self) -> CollectionSpec:
        return self._spec

    @asynccontextmanager
    async def _locked(self):
        await self._lock.acquire()
        self._in_flight = None
        try:
            yield
        finally:
            in_flight, self._in_flight = self._in_flight, None
            if in_flight is not None and not in_flight.done():
                logger.warning(f"{__name__}:_locked - Holding collection lock until the timed-out store call returns")
                in_flight.add_done_callback(self._release_after_straggler)
            else:
                self._lock.release()

    def _release_after_straggler(self, future: asyncio.Future) -> None:
        if not future.cancelled() and future.exception() is not None:
            logger.warning(f"{__name__}:_locked - Timed-out store call failed: {future.exception()}")
        self._lock.release()
        logger.info(f"{__name__}:_locked - Timed-out store call returned, collection lock released")

    async def _store_call(self, operation: str, func: Callable[..., Any], *args: Any) -> Any:
        task = start_in_threadpool(func, *args)
        self._in_flight = task
        try:
            return await asyncio.wait_for(asyncio.shield(task), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"{__name__}:{operation} - Store call timed out after {self._timeout}s")
            raise StoreUnavailableError(
                f"Vector store timed out after {self._timeout}s",
                operation=operation,
            ) from e
        except KnowledgeBaseError:
            raise
        except Exception as e:
            logger.error(f"{__name__}:{operation} - Store call failed: {type(e).__name__}: {e}")
            raise StoreUnavailableError(f"Vector store error: {e}", operation=operation) from e

    async def _ensure_locked(self) -> bool:
        existing = await self._store_call("exists", self._store.describe_collection, self._spec.name)
        if existing is None:
            await self._store_call("create", self._store.create_collection, self._spec)
            logger.info(f"{__name__}:ensure_collection - Created collection '{self._spec.name}'")
            return True

        if not existing.matches(self._spec):
            raise StoreUnavailableError(
                f"Collection '{self._spec.name}' has dimension={existing.dimension}, "
                f"distance={existing.distance} but dimension={self._spec.dimension}, "
                f"distance={self._spec.distance} is configured; clear all sources to reset it",
                operation="fingerprint",
            )
        return False

    async def ensure_collection(self) -> bool:
        """
        Create the collection if it is missing. Never erases existing vectors.

        Returns:
            bool: True if the collection was created, False if it already existed

        Raises:
            StoreUnavailableError: On store failure, timeout or fingerprint mismatch
        """
        async with self._locked():
            return await self._ensure_locked()

    async def reset_collection(self) -> None:
        """Delete the collection (if present) and recreate it empty."""
        async with self._locked():
            await self._store_call("delete", self._store.delete_collection, self._spec.name)
            await self._store_call("create", self._store.create_collection, self._spec)
        logger.info(f"{__name__}:reset_collection - Collection '{self._spec.name}' reset")

    async def upsert(self, records: list[VectorRecord]) -> None:
        """
        Write records in one batch, creating the collection first if needed.

        Raises:
            StoreUnavailableError: On store failure or timeout
        """
        async with self._locked():
            await self._ensure_locked()
            await self._store_call("upsert", self._store.upsert, self._spec.name, records)

    async def query(self, embedding: list[float], k: int) -> list[VectorSearchResult]:
        """
        Nearest-neighbour search.

        Args:
            embedding: Query vector
            k: Maximum number of results

        Returns:
            list[VectorSearchResult]: Up to k results in store order, [] when no collection exists

        Raises:
            StoreUnavailableError: On store failure or timeout
        """
        async with self._locked():
            existing = await self._store_call("exists", self._store.describe_collection, self._spec.name)
            if existing is None:
                logger.info(f"{__name__}:query - Collection '{self._spec.name}' does not exist yet")
                return []
            results = await self._store_call("query", self._store.query, self._spec.name, embedding, k)

        logger.info(f"{__name__}:query - Retrieved {len(results)} fragments", extra={"k": k})
        return results

    async def describe(self) -> dict[str, Any]:
        """Collection name, backend, existence and stored fingerprint."""
        async with self._locked():
            existing = await self._store_call("exists", self._store.describe_collection, self._spec.name)
        return {
            "backend": self._store.backend,
            "collection": self._spec.name,
            "exists": existing is not None,
            "dimension": existing.dimension if existing else self._spec.dimension,
            "distance": existing.distance if existing else self._spec.distance,
        }
