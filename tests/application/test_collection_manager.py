"""
Test suite for CollectionManager.

System role: Verification of collection lifecycle and locking
"""

import asyncio
import time

import pytest

from knowledge_backend.application.services import CollectionManager
from knowledge_backend.boundary.vdb.vector_schemas import CollectionSpec, VectorRecord
from knowledge_backend.core.exceptions import StoreUnavailableError

COLLECTION = "test-collection"


def _record(content: str, vector: list[float]) -> VectorRecord:
    return VectorRecord(embedding=vector, content=content, metadata={"source_id": "s"})


class TestEnsureCollection:
    @pytest.mark.asyncio
    async def test_creates_then_reports_existing(self, collection_manager, memory_store):
        assert await collection_manager.ensure_collection() is True
        assert await collection_manager.ensure_collection() is False
        assert memory_store.calls.count("create") == 1

    @pytest.mark.asyncio
    async def test_never_erases(self, collection_manager, memory_store):
        await collection_manager.upsert([_record("kept", [1.0] * 8)])

        await collection_manager.ensure_collection()

        assert len(memory_store.records()) == 1

    @pytest.mark.asyncio
    async def test_fingerprint_mismatch(self, memory_store, collection_spec):
        memory_store.create_collection(CollectionSpec(name=COLLECTION, dimension=1536, distance="cosine"))
        manager = CollectionManager(memory_store, collection_spec)

        with pytest.raises(StoreUnavailableError) as exc_info:
            await manager.ensure_collection()

        assert exc_info.value.details["operation"] == "fingerprint"

    @pytest.mark.asyncio
    async def test_store_failure(self, collection_manager, memory_store):
        memory_store.fail_on.add("describe")

        with pytest.raises(StoreUnavailableError):
            await collection_manager.ensure_collection()

    @pytest.mark.asyncio
    async def test_unexpected_backend_error_wrapped(self, collection_manager, memory_store):
        def boom(name):
            raise ConnectionError("connection refused")

        memory_store.describe_collection = boom

        with pytest.raises(StoreUnavailableError, match="connection refused"):
            await collection_manager.ensure_collection()

    @pytest.mark.asyncio
    async def test_timeout(self, memory_store, collection_spec):
        def slow(name):
            time.sleep(0.3)

        memory_store.describe_collection = slow
        manager = CollectionManager(memory_store, collection_spec, timeout=0.05)

        with pytest.raises(StoreUnavailableError, match="timed out"):
            await manager.ensure_collection()
        await asyncio.sleep(0.35)


class TestResetAndQuery:
    @pytest.mark.asyncio
    async def test_reset_empties_collection(self, collection_manager, memory_store):
        await collection_manager.upsert([_record("old", [1.0] * 8)])

        await collection_manager.reset_collection()

        assert memory_store.records() == []
        assert memory_store.describe_collection(COLLECTION) is not None

    @pytest.mark.asyncio
    async def test_reset_without_collection(self, collection_manager, memory_store):
        await collection_manager.reset_collection()

        assert memory_store.describe_collection(COLLECTION) is not None

    @pytest.mark.asyncio
    async def test_query_missing_collection_returns_empty(self, collection_manager, memory_store):
        assert await collection_manager.query([1.0] * 8, k=5) == []
        assert "query" not in memory_store.calls

    @pytest.mark.asyncio
    async def test_query_returns_top_k(self, collection_manager):
        await collection_manager.upsert([_record(f"c{i}", [float(i + 1)] + [0.0] * 7) for i in range(7)])

        results = await collection_manager.query([1.0] + [0.0] * 7, k=5)

        assert len(results) == 5

    @pytest.mark.asyncio
    async def test_query_failure(self, collection_manager, memory_store):
        await collection_manager.ensure_collection()
        memory_store.fail_on.add("query")

        with pytest.raises(StoreUnavailableError):
            await collection_manager.query([1.0] * 8, k=5)

    @pytest.mark.asyncio
    async def test_describe(self, collection_manager):
        info = await collection_manager.describe()

        assert info == {
            "backend": "memory",
            "collection": COLLECTION,
            "exists": False,
            "dimension": 8,
            "distance": "cosine",
        }

    @pytest.mark.asyncio
    async def test_reset_and_upsert_do_not_interleave(self, collection_manager, memory_store):
        await collection_manager.ensure_collection()
        memory_store.calls.clear()

        await asyncio.gather(
            collection_manager.reset_collection(),
            collection_manager.upsert([_record("new", [1.0] * 8)]),
        )

        calls = [c for c in memory_store.calls if c in ("delete", "create", "upsert")]
        assert calls in (["delete", "create", "upsert"], ["upsert", "delete", "create"])


class TestTimedOutCalls:
    @pytest.fixture
    def slow_manager(self, memory_store, collection_spec):
        original_upsert = memory_store.upsert

        def slow_upsert(name, records):
            time.sleep(0.3)
            original_upsert(name, records)

        memory_store.upsert = slow_upsert
        return CollectionManager(memory_store, collection_spec, timeout=0.05)

    @pytest.mark.asyncio
    async def test_late_write_cannot_land_after_reset(self, slow_manager, memory_store):
        with pytest.raises(StoreUnavailableError, match="timed out"):
            await slow_manager.upsert([_record("failed write", [1.0] * 8)])

        await slow_manager.reset_collection()
        await asyncio.sleep(0.4)

        assert memory_store.records() == []
        assert memory_store.calls[-3:] == ["upsert", "delete", "create"]

    @pytest.mark.asyncio
    async def test_lock_released_once_worker_returns(self, slow_manager, memory_store):
        with pytest.raises(StoreUnavailableError):
            await slow_manager.upsert([_record("late", [1.0] * 8)])

        await asyncio.sleep(0.4)

        assert await slow_manager.query([1.0] * 8, k=5) != []
        assert await slow_manager.ensure_collection() is False
