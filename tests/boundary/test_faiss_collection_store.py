"""
Test suite for FAISSCollectionStore.

Uses a real LangChain FAISS index in a temporary directory.

System role: Verification of the local vector collection backend
"""

import faiss
import numpy as np
import pytest

from knowledge_backend.boundary.vdb.faiss_collection_store import FAISSCollectionStore
from knowledge_backend.boundary.vdb.vector_schemas import CollectionSpec, VectorRecord
from knowledge_backend.core.exceptions import StoreUnavailableError

NAME = "notes"


def _unit(*values: float) -> list[float]:
    vector = np.asarray(values, dtype=np.float32)
    return (vector / np.linalg.norm(vector)).tolist()


@pytest.fixture
def store(tmp_path) -> FAISSCollectionStore:
    return FAISSCollectionStore(index_dir=str(tmp_path / "index"))


@pytest.fixture
def spec() -> CollectionSpec:
    return CollectionSpec(name=NAME, dimension=3, distance="cosine")


class TestLifecycle:
    def test_absent_collection(self, store):
        assert store.describe_collection(NAME) is None

    def test_create_and_describe(self, store, spec):
        store.create_collection(spec)

        assert store.describe_collection(NAME) == spec

    def test_fingerprint_survives_reload(self, store, spec, tmp_path):
        store.create_collection(spec)

        reopened = FAISSCollectionStore(index_dir=str(tmp_path / "index"))

        assert reopened.describe_collection(NAME) == spec

    def test_delete(self, store, spec):
        store.create_collection(spec)
        store.delete_collection(NAME)

        assert store.describe_collection(NAME) is None

    def test_delete_absent_is_noop(self, store):
        store.delete_collection("never-created")


class TestUpsertAndQuery:
    def test_query_empty_collection(self, store, spec):
        store.create_collection(spec)

        assert store.query(NAME, [1.0, 0.0, 0.0], 5) == []

    def test_nearest_first_with_cosine_scores(self, store, spec):
        store.create_collection(spec)
        store.upsert(NAME, [
            VectorRecord(id="x", embedding=[1.0, 0.0, 0.0], content="x axis", metadata={"source_id": "s1"}),
            VectorRecord(id="y", embedding=[0.0, 1.0, 0.0], content="y axis"),
            VectorRecord(id="xy", embedding=[1.0, 1.0, 0.0], content="diagonal"),
        ])

        results = store.query(NAME, [2.0, 0.1, 0.0], 2)

        assert [r.id for r in results] == ["x", "xy"]
        assert results[0].content == "x axis"
        assert results[0].metadata == {"source_id": "s1"}
        assert results[0].score == pytest.approx(float(np.dot(_unit(2.0, 0.1, 0.0), [1.0, 0.0, 0.0])), rel=1e-4)
        assert results[0].score > results[1].score

    def test_k_larger_than_collection(self, store, spec):
        store.create_collection(spec)
        store.upsert(NAME, [VectorRecord(id="only", embedding=[0.0, 0.0, 1.0], content="z")])

        assert len(store.query(NAME, [0.0, 0.0, 1.0], 5)) == 1

    def test_upsert_replaces_same_id(self, store, spec):
        store.create_collection(spec)
        store.upsert(NAME, [VectorRecord(id="r", embedding=[1.0, 0.0, 0.0], content="old")])
        store.upsert(NAME, [VectorRecord(id="r", embedding=[1.0, 0.0, 0.0], content="new")])

        results = store.query(NAME, [1.0, 0.0, 0.0], 5)

        assert [r.content for r in results] == ["new"]

    def test_records_persist_across_instances(self, store, spec, tmp_path):
        store.create_collection(spec)
        store.upsert(NAME, [VectorRecord(id="r", embedding=[0.0, 1.0, 0.0], content="kept")])

        reopened = FAISSCollectionStore(index_dir=str(tmp_path / "index"))

        assert [r.content for r in reopened.query(NAME, [0.0, 1.0, 0.0], 1)] == ["kept"]

    def test_wrong_dimension(self, store, spec):
        store.create_collection(spec)

        with pytest.raises(StoreUnavailableError):
            store.upsert(NAME, [VectorRecord(id="bad", embedding=[1.0, 0.0], content="2d")])

    def test_upsert_without_collection(self, store):
        with pytest.raises(StoreUnavailableError):
            store.upsert(NAME, [VectorRecord(id="r", embedding=[1.0, 0.0, 0.0], content="c")])

    def test_euclidean_scores_are_distances(self, store):
        store.create_collection(CollectionSpec(name=NAME, dimension=2, distance="euclidean"))
        store.upsert(NAME, [
            VectorRecord(id="near", embedding=[1.0, 1.0], content="near"),
            VectorRecord(id="far", embedding=[5.0, 5.0], content="far"),
        ])

        results = store.query(NAME, [1.0, 1.0], 2)

        assert [r.id for r in results] == ["near", "far"]
        assert results[0].score == pytest.approx(0.0)

    def test_euclidean_fingerprint_survives_reload(self, store, tmp_path):
        spec = CollectionSpec(name=NAME, dimension=2, distance="euclidean")
        store.create_collection(spec)

        reopened = FAISSCollectionStore(index_dir=str(tmp_path / "index"))

        assert reopened.describe_collection(NAME) == spec


class TestFailedSave:
    def test_unsaved_write_is_not_searchable(self, store, spec, monkeypatch):
        store.create_collection(spec)
        store.upsert(NAME, [VectorRecord(id="kept", embedding=[0.0, 1.0, 0.0], content="kept content")])

        def disk_full(index, path):
            raise RuntimeError("disk full")

        monkeypatch.setattr(faiss, "write_index", disk_full)
        with pytest.raises(StoreUnavailableError, match="disk full"):
            store.upsert(NAME, [VectorRecord(id="ghost", embedding=[1.0, 0.0, 0.0], content="ghost content")])
        monkeypatch.undo()

        results = store.query(NAME, [1.0, 0.0, 0.0], 5)

        assert [r.content for r in results] == ["kept content"]

    def test_failed_replace_keeps_previous_version(self, store, spec, monkeypatch):
        store.create_collection(spec)
        store.upsert(NAME, [VectorRecord(id="r", embedding=[1.0, 0.0, 0.0], content="old")])

        def read_only(index, path):
            raise OSError("read-only file system")

        monkeypatch.setattr(faiss, "write_index", read_only)
        with pytest.raises(StoreUnavailableError):
            store.upsert(NAME, [VectorRecord(id="r", embedding=[1.0, 0.0, 0.0], content="new")])
        monkeypatch.undo()

        assert [r.content for r in store.query(NAME, [1.0, 0.0, 0.0], 5)] == ["old"]
