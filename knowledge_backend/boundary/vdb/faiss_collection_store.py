"""
FAISS collection store for local use.

Wraps LangChain FAISS: one `save_local` index per collection name, holding the
FAISS index plus its docstore. Cosine collections use an inner-product index
over L2-normalised vectors, so scores are cosine similarities; euclidean
collections return L2 distances.

Dependencies: faiss-cpu, langchain-community, knowledge_backend.boundary.vdb.vector_schemas
System role: Default local vector collection backend
"""

import logging
from pathlib import Path

import faiss
from langchain_community.docstore.in_memory import InMemoryDocstore
from langchain_community.vectorstores import FAISS
from langchain_community.vectorstores.utils import DistanceStrategy
from langchain_core.embeddings import Embeddings
import numpy as np

from knowledge_backend.boundary.vdb.collection_store import CollectionStore
from knowledge_backend.boundary.vdb.vector_schemas import (
    CollectionSpec,
    VectorRecord,
    VectorSearchResult,
)
from knowledge_backend.core.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

_STRATEGIES = {
    "cosine": DistanceStrategy.MAX_INNER_PRODUCT,
    "euclidean": DistanceStrategy.EUCLIDEAN_DISTANCE,
}


class PrecomputedEmbeddings(Embeddings):
    """Placeholder embedding function; vectors arrive already embedded."""

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        raise NotImplementedError("FAISS collections only accept precomputed vectors")

    def embed_query(self, text: str) -> list[float]:
        raise NotImplementedError("FAISS collections only accept precomputed vectors")


class FAISSCollectionStore(CollectionStore):
    """
    Directory-backed FAISS collections.

    Loaded collections are cached in memory and saved after every mutation.
    A failed save drops the cached copy so the next call reloads what is on disk.
    """

    backend = "faiss"

    def __init__(self, index_dir: str = ".faiss_index") -> None:
        """
        Initialize FAISS collection store.

        Args:
            index_dir: Directory holding `<name>.faiss` and `<name>.pkl` pairs
        """
        self._index_dir = Path(index_dir)
        self._embeddings = PrecomputedEmbeddings()
        self._collections: dict[str, FAISS] = {}

    def _paths(self, name: str) -> tuple[Path, Path]:
        return self._index_dir / f"{name}.faiss", self._index_dir / f"{name}.pkl"

    def _wrap(self, index, docstore, index_to_docstore_id: dict, distance: str) -> FAISS:
        return FAISS(
            embedding_function=self._embeddings,
            index=index,
            docstore=docstore,
            index_to_docstore_id=index_to_docstore_id,
            distance_strategy=_STRATEGIES[distance],
        )

    @staticmethod
    def _distance_of(vector_store: FAISS) -> str:
        return "cosine" if vector_store.index.metric_type == faiss.METRIC_INNER_PRODUCT else "euclidean"

    def _load(self, name: str) -> FAISS | None:
        if name in self._collections:
            return self._collections[name]

        index_file, _ = self._paths(name)
        if not index_file.exists():
            return None

        try:
            loaded = FAISS.load_local(
                str(self._index_dir),
                self._embeddings,
                index_name=name,
                allow_dangerous_deserialization=True,
            )
        except Exception as e:
            logger.error(f"{__name__}:_load - Failed to load collection '{name}': {type(e).__name__}: {e}")
            raise StoreUnavailableError(
                f"Failed to load FAISS collection '{name}': {e}",
                operation="load",
            ) from e

        # load_local does not persist the distance strategy; the index metric does
        vector_store = self._wrap(
            loaded.index,
            loaded.docstore,
            loaded.index_to_docstore_id,
            self._distance_of(loaded),
        )
        self._collections[name] = vector_store
        logger.info(f"{__name__}:_load - Loaded collection '{name}' ({vector_store.index.ntotal} vectors)")
        return vector_store

    def _save(self, name: str, vector_store: FAISS) -> None:
        try:
            vector_store.save_local(str(self._index_dir), index_name=name)
        except Exception as e:
            self._collections.pop(name, None)
            logger.error(f"{__name__}:_save - Failed to save collection '{name}': {type(e).__name__}: {e}")
            raise StoreUnavailableError(
                f"Failed to save FAISS collection '{name}': {e}",
                operation="save",
            ) from e

    @staticmethod
    def _prepare(spec: CollectionSpec, vectors: list[list[float]]) -> np.ndarray:
        matrix = np.asarray(vectors, dtype=np.float32)
        if matrix.ndim != 2 or matrix.shape[1] != spec.dimension:
            raise StoreUnavailableError(
                f"Vector dimension {matrix.shape[-1]} does not match collection dimension {spec.dimension}",
                operation="dimension",
            )
        if spec.distance == "cosine":
            faiss.normalize_L2(matrix)
        return matrix

    def describe_collection(self, name: str) -> CollectionSpec | None:
        vector_store = self._load(name)
        if vector_store is None:
            return None
        return CollectionSpec(
            name=name,
            dimension=vector_store.index.d,
            distance=self._distance_of(vector_store),
        )

    def create_collection(self, spec: CollectionSpec) -> None:
        logger.info(
            f"{__name__}:create_collection - Creating '{spec.name}' "
            f"(dimension={spec.dimension}, distance={spec.distance})"
        )
        index = faiss.IndexFlatIP(spec.dimension) if spec.distance == "cosine" else faiss.IndexFlatL2(spec.dimension)
        vector_store = self._wrap(index, InMemoryDocstore(), {}, spec.distance)
        self._save(spec.name, vector_store)
        self._collections[spec.name] = vector_store

    def delete_collection(self, name: str) -> None:
        self._collections.pop(name, None)
        try:
            for path in self._paths(name):
                path.unlink(missing_ok=True)
        except OSError as e:
            raise StoreUnavailableError(
                f"Failed to delete FAISS collection '{name}': {e}",
                operation="delete",
            ) from e
        logger.info(f"{__name__}:delete_collection - Deleted '{name}'")

    def upsert(self, name: str, records: list[VectorRecord]) -> None:
        if not records:
            return
        vector_store = self._load(name)
        if vector_store is None:
            raise StoreUnavailableError(f"Collection '{name}' does not exist", operation="upsert")

        spec = self.describe_collection(name)
        matrix = self._prepare(spec, [r.embedding for r in records])

        try:
            stored_ids = set(vector_store.index_to_docstore_id.values())
            replaced = [r.id for r in records if r.id in stored_ids]
            if replaced:
                vector_store.delete(ids=replaced)
            vector_store.add_embeddings(
                text_embeddings=[(r.content, row) for r, row in zip(records, matrix.tolist())],
                metadatas=[dict(r.metadata) for r in records],
                ids=[r.id for r in records],
            )
        except Exception as e:
            self._collections.pop(name, None)
            raise StoreUnavailableError(f"FAISS write to '{name}' failed: {e}", operation="upsert") from e

        self._save(name, vector_store)
        logger.info(
            f"{__name__}:upsert - Wrote {len(records)} vectors to '{name}' "
            f"(total={vector_store.index.ntotal})"
        )

    def query(self, name: str, embedding: list[float], k: int) -> list[VectorSearchResult]:
        vector_store = self._load(name)
        if vector_store is None or vector_store.index.ntotal == 0:
            return []

        spec = self.describe_collection(name)
        query_vector = self._prepare(spec, [embedding])[0].tolist()
        hits = vector_store.similarity_search_with_score_by_vector(
            query_vector,
            k=min(k, vector_store.index.ntotal),
        )
        return [
            VectorSearchResult(
                id=doc.id,
                content=doc.page_content,
                metadata=doc.metadata or {},
                score=float(score),
            )
            for doc, score in hits
        ]
