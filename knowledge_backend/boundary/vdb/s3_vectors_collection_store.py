"""
Amazon S3 Vectors collection store.

Maps the collection to an S3 Vectors index inside a vector bucket. Chunk text
is kept in non-filterable metadata so query results carry their content.

Dependencies: boto3, botocore, knowledge_backend.boundary.vdb.vector_schemas
System role: Remote vector collection backend
"""

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from knowledge_backend.boundary.vdb.collection_store import CollectionStore
from knowledge_backend.boundary.vdb.vector_schemas import (
    CollectionSpec,
    VectorRecord,
    VectorSearchResult,
)
from knowledge_backend.core.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

CONTENT_KEY = "content"
PUT_BATCH_SIZE = 500


def _is_not_found(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") in ("NotFoundException", "ResourceNotFoundException")


class S3VectorsCollectionStore(CollectionStore):
    """
    S3 Vectors index as a collection.

    Uses the boto3 `s3vectors` client directly.
    """

    backend = "s3"

    def __init__(
        self,
        vectors_bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        client: Any | None = None,
    ) -> None:
        """
        Initialize S3 Vectors store.

        Args:
            vectors_bucket: S3 Vectors bucket name
            region: AWS region for S3 Vectors
            endpoint_url: Optional endpoint override
            access_key_id: Optional explicit credential, otherwise the default chain is used
            secret_access_key: Secret matching access_key_id
            client: Pre-built client (tests)
        """
        self._bucket = vectors_bucket
        self._client = client or boto3.client(
            "s3vectors",
            region_name=region,
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )
        logger.info(f"{__name__}:__init__ - S3 Vectors client ready (bucket={vectors_bucket}, region={region})")

    def describe_collection(self, name: str) -> CollectionSpec | None:
        try:
            response = self._client.get_index(vectorBucketName=self._bucket, indexName=name)
        except ClientError as e:
            if _is_not_found(e):
                return None
            raise StoreUnavailableError(f"S3 Vectors get_index failed: {e}", operation="exists") from e
        except BotoCoreError as e:
            raise StoreUnavailableError(f"S3 Vectors unreachable: {e}", operation="exists") from e

        index = response["index"]
        return CollectionSpec(
            name=name,
            dimension=index["dimension"],
            distance=index["distanceMetric"],
        )

    def create_collection(self, spec: CollectionSpec) -> None:
        logger.info(
            f"{__name__}:create_collection - Creating index '{spec.name}' "
            f"(dimension={spec.dimension}, distance={spec.distance})"
        )
        try:
            self._client.create_index(
                vectorBucketName=self._bucket,
                indexName=spec.name,
                dataType="float32",
                dimension=spec.dimension,
                distanceMetric=spec.distance,
                metadataConfiguration={"nonFilterableMetadataKeys": [CONTENT_KEY]},
            )
        except (ClientError, BotoCoreError) as e:
            raise StoreUnavailableError(f"S3 Vectors create_index failed: {e}", operation="create") from e

    def delete_collection(self, name: str) -> None:
        try:
            self._client.delete_index(vectorBucketName=self._bucket, indexName=name)
        except ClientError as e:
            if _is_not_found(e):
                return
            raise StoreUnavailableError(f"S3 Vectors delete_index failed: {e}", operation="delete") from e
        except BotoCoreError as e:
            raise StoreUnavailableError(f"S3 Vectors unreachable: {e}", operation="delete") from e
        logger.info(f"{__name__}:delete_collection - Deleted index '{name}'")

    @staticmethod
    def _to_vector(record: VectorRecord) -> dict[str, Any]:
        metadata = {k: v for k, v in record.metadata.items() if v is not None}
        metadata[CONTENT_KEY] = record.content
        return {
            "key": record.id,
            "data": {"float32": [float(x) for x in record.embedding]},
            "metadata": metadata,
        }

    def upsert(self, name: str, records: list[VectorRecord]) -> None:
        vectors = [self._to_vector(r) for r in records]
        try:
            for start in range(0, len(vectors), PUT_BATCH_SIZE):
                self._client.put_vectors(
                    vectorBucketName=self._bucket,
                    indexName=name,
                    vectors=vectors[start:start + PUT_BATCH_SIZE],
                )
        except (ClientError, BotoCoreError) as e:
            raise StoreUnavailableError(f"S3 Vectors put_vectors failed: {e}", operation="upsert") from e
        logger.info(f"{__name__}:upsert - Wrote {len(vectors)} vectors to '{name}'")

    def query(self, name: str, embedding: list[float], k: int) -> list[VectorSearchResult]:
        try:
            response = self._client.query_vectors(
                vectorBucketName=self._bucket,
                indexName=name,
                topK=k,
                queryVector={"float32": [float(x) for x in embedding]},
                returnMetadata=True,
                returnDistance=True,
            )
        except ClientError as e:
            if _is_not_found(e):
                return []
            raise StoreUnavailableError(f"S3 Vectors query_vectors failed: {e}", operation="query") from e
        except BotoCoreError as e:
            raise StoreUnavailableError(f"S3 Vectors unreachable: {e}", operation="query") from e

        results = []
        for item in response.get("vectors", []):
            metadata = dict(item.get("metadata") or {})
            content = metadata.pop(CONTENT_KEY, "")
            distance = float(item.get("distance", 0.0))
            results.append(
                VectorSearchResult(
                    id=item["key"],
                    content=content,
                    metadata=metadata,
                    # cosine distance -> similarity
                    score=1.0 - distance if response.get("distanceMetric", "cosine") == "cosine" else distance,
                )
            )
        return results
