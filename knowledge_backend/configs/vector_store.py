"""
Vector store configuration settings.

Selects the collection backend (local FAISS directory or Amazon S3 Vectors)
and fixes the collection name and distance metric.

Dependencies: pydantic, pydantic_settings
System role: Vector collection configuration for ingestion and retrieval
"""

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreSettings(BaseSettings):
    """Vector collection configuration (FAISS locally, S3 Vectors remotely)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: Literal["faiss", "s3"] = Field(
        default="faiss",
        description="'faiss' for a local index directory, 's3' for S3 Vectors",
    )
    collection_name: str = Field(
        default="personal-notebooklm",
        description="Name of the single vector collection",
    )
    distance: Literal["cosine", "euclidean"] = Field(
        default="cosine",
        description="Distance metric fixed at collection creation",
    )
    index_dir: str = Field(
        default=".faiss_index",
        description="Directory holding local FAISS collections",
    )

    url: str | None = Field(default=None, description="S3 Vectors endpoint override")
    bucket: str = Field(default="personal-notebooklm-vectors", description="S3 Vectors bucket")
    region: str = Field(default="us-east-1", description="AWS region for S3 Vectors")
    access_key_id: str | None = Field(default=None, description="Optional access key")
    secret_access_key: SecretStr | None = Field(default=None, description="Optional secret key")

    top_k: int = Field(default=5, ge=1, le=100, description="Fragments retrieved per question")
    timeout: float = Field(default=30.0, gt=0, description="Timeout in seconds per store call")
