"""
Ingestion settings.

Chunking, excerpt and upload handling parameters.

Dependencies: pydantic, pydantic_settings
System role: Configuration for the ingestion pipeline
"""

import tempfile

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class IngestionSettings(BaseSettings):
    """Chunking and upload configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INGESTION_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(default=1000, gt=0, description="Maximum chunk size in characters")
    chunk_overlap: int = Field(default=200, ge=0, description="Overlap between chunks")
    excerpt_length: int = Field(default=200, gt=0, description="Characters kept as source excerpt")
    upload_dir: str = Field(
        default_factory=tempfile.gettempdir,
        description="Directory for temporary uploaded files",
    )
    fetch_timeout: float = Field(default=15.0, gt=0, description="Web page fetch timeout in seconds")

    @model_validator(mode="after")
    def _check_overlap(self) -> "IngestionSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        return self
