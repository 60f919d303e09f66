"""
Source domain models.

A Source is one ingested document tracked by the registry. Field names are
serialized in camelCase for the HTTP API.

Dependencies: pydantic
System role: Source registry data structures
"""

from datetime import datetime, timezone
from enum import Enum
import uuid

from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel

EXCERPT_ELLIPSIS = "..."


class SourceType(str, Enum):
    """Kinds of ingestible content."""

    PDF = "pdf"
    TEXT = "text"
    URL = "url"


class SourceMetadata(BaseModel):
    """Metadata supplied with text handed to the ingestion coordinator."""

    type: SourceType
    title: str
    origin: str | None = Field(default=None, description="Source URL for url sources")


class Source(BaseModel):
    """Registry entry for one ingested document."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(description="Unique source identifier")
    type: SourceType
    title: str
    origin: str | None = None
    excerpt: str = Field(description="Bounded preview of the ingested text")
    ingested_at: datetime

    @model_serializer(mode="wrap")
    def _omit_missing_origin(self, handler):
        data = handler(self)
        if self.origin is None:
            data.pop("origin", None)
        return data


def new_source_id() -> str:
    """Generate a collision-resistant source identifier."""
    return f"source_{uuid.uuid4().hex}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def make_excerpt(text: str, max_length: int = 200) -> str:
    """
    Build the display preview of a text.

    Args:
        text: Full ingested text
        max_length: Character cap before the ellipsis marker

    Returns:
        str: Text cut to max_length, with an ellipsis when it was longer
    """
    if len(text) <= max_length:
        return text
    return text[:max_length] + EXCERPT_ELLIPSIS
