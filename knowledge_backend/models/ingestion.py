"""
Ingestion request and response schemas.

Fields are optional at the schema level so that missing values are reported
as 400 by the service layer instead of a schema error.

Dependencies: pydantic
System role: Ingestion API contracts
"""

from pydantic import BaseModel, Field

from knowledge_backend.models.source import Source


class EmbedTextRequest(BaseModel):
    """Raw text to add to the knowledge base."""

    title: str | None = Field(default=None, description="Label shown in the source list")
    content: str | None = Field(default=None, description="Text to embed")


class EmbedUrlRequest(BaseModel):
    """Web page to fetch and add to the knowledge base."""

    title: str | None = Field(default=None, description="Label shown in the source list")
    url: str | None = Field(default=None, description="Page address")


class EmbedResponse(BaseModel):
    """Successful ingestion."""

    message: str
    source: Source
