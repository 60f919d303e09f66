"""
Source listing and removal schemas.

Dependencies: pydantic, knowledge_backend.models.source
System role: Source management API contracts
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from knowledge_backend.models.source import Source


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SourcesContextResponse(_CamelModel):
    """Every source currently in the registry."""

    total_sources: int
    sources: list[Source]


class ClearSourcesResponse(_CamelModel):
    """Response for a full knowledge base reset."""

    message: str
    total_sources: int = 0


class RemoveSourceResponse(_CamelModel):
    """Response for a single source removal."""

    message: str
    removed_source: Source
    total_sources: int
    note: str = Field(
        default=(
            "The source is no longer listed, but its content stays in the vector "
            "collection and can still influence answers until all sources are cleared."
        ),
    )
