"""
In-memory source registry.

Ordered list of ingested sources shared by every request. The registry is
process-local and is lost on restart.

Dependencies: knowledge_backend.models.source
System role: Authoritative list of sources shown to users and to the prompt
"""

import logging
import threading

from knowledge_backend.core.exceptions import SourceNotFoundError
from knowledge_backend.models.source import Source

logger = logging.getLogger(__name__)


class SourceRegistry:
    """Thread-safe, insertion-ordered collection of Source entries."""

    def __init__(self) -> None:
        self._sources: list[Source] = []
        self._lock = threading.Lock()

    def add(self, source: Source) -> None:
        """
        Append a source.

        Raises:
            ValueError: When a source with the same id is already registered
        """
        with self._lock:
            if any(s.id == source.id for s in self._sources):
                raise ValueError(f"Duplicate source id: {source.id}")
            self._sources.append(source)
            total = len(self._sources)
        logger.info(
            f"{__name__}:add - Registered source",
            extra={"source_id": source.id, "title": source.title, "total_sources": total},
        )

    def list_sources(self) -> list[Source]:
        """Snapshot of all sources in insertion order."""
        with self._lock:
            return list(self._sources)

    def get(self, source_id: str) -> Source | None:
        with self._lock:
            return next((s for s in self._sources if s.id == source_id), None)

    def remove(self, source_id: str) -> Source:
        """
        Remove one source by id. Vectors already stored are not touched.

        Args:
            source_id: Source identifier

        Returns:
            Source: The removed entry

        Raises:
            SourceNotFoundError: When the id is unknown (registry unchanged)
        """
        with self._lock:
            for position, source in enumerate(self._sources):
                if source.id == source_id:
                    del self._sources[position]
                    break
            else:
                raise SourceNotFoundError(source_id)
        logger.info(f"{__name__}:remove - Removed source {source_id}")
        return source

    def clear(self) -> int:
        """Remove every source and return how many were removed."""
        with self._lock:
            removed = len(self._sources)
            self._sources.clear()
        logger.info(f"{__name__}:clear - Cleared {removed} sources")
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._sources)
