"""
Source management service.

Listing, single removal (registry only) and full reset of the knowledge base.

Dependencies: knowledge_backend.core.source_registry, knowledge_backend.application.services.collection_manager
System role: Source registry operations exposed to the API
"""

import logging

from knowledge_backend.application.services.collection_manager import CollectionManager
from knowledge_backend.core.source_registry import SourceRegistry
from knowledge_backend.models.source import Source

logger = logging.getLogger(__name__)


class SourceService:
    """Source listing, removal and reset."""

    def __init__(self, registry: SourceRegistry, collection: CollectionManager) -> None:
        self._registry = registry
        self._collection = collection

    def list_sources(self) -> list[Source]:
        return self._registry.list_sources()

    def count(self) -> int:
        return len(self._registry)

    def remove_source(self, source_id: str) -> Source:
        """
        Unlist one source. Its vectors stay in the collection until a full clear.

        Raises:
            SourceNotFoundError: Unknown id
        """
        return self._registry.remove(source_id)

    async def clear_all(self) -> int:
        """
        Reset the collection, then empty the registry.

        Returns:
            int: Number of sources removed

        Raises:
            StoreUnavailableError: Reset failed; the registry is left untouched
        """
        await self._collection.reset_collection()
        removed = self._registry.clear()
        logger.info(f"{__name__}:clear_all - Knowledge base cleared ({removed} sources)")
        return removed
