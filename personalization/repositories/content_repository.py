"""
Content catalog adapters - Source of the content snapshot the engine ranks.

The catalog is owned by an external collaborator; the engine only pulls
a full snapshot per scoring pass.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

import aiofiles
from pydantic import ValidationError as PydanticValidationError

from personalization.core.exceptions import StorageError
from personalization.models.content import ContentItem

logger = logging.getLogger(__name__)


class ContentCatalog(ABC):
    """Snapshot pull interface for content items."""

    @abstractmethod
    async def list_content_items(self) -> List[ContentItem]:
        """Return the current catalog snapshot."""

    async def get_index(self) -> Dict[str, ContentItem]:
        """Catalog snapshot keyed by content id."""
        return {item.id: item for item in await self.list_content_items()}


class InMemoryContentCatalog(ContentCatalog):
    """Catalog held in process memory; used by tests and embedding callers."""

    def __init__(self, items: Optional[Iterable[ContentItem]] = None):
        self._items: List[ContentItem] = list(items or [])

    async def list_content_items(self) -> List[ContentItem]:
        return list(self._items)

    def replace(self, items: Iterable[ContentItem]) -> None:
        """Swap in a refreshed snapshot."""
        self._items = list(items)


class JsonFileContentCatalog(ContentCatalog):
    """
    Catalog read from a JSON file containing an array of content items.

    The file is re-read on every pull so external refreshes are picked up.
    """

    def __init__(self, path: str):
        self.path = path

    async def list_content_items(self) -> List[ContentItem]:
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                raw = await f.read()
            records = json.loads(raw)
            return [ContentItem.model_validate(record) for record in records]
        except (OSError, ValueError, TypeError, PydanticValidationError) as e:
            logger.error(f"Failed to read content catalog {self.path}: {e}")
            raise StorageError("load", "content_catalog") from e
