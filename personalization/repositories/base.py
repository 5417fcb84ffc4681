"""
Snapshot store interface - Pluggable persistence for engine state.

This provides:
1. Abstract load/save contract keyed by collection name
2. In-memory implementation for tests and development
3. Consistent error translation into StorageError

The engine keeps its working state in memory and rewrites each touched
collection after every mutating call, so every backend only needs
whole-collection load and save.
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from personalization.core.exceptions import StorageError

logger = logging.getLogger(__name__)

# Collections persisted by the engine
INTERACTIONS = "interactions"
USER_SOCIAL_DATA = "user_social_data"
CONTENT_STATS = "content_stats"
USER_PROFILES = "user_profiles"
EXPERIMENT_RESULTS = "experiment_results"


class SnapshotStore(ABC):
    """
    Abstract base class for snapshot stores.

    Data handed to save() must be JSON-serializable (plain dicts, lists,
    strings and numbers); load() returns the same shape or None when the
    collection was never saved.
    """

    @abstractmethod
    async def load(self, collection: str) -> Optional[Any]:
        """
        Load a collection snapshot.

        Raises:
            StorageError: If the backend cannot be read
        """

    @abstractmethod
    async def save(self, collection: str, data: Any) -> None:
        """
        Replace a collection snapshot.

        Raises:
            StorageError: If the backend cannot be written
        """

    async def close(self) -> None:
        """Release backend resources."""

    @staticmethod
    def _encode(collection: str, data: Any) -> str:
        try:
            return json.dumps(data)
        except (TypeError, ValueError) as e:
            logger.error(f"Snapshot for {collection} is not serializable: {e}")
            raise StorageError("save", collection, "Snapshot is not serializable") from e

    @staticmethod
    def _decode(collection: str, raw: Any) -> Any:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.error(f"Snapshot for {collection} is corrupt: {e}")
            raise StorageError("load", collection, "Snapshot is corrupt") from e


class InMemorySnapshotStore(SnapshotStore):
    """
    Dictionary-backed store.

    Snapshots are kept JSON-encoded so later mutation of live engine
    objects never leaks into stored state.
    """

    def __init__(self):
        self._snapshots: Dict[str, str] = {}
        self.save_count = 0

    async def load(self, collection: str) -> Optional[Any]:
        raw = self._snapshots.get(collection)
        if raw is None:
            return None
        return self._decode(collection, raw)

    async def save(self, collection: str, data: Any) -> None:
        self._snapshots[collection] = self._encode(collection, data)
        self.save_count += 1

    def __contains__(self, collection: str) -> bool:
        return collection in self._snapshots
