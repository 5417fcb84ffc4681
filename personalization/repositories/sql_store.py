"""
SQL snapshot store backed by async SQLAlchemy.

Each collection is one row in engine_snapshots; save() merges the row by
primary key inside a single transaction.
"""

import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from personalization.core.exceptions import StorageError
from personalization.database import SnapshotRecord, init_db
from personalization.repositories.base import SnapshotStore

logger = logging.getLogger(__name__)


class SqlAlchemySnapshotStore(SnapshotStore):
    """Relational store for production deployments."""

    def __init__(self, engine: AsyncEngine):
        """
        Initialize store with an async engine.

        Args:
            engine: Async SQLAlchemy engine (call initialize() before use)
        """
        self.engine = engine
        self.session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async def initialize(self) -> None:
        try:
            await init_db(self.engine)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create snapshot tables: {e}")
            raise StorageError("initialize", "engine_snapshots") from e

    async def load(self, collection: str) -> Optional[Any]:
        try:
            async with self.session_factory() as session:
                record = await session.get(SnapshotRecord, collection)
                return record.payload if record is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Snapshot load failed for {collection}: {e}")
            raise StorageError("load", collection) from e

    async def save(self, collection: str, data: Any) -> None:
        # Round-trip through JSON so non-serializable data fails the same way on every backend
        payload = self._decode(collection, self._encode(collection, data))
        try:
            async with self.session_factory() as session:
                await session.merge(SnapshotRecord(collection=collection, payload=payload))
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Snapshot save failed for {collection}: {e}")
            raise StorageError("save", collection) from e

    async def close(self) -> None:
        await self.engine.dispose()
