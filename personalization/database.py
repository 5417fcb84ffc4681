"""
Database configuration for the SQL snapshot store.

1. Async SQLAlchemy engine creation
2. Declarative base and the snapshot table
3. Table creation helper
"""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String, func
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base model class for all database models."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"


class SnapshotRecord(Base):
    """
    One persisted engine collection.

    Design decisions:
    - One row per collection, rewritten wholesale on save
    - JSON payload so the engine's models stay storage-agnostic
    """

    __tablename__ = "engine_snapshots"

    collection: Mapped[str] = mapped_column(String(64), primary_key=True)
    payload: Mapped[Any] = mapped_column(JSON)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<SnapshotRecord(collection='{self.collection}')>"


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine used by the snapshot store."""
    engine_kwargs = {"echo": echo}
    if not database_url.startswith("sqlite"):
        engine_kwargs.update({"pool_pre_ping": True, "pool_recycle": 3600})
    return create_async_engine(database_url, **engine_kwargs)


async def init_db(engine: AsyncEngine) -> None:
    """Create tables if they do not exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Snapshot tables ready")
