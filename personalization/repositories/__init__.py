# Repository package - persistence and data access
from personalization.config import Settings
from personalization.core.exceptions import ValidationError

from .base import InMemorySnapshotStore, SnapshotStore
from .content_repository import ContentCatalog, InMemoryContentCatalog, JsonFileContentCatalog
from .interaction_repository import InteractionLedger
from .profile_repository import UserProfileStore


async def create_store(settings: Settings) -> SnapshotStore:
    """Build and connect the snapshot store selected by settings.store_backend."""
    backend = settings.store_backend.lower()

    if backend == "memory":
        return InMemorySnapshotStore()

    if backend == "sql":
        from personalization.database import create_engine
        from .sql_store import SqlAlchemySnapshotStore

        store = SqlAlchemySnapshotStore(create_engine(settings.database_url, echo=settings.debug))
        await store.initialize()
        return store

    if backend == "redis":
        from .redis_store import RedisSnapshotStore

        store = RedisSnapshotStore(key_prefix=settings.store_key_prefix)
        await store.connect(settings.redis_url)
        return store

    raise ValidationError(f"Unknown store backend: {settings.store_backend}")


__all__ = [
    "SnapshotStore",
    "InMemorySnapshotStore",
    "ContentCatalog",
    "InMemoryContentCatalog",
    "JsonFileContentCatalog",
    "InteractionLedger",
    "UserProfileStore",
    "create_store",
]
