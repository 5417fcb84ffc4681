"""
Redis snapshot store.

This provides:
1. One Redis key per collection under a configurable prefix
2. JSON serialization of snapshots
3. Connection setup with a health check ping
"""

import logging
from typing import Any, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from personalization.core.exceptions import StorageError
from personalization.repositories.base import SnapshotStore

logger = logging.getLogger(__name__)


class RedisSnapshotStore(SnapshotStore):
    """Key-value store for production deployments."""

    def __init__(self, redis_client=None, key_prefix: str = "personalization:"):
        self.redis_client = redis_client
        self._connection_pool = None
        self.key_prefix = key_prefix

    async def connect(self, redis_url: str) -> None:
        """Establish Redis connection and verify it responds."""
        try:
            self._connection_pool = redis.ConnectionPool.from_url(
                redis_url,
                max_connections=20,
                retry_on_timeout=True,
                decode_responses=False,
            )
            self.redis_client = redis.Redis(connection_pool=self._connection_pool)
            await self.redis_client.ping()
            logger.info("Redis snapshot store connected")
        except (RedisError, OSError) as e:
            logger.error(f"Failed to connect to Redis: {e}")
            raise StorageError("connect", "redis") from e

    def _generate_key(self, collection: str) -> str:
        return f"{self.key_prefix}{collection}"

    async def load(self, collection: str) -> Optional[Any]:
        try:
            raw = await self.redis_client.get(self._generate_key(collection))
        except (RedisError, OSError) as e:
            logger.error(f"Snapshot load failed for {collection}: {e}")
            raise StorageError("load", collection) from e
        if raw is None:
            return None
        return self._decode(collection, raw)

    async def save(self, collection: str, data: Any) -> None:
        encoded = self._encode(collection, data)
        try:
            await self.redis_client.set(self._generate_key(collection), encoded.encode("utf-8"))
        except (RedisError, OSError) as e:
            logger.error(f"Snapshot save failed for {collection}: {e}")
            raise StorageError("save", collection) from e

    async def close(self) -> None:
        if self.redis_client:
            await self.redis_client.aclose()
        if self._connection_pool:
            await self._connection_pool.disconnect()
