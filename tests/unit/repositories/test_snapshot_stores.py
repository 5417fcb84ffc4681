"""
Unit tests for the snapshot store backends.
"""

from unittest.mock import AsyncMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from personalization.config import Settings
from personalization.core.exceptions import StorageError, ValidationError
from personalization.repositories import InMemorySnapshotStore, create_store
from personalization.repositories.base import INTERACTIONS, USER_PROFILES
from personalization.repositories.redis_store import RedisSnapshotStore
from personalization.repositories.sql_store import SqlAlchemySnapshotStore


@pytest.mark.unit
class TestInMemorySnapshotStore:
    @pytest.mark.asyncio
    async def test_missing_collection_loads_none(self, memory_store):
        assert await memory_store.load(INTERACTIONS) is None

    @pytest.mark.asyncio
    async def test_save_then_load(self, memory_store):
        await memory_store.save(USER_PROFILES, [{"id": "u1"}])

        assert await memory_store.load(USER_PROFILES) == [{"id": "u1"}]
        assert USER_PROFILES in memory_store
        assert memory_store.save_count == 1

    @pytest.mark.asyncio
    async def test_stored_copy_is_isolated(self, memory_store):
        data = [{"id": "u1"}]
        await memory_store.save(USER_PROFILES, data)
        data.append({"id": "u2"})

        assert await memory_store.load(USER_PROFILES) == [{"id": "u1"}]

    @pytest.mark.asyncio
    async def test_unserializable_data_raises_storage_error(self, memory_store):
        with pytest.raises(StorageError) as exc_info:
            await memory_store.save(INTERACTIONS, {"bad": object()})

        assert exc_info.value.operation == "save"
        assert exc_info.value.collection == INTERACTIONS
        assert exc_info.value.status_code == 503


@pytest.mark.unit
class TestSqlAlchemySnapshotStore:
    @pytest.fixture
    async def sql_store(self):
        """Store over an in-memory SQLite database."""
        engine = create_async_engine(
            "sqlite+aiosqlite:///:memory:",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
        store = SqlAlchemySnapshotStore(engine)
        await store.initialize()
        yield store
        await store.close()

    @pytest.mark.asyncio
    async def test_save_then_load(self, sql_store):
        await sql_store.save(INTERACTIONS, [{"id": "i1", "type": "like"}])

        assert await sql_store.load(INTERACTIONS) == [{"id": "i1", "type": "like"}]

    @pytest.mark.asyncio
    async def test_save_overwrites_collection(self, sql_store):
        await sql_store.save(INTERACTIONS, [{"id": "i1"}])
        await sql_store.save(INTERACTIONS, [])

        assert await sql_store.load(INTERACTIONS) == []

    @pytest.mark.asyncio
    async def test_missing_collection_loads_none(self, sql_store):
        assert await sql_store.load(USER_PROFILES) is None


@pytest.mark.unit
class TestRedisSnapshotStore:
    @pytest.fixture
    def redis_store(self, mock_redis):
        return RedisSnapshotStore(redis_client=mock_redis, key_prefix="test:")

    @pytest.mark.asyncio
    async def test_save_writes_prefixed_key(self, redis_store, mock_redis):
        await redis_store.save(INTERACTIONS, [{"id": "i1"}])

        mock_redis.set.assert_called_once_with("test:interactions", b'[{"id": "i1"}]')

    @pytest.mark.asyncio
    async def test_load_decodes_bytes(self, redis_store, mock_redis):
        mock_redis.get = AsyncMock(return_value=b'[{"id": "u1"}]')

        assert await redis_store.load(USER_PROFILES) == [{"id": "u1"}]
        mock_redis.get.assert_called_once_with("test:user_profiles")

    @pytest.mark.asyncio
    async def test_missing_key_loads_none(self, redis_store):
        assert await redis_store.load(USER_PROFILES) is None

    @pytest.mark.asyncio
    async def test_corrupt_payload_raises_storage_error(self, redis_store, mock_redis):
        mock_redis.get = AsyncMock(return_value=b"{not json")

        with pytest.raises(StorageError) as exc_info:
            await redis_store.load(USER_PROFILES)
        assert exc_info.value.operation == "load"

    @pytest.mark.asyncio
    async def test_redis_failure_raises_storage_error(self, redis_store, mock_redis):
        mock_redis.set = AsyncMock(side_effect=RedisConnectionError("down"))

        with pytest.raises(StorageError) as exc_info:
            await redis_store.save(INTERACTIONS, [])
        assert isinstance(exc_info.value.__cause__, RedisConnectionError)

    @pytest.mark.asyncio
    async def test_close_releases_client(self, redis_store, mock_redis):
        await redis_store.close()

        mock_redis.aclose.assert_awaited_once()


@pytest.mark.unit
class TestCreateStore:
    @pytest.mark.asyncio
    async def test_memory_backend(self):
        store = await create_store(Settings(store_backend="memory"))

        assert isinstance(store, InMemorySnapshotStore)

    @pytest.mark.asyncio
    async def test_sql_backend(self):
        store = await create_store(
            Settings(store_backend="sql", database_url="sqlite+aiosqlite:///:memory:")
        )
        try:
            assert isinstance(store, SqlAlchemySnapshotStore)
            assert await store.load(INTERACTIONS) is None
        finally:
            await store.close()

    @pytest.mark.asyncio
    async def test_redis_backend_connects(self, mock_redis):
        with patch("personalization.repositories.redis_store.redis.Redis", return_value=mock_redis):
            store = await create_store(
                Settings(store_backend="redis", store_key_prefix="p:")
            )

        assert isinstance(store, RedisSnapshotStore)
        assert store.key_prefix == "p:"
        mock_redis.ping.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_backend(self):
        with pytest.raises(ValidationError):
            await create_store(Settings(store_backend="cassandra"))
