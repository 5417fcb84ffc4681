"""
Shared test fixtures and configuration.
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from personalization.config import Settings
from personalization.engine import PersonalizationEngine
from personalization.models.content import ContentType
from personalization.repositories import InMemoryContentCatalog, InMemorySnapshotStore
from tests.factories import NOW, make_item


@pytest.fixture
def settings():
    """Isolated settings: in-memory store, no catalog file."""
    return Settings(store_backend="memory", catalog_path=None, log_level="DEBUG")


@pytest.fixture
def sample_content():
    """Small catalog covering every content type."""
    return [
        make_item(
            "a1", ContentType.ARTICLE, "politics", ["election", "vote"], "alice",
            views=500, likes=40, shares=10, rating=4.5, engagement=12,
            published_at=NOW - timedelta(days=3),
        ),
        make_item(
            "a2", ContentType.ARTICLE, "politics", ["vote", "campaign"], "bob",
            views=200, likes=10, shares=5, rating=3.8, engagement=40,
            published_at=NOW - timedelta(days=10),
        ),
        make_item(
            "i1", ContentType.INTERVIEW, "economy", ["jobs"], "carol",
            views=900, likes=80, shares=30, rating=4.1, engagement=5,
            published_at=NOW - timedelta(days=45),
        ),
        make_item(
            "p1", ContentType.PHOTO_REPORT, "culture", ["festival"], "dave",
            views=50, likes=2, shares=1, rating=4.9,
        ),
        make_item(
            "v1", ContentType.VIDEO_ANALYSIS, "politics", ["election"], "erin",
            views=120, likes=9, shares=3, rating=3.2,
        ),
        make_item(
            "t1", ContentType.TESTIMONIAL, "society", ["voices"], "frank",
            views=10, likes=1, shares=0, rating=2.5,
        ),
    ]


@pytest.fixture
def memory_store():
    return InMemorySnapshotStore()


@pytest.fixture
def catalog(sample_content):
    return InMemoryContentCatalog(sample_content)


@pytest.fixture
async def engine(settings, memory_store, catalog):
    """Fully wired engine over the in-memory store and catalog."""
    engine = PersonalizationEngine(settings, memory_store, catalog)
    await engine.load()
    yield engine
    await engine.close()


@pytest.fixture
def mock_redis():
    """Mock Redis client."""
    redis_mock = AsyncMock()
    redis_mock.ping = AsyncMock(return_value=True)
    redis_mock.get = AsyncMock(return_value=None)
    redis_mock.set = AsyncMock(return_value=True)
    redis_mock.aclose = AsyncMock(return_value=None)
    return redis_mock
