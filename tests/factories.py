"""
Builders for content items and profiles used across tests.
"""

import asyncio
from datetime import datetime, timezone

from personalization.models.content import ContentItem, ContentMetrics, ContentType
from personalization.models.profile import UserProfile, ViewHistoryItem
from personalization.repositories import InMemorySnapshotStore

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_item(
    content_id: str,
    content_type: ContentType = ContentType.ARTICLE,
    category: str = None,
    tags=None,
    author: str = None,
    views: int = 0,
    likes: int = 0,
    shares: int = 0,
    rating: float = 0.0,
    engagement: float = 0.0,
    published_at: datetime = NOW,
) -> ContentItem:
    return ContentItem(
        id=content_id,
        type=content_type,
        title=f"Title {content_id}",
        published_at=published_at,
        author=author,
        category=category,
        tags=tags or [],
        metrics=ContentMetrics(
            views=views, likes=likes, shares=shares, rating=rating, engagement=engagement
        ),
    )


def profile_with_views(user_id: str, *items: ContentItem) -> UserProfile:
    profile = UserProfile(id=user_id)
    for item in items:
        profile.behavior.view_history.append(
            ViewHistoryItem(content_id=item.id, content_type=item.type, viewed_at=NOW)
        )
    return profile


class SlowFirstSaveStore(InMemorySnapshotStore):
    """In-memory store whose first save suspends longer than the rest."""

    def __init__(self, first_delay: float = 0.05):
        super().__init__()
        self.first_delay = first_delay
        self._delayed = False

    async def save(self, collection, data):
        encoded = self._encode(collection, data)
        delay = 0 if self._delayed else self.first_delay
        self._delayed = True
        await asyncio.sleep(delay)
        self.save_count += 1
        self._snapshots[collection] = encoded
