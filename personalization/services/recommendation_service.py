"""
Recommendation Service - Orchestrates ranking and profile updates.

This provides:
1. Generate: blended, ranked recommendations for a user
2. Personalized feed: recommendations resolved to content and filtered
3. Profile updates from behavioral interactions, views and searches
4. Behavior analytics derived from the profile
"""

from collections import Counter
from datetime import datetime
from typing import Any, Dict, List, Optional

from personalization.algorithms.base import StrategyContext
from personalization.algorithms.hybrid import HybridRecommendation
from personalization.config import Settings
from personalization.core.clock import as_utc, utcnow
from personalization.models.content import ContentItem, ContentType
from personalization.models.profile import (
    RATING_INTERACTIONS,
    BehaviorAnalytics,
    BehaviorPattern,
    InteractionItem,
    SearchHistoryItem,
    ViewHistoryItem,
)
from personalization.models.recommendation import FeedFilters, Recommendation
from personalization.repositories.content_repository import ContentCatalog
from personalization.repositories.profile_repository import UserProfileStore
from personalization.services.base import BaseService


class RecommendationService(BaseService):
    """
    Main recommendation service.

    Generate snapshots the profile under the per-user lock and ranks
    outside it, so calls for different users run in parallel and a call
    never ranks against a half-applied profile update.
    """

    def __init__(
        self,
        settings: Settings,
        catalog: ContentCatalog,
        profiles: UserProfileStore,
        hybrid: Optional[HybridRecommendation] = None,
    ):
        super().__init__(settings)
        self.catalog = catalog
        self.profiles = profiles
        self.hybrid = hybrid or HybridRecommendation(settings)

    async def generate(self, user_id: str, limit: int = 10) -> List[Recommendation]:
        """
        Get ranked recommendations for a user.

        Args:
            user_id: User to rank for (profile is created if unknown)
            limit: Maximum number of recommendations

        Returns:
            At most limit recommendations, best first

        Raises:
            ValidationError: If user_id or limit is invalid
            StorageError: If the content catalog cannot be read
            ServiceError: If a strategy fails unexpectedly
        """
        self._require_id(user_id, "user_id")
        self._require_limit(limit, self.settings.max_recommendations)
        self._log_operation("generate", user_id=user_id, limit=limit)

        async with self.profiles.locks.hold(user_id):
            profile = self.profiles.snapshot(user_id)

        try:
            content_items = await self.catalog.list_content_items()
            context = StrategyContext(profile, content_items)
            return await self.hybrid.generate_recommendations(context, limit)
        except Exception as e:
            self._handle_service_error(e, "generate recommendations")

    async def personalized_feed(
        self, user_id: str, filters: Optional[FeedFilters] = None
    ) -> List[ContentItem]:
        """
        Recommended content items for a user, filtered.

        Recommended ids missing from the current catalog are dropped
        silently; an item recommended by several strategies appears once.
        """
        recommendations = await self.generate(user_id, self.settings.feed_candidate_limit)
        index = await self.catalog.get_index()

        feed: List[ContentItem] = []
        seen = set()
        for rec in recommendations:
            item = index.get(rec.content_id)
            if item is None or item.id in seen:
                continue
            seen.add(item.id)
            feed.append(item)

        if filters is None:
            return feed

        if filters.content_types is not None:
            allowed_types = set(filters.content_types)
            feed = [item for item in feed if item.type in allowed_types]
        if filters.categories is not None:
            allowed_categories = set(filters.categories)
            feed = [item for item in feed if item.category and item.category in allowed_categories]
        if filters.min_rating is not None:
            feed = [item for item in feed if item.metrics.rating >= filters.min_rating]
        if filters.date_range is not None:
            start = as_utc(filters.date_range.start)
            end = as_utc(filters.date_range.end)
            feed = [item for item in feed if start <= as_utc(item.published_at) <= end]
        if filters.exclude_viewed:
            profile = self.profiles.get(user_id)
            viewed = set(profile.viewed_content_ids) if profile else set()
            feed = [item for item in feed if item.id not in viewed]

        return feed

    async def update_profile(self, user_id: str, interaction: InteractionItem) -> None:
        """
        Append a behavioral interaction to the profile.

        Likes and shares bump the rating of an existing view of that
        content by one, starting from the default rating and clamped to
        the maximum rating.
        """
        self._require_id(user_id, "user_id")
        self._log_operation(
            "update_profile",
            user_id=user_id,
            type=interaction.type.value,
            content_id=interaction.content_id,
        )

        async with self.profiles.locks.hold(user_id):
            profile = self.profiles.get_or_create(user_id)
            profile.behavior.interactions.append(interaction)

            if interaction.type in RATING_INTERACTIONS:
                view = profile.find_view(interaction.content_id)
                if view is not None:
                    current = view.rating if view.rating is not None else self.settings.default_view_rating
                    view.rating = min(current + 1, self.settings.max_view_rating)

            profile.updated_at = utcnow()
            await self.profiles.persist()

    async def record_view(
        self,
        user_id: str,
        content_id: str,
        content_type: ContentType,
        duration_seconds: float = 0,
        completed: bool = False,
        viewed_at: Optional[datetime] = None,
    ) -> bool:
        """
        Add a view to the history, once per content id.

        Returns:
            True if the history changed
        """
        self._require_id(user_id, "user_id")
        self._require_id(content_id, "content_id")

        async with self.profiles.locks.hold(user_id):
            profile = self.profiles.get_or_create(user_id)
            if profile.has_viewed(content_id):
                return False

            profile.behavior.view_history.append(
                ViewHistoryItem(
                    content_id=content_id,
                    content_type=content_type,
                    viewed_at=viewed_at or utcnow(),
                    duration_seconds=duration_seconds,
                    completed=completed,
                )
            )
            profile.updated_at = utcnow()
            await self.profiles.persist()
            return True

    async def record_search(
        self,
        user_id: str,
        query: str,
        results_clicked: Optional[List[str]] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._require_id(user_id, "user_id")
        self._require_id(query, "query")

        async with self.profiles.locks.hold(user_id):
            profile = self.profiles.get_or_create(user_id)
            profile.behavior.search_history.append(
                SearchHistoryItem(
                    query=query,
                    results_clicked=results_clicked or [],
                    filters=filters or {},
                )
            )
            profile.updated_at = utcnow()
            await self.profiles.persist()

    async def analyze_behavior(self, user_id: str) -> BehaviorAnalytics:
        """Summarise reading time and content type preference from the view history."""
        self._require_id(user_id, "user_id")

        async with self.profiles.locks.hold(user_id):
            profile = self.profiles.snapshot(user_id)

        views = profile.behavior.view_history
        total_duration = sum(view.duration_seconds for view in views)
        average_duration = total_duration / max(len(views), 1)

        patterns = [
            BehaviorPattern(
                type="reading_time",
                description=f"Average reading time: {round(average_duration / 60)} minutes",
                frequency=len(views),
                confidence=0.8,
            )
        ]

        if views:
            favourite_type, count = Counter(view.content_type for view in views).most_common(1)[0]
            patterns.append(
                BehaviorPattern(
                    type="content_preference",
                    description=f"Most viewed content type: {favourite_type.value}",
                    frequency=count,
                    confidence=round(count / len(views), 2),
                )
            )

        return BehaviorAnalytics(user_id=user_id, patterns=patterns)
