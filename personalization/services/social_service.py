"""
Social Service - Likes, bookmarks, shares and views over the interaction ledger.

This provides:
1. Toggle, view and share operations with immediate stats refresh
2. Share intents for the external browser/OS executor
3. Per-content stats and ledger-based trending
4. Per-user social activity lookups
5. Forwarding of behavioral interactions into the user profile

Each mutation holds the per-content lock while it changes the ledger,
recomputes stats and persists, so a concurrent toggle and recompute for
the same content can never interleave.
"""

from typing import List, Optional, Tuple

from personalization.config import Settings
from personalization.core.exceptions import ValidationError
from personalization.core.locks import KeyedLock
from personalization.models.content import ContentType
from personalization.models.interaction import (
    TOGGLE_TYPES,
    InteractionType,
    ShareIntent,
    SocialStats,
    UserSocialData,
)
from personalization.models.profile import InteractionItem, InteractionItemType
from personalization.repositories.interaction_repository import InteractionLedger
from personalization.services.base import BaseService
from personalization.services.engagement_service import EngagementAggregator
from personalization.services.recommendation_service import RecommendationService
from personalization.services.share_intents import build_share_intent

_PROFILE_INTERACTIONS = {
    InteractionType.LIKE: InteractionItemType.LIKE,
    InteractionType.BOOKMARK: InteractionItemType.BOOKMARK,
    InteractionType.SHARE: InteractionItemType.SHARE,
}


class SocialService(BaseService):
    def __init__(
        self,
        settings: Settings,
        ledger: InteractionLedger,
        aggregator: EngagementAggregator,
        recommendations: Optional[RecommendationService] = None,
    ):
        super().__init__(settings)
        self.ledger = ledger
        self.aggregator = aggregator
        self.recommendations = recommendations
        self.locks = KeyedLock()

    async def toggle(
        self,
        user_id: str,
        content_id: str,
        content_type: ContentType,
        kind: InteractionType,
    ) -> bool:
        """
        Flip a like or bookmark.

        Returns:
            The new state (True = active)

        Raises:
            ValidationError: For blank ids or a non-toggle kind
            StorageError: If persisting fails (the toggle stays applied in memory)
        """
        self._require_id(user_id, "user_id")
        self._require_id(content_id, "content_id")
        kind = self._coerce_kind(kind)
        if kind not in TOGGLE_TYPES:
            raise ValidationError(f"{kind.value} cannot be toggled", {"field": "kind"})
        content_type = self._coerce_content_type(content_type)
        self._log_operation("toggle", user_id=user_id, content_id=content_id, kind=kind.value)

        active = False
        try:
            async with self.locks.hold(content_id):
                active = self.ledger.toggle(user_id, content_id, content_type, kind)
                self.aggregator.recompute(content_id)
                await self._persist()
        finally:
            if active:
                await self._track(user_id, content_id, content_type, kind)
        return active

    async def like(self, user_id: str, content_id: str, content_type: ContentType) -> bool:
        return await self.toggle(user_id, content_id, content_type, InteractionType.LIKE)

    async def bookmark(self, user_id: str, content_id: str, content_type: ContentType) -> bool:
        return await self.toggle(user_id, content_id, content_type, InteractionType.BOOKMARK)

    async def view(self, user_id: str, content_id: str, content_type: ContentType) -> None:
        """Record a view; repeat views by the same user are ignored."""
        self._require_id(user_id, "user_id")
        self._require_id(content_id, "content_id")
        content_type = self._coerce_content_type(content_type)

        try:
            async with self.locks.hold(content_id):
                if not self.ledger.view(user_id, content_id, content_type):
                    return
                self.aggregator.recompute(content_id)
                await self._persist()
        finally:
            if self.recommendations is not None:
                await self.recommendations.record_view(user_id, content_id, content_type)

    async def share(
        self,
        user_id: str,
        content_id: str,
        content_type: ContentType,
        platform: str,
        share_url: str,
        share_text: str,
    ) -> ShareIntent:
        """
        Record a share and return the intent for the external executor.

        Unrecognized platforms are recorded as-is and get a copy-to-clipboard intent.
        """
        self._require_id(user_id, "user_id")
        self._require_id(content_id, "content_id")
        self._require_id(platform, "platform")
        content_type = self._coerce_content_type(content_type)
        self._log_operation("share", user_id=user_id, content_id=content_id, platform=platform)

        intent = build_share_intent(platform, share_url, share_text)
        metadata = {"platform": intent.platform, "shareUrl": share_url, "shareText": share_text}

        try:
            async with self.locks.hold(content_id):
                self.ledger.share(user_id, content_id, content_type, metadata)
                self.aggregator.recompute(content_id)
                await self._persist()
        finally:
            await self._track(
                user_id, content_id, content_type, InteractionType.SHARE, {"platform": intent.platform}
            )
        return intent

    async def get_stats(self, content_id: str) -> SocialStats:
        self._require_id(content_id, "content_id")
        async with self.locks.hold(content_id):
            return self.aggregator.get_stats(content_id)

    def trending(self, limit: int = 10) -> List[Tuple[str, SocialStats]]:
        self._require_limit(limit, self.settings.max_recommendations)
        return self.aggregator.trending(limit)

    def get_user_social_data(self, user_id: str) -> UserSocialData:
        self._require_id(user_id, "user_id")
        return self.ledger.get_user_social_data(user_id).model_copy(deep=True)

    def is_liked(self, user_id: str, content_id: str) -> bool:
        return content_id in self.get_user_social_data(user_id).likes

    def is_bookmarked(self, user_id: str, content_id: str) -> bool:
        return content_id in self.get_user_social_data(user_id).bookmarks

    def liked_content(self, user_id: str) -> List[str]:
        return self.get_user_social_data(user_id).likes

    def bookmarked_content(self, user_id: str) -> List[str]:
        return self.get_user_social_data(user_id).bookmarks

    async def _persist(self) -> None:
        await self.ledger.persist()
        await self.aggregator.persist()

    async def _track(
        self,
        user_id: str,
        content_id: str,
        content_type: ContentType,
        kind: InteractionType,
        metadata: Optional[dict] = None,
    ) -> None:
        if self.recommendations is None:
            return
        await self.recommendations.update_profile(
            user_id,
            InteractionItem(
                type=_PROFILE_INTERACTIONS[kind],
                content_id=content_id,
                content_type=content_type,
                metadata=metadata,
            ),
        )

    @staticmethod
    def _coerce_kind(kind) -> InteractionType:
        try:
            return InteractionType(kind)
        except ValueError:
            raise ValidationError(f"Unknown interaction kind: {kind}", {"field": "kind"})

    @staticmethod
    def _coerce_content_type(content_type) -> ContentType:
        try:
            return ContentType(content_type)
        except ValueError:
            raise ValidationError(
                f"Unknown content type: {content_type}", {"field": "content_type"}
            )
