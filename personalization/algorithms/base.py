"""
Base recommendation strategy interface.

This provides:
1. Abstract base class for all strategy pools
2. The read-only scoring context shared by the strategies
3. Freshness decay used to annotate final recommendations
4. Common validation and logging helpers
"""

import logging
import math
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional

from personalization.core.clock import as_utc
from personalization.models.content import ContentItem
from personalization.models.profile import UserProfile
from personalization.models.recommendation import (
    Recommendation,
    RecommendationMetadata,
    RecommendationReason,
    StrategyName,
)

logger = logging.getLogger(__name__)


def calculate_freshness(
    published_at: datetime, now: datetime, window_days: int = 30
) -> float:
    """Linear decay from 1 at publication to 0 after window_days."""
    days_since = (as_utc(now) - as_utc(published_at)).total_seconds() / 86400
    return max(0.0, 1 - days_since / window_days)


def sub_limit(limit: int, share: float) -> int:
    """Per-strategy target size, rounded down."""
    return int(math.floor(limit * share))


class StrategyContext:
    """
    Snapshot of everything a strategy needs for one scoring pass.

    The profile is a copy taken under the user lock and the catalog is a
    single pull, so strategies read consistent data without locking.
    """

    def __init__(self, profile: UserProfile, content_items: List[ContentItem]):
        self.profile = profile
        self.content_items = content_items
        self.content_index: Dict[str, ContentItem] = {item.id: item for item in content_items}

    @property
    def viewed_ids(self) -> set:
        return set(self.profile.viewed_content_ids)

    def unseen_items(self) -> List[ContentItem]:
        viewed = self.viewed_ids
        return [item for item in self.content_items if item.id not in viewed]

    def viewed_items(self) -> List[ContentItem]:
        """Viewed content still present in the catalog, in history order."""
        items = []
        for content_id in self.profile.viewed_content_ids:
            item = self.content_index.get(content_id)
            if item is not None:
                items.append(item)
        return items


class BaseRecommendationStrategy(ABC):
    """
    Abstract base class for strategy pools.

    Each strategy returns candidates sorted by score descending and
    truncated to its own sub-limit; the hybrid orchestrator merges pools.
    """

    strategy: StrategyName

    def __init__(self, name: str, version: str = "1.0"):
        """
        Initialize the strategy.

        Args:
            name: Human-readable name for this strategy
            version: Version tag written into recommendation metadata
        """
        self.name = name
        self.version = version
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    async def generate_recommendations(
        self, context: StrategyContext, limit: int
    ) -> List[Recommendation]:
        """
        Produce this strategy's candidate pool.

        Args:
            context: Profile and catalog snapshot
            limit: Sub-limit for this pool (may be 0)

        Returns:
            Candidates sorted by score descending, at most limit long
        """

    def build_recommendation(
        self,
        item: ContentItem,
        score: float,
        reasons: Optional[List[RecommendationReason]] = None,
    ) -> Recommendation:
        return Recommendation(
            content_id=item.id,
            content_type=item.type,
            score=score,
            reasons=reasons or [],
            metadata=RecommendationMetadata(
                algorithm=self.strategy.value,
                strategy=self.strategy,
                version=self.version,
                confidence=score,
            ),
        )

    @staticmethod
    def top(recommendations: List[Recommendation], limit: int) -> List[Recommendation]:
        """Stable sort by score descending, then truncate."""
        ordered = sorted(recommendations, key=lambda r: r.score, reverse=True)
        return ordered[: max(limit, 0)]

    def log_pool(self, user_id: str, limit: int, pool: List[Recommendation]) -> None:
        self.logger.debug(
            f"{self.name}: {len(pool)} candidates for user {user_id} (sub-limit {limit})"
        )
