"""
Hybrid Recommendation Algorithm.

This provides:
1. Target-share allocation of the final list across four strategy pools
2. Global merge and ranking of all pools by score
3. Metadata annotation (generation time, confidence, freshness)
"""

from datetime import datetime
from typing import Dict, List, Optional

from personalization.algorithms.base import (
    BaseRecommendationStrategy,
    StrategyContext,
    calculate_freshness,
    sub_limit,
)
from personalization.algorithms.behavior_based import BehaviorBasedRecommendation
from personalization.algorithms.content_based import ContentBasedRecommendation
from personalization.algorithms.diversity import DiversityRecommendation
from personalization.algorithms.trending import TrendingRecommendation
from personalization.config import Settings
from personalization.core.clock import utcnow
from personalization.models.recommendation import Recommendation, StrategyName


class HybridRecommendation:
    """
    Hybrid recommendation algorithm that blends four strategies.

    Strategy (target shares of the final limit, rounded down):
    1. Behavior-based: 40%
    2. Content-based: 30%
    3. Trending: 20%
    4. Diversity: 10%

    Shares are targets, not quotas: pools are concatenated in that order,
    sorted by score with a stable sort (ties keep strategy-then-candidate
    order) and truncated to the limit.
    """

    ALGORITHM_TAG = "hybrid"

    def __init__(
        self,
        settings: Settings,
        strategies: Optional[Dict[StrategyName, BaseRecommendationStrategy]] = None,
    ):
        self.name = "Hybrid Recommendation System"
        self.settings = settings
        self.version = settings.recommendation_version
        self.weights = {
            StrategyName(name): share for name, share in settings.strategy_shares.items()
        }
        self.strategies = strategies or {
            StrategyName.BEHAVIOR_BASED: BehaviorBasedRecommendation(
                min_score=settings.min_score_threshold, version=self.version
            ),
            StrategyName.CONTENT_BASED: ContentBasedRecommendation(
                min_similarity=settings.min_score_threshold, version=self.version
            ),
            StrategyName.TRENDING: TrendingRecommendation(
                fixed_score=settings.trending_score, version=self.version
            ),
            StrategyName.DIVERSITY: DiversityRecommendation(
                fixed_score=settings.diversity_score, version=self.version
            ),
        }

    def sub_limits(self, limit: int) -> Dict[StrategyName, int]:
        return {name: sub_limit(limit, share) for name, share in self.weights.items()}

    async def generate_recommendations(
        self, context: StrategyContext, limit: int, now: Optional[datetime] = None
    ) -> List[Recommendation]:
        """
        Generate the blended, ranked list.

        Args:
            context: Profile and catalog snapshot
            limit: Maximum number of recommendations
            now: Reference time for metadata and freshness

        Returns:
            At most limit recommendations, best first
        """
        limits = self.sub_limits(limit)

        merged: List[Recommendation] = []
        for name in StrategyName:
            strategy = self.strategies.get(name)
            if strategy is None:
                continue
            merged.extend(await strategy.generate_recommendations(context, limits[name]))

        ranked = BaseRecommendationStrategy.top(merged, limit)
        return self._annotate(ranked, context, now or utcnow())

    def _annotate(
        self, recommendations: List[Recommendation], context: StrategyContext, now: datetime
    ) -> List[Recommendation]:
        annotated = []
        for rec in recommendations:
            item = context.content_index.get(rec.content_id)
            freshness = (
                calculate_freshness(item.published_at, now, self.settings.freshness_window_days)
                if item is not None
                else 0.0
            )
            metadata = rec.metadata.model_copy(
                update={
                    "generated_at": now,
                    "algorithm": self.ALGORITHM_TAG,
                    "version": self.version,
                    "confidence": rec.score,
                    "freshness": freshness,
                }
            )
            annotated.append(rec.model_copy(update={"metadata": metadata}))
        return annotated
