"""
Trending Content Recommendation Strategy.

Ranks the whole catalog by raw popularity (views + likes + shares from
the catalog metrics) and emits the top items at a fixed score. This is a
different signal from the ledger-based engagement ranking, and it does
not exclude content the user has already seen.
"""

from typing import List

from personalization.algorithms.base import BaseRecommendationStrategy, StrategyContext
from personalization.models.recommendation import (
    ReasonType,
    Recommendation,
    RecommendationReason,
    StrategyName,
)


class TrendingRecommendation(BaseRecommendationStrategy):
    """Globally most popular catalog items."""

    strategy = StrategyName.TRENDING

    def __init__(self, fixed_score: float = 0.7, version: str = "1.0"):
        super().__init__("Trending Content", version)
        self.fixed_score = fixed_score

    async def generate_recommendations(
        self, context: StrategyContext, limit: int
    ) -> List[Recommendation]:
        if limit <= 0:
            return []

        # Stable: equal popularity keeps catalog order
        ranked = sorted(
            context.content_items, key=lambda item: item.metrics.popularity, reverse=True
        )

        pool = []
        for item in ranked[:limit]:
            reason = RecommendationReason(
                type=ReasonType.TRENDING,
                explanation="Trending now",
                weight=self.fixed_score,
            )
            pool.append(self.build_recommendation(item, self.fixed_score, [reason]))

        self.log_pool(context.profile.id, limit, pool)
        return pool
