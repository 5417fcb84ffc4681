"""
Content-Based Recommendation Strategy.

For each unseen item, the score is its best similarity to any item the
user has viewed. Items whose best similarity exceeds the threshold are
recommended with a reason naming the closest viewed title.
"""

from typing import List

from personalization.algorithms.base import BaseRecommendationStrategy, StrategyContext
from personalization.algorithms.similarity import content_similarity
from personalization.models.recommendation import (
    ReasonType,
    Recommendation,
    RecommendationReason,
    StrategyName,
)


class ContentBasedRecommendation(BaseRecommendationStrategy):
    """
    Content-based recommendation strategy.

    Algorithm Steps:
    1. Resolve the user's view history against the catalog
    2. Score every unseen item by max similarity to a viewed item
    3. Keep items above the threshold, best first
    """

    strategy = StrategyName.CONTENT_BASED

    def __init__(self, min_similarity: float = 0.3, version: str = "1.0"):
        super().__init__("Content-Based Filtering", version)
        self.min_similarity = min_similarity

    async def generate_recommendations(
        self, context: StrategyContext, limit: int
    ) -> List[Recommendation]:
        viewed_items = context.viewed_items()
        if not viewed_items:
            return []

        candidates = []
        for item in context.unseen_items():
            max_similarity = 0.0
            best_match = None

            for viewed in viewed_items:
                similarity = content_similarity(item, viewed)
                if similarity > max_similarity:
                    max_similarity = similarity
                    best_match = viewed

            if best_match is not None and max_similarity > self.min_similarity:
                reason = RecommendationReason(
                    type=ReasonType.SIMILAR_CONTENT,
                    explanation=f'Similar to "{best_match.title}" which you viewed',
                    weight=max_similarity,
                )
                candidates.append(self.build_recommendation(item, max_similarity, [reason]))

        pool = self.top(candidates, limit)
        self.log_pool(context.profile.id, limit, pool)
        return pool
