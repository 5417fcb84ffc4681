"""
Behavior-Based Recommendation Strategy.

Scores unseen content against patterns in the user's view history:
1. Category seen before: +0.4 (category_match reason)
2. Content type seen before: +0.3 (user_behavior reason)
3. Catalog engagement: +min(engagement / 100, 0.3), no reason attached

Candidates must score above the minimum threshold (0.3).
"""

from typing import List

from personalization.algorithms.base import BaseRecommendationStrategy, StrategyContext
from personalization.models.recommendation import (
    ReasonType,
    Recommendation,
    RecommendationReason,
    StrategyName,
)

CATEGORY_MATCH_WEIGHT = 0.4
TYPE_MATCH_WEIGHT = 0.3
MAX_ENGAGEMENT_BOOST = 0.3


class BehaviorBasedRecommendation(BaseRecommendationStrategy):
    """Recommends unseen content resembling what the user already views."""

    strategy = StrategyName.BEHAVIOR_BASED

    def __init__(self, min_score: float = 0.3, version: str = "1.0"):
        super().__init__("Behavior-Based", version)
        self.min_score = min_score

    async def generate_recommendations(
        self, context: StrategyContext, limit: int
    ) -> List[Recommendation]:
        viewed_categories = set()
        for item in context.viewed_items():
            if item.category:
                viewed_categories.add(item.category)
        viewed_types = {view.content_type for view in context.profile.behavior.view_history}

        candidates = []
        for item in context.unseen_items():
            score = 0.0
            reasons = []

            if item.category and item.category in viewed_categories:
                score += CATEGORY_MATCH_WEIGHT
                reasons.append(
                    RecommendationReason(
                        type=ReasonType.CATEGORY_MATCH,
                        explanation=f'You showed interest in the "{item.category}" category',
                        weight=CATEGORY_MATCH_WEIGHT,
                    )
                )

            if item.type in viewed_types:
                score += TYPE_MATCH_WEIGHT
                reasons.append(
                    RecommendationReason(
                        type=ReasonType.USER_BEHAVIOR,
                        explanation="You often view this type of content",
                        weight=TYPE_MATCH_WEIGHT,
                    )
                )

            score += min(item.metrics.engagement / 100, MAX_ENGAGEMENT_BOOST)

            if score > self.min_score:
                candidates.append(self.build_recommendation(item, score, reasons))

        pool = self.top(candidates, limit)
        self.log_pool(context.profile.id, limit, pool)
        return pool
