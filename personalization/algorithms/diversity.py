"""
Diversity Recommendation Strategy.

Surfaces content types the user rarely views: for every discovery type
seen fewer than twice in the view history, the highest-rated catalog
item of that type is emitted at a fixed score. Articles are the default
format and are never a discovery type. Seen content is not excluded.
"""

from collections import Counter
from typing import List

from personalization.algorithms.base import BaseRecommendationStrategy, StrategyContext
from personalization.models.content import ContentType
from personalization.models.recommendation import (
    ReasonType,
    Recommendation,
    RecommendationReason,
    StrategyName,
)

UNDER_REPRESENTED_BELOW = 2

# Walked in this order; with a sub-limit of 1 only the first qualifying type is picked
DISCOVERY_TYPES = (
    ContentType.INTERVIEW,
    ContentType.PHOTO_REPORT,
    ContentType.VIDEO_ANALYSIS,
    ContentType.TESTIMONIAL,
)


class DiversityRecommendation(BaseRecommendationStrategy):
    """At most one pick per under-represented content type."""

    strategy = StrategyName.DIVERSITY

    def __init__(self, fixed_score: float = 0.5, version: str = "1.0"):
        super().__init__("Diversity Discovery", version)
        self.fixed_score = fixed_score

    def under_represented_types(self, context: StrategyContext) -> List[ContentType]:
        counts = Counter(view.content_type for view in context.profile.behavior.view_history)
        return [t for t in DISCOVERY_TYPES if counts[t] < UNDER_REPRESENTED_BELOW]

    async def generate_recommendations(
        self, context: StrategyContext, limit: int
    ) -> List[Recommendation]:
        pool = []
        for content_type in self.under_represented_types(context):
            if len(pool) >= limit:
                break

            type_items = [item for item in context.content_items if item.type == content_type]
            if not type_items:
                continue

            # max() keeps the first item among equal ratings
            best_item = max(type_items, key=lambda item: item.metrics.rating)
            reason = RecommendationReason(
                type=ReasonType.NEW_CONTENT_TYPE,
                explanation="Discover a new type of content",
                weight=self.fixed_score,
            )
            pool.append(self.build_recommendation(best_item, self.fixed_score, [reason]))

        self.log_pool(context.profile.id, limit, pool)
        return pool
