# Import all models to make them available
from .content import ContentItem, ContentMetrics, ContentType
from .experiment import ExperimentOutcome, ExperimentResults, Variant, VariantPerformance
from .interaction import (
    InteractionType,
    ShareIntent,
    SharePlatform,
    SocialInteraction,
    SocialStats,
    UserSocialData,
)
from .profile import (
    BehaviorAnalytics,
    InteractionItem,
    InteractionItemType,
    UserProfile,
    ViewHistoryItem,
)
from .recommendation import (
    FeedFilters,
    ReasonType,
    Recommendation,
    RecommendationReason,
    StrategyName,
)

__all__ = [
    "ContentItem",
    "ContentMetrics",
    "ContentType",
    "InteractionType",
    "SharePlatform",
    "ShareIntent",
    "SocialInteraction",
    "SocialStats",
    "UserSocialData",
    "UserProfile",
    "ViewHistoryItem",
    "InteractionItem",
    "InteractionItemType",
    "BehaviorAnalytics",
    "Recommendation",
    "RecommendationReason",
    "ReasonType",
    "StrategyName",
    "FeedFilters",
    "Variant",
    "VariantPerformance",
    "ExperimentResults",
    "ExperimentOutcome",
]
