# Recommendation algorithms package initialization

from .base import BaseRecommendationStrategy, StrategyContext, calculate_freshness
from .behavior_based import BehaviorBasedRecommendation
from .content_based import ContentBasedRecommendation
from .diversity import DiversityRecommendation
from .hybrid import HybridRecommendation
from .similarity import content_similarity
from .trending import TrendingRecommendation

__all__ = [
    "BaseRecommendationStrategy",
    "StrategyContext",
    "calculate_freshness",
    "content_similarity",
    "BehaviorBasedRecommendation",
    "ContentBasedRecommendation",
    "TrendingRecommendation",
    "DiversityRecommendation",
    "HybridRecommendation",
]
