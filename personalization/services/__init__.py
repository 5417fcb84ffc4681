# Service layer - business logic over the repositories
from .base import BaseService
from .engagement_service import EngagementAggregator
from .experiment_service import ExperimentEvaluator
from .recommendation_service import RecommendationService
from .share_intents import build_share_intent
from .social_service import SocialService

__all__ = [
    "BaseService",
    "EngagementAggregator",
    "ExperimentEvaluator",
    "RecommendationService",
    "SocialService",
    "build_share_intent",
]
