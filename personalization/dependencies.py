"""
FastAPI dependencies for dependency injection.

This provides:
1. The engine built in the application lifespan
2. Service dependencies resolved from the engine
"""

from fastapi import Depends, Request

from personalization.engine import PersonalizationEngine
from personalization.services import ExperimentEvaluator, RecommendationService, SocialService


def get_engine(request: Request) -> PersonalizationEngine:
    """Engine instance stored on app.state by the lifespan."""
    return request.app.state.engine


# Service Dependencies
def get_recommendation_service(
    engine: PersonalizationEngine = Depends(get_engine),
) -> RecommendationService:
    return engine.recommendations


def get_social_service(engine: PersonalizationEngine = Depends(get_engine)) -> SocialService:
    return engine.social


def get_experiment_evaluator(
    engine: PersonalizationEngine = Depends(get_engine),
) -> ExperimentEvaluator:
    return engine.experiments
