"""
API endpoints for content recommendations.

This provides:
1. User personalized recommendations
2. Filtered personalized feed
3. Profile updates (interactions, views, searches)
4. Behavior analytics
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from personalization.dependencies import get_recommendation_service
from personalization.models.profile import BehaviorAnalytics, InteractionItem
from personalization.models.recommendation import FeedFilters
from personalization.schemas.recommendations import (
    FeedResponse,
    InteractionRequest,
    RecommendationResponse,
    SearchRequest,
    ViewRequest,
    ViewResponse,
)
from personalization.services.recommendation_service import RecommendationService

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


@router.get("/{user_id}", response_model=RecommendationResponse)
async def get_user_recommendations(
    user_id: str = Path(..., description="User ID to get recommendations for"),
    limit: int = Query(10, description="Number of recommendations"),
    service: RecommendationService = Depends(get_recommendation_service),
):
    """
    Get personalized recommendations for a user.

    Blends four strategy pools (behavior based, content based, trending,
    diversity) and returns the top `limit` by score. Unknown users get a
    default profile, so the list is never empty while the catalog has content.
    """
    recommendations = await service.generate(user_id, limit)
    return RecommendationResponse(
        user_id=user_id,
        recommendations=recommendations,
        total_items=len(recommendations),
    )


@router.post("/{user_id}/feed", response_model=FeedResponse)
async def get_personalized_feed(
    user_id: str = Path(..., description="User ID"),
    filters: Optional[FeedFilters] = None,
    service: RecommendationService = Depends(get_recommendation_service),
):
    """
    Get recommended content items, filtered.

    **Filters (all optional, applied in order):**
    - `content_types`, `categories`: allow-lists
    - `min_rating`: minimum content rating
    - `date_range`: inclusive publish date range
    - `exclude_viewed`: drop content the user has already viewed
    """
    items = await service.personalized_feed(user_id, filters)
    return FeedResponse(user_id=user_id, items=items, total_items=len(items))


@router.post("/{user_id}/interactions", status_code=204)
async def record_interaction(
    request: InteractionRequest,
    user_id: str = Path(..., description="User ID"),
    service: RecommendationService = Depends(get_recommendation_service),
):
    await service.update_profile(
        user_id,
        InteractionItem(
            type=request.type,
            content_id=request.content_id,
            content_type=request.content_type,
            metadata=request.metadata,
        ),
    )


@router.post("/{user_id}/views", response_model=ViewResponse)
async def record_view(
    request: ViewRequest,
    user_id: str = Path(..., description="User ID"),
    service: RecommendationService = Depends(get_recommendation_service),
):
    recorded = await service.record_view(
        user_id,
        request.content_id,
        request.content_type,
        duration_seconds=request.duration_seconds,
        completed=request.completed,
        viewed_at=request.viewed_at,
    )
    return ViewResponse(recorded=recorded)


@router.post("/{user_id}/searches", status_code=204)
async def record_search(
    request: SearchRequest,
    user_id: str = Path(..., description="User ID"),
    service: RecommendationService = Depends(get_recommendation_service),
):
    await service.record_search(user_id, request.query, request.results_clicked, request.filters)


@router.get("/{user_id}/behavior", response_model=BehaviorAnalytics)
async def analyze_behavior(
    user_id: str = Path(..., description="User ID"),
    service: RecommendationService = Depends(get_recommendation_service),
):
    """Reading time and content preference patterns from the view history."""
    return await service.analyze_behavior(user_id)
