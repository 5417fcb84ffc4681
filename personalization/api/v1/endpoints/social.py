"""
API endpoints for social interactions.

This provides:
1. Like and bookmark toggles
2. View recording and sharing
3. Per-content stats and trending
4. Per-user social activity
"""

from fastapi import APIRouter, Depends, Path, Query

from personalization.dependencies import get_social_service
from personalization.models.interaction import UserSocialData
from personalization.schemas.social import (
    ContentStatsResponse,
    ShareRequest,
    ShareResponse,
    SocialActionRequest,
    ToggleResponse,
    TrendingResponse,
)
from personalization.services.social_service import SocialService

router = APIRouter(prefix="/social", tags=["social"])


# Static routes first so they are not captured by /{content_id}/...
@router.get("/trending", response_model=TrendingResponse)
async def get_trending(
    limit: int = Query(10, description="Number of content items"),
    service: SocialService = Depends(get_social_service),
):
    """Content ranked by engagement, highest first."""
    ranked = service.trending(limit)
    return TrendingResponse(
        items=[ContentStatsResponse(content_id=cid, stats=stats) for cid, stats in ranked]
    )


@router.get("/users/{user_id}", response_model=UserSocialData)
async def get_user_social_data(
    user_id: str = Path(..., description="User ID"),
    service: SocialService = Depends(get_social_service),
):
    return service.get_user_social_data(user_id)


@router.post("/{content_id}/like", response_model=ToggleResponse)
async def toggle_like(
    request: SocialActionRequest,
    content_id: str = Path(..., description="Content ID"),
    service: SocialService = Depends(get_social_service),
):
    active = await service.like(request.user_id, content_id, request.content_type)
    stats = await service.get_stats(content_id)
    return ToggleResponse(content_id=content_id, active=active, stats=stats)


@router.post("/{content_id}/bookmark", response_model=ToggleResponse)
async def toggle_bookmark(
    request: SocialActionRequest,
    content_id: str = Path(..., description="Content ID"),
    service: SocialService = Depends(get_social_service),
):
    active = await service.bookmark(request.user_id, content_id, request.content_type)
    stats = await service.get_stats(content_id)
    return ToggleResponse(content_id=content_id, active=active, stats=stats)


@router.post("/{content_id}/view", response_model=ContentStatsResponse)
async def record_view(
    request: SocialActionRequest,
    content_id: str = Path(..., description="Content ID"),
    service: SocialService = Depends(get_social_service),
):
    """Record a view. Repeat views by the same user leave the stats unchanged."""
    await service.view(request.user_id, content_id, request.content_type)
    stats = await service.get_stats(content_id)
    return ContentStatsResponse(content_id=content_id, stats=stats)


@router.post("/{content_id}/share", response_model=ShareResponse)
async def share_content(
    request: ShareRequest,
    content_id: str = Path(..., description="Content ID"),
    service: SocialService = Depends(get_social_service),
):
    """
    Record a share and return the share intent.

    **Actions:**
    - `open_url`: open `url` (twitter, facebook, linkedin, whatsapp, email)
    - `copy_to_clipboard`: copy `text` (any other platform)
    """
    intent = await service.share(
        request.user_id,
        content_id,
        request.content_type,
        request.platform,
        request.share_url,
        request.share_text,
    )
    stats = await service.get_stats(content_id)
    return ShareResponse(content_id=content_id, intent=intent, stats=stats)


@router.get("/{content_id}/stats", response_model=ContentStatsResponse)
async def get_content_stats(
    content_id: str = Path(..., description="Content ID"),
    service: SocialService = Depends(get_social_service),
):
    stats = await service.get_stats(content_id)
    return ContentStatsResponse(content_id=content_id, stats=stats)
