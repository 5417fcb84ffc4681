"""
Pydantic schemas for recommendation API endpoints.

This defines the data models for:
1. Recommendation and feed responses
2. Profile update requests (interactions, views, searches)
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from personalization.models.content import ContentItem, ContentType
from personalization.models.profile import InteractionItemType
from personalization.models.recommendation import Recommendation


class RecommendationResponse(BaseModel):
    """Response model for the recommendations endpoint."""

    user_id: str = Field(..., description="User the list was generated for")
    recommendations: List[Recommendation] = Field(..., description="Ranked recommendations, best first")
    total_items: int = Field(..., description="Number of recommendations returned")


class FeedResponse(BaseModel):
    user_id: str
    items: List[ContentItem]
    total_items: int


class InteractionRequest(BaseModel):
    """Behavioral interaction appended to the user profile."""

    type: InteractionItemType
    content_id: str = Field(..., min_length=1)
    content_type: ContentType
    metadata: Optional[Dict[str, Any]] = None


class ViewRequest(BaseModel):
    content_id: str = Field(..., min_length=1)
    content_type: ContentType
    duration_seconds: float = Field(0, ge=0, description="Time spent on the content")
    completed: bool = False
    viewed_at: Optional[datetime] = None


class ViewResponse(BaseModel):
    recorded: bool = Field(..., description="False when the content was already in the history")


class SearchRequest(BaseModel):
    query: str = Field(..., min_length=1)
    results_clicked: List[str] = Field(default_factory=list)
    filters: Dict[str, Any] = Field(default_factory=dict)
