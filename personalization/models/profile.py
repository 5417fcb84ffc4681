"""
User profile models - Preferences and behavioral history per user.

This handles:
1. Content type and category preference weights
2. View, search and interaction history
3. Behavior analytics derived from the history
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from personalization.core.clock import utcnow
from personalization.models.content import ContentType


class ContentTypePreference(BaseModel):
    type: ContentType
    weight: float = Field(..., ge=0, le=1)
    enabled: bool = True


class CategoryPreference(BaseModel):
    category: str
    weight: float = Field(..., ge=0, le=1)
    enabled: bool = True


DEFAULT_CONTENT_TYPE_WEIGHTS = {
    ContentType.ARTICLE: 0.8,
    ContentType.INTERVIEW: 0.6,
    ContentType.PHOTO_REPORT: 0.7,
    ContentType.VIDEO_ANALYSIS: 0.5,
    ContentType.TESTIMONIAL: 0.4,
}


class UserPreferences(BaseModel):
    content_type_weights: List[ContentTypePreference] = Field(
        default_factory=lambda: [
            ContentTypePreference(type=content_type, weight=weight)
            for content_type, weight in DEFAULT_CONTENT_TYPE_WEIGHTS.items()
        ]
    )
    category_weights: List[CategoryPreference] = Field(default_factory=list)
    languages: List[str] = Field(default_factory=lambda: ["fr"])


class ViewHistoryItem(BaseModel):
    """One viewed content item. Rating may be bumped in place by likes/shares."""

    content_id: str
    content_type: ContentType
    viewed_at: datetime = Field(default_factory=utcnow)
    duration_seconds: float = Field(0, ge=0)
    completed: bool = False
    rating: Optional[int] = None


class SearchHistoryItem(BaseModel):
    query: str
    searched_at: datetime = Field(default_factory=utcnow)
    results_clicked: List[str] = Field(default_factory=list)
    filters: Dict[str, Any] = Field(default_factory=dict)


class InteractionItemType(str, Enum):
    """Behavioral interactions fed into the profile"""

    LIKE = "like"
    SHARE = "share"
    COMMENT = "comment"
    BOOKMARK = "bookmark"
    DOWNLOAD = "download"


# Interactions that bump the rating of an existing view
RATING_INTERACTIONS = frozenset({InteractionItemType.LIKE, InteractionItemType.SHARE})


class InteractionItem(BaseModel):
    type: InteractionItemType
    content_id: str = Field(..., min_length=1)
    content_type: ContentType
    timestamp: datetime = Field(default_factory=utcnow)
    metadata: Optional[Dict[str, Any]] = None


class UserBehavior(BaseModel):
    view_history: List[ViewHistoryItem] = Field(default_factory=list)
    search_history: List[SearchHistoryItem] = Field(default_factory=list)
    interactions: List[InteractionItem] = Field(default_factory=list)


class UserProfile(BaseModel):
    """
    Per-user preferences and behavior.

    Profiles are created lazily with default weights the first time a
    user is referenced and are never deleted by the engine.
    """

    id: str
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    behavior: UserBehavior = Field(default_factory=UserBehavior)
    interests: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def find_view(self, content_id: str) -> Optional[ViewHistoryItem]:
        for view in self.behavior.view_history:
            if view.content_id == content_id:
                return view
        return None

    def has_viewed(self, content_id: str) -> bool:
        return self.find_view(content_id) is not None

    @property
    def viewed_content_ids(self) -> List[str]:
        return [view.content_id for view in self.behavior.view_history]


class BehaviorPattern(BaseModel):
    type: str  # reading_time, content_preference
    description: str
    frequency: int
    confidence: float
    trend: str = "stable"


class BehaviorAnalytics(BaseModel):
    user_id: str
    patterns: List[BehaviorPattern] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=utcnow)
