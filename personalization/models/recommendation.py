"""
Recommendation models - Ranked output and feed filters.

Reasons use a closed enum so a strategy cannot attach an untyped tag.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from personalization.core.clock import utcnow
from personalization.models.content import ContentType


class ReasonType(str, Enum):
    """Why a recommendation was produced"""

    CATEGORY_MATCH = "category_match"
    USER_BEHAVIOR = "user_behavior"
    SIMILAR_CONTENT = "similar_content"
    TRENDING = "trending"
    NEW_CONTENT_TYPE = "new_content_type"


class StrategyName(str, Enum):
    """Strategy pools merged by the hybrid orchestrator"""

    BEHAVIOR_BASED = "behavior_based"
    CONTENT_BASED = "content_based"
    TRENDING = "trending"
    DIVERSITY = "diversity"


class RecommendationReason(BaseModel):
    type: ReasonType
    explanation: str
    weight: float


class RecommendationMetadata(BaseModel):
    generated_at: Optional[datetime] = None
    algorithm: str
    strategy: StrategyName
    version: str = "1.0"
    confidence: float
    freshness: float = 0.0


class Recommendation(BaseModel):
    """
    One ranked content id.

    Scores are not bounded to [0, 1]; trending picks always score 0.7 and
    diversity picks 0.5.
    """

    content_id: str
    content_type: ContentType
    score: float
    reasons: List[RecommendationReason] = Field(default_factory=list)
    metadata: RecommendationMetadata


class DateRange(BaseModel):
    """Inclusive publish-date range."""

    start: datetime
    end: datetime

    @model_validator(mode="after")
    def check_order(self) -> "DateRange":
        if self.end < self.start:
            raise ValueError("date range end must not precede start")
        return self


class FeedFilters(BaseModel):
    """
    Optional personalized feed filters, applied in field order.

    A filter left as None is skipped; an empty allow-list lets nothing through.
    """

    content_types: Optional[List[ContentType]] = None
    categories: Optional[List[str]] = None
    min_rating: Optional[float] = Field(None, ge=0, le=5)
    date_range: Optional[DateRange] = None
    exclude_viewed: bool = False
