"""
Content models - Snapshot of publishable content supplied by the catalog.

This handles:
1. Content types (articles, interviews, photo reports, ...)
2. Engagement metrics used by trending and diversity scoring
3. Immutable content items ranked by the engine
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ContentType(str, Enum):
    """Enum for different types of content"""

    ARTICLE = "article"
    INTERVIEW = "interview"
    PHOTO_REPORT = "photo_report"
    VIDEO_ANALYSIS = "video_analysis"
    TESTIMONIAL = "testimonial"


class ContentMetrics(BaseModel):
    """Engagement counters reported by the catalog for one item."""

    model_config = ConfigDict(frozen=True)

    views: int = Field(0, ge=0)
    likes: int = Field(0, ge=0)
    shares: int = Field(0, ge=0)
    comments: int = Field(0, ge=0)
    rating: float = Field(0.0, ge=0, le=5)
    engagement: float = Field(0.0, ge=0)

    @property
    def popularity(self) -> int:
        """Raw popularity signal used by the trending strategy."""
        return self.views + self.likes + self.shares


class ContentItem(BaseModel):
    """
    Immutable snapshot of a piece of content.

    Design decisions:
    - Frozen: read-only to the engine within one scoring pass
    - Tags are stored as a list but compared as a set
    - Category and author are optional; empty values never match
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    type: ContentType
    title: str
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    published_at: datetime
    author: Optional[str] = None
    category: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    metrics: ContentMetrics = Field(default_factory=ContentMetrics)

    @property
    def tag_set(self) -> frozenset:
        return frozenset(self.tags)

    def __repr__(self) -> str:
        return f"<ContentItem(id={self.id!r}, type='{self.type.value}')>"
