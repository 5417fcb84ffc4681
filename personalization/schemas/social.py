"""
Social interaction schemas for request/response validation.
"""

from typing import List

from pydantic import BaseModel, Field

from personalization.models.content import ContentType
from personalization.models.interaction import ShareIntent, SocialStats


class SocialActionRequest(BaseModel):
    """Body shared by like, bookmark and view."""

    user_id: str = Field(..., min_length=1)
    content_type: ContentType


class ShareRequest(SocialActionRequest):
    platform: str = Field(..., min_length=1, description="twitter, facebook, linkedin, whatsapp, email")
    share_url: str = Field(..., description="Canonical URL of the content")
    share_text: str = Field("", description="Text prefilled in the share dialog")


class ToggleResponse(BaseModel):
    content_id: str
    active: bool = Field(..., description="New state after the toggle")
    stats: SocialStats


class ShareResponse(BaseModel):
    content_id: str
    intent: ShareIntent
    stats: SocialStats


class ContentStatsResponse(BaseModel):
    content_id: str
    stats: SocialStats


class TrendingResponse(BaseModel):
    items: List[ContentStatsResponse]
