"""
Interaction models - Social events recorded in the interaction ledger.

This handles:
1. Interaction kinds (like, bookmark, share, view)
2. Share platforms and the share intent handed to the browser/OS
3. Derived per-content engagement statistics
4. Per-user social activity lists
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from personalization.core.clock import utcnow
from personalization.models.content import ContentType


class InteractionType(str, Enum):
    """Different types of social interactions"""

    LIKE = "like"
    BOOKMARK = "bookmark"
    SHARE = "share"
    VIEW = "view"


# At most one active entry per (user, content) for these kinds
TOGGLE_TYPES = frozenset({InteractionType.LIKE, InteractionType.BOOKMARK})


class SharePlatform(str, Enum):
    """Platforms with a known share deep-link template"""

    TWITTER = "twitter"
    FACEBOOK = "facebook"
    LINKEDIN = "linkedin"
    WHATSAPP = "whatsapp"
    EMAIL = "email"


class ShareAction(str, Enum):
    OPEN_URL = "open_url"
    COPY_TO_CLIPBOARD = "copy_to_clipboard"


class SocialInteraction(BaseModel):
    """
    One live ledger entry.

    Like and bookmark entries are physically removed when toggled off;
    share entries repeat; a view is recorded at most once per user/content.
    """

    id: str
    user_id: str
    content_id: str
    content_type: ContentType
    type: InteractionType
    timestamp: datetime = Field(default_factory=utcnow)
    metadata: Optional[Dict[str, Any]] = None


class SocialStats(BaseModel):
    """Engagement statistics derived from live ledger entries."""

    likes: int = 0
    bookmarks: int = 0
    shares: int = 0
    views: int = 0
    engagement: float = 0.0

    @classmethod
    def from_counts(cls, likes: int, bookmarks: int, shares: int, views: int) -> "SocialStats":
        """Engagement is (likes + bookmarks + shares) / views * 100, or 0 without views."""
        if views > 0:
            engagement = round((likes + bookmarks + shares) / views * 100, 2)
        else:
            engagement = 0.0
        return cls(
            likes=likes,
            bookmarks=bookmarks,
            shares=shares,
            views=views,
            engagement=engagement,
        )


class ShareIntent(BaseModel):
    """
    Instruction for the external share executor.

    The engine never opens windows or touches the clipboard itself.
    """

    platform: str
    action: ShareAction
    url: Optional[str] = None
    text: Optional[str] = None


class UserSocialData(BaseModel):
    """Content ids a user has liked, bookmarked, shared and viewed, in order."""

    user_id: str
    likes: List[str] = Field(default_factory=list)
    bookmarks: List[str] = Field(default_factory=list)
    shares: List[str] = Field(default_factory=list)
    views: List[str] = Field(default_factory=list)
