"""
Content similarity scoring.

Weighted sum of four signals, capped at 1.0:
- same non-empty category: 0.4
- tag overlap ratio |A ∩ B| / max(|A|, |B|, 1): up to 0.3
- same non-empty author: 0.2
- same content type: 0.1

Every term is symmetric, so similarity(a, b) == similarity(b, a).
"""

from personalization.models.content import ContentItem

CATEGORY_WEIGHT = 0.4
TAG_WEIGHT = 0.3
AUTHOR_WEIGHT = 0.2
TYPE_WEIGHT = 0.1


def tag_overlap(a: ContentItem, b: ContentItem) -> float:
    tags_a, tags_b = a.tag_set, b.tag_set
    return len(tags_a & tags_b) / max(len(tags_a), len(tags_b), 1)


def content_similarity(a: ContentItem, b: ContentItem) -> float:
    """Similarity between two content items in [0, 1]."""
    score = 0.0

    if a.category and b.category and a.category == b.category:
        score += CATEGORY_WEIGHT

    score += tag_overlap(a, b) * TAG_WEIGHT

    if a.author and b.author and a.author == b.author:
        score += AUTHOR_WEIGHT

    if a.type == b.type:
        score += TYPE_WEIGHT

    return min(score, 1.0)
