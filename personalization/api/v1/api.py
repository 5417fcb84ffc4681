"""
API v1 router - Combines all API endpoints.

This provides:
1. Centralized API routing
2. Consistent API structure
3. Version management
"""

from fastapi import APIRouter

from personalization.api.v1.endpoints import experiments, recommendations, social

# Create the main API router for version 1
api_router = APIRouter(prefix="/v1")

# Include all endpoint routers
api_router.include_router(recommendations.router)
api_router.include_router(social.router)
api_router.include_router(experiments.router)

# API metadata for documentation
tags_metadata = [
    {
        "name": "recommendations",
        "description": "Personalized recommendations, feed and profile updates",
    },
    {
        "name": "social",
        "description": "Likes, bookmarks, views, shares and engagement stats",
    },
    {
        "name": "experiments",
        "description": "A/B variant assignment and significance testing",
    },
]
