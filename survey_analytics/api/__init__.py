"""
Backend API package initialization.

This package contains FastAPI router modules for the Survey Analytics service:
- analytics: Study analytics summary
- studies: Read-only study and response listings
"""

from fastapi import APIRouter

from survey_analytics.api.analytics import router as analytics_router
from survey_analytics.api.studies import router as studies_router

# Create main API router
api_router = APIRouter()

api_router.include_router(analytics_router, prefix="/analytics", tags=["analytics"])
api_router.include_router(studies_router, prefix="/studies", tags=["studies"])

__all__ = [
    "api_router",
    "analytics_router",
    "studies_router",
]
