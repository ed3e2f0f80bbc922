"""
API Router Factory
Provides centralized router creation and configuration
"""
from fastapi import APIRouter
from typing import List, Optional

from sitestats.core.config import settings

from .endpoints import stats, tracking, views


def create_router(
    prefix: str = "/api/v1",
    tags: Optional[List[str]] = None
) -> APIRouter:
    """
    Create configured API router with all endpoints

    Args:
        prefix: API route prefix
        tags: OpenAPI tags

    Returns:
        Configured APIRouter instance
    """
    if tags is None:
        tags = ["api"]

    router = APIRouter(prefix=prefix, tags=tags)

    router.include_router(tracking.router, prefix="/track", tags=["tracking"])
    router.include_router(stats.router, prefix="/stats", tags=["stats"])
    router.include_router(views.router, prefix="/views", tags=["views"])

    return router


# Create default API router instance for export
api_router = create_router(prefix=settings.API_V1_STR)
