"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from rabbitforms.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from rabbitforms.api.v1.endpoints import (
    businesses,
    forms,
    health,
    public,
    submissions,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(businesses.router, prefix="/businesses", tags=["businesses"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(forms.router, prefix="/forms", tags=["forms"])
api_router.include_router(public.router, prefix="/public", tags=["public"])
api_router.include_router(submissions.router, prefix="/submissions", tags=["submissions"])
