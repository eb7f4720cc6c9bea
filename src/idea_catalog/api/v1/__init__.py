# src/idea_catalog/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    comments_router,
    ideas_router,
    metrics_router,
    projects_router,
    users_router,
)

__all__ = [
    "comments_router",
    "ideas_router",
    "metrics_router",
    "projects_router",
    "users_router",
]
