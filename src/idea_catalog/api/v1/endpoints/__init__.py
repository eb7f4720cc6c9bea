# src/idea_catalog/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .comments import router as comments_router
from .ideas import router as ideas_router
from .metrics import router as metrics_router
from .projects import router as projects_router
from .users import router as users_router

__all__ = [
    "comments_router",
    "ideas_router",
    "metrics_router",
    "projects_router",
    "users_router",
]
