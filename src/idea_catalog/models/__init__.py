# src/idea_catalog/models/__init__.py
"""SQLAlchemy models for the idea catalog."""

from .comment import Comment
from .idea import COUNTER_COLUMNS, DIFFICULTY_RANK, Category, Difficulty, Idea
from .project_link import ProjectLink
from .user import User

__all__ = [
    "Category", "Difficulty", "Idea", "COUNTER_COLUMNS", "DIFFICULTY_RANK",
    "Comment",
    "ProjectLink",
    "User",
]
