"""User profile service: public profiles and per-user activity listings."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.orm import Session

from idea_catalog.core.errors import NotFound
from idea_catalog.models import Comment, Idea, ProjectLink, User
from idea_catalog.schemas.user import ProfileUpdate, UserCommentItem, UserProjectItem

__all__ = [
    "get_profile",
    "list_user_comments",
    "list_user_projects",
    "update_profile",
]

logger = logging.getLogger(__name__)


def _get_user_or_404(db: Session, user_id: uuid.UUID) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User profile not found")
    return user


def get_profile(db: Session, user_id: uuid.UUID) -> User:
    """Return the user behind a public profile.

    Raises:
        NotFound: If the user does not exist
    """
    return _get_user_or_404(db, user_id)


def update_profile(db: Session, user: User, data: ProfileUpdate) -> User:
    """Apply a partial update to the caller's own profile."""
    changes = data.model_dump(exclude_unset=True)
    for key, value in changes.items():
        setattr(user, key, value)

    db.commit()
    db.refresh(user)
    logger.info("Profile %s updated (%s)", user.id, ", ".join(sorted(changes)))
    return user


def list_user_projects(db: Session, user_id: uuid.UUID) -> list[UserProjectItem]:
    """Return a user's project links, newest first, with the idea title.

    Raises:
        NotFound: If the user does not exist
    """
    _get_user_or_404(db, user_id)

    rows = (
        db.query(ProjectLink, Idea.title)
        .outerjoin(Idea, Idea.id == ProjectLink.idea_id)
        .filter(ProjectLink.user_id == user_id)
        .order_by(ProjectLink.created_at.desc(), ProjectLink.id)
        .all()
    )
    return [
        UserProjectItem(
            id=project.id,
            idea_id=project.idea_id,
            idea_title=idea_title,
            title=project.title,
            url=project.url,
            description=project.description,
            tools_used=list(project.tools_used or []),
            created_at=project.created_at,
            updated_at=project.updated_at,
        )
        for project, idea_title in rows
    ]


def list_user_comments(db: Session, user_id: uuid.UUID) -> list[UserCommentItem]:
    """Return a user's unflagged comments, newest first, with the idea title.

    Raises:
        NotFound: If the user does not exist
    """
    _get_user_or_404(db, user_id)

    rows = (
        db.query(Comment, Idea.title)
        .outerjoin(Idea, Idea.id == Comment.idea_id)
        .filter(
            Comment.user_id == user_id,
            Comment.flagged_for_moderation.is_(False),
        )
        .order_by(Comment.created_at.desc(), Comment.id)
        .all()
    )
    return [
        UserCommentItem(
            id=comment.id,
            idea_id=comment.idea_id,
            idea_title=idea_title,
            parent_comment_id=comment.parent_comment_id,
            content=comment.content,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
        for comment, idea_title in rows
    ]
