# src/idea_catalog/models/comment.py
"""SQLAlchemy model for threaded comments on ideas."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    ForeignKeyConstraint,
    Index,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from idea_catalog.db.session import Base
from idea_catalog.db.time import utcnow


class Comment(Base):
    """A discussion entry attached to an idea.

    Top-level comments have ``parent_comment_id = NULL``. A reply must point at
    a parent on the same idea; the composite foreign key enforces that and
    cascades deletion down the whole reply chain.
    """

    __tablename__ = "comments"
    __table_args__ = (
        CheckConstraint("id <> parent_comment_id", name="ck_comments_no_self_reference"),
        CheckConstraint("length(trim(content)) > 0", name="ck_comments_content_not_empty"),
        UniqueConstraint("id", "idea_id", name="uq_comments_id_idea"),
        ForeignKeyConstraint(
            ["parent_comment_id", "idea_id"],
            ["comments.id", "comments.idea_id"],
            ondelete="CASCADE",
            name="fk_comments_parent_same_idea",
        ),
        Index("ix_comments_idea_created", "idea_id", "created_at"),
        Index("ix_comments_parent", "parent_comment_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    idea_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("ideas.id", ondelete="CASCADE"),
        nullable=False,
    )
    # Nullable so a removed identity leaves its comments behind as anonymous.
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    parent_comment_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)

    content: Mapped[str] = mapped_column(Text, nullable=False)
    flagged_for_moderation: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )
