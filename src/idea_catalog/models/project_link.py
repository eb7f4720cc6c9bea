# src/idea_catalog/models/project_link.py
"""SQLAlchemy model for user-submitted project links."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from idea_catalog.db.session import Base
from idea_catalog.db.time import utcnow


class ProjectLink(Base):
    """A project someone built from an idea."""

    __tablename__ = "project_links"
    __table_args__ = (
        CheckConstraint("length(trim(title)) > 0", name="ck_project_links_title_not_empty"),
        CheckConstraint("length(trim(url)) > 0", name="ck_project_links_url_not_empty"),
        Index("ix_project_links_idea_created", "idea_id", "created_at"),
        Index("ix_project_links_user", "user_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    idea_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("ideas.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # Tool names as entered by the submitter; used for campaign statistics.
    tools_used: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )
