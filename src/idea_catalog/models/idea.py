# src/idea_catalog/models/idea.py
"""SQLAlchemy models for catalog ideas."""

from __future__ import annotations

import enum
import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from idea_catalog.db.session import Base
from idea_catalog.db.time import utcnow


class Difficulty(str, enum.Enum):
    """Difficulty levels, declared in ascending order."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class Category(str, enum.Enum):
    """The fixed set of catalog categories."""

    B2B_SAAS_TOOLS = "B2B SaaS Tools"
    BOOK_CLUB_READING = "Book Club & Reading"
    COMMUNITY_CULTURAL_GROUPS = "Community & Cultural Groups"
    COMMUNITY_BUILDING = "Community Building"
    EDUCATION_LEARNING = "Education & Learning"
    EDUCATION_TEACHING = "Education & Teaching"
    GAMES_PUZZLES = "Games and Puzzles"
    HEALTH_WELLNESS = "Health & Wellness"
    MARKETING_CONTENT = "Marketing & Content Creation"
    NICHE_COMMUNITY_TOOLS = "Niche Community Tools"
    PRODUCTIVITY_FINANCE = "Personal Productivity & Finance"
    PROJECTS_IN_DEVELOPMENT = "Projects in Development"
    THINK_TANK_RESEARCH = "Think Tank & Research"


DIFFICULTY_RANK = {
    Difficulty.BEGINNER.value: 1,
    Difficulty.INTERMEDIATE.value: 2,
    Difficulty.ADVANCED.value: 3,
}

# Columns the counter maintainer is allowed to touch.
COUNTER_COLUMNS = ("view_count", "comment_count", "project_count")


class Idea(Base):
    """A curated project idea.

    Counters are denormalized aggregates; only the counter maintainer
    writes them, always through single atomic UPDATE statements.
    """

    __tablename__ = "ideas"
    __table_args__ = (
        CheckConstraint("length(trim(title)) > 0", name="ck_ideas_title_not_empty"),
        CheckConstraint("length(trim(description)) > 0", name="ck_ideas_description_not_empty"),
        CheckConstraint("view_count >= 0", name="ck_ideas_view_count_positive"),
        CheckConstraint("comment_count >= 0", name="ck_ideas_comment_count_positive"),
        CheckConstraint("project_count >= 0", name="ck_ideas_project_count_positive"),
        Index("ix_ideas_category", "category"),
        Index("ix_ideas_free_tier", "free_tier"),
        Index("ix_ideas_created_at", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    difficulty: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=Difficulty.BEGINNER.value,
    )
    tools: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Withheld from guests on the teaser item.
    monetization_potential: Mapped[str | None] = mapped_column(Text, nullable=True)
    estimated_build_time: Mapped[str | None] = mapped_column(String(50), nullable=True)
    build_guide: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Access control: free ideas are guest-visible; the teaser is guest-visible
    # with a reduced field set.
    free_tier: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_teaser: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comment_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    project_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )
