"""Dashboard metrics read from row counts and the denormalized idea counters."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy import func
from sqlalchemy.orm import InstrumentedAttribute, Session

from idea_catalog.core.settings import settings
from idea_catalog.db.time import utcnow
from idea_catalog.models import Comment, Idea, ProjectLink, User
from idea_catalog.schemas.metrics import DashboardMetrics, GoalProgress, RankedIdea

__all__ = ["dashboard", "goal_progress", "top_ideas"]

logger = logging.getLogger(__name__)


def goal_progress(db: Session) -> GoalProgress:
    """Project links submitted against the campaign goal."""
    current = db.query(func.count(ProjectLink.id)).scalar() or 0
    goal = settings.campaign_goal
    percentage = round(current / goal * 100, 2) if goal > 0 else 0.0
    return GoalProgress(current=current, goal=goal, percentage=percentage)


def top_ideas(db: Session, counter: InstrumentedAttribute[int], limit: int) -> list[RankedIdea]:
    """Ideas with the highest ``counter``; id breaks ties."""
    ideas = db.query(Idea).order_by(counter.desc(), Idea.id).limit(limit).all()
    return [
        RankedIdea(
            id=idea.id,
            title=idea.title,
            view_count=idea.view_count,
            comment_count=idea.comment_count,
            project_count=idea.project_count,
        )
        for idea in ideas
    ]


def dashboard(db: Session, now: datetime | None = None) -> DashboardMetrics:
    """Collect the admin dashboard figures.

    Args:
        db: Database session
        now: Reference time for the recent-registration window

    Returns:
        DashboardMetrics snapshot
    """
    now = now or utcnow()
    since = now - timedelta(days=settings.recent_registration_days)
    limit = settings.dashboard_top_ideas

    progress = goal_progress(db)
    metrics = DashboardMetrics(
        total_registrations=db.query(func.count(User.id)).scalar() or 0,
        total_projects=progress.current,
        total_comments=db.query(func.count(Comment.id)).scalar() or 0,
        total_idea_views=db.query(func.coalesce(func.sum(Idea.view_count), 0)).scalar() or 0,
        recent_registrations=(
            db.query(func.count(User.id)).filter(User.created_at >= since).scalar() or 0
        ),
        projects_goal_progress=progress,
        most_viewed_ideas=top_ideas(db, Idea.view_count, limit),
        most_commented_ideas=top_ideas(db, Idea.comment_count, limit),
        most_built_ideas=top_ideas(db, Idea.project_count, limit),
        updated_at=now,
    )
    logger.debug(
        "Dashboard computed: %d users, %d projects, %d comments",
        metrics.total_registrations,
        metrics.total_projects,
        metrics.total_comments,
    )
    return metrics
