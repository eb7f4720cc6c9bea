"""Project link service: submissions built from ideas, plus campaign stats."""

from __future__ import annotations

import logging
import uuid
from collections import Counter

from sqlalchemy.orm import Session

from idea_catalog.core.errors import Forbidden, NotFound
from idea_catalog.core.settings import settings
from idea_catalog.db.time import utcnow
from idea_catalog.models import Idea, ProjectLink, User
from idea_catalog.schemas.project import (
    ProjectLinkCreate,
    ProjectLinkResponse,
    ProjectLinkUpdate,
    ProjectStats,
    ToolStats,
)
from idea_catalog.services import counters
from idea_catalog.services.discussion import AuthorLookup, resolve_author_name, session_lookup

__all__ = [
    "create_project",
    "delete_project",
    "describe_project",
    "list_projects",
    "project_stats",
    "update_project",
]

logger = logging.getLogger(__name__)


def describe_project(
    db: Session,
    project: ProjectLink,
    author: User | None = None,
    lookup: AuthorLookup | None = None,
) -> ProjectLinkResponse:
    """Render a project link with its resolved author name."""
    name = resolve_author_name(author, project.user_id, lookup or session_lookup(db))
    return ProjectLinkResponse(
        id=project.id,
        idea_id=project.idea_id,
        user_id=project.user_id,
        title=project.title,
        url=project.url,
        description=project.description,
        tools_used=list(project.tools_used or []),
        created_at=project.created_at,
        updated_at=project.updated_at,
        user=name.as_info(),
    )


def _get_idea_or_404(db: Session, idea_id: uuid.UUID) -> Idea:
    idea = db.get(Idea, idea_id)
    if idea is None:
        raise NotFound("Idea not found")
    return idea


def _get_owned_project(db: Session, project_id: uuid.UUID, owner: User, action: str) -> ProjectLink:
    project = db.get(ProjectLink, project_id)
    if project is None:
        raise NotFound("Project link not found")
    if project.user_id != owner.id:
        raise Forbidden(f"You do not have permission to {action} this project link")
    return project


def list_projects(db: Session, idea_id: uuid.UUID) -> list[ProjectLinkResponse]:
    """Return the project links for an idea, newest first."""
    _get_idea_or_404(db, idea_id)

    rows = (
        db.query(ProjectLink, User)
        .outerjoin(User, User.id == ProjectLink.user_id)
        .filter(ProjectLink.idea_id == idea_id)
        .order_by(ProjectLink.created_at.desc(), ProjectLink.id)
        .all()
    )
    lookup = session_lookup(db)
    return [describe_project(db, project, user, lookup) for project, user in rows]


def create_project(
    db: Session,
    idea_id: uuid.UUID,
    author: User,
    data: ProjectLinkCreate,
) -> tuple[ProjectLink, int | None]:
    """Submit a project link and bump the idea's ``project_count``.

    Returns:
        The created link and the idea's project count after the increment,
        or None if the best-effort increment failed
    """
    _get_idea_or_404(db, idea_id)

    project = ProjectLink(
        idea_id=idea_id,
        user_id=author.id,
        title=data.title,
        url=data.url,
        description=data.description,
        tools_used=[tool.strip() for tool in data.tools_used if tool.strip()],
    )
    db.add(project)
    db.commit()
    db.refresh(project)

    project_count = counters.try_increment(db, idea_id, "project_count")
    logger.info("Project link %s submitted for idea %s by %s", project.id, idea_id, author.id)
    return project, project_count


def update_project(
    db: Session,
    project_id: uuid.UUID,
    author: User,
    data: ProjectLinkUpdate,
) -> ProjectLink:
    """Apply a partial update to a project link owned by ``author``."""
    project = _get_owned_project(db, project_id, author, "update")

    changes = data.model_dump(exclude_unset=True)
    if "tools_used" in changes:
        changes["tools_used"] = [tool.strip() for tool in changes["tools_used"] if tool.strip()]
    for key, value in changes.items():
        setattr(project, key, value)
    project.updated_at = utcnow()

    db.commit()
    db.refresh(project)
    return project


def delete_project(db: Session, project_id: uuid.UUID, author: User) -> None:
    """Delete a project link owned by ``author`` and lower ``project_count``."""
    project = _get_owned_project(db, project_id, author, "delete")
    idea_id = project.idea_id

    db.delete(project)
    db.commit()

    counters.try_decrement(db, idea_id, "project_count", 1)
    logger.info("Project link %s deleted from idea %s", project_id, idea_id)


def project_stats(db: Session) -> ProjectStats:
    """Aggregate project link counts for the campaign dashboard."""
    rows = (
        db.query(ProjectLink.tools_used, Idea.category)
        .outerjoin(Idea, Idea.id == ProjectLink.idea_id)
        .all()
    )

    tool_counts: Counter[str] = Counter()
    category_counts: Counter[str] = Counter()
    for tools_used, category in rows:
        for tool in tools_used or []:
            name = tool.strip()
            if name:
                tool_counts[name] += 1
        if category:
            category_counts[category] += 1

    campaign_tools = settings.campaign_tools
    breakdown = {tool.lower(): tool_counts.get(tool, 0) for tool in campaign_tools}
    breakdown["other"] = sum(
        count for tool, count in tool_counts.items() if tool not in campaign_tools
    )

    total = len(rows)
    goal = settings.campaign_goal
    progress = round(total / goal * 100, 2) if goal > 0 else 0.0

    return ProjectStats(
        total_projects=total,
        campaign_goal=goal,
        progress_percentage=progress,
        tools=ToolStats(breakdown=breakdown, all_tools=dict(tool_counts)),
        categories=dict(category_counts),
    )
