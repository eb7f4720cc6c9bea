"""Dashboard metric schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class GoalProgress(BaseModel):
    """Progress of the project-building campaign."""

    current: int = Field(..., ge=0)
    goal: int
    percentage: float


class RankedIdea(BaseModel):
    """An idea with all three counters, as shown in the dashboard rankings."""

    id: uuid.UUID
    title: str
    view_count: int
    comment_count: int
    project_count: int


class DashboardMetrics(BaseModel):
    total_registrations: int
    total_projects: int
    total_comments: int
    total_idea_views: int
    recent_registrations: int
    projects_goal_progress: GoalProgress
    most_viewed_ideas: list[RankedIdea]
    most_commented_ideas: list[RankedIdea]
    most_built_ideas: list[RankedIdea]
    updated_at: datetime


class DashboardResponse(BaseModel):
    success: bool = True
    data: DashboardMetrics


class GoalProgressResponse(BaseModel):
    success: bool = True
    data: GoalProgress
