# src/idea_catalog/api/v1/endpoints/metrics.py
"""Campaign and dashboard metrics endpoints."""

from fastapi import APIRouter

from idea_catalog.api.v1.dependencies import CurrentUserDep, SessionDep
from idea_catalog.schemas.metrics import DashboardResponse, GoalProgressResponse
from idea_catalog.services import metrics

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(db: SessionDep, _current_user: CurrentUserDep) -> DashboardResponse:
    """Totals and top ideas for the dashboard. Requires authentication."""
    return DashboardResponse(data=metrics.dashboard(db))


@router.get("/projects-goal", response_model=GoalProgressResponse)
async def get_projects_goal(db: SessionDep) -> GoalProgressResponse:
    """Progress toward the project-building goal. No authentication required."""
    return GoalProgressResponse(data=metrics.goal_progress(db))
