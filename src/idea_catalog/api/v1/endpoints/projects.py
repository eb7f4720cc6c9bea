# src/idea_catalog/api/v1/endpoints/projects.py
"""Project link endpoints."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Path, status
from sqlalchemy.orm import Session

from idea_catalog.api.v1.dependencies import CurrentUserDep, SessionDep
from idea_catalog.core.errors import ValidationError
from idea_catalog.models import User
from idea_catalog.schemas.common import MessageResponse
from idea_catalog.schemas.project import (
    ProjectLinkCreate,
    ProjectLinkEnvelope,
    ProjectLinkListResponse,
    ProjectLinkUpdate,
    ProjectStatsResponse,
)
from idea_catalog.services import projects

router = APIRouter(tags=["projects"])

IdeaIdPath = Annotated[uuid.UUID, Path(description="Idea ID")]
ProjectIdPath = Annotated[uuid.UUID, Path(description="Project link ID")]


@router.get("/ideas/{idea_id}/projects", response_model=ProjectLinkListResponse)
async def list_projects(idea_id: IdeaIdPath, db: SessionDep) -> ProjectLinkListResponse:
    """List the projects built from an idea, newest first."""
    links = projects.list_projects(db, idea_id)
    return ProjectLinkListResponse(data=links, count=len(links))


def _created(
    db: Session,
    idea_id: uuid.UUID,
    body: ProjectLinkCreate,
    user: User,
) -> ProjectLinkEnvelope:
    project, project_count = projects.create_project(db, idea_id, user, body)
    return ProjectLinkEnvelope(
        data=projects.describe_project(db, project, user),
        message="Project link created successfully",
        project_count=project_count,
    )


@router.post(
    "/ideas/{idea_id}/projects",
    response_model=ProjectLinkEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_project_for_idea(
    idea_id: IdeaIdPath,
    body: ProjectLinkCreate,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> ProjectLinkEnvelope:
    """Submit a project built from the idea in the path."""
    return _created(db, idea_id, body, current_user)


@router.post("/projects", response_model=ProjectLinkEnvelope, status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectLinkCreate,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> ProjectLinkEnvelope:
    """Submit a project, naming the idea in the request body.

    Raises:
        ValidationError: If ``idea_id`` is missing from the body
        NotFound: If the idea does not exist
    """
    if body.idea_id is None:
        raise ValidationError("Valid idea ID is required", field="idea_id")
    return _created(db, body.idea_id, body, current_user)


@router.get("/projects/stats", response_model=ProjectStatsResponse)
async def get_project_stats(db: SessionDep) -> ProjectStatsResponse:
    """Aggregate statistics for the build campaign. No authentication required."""
    return ProjectStatsResponse(data=projects.project_stats(db))


@router.patch("/projects/{project_id}", response_model=ProjectLinkEnvelope)
async def update_project(
    project_id: ProjectIdPath,
    body: ProjectLinkUpdate,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> ProjectLinkEnvelope:
    """Update a project link. Only its author may do this."""
    project = projects.update_project(db, project_id, current_user, body)
    return ProjectLinkEnvelope(
        data=projects.describe_project(db, project, current_user),
        message="Project link updated successfully",
    )


@router.delete("/projects/{project_id}", response_model=MessageResponse)
async def delete_project(
    project_id: ProjectIdPath,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> MessageResponse:
    """Delete a project link. Only its author may do this."""
    projects.delete_project(db, project_id, current_user)
    return MessageResponse(message="Project link deleted successfully")
