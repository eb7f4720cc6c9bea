# src/idea_catalog/api/v1/endpoints/users.py
"""User profile endpoints."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Path

from idea_catalog.api.v1.dependencies import CurrentUserDep, SessionDep
from idea_catalog.schemas.user import (
    OwnProfile,
    OwnProfileResponse,
    ProfileUpdate,
    PublicProfile,
    PublicProfileResponse,
    UserCommentListResponse,
    UserProjectListResponse,
)
from idea_catalog.services import users

router = APIRouter(prefix="/users", tags=["users"])

UserIdPath = Annotated[uuid.UUID, Path(description="User ID")]


@router.patch("/profile", response_model=OwnProfileResponse)
async def update_my_profile(
    body: ProfileUpdate,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> OwnProfileResponse:
    """Update the caller's display name and/or bio."""
    user = users.update_profile(db, current_user, body)
    return OwnProfileResponse(
        data=OwnProfile.model_validate(user),
        message="Profile updated successfully",
    )


@router.get("/{user_id}/profile", response_model=PublicProfileResponse)
async def get_profile(user_id: UserIdPath, db: SessionDep) -> PublicProfileResponse:
    """Public profile. No authentication required."""
    return PublicProfileResponse(data=PublicProfile.model_validate(users.get_profile(db, user_id)))


@router.get("/{user_id}/projects", response_model=UserProjectListResponse)
async def list_user_projects(user_id: UserIdPath, db: SessionDep) -> UserProjectListResponse:
    """Projects submitted by a user, newest first."""
    items = users.list_user_projects(db, user_id)
    return UserProjectListResponse(data=items, count=len(items))


@router.get("/{user_id}/comments", response_model=UserCommentListResponse)
async def list_user_comments(user_id: UserIdPath, db: SessionDep) -> UserCommentListResponse:
    """Comments written by a user, newest first. Flagged comments are hidden."""
    items = users.list_user_comments(db, user_id)
    return UserCommentListResponse(data=items, count=len(items))
