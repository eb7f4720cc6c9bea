"""User profile Pydantic schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

DISPLAY_NAME_MAX_LENGTH = 100
BIO_MAX_LENGTH = 500


def _clean_optional(value: str | None, label: str, max_length: int) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    if len(cleaned) > max_length:
        raise ValueError(f"{label} must not exceed {max_length} characters")
    return cleaned or None


class PublicProfile(BaseModel):
    """What anyone may see about a user; email is never included."""

    display_name: str | None
    bio: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OwnProfile(PublicProfile):
    """The caller's own profile."""

    id: uuid.UUID
    email: str | None
    updated_at: datetime


class ProfileUpdate(BaseModel):
    """Partial profile update; null or blank clears a field."""

    display_name: str | None = None
    bio: str | None = None

    @field_validator("display_name")
    @classmethod
    def _validate_display_name(cls, value: str | None) -> str | None:
        return _clean_optional(value, "Display name", DISPLAY_NAME_MAX_LENGTH)

    @field_validator("bio")
    @classmethod
    def _validate_bio(cls, value: str | None) -> str | None:
        return _clean_optional(value, "Bio", BIO_MAX_LENGTH)

    @model_validator(mode="after")
    def _require_any_field(self) -> ProfileUpdate:
        if not self.model_fields_set:
            raise ValueError("At least one field (display_name or bio) must be provided")
        return self


class PublicProfileResponse(BaseModel):
    success: bool = True
    data: PublicProfile


class OwnProfileResponse(BaseModel):
    success: bool = True
    data: OwnProfile
    message: str


class UserProjectItem(BaseModel):
    """A project link listed on its author's profile."""

    id: uuid.UUID
    idea_id: uuid.UUID
    idea_title: str | None
    title: str
    url: str
    description: str | None
    tools_used: list[str]
    created_at: datetime
    updated_at: datetime


class UserCommentItem(BaseModel):
    """A comment listed on its author's profile."""

    id: uuid.UUID
    idea_id: uuid.UUID
    idea_title: str | None
    parent_comment_id: uuid.UUID | None
    content: str
    created_at: datetime
    updated_at: datetime


class UserProjectListResponse(BaseModel):
    success: bool = True
    data: list[UserProjectItem]
    count: int


class UserCommentListResponse(BaseModel):
    success: bool = True
    data: list[UserCommentItem]
    count: int
