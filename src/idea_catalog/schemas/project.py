"""Project link Pydantic schemas."""

from __future__ import annotations

import uuid
from datetime import datetime
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .common import AuthorInfo

TITLE_MAX_LENGTH = 255
URL_MAX_LENGTH = 500
DESCRIPTION_MAX_LENGTH = 2000


def _clean_title(value: str) -> str:
    title = value.strip()
    if not title:
        raise ValueError("Title is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValueError(f"Title must be {TITLE_MAX_LENGTH} characters or less")
    return title


def _clean_url(value: str) -> str:
    url = value.strip()
    if len(url) > URL_MAX_LENGTH:
        raise ValueError(f"URL must be {URL_MAX_LENGTH} characters or less")
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Valid URL is required (must start with http:// or https://)")
    return url


def _clean_description(value: str | None) -> str | None:
    if value is None:
        return None
    description = value.strip()
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValueError(f"Description must be {DESCRIPTION_MAX_LENGTH} characters or less")
    return description or None


class ProjectLinkCreate(BaseModel):
    """Schema for submitting a project built from an idea."""

    title: str
    url: str
    description: str | None = None
    tools_used: list[str] = Field(default_factory=list)
    # Only read by ``POST /projects``; the nested route takes it from the path.
    idea_id: uuid.UUID | None = None

    @field_validator("title")
    @classmethod
    def _validate_title(cls, value: str) -> str:
        return _clean_title(value)

    @field_validator("url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        return _clean_url(value)

    @field_validator("description")
    @classmethod
    def _validate_description(cls, value: str | None) -> str | None:
        return _clean_description(value)


class ProjectLinkUpdate(BaseModel):
    """Partial update; at least one field must be supplied.

    Omitted fields are left alone. Only ``description`` may be cleared with an
    explicit null.
    """

    title: str | None = None
    url: str | None = None
    description: str | None = None
    tools_used: list[str] | None = None

    # Field validators only run for supplied values, so None here is an explicit null.
    @field_validator("title")
    @classmethod
    def _validate_title(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("Title cannot be null")
        return _clean_title(value)

    @field_validator("url")
    @classmethod
    def _validate_url(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("URL cannot be null")
        return _clean_url(value)

    @field_validator("tools_used")
    @classmethod
    def _validate_tools_used(cls, value: list[str] | None) -> list[str]:
        if value is None:
            raise ValueError("Tools used cannot be null; send an empty list instead")
        return value

    @field_validator("description")
    @classmethod
    def _validate_description(cls, value: str | None) -> str | None:
        return _clean_description(value)

    @model_validator(mode="after")
    def _require_any_field(self) -> ProjectLinkUpdate:
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        return self


class ProjectLinkResponse(BaseModel):
    """Schema for project link information returned by the API."""

    id: uuid.UUID
    idea_id: uuid.UUID
    user_id: uuid.UUID | None
    title: str
    url: str
    description: str | None
    tools_used: list[str]
    created_at: datetime
    updated_at: datetime
    user: AuthorInfo

    model_config = ConfigDict(from_attributes=True)


class ProjectLinkListResponse(BaseModel):
    success: bool = True
    data: list[ProjectLinkResponse]
    count: int


class ProjectLinkEnvelope(BaseModel):
    """Envelope for a created or updated project link."""

    success: bool = True
    data: ProjectLinkResponse
    message: str
    project_count: int | None = None


class ToolStats(BaseModel):
    """Per-tool counts.

    ``breakdown`` holds the campaign tools (lowercased) plus ``other``;
    ``all_tools`` holds every tool name as submitted, trimmed.
    """

    breakdown: dict[str, int]
    all_tools: dict[str, int]


class ProjectStats(BaseModel):
    total_projects: int
    campaign_goal: int
    progress_percentage: float
    tools: ToolStats
    categories: dict[str, int]


class ProjectStatsResponse(BaseModel):
    """Envelope for aggregate project statistics."""

    success: bool = True
    data: ProjectStats
