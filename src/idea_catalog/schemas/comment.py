"""Comment-related Pydantic schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import AuthorInfo

COMMENT_MAX_LENGTH = 2000


def _clean_content(value: str) -> str:
    content = value.strip()
    if not content:
        raise ValueError("Comment content cannot be empty")
    if len(content) > COMMENT_MAX_LENGTH:
        raise ValueError(f"Comment must be between 1 and {COMMENT_MAX_LENGTH} characters")
    return content


class CommentBody(BaseModel):
    """Comment text; surrounding whitespace is trimmed before length checks."""

    content: str = Field(..., description="Comment text, 1-2000 characters after trimming")

    @field_validator("content")
    @classmethod
    def _validate_content(cls, value: str) -> str:
        return _clean_content(value)


class CommentCreate(CommentBody):
    """Schema for creating a top-level comment via ``POST /comments``."""

    idea_id: uuid.UUID


class CommentReply(CommentBody):
    """Schema for replying to an existing comment."""


class CommentUpdate(CommentBody):
    """Schema for editing a comment's content."""


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    id: uuid.UUID
    idea_id: uuid.UUID
    user_id: uuid.UUID | None
    parent_comment_id: uuid.UUID | None
    content: str
    flagged_for_moderation: bool
    created_at: datetime
    updated_at: datetime
    user: AuthorInfo

    model_config = ConfigDict(from_attributes=True)


class CommentNode(CommentResponse):
    """A comment placed in the reply forest."""

    depth: int = Field(..., ge=0, description="0 for top-level comments")
    replies: list[CommentNode] = Field(default_factory=list)


class CommentTreeResponse(BaseModel):
    """Envelope for an idea's discussion forest."""

    success: bool = True
    data: list[CommentNode]
    count: int = Field(..., description="Total number of comments on the idea")
    max_display_depth: int


class CommentEnvelope(BaseModel):
    """Envelope for a single created or updated comment."""

    success: bool = True
    data: CommentResponse
    message: str


class CommentDeleteResponse(BaseModel):
    """Envelope for a cascading comment deletion."""

    success: bool = True
    message: str
    deleted_count: int = Field(..., ge=1)
