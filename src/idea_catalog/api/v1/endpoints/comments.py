# src/idea_catalog/api/v1/endpoints/comments.py
"""Discussion endpoints: threaded comments on ideas."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Path, status

from idea_catalog.api.v1.dependencies import CurrentUserDep, SessionDep
from idea_catalog.core.settings import settings
from idea_catalog.schemas.comment import (
    CommentBody,
    CommentCreate,
    CommentDeleteResponse,
    CommentEnvelope,
    CommentReply,
    CommentTreeResponse,
    CommentUpdate,
)
from idea_catalog.schemas.common import MessageResponse
from idea_catalog.services import discussion

router = APIRouter(tags=["comments"])

IdeaIdPath = Annotated[uuid.UUID, Path(description="Idea ID")]
CommentIdPath = Annotated[uuid.UUID, Path(description="Comment ID")]


@router.get("/ideas/{idea_id}/comments", response_model=CommentTreeResponse)
async def list_comments(idea_id: IdeaIdPath, db: SessionDep) -> CommentTreeResponse:
    """Get the discussion for an idea as a reply forest.

    Every node carries its ``depth``; clients render replies up to
    ``max_display_depth`` and collapse anything deeper.
    """
    thread = discussion.list_comments(db, idea_id)
    return CommentTreeResponse(
        data=thread.forest,
        count=thread.total,
        max_display_depth=settings.comment_display_depth,
    )


@router.post(
    "/ideas/{idea_id}/comments",
    response_model=CommentEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment_on_idea(
    idea_id: IdeaIdPath,
    body: CommentBody,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> CommentEnvelope:
    """Post a top-level comment on an idea."""
    comment = discussion.create_comment(db, idea_id, current_user, body.content)
    return CommentEnvelope(
        data=discussion.describe_comment(db, comment, current_user),
        message="Comment created successfully",
    )


@router.post("/comments", response_model=CommentEnvelope, status_code=status.HTTP_201_CREATED)
async def create_comment(
    body: CommentCreate,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> CommentEnvelope:
    """Post a top-level comment, naming the idea in the request body."""
    comment = discussion.create_comment(db, body.idea_id, current_user, body.content)
    return CommentEnvelope(
        data=discussion.describe_comment(db, comment, current_user),
        message="Comment created successfully",
    )


@router.post(
    "/comments/{comment_id}/reply",
    response_model=CommentEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def reply_to_comment(
    comment_id: CommentIdPath,
    body: CommentReply,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> CommentEnvelope:
    """Reply to a comment. Replies do not change the idea's comment count."""
    reply = discussion.reply_to_comment(db, comment_id, current_user, body.content)
    return CommentEnvelope(
        data=discussion.describe_comment(db, reply, current_user),
        message="Reply created successfully",
    )


@router.api_route(
    "/comments/{comment_id}",
    methods=["PATCH", "PUT"],
    response_model=CommentEnvelope,
)
async def update_comment(
    comment_id: CommentIdPath,
    body: CommentUpdate,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> CommentEnvelope:
    """Edit a comment. Only its author may do this.

    Args:
        comment_id: ID of the comment to edit
        body: New content
        db: Database session
        current_user: Authenticated caller

    Returns:
        The updated comment

    Raises:
        NotFound: If the comment does not exist
        Forbidden: If the caller is not the author
    """
    comment = discussion.update_comment(db, comment_id, current_user, body.content)
    return CommentEnvelope(
        data=discussion.describe_comment(db, comment, current_user),
        message="Comment updated successfully",
    )


@router.delete("/comments/{comment_id}", response_model=CommentDeleteResponse)
async def delete_comment(
    comment_id: CommentIdPath,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> CommentDeleteResponse:
    """Delete a comment together with every nested reply."""
    deleted_count = discussion.delete_comment(db, comment_id, current_user)
    return CommentDeleteResponse(
        message=f"Comment and {deleted_count - 1} nested replies deleted successfully",
        deleted_count=deleted_count,
    )


@router.post("/comments/{comment_id}/flag", response_model=MessageResponse)
async def flag_comment(
    comment_id: CommentIdPath,
    db: SessionDep,
    _current_user: CurrentUserDep,
) -> MessageResponse:
    """Flag a comment for moderation. Flagging twice is a no-op."""
    discussion.flag_comment(db, comment_id)
    return MessageResponse(message="Comment flagged for moderation")
