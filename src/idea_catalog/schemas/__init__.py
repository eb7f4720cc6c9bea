# src/idea_catalog/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .comment import (
    CommentCreate,
    CommentDeleteResponse,
    CommentEnvelope,
    CommentNode,
    CommentReply,
    CommentResponse,
    CommentTreeResponse,
    CommentUpdate,
)
from .common import AuthorInfo, ErrorResponse, MessageResponse, PaginationMeta
from .idea import (
    CatalogFilterEcho,
    FreeTierShowcaseResponse,
    IdeaDetailResponse,
    IdeaListResponse,
    IdeaResponse,
    IdeaTeaserResponse,
    ViewCountResponse,
)
from .metrics import DashboardResponse, GoalProgressResponse
from .project import (
    ProjectLinkCreate,
    ProjectLinkEnvelope,
    ProjectLinkListResponse,
    ProjectLinkResponse,
    ProjectLinkUpdate,
    ProjectStatsResponse,
)
from .user import (
    OwnProfileResponse,
    ProfileUpdate,
    PublicProfileResponse,
    UserCommentListResponse,
    UserProjectListResponse,
)

__all__ = [
    "AuthorInfo", "ErrorResponse", "MessageResponse", "PaginationMeta",
    "CatalogFilterEcho", "FreeTierShowcaseResponse", "IdeaDetailResponse",
    "IdeaListResponse", "IdeaResponse", "IdeaTeaserResponse", "ViewCountResponse",
    "CommentCreate", "CommentDeleteResponse", "CommentEnvelope", "CommentNode",
    "CommentReply", "CommentResponse", "CommentTreeResponse", "CommentUpdate",
    "ProjectLinkCreate", "ProjectLinkEnvelope", "ProjectLinkListResponse",
    "ProjectLinkResponse", "ProjectLinkUpdate", "ProjectStatsResponse",
    "DashboardResponse", "GoalProgressResponse",
    "OwnProfileResponse", "ProfileUpdate", "PublicProfileResponse",
    "UserCommentListResponse", "UserProjectListResponse",
]
