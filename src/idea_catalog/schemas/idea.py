"""Idea-related Pydantic schemas."""

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .common import PaginationMeta

AccessLabel = Literal["full", "free_tier", "teaser"]


class _IdeaBase(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    category: str
    difficulty: str
    tools: list[str]
    tags: list[str]
    free_tier: bool
    is_teaser: bool
    view_count: int
    comment_count: int
    project_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class IdeaTeaserResponse(_IdeaBase):
    """Reduced idea record disclosed to guests for the teaser item."""


class IdeaResponse(_IdeaBase):
    """Full idea record, including the implementation guide."""

    monetization_potential: str | None
    estimated_build_time: str | None
    build_guide: str | None


IdeaPayload = IdeaResponse | IdeaTeaserResponse


class CatalogFilterEcho(BaseModel):
    """Filters applied to a listing, echoed back to the caller."""

    category: str | None = None
    difficulty: str | None = None
    search: str | None = None
    tools: list[str] | None = None
    free_tier: bool | None = None
    sort: str
    tier: Literal["guest", "authenticated"]


class IdeaListResponse(BaseModel):
    """Paginated listing envelope."""

    success: bool = True
    data: list[IdeaPayload]
    pagination: PaginationMeta
    filters: CatalogFilterEcho | None = None
    query: str | None = None
    category: str | None = None


class FreeTierShowcaseResponse(BaseModel):
    """The free-tier showcase: a short list of free ideas."""

    success: bool = True
    data: list[IdeaResponse]
    count: int


class IdeaDetailResponse(BaseModel):
    """Single idea envelope; ``access`` says which field set was disclosed."""

    success: bool = True
    data: IdeaPayload
    access: AccessLabel


class ViewCountData(BaseModel):
    id: uuid.UUID
    view_count: int = Field(..., ge=0)


class ViewCountResponse(BaseModel):
    """Envelope for the view counter endpoint."""

    success: bool = True
    data: ViewCountData
    message: str = "View count incremented successfully"
