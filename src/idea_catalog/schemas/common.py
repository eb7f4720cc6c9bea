"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PaginationMeta(BaseModel):
    """Paging metadata derived from the post-filter, pre-pagination count."""

    total: int = Field(..., ge=0, description="Number of items matching the filters")
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0, alias="totalPages")
    has_next_page: bool = Field(..., alias="hasNextPage")
    has_prev_page: bool = Field(..., alias="hasPrevPage")

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    """Error envelope returned for every failed request."""

    success: Literal[False] = False
    error: str = Field(..., description="Error kind, e.g. NotFound")
    message: str
    field: str | None = Field(None, description="Offending input, for validation failures")


class MessageResponse(BaseModel):
    """Acknowledgement envelope for operations without a payload."""

    success: bool = True
    message: str


class AuthorInfo(BaseModel):
    """Resolved author display name and the branch that produced it."""

    display_name: str
    source: Literal["joined", "lookup", "anonymous"]
