# src/idea_catalog/api/v1/endpoints/ideas.py
"""Catalog endpoints: listings, single ideas and view counting."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Path, Query

from idea_catalog.api.v1.dependencies import AccessTierDep, SessionDep
from idea_catalog.core.settings import settings
from idea_catalog.models import Category, Difficulty
from idea_catalog.schemas.idea import (
    CatalogFilterEcho,
    FreeTierShowcaseResponse,
    IdeaDetailResponse,
    IdeaListResponse,
    IdeaResponse,
    ViewCountData,
    ViewCountResponse,
)
from idea_catalog.services import catalog, counters
from idea_catalog.services.access import access_label, get_visible_idea, shape_idea

router = APIRouter(prefix="/ideas", tags=["ideas"])

PageQuery = Annotated[int, Query(ge=1, description="Page number, starting at 1")]
LimitQuery = Annotated[
    int,
    Query(ge=1, le=settings.max_page_size, description="Items per page"),
]


def _split_tools(raw: list[str]) -> tuple[str, ...]:
    # Accept both ?tools=a&tools=b and ?tools=a,b
    return tuple(part.strip() for value in raw for part in value.split(",") if part.strip())


@router.get("", response_model=IdeaListResponse)
async def list_ideas(
    db: SessionDep,
    tier: AccessTierDep,
    page: PageQuery = 1,
    limit: LimitQuery = settings.default_page_size,
    category: Category | None = Query(None, description="Filter by category"),
    difficulty: Difficulty | None = Query(None, description="Filter by difficulty"),
    search: str | None = Query(None, max_length=200, description="Search text"),
    tools: list[str] | None = Query(None, description="Match ideas using any of these tools"),
    free_tier: bool | None = Query(None, description="Only free-tier ideas when true"),
    sort: catalog.SortKey = Query(catalog.SortKey.RECENT, description="Listing order"),
) -> IdeaListResponse:
    """List ideas visible to the caller with filtering, sorting and pagination.

    Guests only ever see free-tier ideas and the teaser item; filters narrow
    that set further.

    Args:
        db: Database session
        tier: Access tier of the caller
        page: Page number
        limit: Items per page
        category: Category filter
        difficulty: Difficulty filter
        search: Case-insensitive text search
        tools: Tool filter (any match)
        free_tier: Restrict to free-tier ideas
        sort: Listing order

    Returns:
        Page of ideas with pagination metadata and the applied filters
    """
    filters = catalog.CatalogFilters(
        category=category.value if category else None,
        difficulty=difficulty.value if difficulty else None,
        search=search,
        tools=_split_tools(tools or []),
        free_tier=free_tier,
    )
    result = catalog.list_ideas(
        db,
        tier,
        filters,
        sort,
        catalog.PageRequest(page=page, limit=limit),
    )
    return IdeaListResponse(
        data=[shape_idea(idea, tier) for idea in result.items],
        pagination=result.pagination,
        filters=CatalogFilterEcho(
            category=filters.category,
            difficulty=filters.difficulty,
            search=search,
            tools=list(filters.tools) or None,
            free_tier=free_tier,
            sort=sort.value,
            tier=tier.value,
        ),
    )


@router.get("/free-tier", response_model=FreeTierShowcaseResponse)
async def list_free_tier_ideas(db: SessionDep) -> FreeTierShowcaseResponse:
    """Return the free-tier showcase available to everyone."""
    ideas = catalog.free_tier_showcase(db)
    return FreeTierShowcaseResponse(
        data=[IdeaResponse.model_validate(idea) for idea in ideas],
        count=len(ideas),
    )


@router.get("/search", response_model=IdeaListResponse)
async def search_ideas(
    db: SessionDep,
    tier: AccessTierDep,
    q: str = Query(..., min_length=1, max_length=200, description="Search text"),
    page: PageQuery = 1,
    limit: LimitQuery = settings.default_page_size,
) -> IdeaListResponse:
    """Search visible ideas, most viewed first."""
    result = catalog.search_ideas(db, tier, q, catalog.PageRequest(page=page, limit=limit))
    return IdeaListResponse(
        data=[shape_idea(idea, tier) for idea in result.items],
        pagination=result.pagination,
        query=q,
    )


@router.get("/category/{category}", response_model=IdeaListResponse)
async def list_ideas_by_category(
    category: Category,
    db: SessionDep,
    tier: AccessTierDep,
    page: PageQuery = 1,
    limit: LimitQuery = settings.default_page_size,
) -> IdeaListResponse:
    """Newest visible ideas within one category."""
    result = catalog.ideas_by_category(
        db,
        tier,
        category.value,
        catalog.PageRequest(page=page, limit=limit),
    )
    return IdeaListResponse(
        data=[shape_idea(idea, tier) for idea in result.items],
        pagination=result.pagination,
        category=category.value,
    )


@router.get("/{idea_id}", response_model=IdeaDetailResponse)
async def get_idea(
    idea_id: Annotated[uuid.UUID, Path(description="Idea ID")],
    db: SessionDep,
    tier: AccessTierDep,
) -> IdeaDetailResponse:
    """Get a single idea, shaped for the caller's tier.

    Args:
        idea_id: ID of the idea to retrieve
        db: Database session
        tier: Access tier of the caller

    Returns:
        The idea and the access label describing the disclosed field set

    Raises:
        NotFound: If the idea does not exist
        Forbidden: If a guest asks for a premium idea
    """
    idea = get_visible_idea(db, idea_id, tier)
    return IdeaDetailResponse(data=shape_idea(idea, tier), access=access_label(idea, tier))


@router.api_route("/{idea_id}/view", methods=["POST", "PATCH"], response_model=ViewCountResponse)
async def record_view(
    idea_id: Annotated[uuid.UUID, Path(description="Idea ID")],
    db: SessionDep,
) -> ViewCountResponse:
    """Count a view of an idea. No authentication required."""
    view_count = counters.record_view(db, idea_id)
    return ViewCountResponse(data=ViewCountData(id=idea_id, view_count=view_count))
