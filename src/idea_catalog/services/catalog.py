"""Catalog query engine: filtering, sorting and pagination of ideas.

All filtering runs in SQL. For guests the tier visibility clause is applied
before any caller-supplied filter, so filters can only narrow the visible set.
"""

from __future__ import annotations

import enum
import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from sqlalchemy import case, exists, func, literal, or_, select
from sqlalchemy.orm import InstrumentedAttribute, Query, Session
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.sql.selectable import TableValuedAlias

from idea_catalog.core.errors import ValidationError
from idea_catalog.core.settings import settings
from idea_catalog.models import DIFFICULTY_RANK, Idea
from idea_catalog.schemas.common import PaginationMeta
from idea_catalog.services.access import AccessTier, visibility_clause

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


class SortKey(str, enum.Enum):
    """Supported listing orders."""

    POPULAR = "popular"
    RECENT = "recent"
    DIFFICULTY = "difficulty"
    TITLE = "title"


@dataclass(frozen=True)
class CatalogFilters:
    """Optional narrowing filters; unset fields do not constrain the result."""

    category: str | None = None
    difficulty: str | None = None
    search: str | None = None
    tools: tuple[str, ...] = ()
    free_tier: bool | None = None


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = field(default_factory=lambda: settings.default_page_size)

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValidationError("Page must be a positive integer", field="page")
        if not 1 <= self.limit <= settings.max_page_size:
            raise ValidationError(
                f"Limit must be between 1 and {settings.max_page_size}",
                field="limit",
            )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass
class CatalogPage:
    """One page of ideas plus the metadata describing the whole result."""

    items: list[Idea]
    pagination: PaginationMeta


def build_pagination_meta(total: int, page: int, limit: int) -> PaginationMeta:
    """Derive paging metadata from the pre-pagination count."""
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    return PaginationMeta(
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so ``term`` only matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def _json_elements(column: InstrumentedAttribute[list[str]], dialect: str) -> TableValuedAlias:
    # One row per array element, exposed as ``value``.
    if dialect == "postgresql":
        return func.json_array_elements_text(column).table_valued("value")
    return func.json_each(column).table_valued("value")


def _any_element(
    column: InstrumentedAttribute[list[str]],
    dialect: str,
    predicate: Callable[[ColumnElement[str]], ColumnElement[bool]],
) -> ColumnElement[bool]:
    """True when at least one element of the JSON array ``column`` satisfies ``predicate``."""
    elements = _json_elements(column, dialect)
    return exists(select(literal(1)).select_from(elements).where(predicate(elements.c.value)))


def apply_filters(query: Query[Idea], filters: CatalogFilters) -> Query[Idea]:
    """Narrow ``query`` by every filter that is set."""
    dialect = query.session.get_bind().dialect.name

    if filters.category:
        query = query.filter(Idea.category == filters.category)

    if filters.difficulty:
        query = query.filter(Idea.difficulty == filters.difficulty)

    if filters.free_tier:
        query = query.filter(Idea.free_tier.is_(True))

    search = (filters.search or "").strip()
    if search:
        pattern = f"%{escape_like(search)}%"

        def contains_term(value: ColumnElement[str]) -> ColumnElement[bool]:
            return value.ilike(pattern, escape=LIKE_ESCAPE)

        query = query.filter(
            or_(
                contains_term(Idea.title),
                contains_term(Idea.description),
                _any_element(Idea.tags, dialect, contains_term),
                _any_element(Idea.tools, dialect, contains_term),
            )
        )

    tools = [tool.strip() for tool in filters.tools if tool.strip()]
    if tools:

        def is_requested_tool(value: ColumnElement[str]) -> ColumnElement[bool]:
            return or_(*(func.lower(value) == func.lower(literal(tool)) for tool in tools))

        query = query.filter(_any_element(Idea.tools, dialect, is_requested_tool))

    return query


def sort_columns(sort: SortKey) -> Sequence[object]:
    """Return ORDER BY terms for ``sort``; id breaks ties for stable paging."""
    if sort is SortKey.POPULAR:
        return (Idea.view_count.desc(), Idea.id)
    if sort is SortKey.DIFFICULTY:
        rank = case(DIFFICULTY_RANK, value=Idea.difficulty, else_=len(DIFFICULTY_RANK) + 1)
        return (rank.asc(), Idea.id)
    if sort is SortKey.TITLE:
        return (Idea.title.asc(), Idea.id)
    return (Idea.created_at.desc(), Idea.id)


def list_ideas(
    db: Session,
    tier: AccessTier,
    filters: CatalogFilters | None = None,
    sort: SortKey = SortKey.RECENT,
    page: PageRequest | None = None,
) -> CatalogPage:
    """Return one page of ideas visible to ``tier``.

    Args:
        db: Database session
        tier: Access tier of the caller
        filters: Optional narrowing filters
        sort: Listing order
        page: Page number and size

    Returns:
        CatalogPage with the page items and pagination metadata
    """
    filters = filters or CatalogFilters()
    page = page or PageRequest()

    query = db.query(Idea).filter(visibility_clause(tier))
    query = apply_filters(query, filters)

    total = query.count()
    items = (
        query.order_by(*sort_columns(sort))
        .offset(page.offset)
        .limit(page.limit)
        .all()
    )
    logger.debug(
        "Listed %d of %d ideas for %s tier (page=%d, limit=%d, sort=%s)",
        len(items),
        total,
        tier.value,
        page.page,
        page.limit,
        sort.value,
    )
    return CatalogPage(items=items, pagination=build_pagination_meta(total, page.page, page.limit))


def free_tier_showcase(db: Session, limit: int | None = None) -> list[Idea]:
    """Return the free ideas shown to everyone, ordered by title."""
    cap = settings.free_tier_showcase_limit if limit is None else limit
    return (
        db.query(Idea)
        .filter(Idea.free_tier.is_(True))
        .order_by(Idea.title.asc(), Idea.id)
        .limit(cap)
        .all()
    )


def search_ideas(
    db: Session,
    tier: AccessTier,
    term: str,
    page: PageRequest | None = None,
) -> CatalogPage:
    """Full-text-ish search ordered by popularity."""
    if not term.strip():
        raise ValidationError("Search query is required", field="q")
    return list_ideas(db, tier, CatalogFilters(search=term), SortKey.POPULAR, page)


def ideas_by_category(
    db: Session,
    tier: AccessTier,
    category: str,
    page: PageRequest | None = None,
) -> CatalogPage:
    """Newest ideas within one category."""
    return list_ideas(db, tier, CatalogFilters(category=category), SortKey.RECENT, page)
