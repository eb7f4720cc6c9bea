"""Tier-based content resolution for catalog ideas."""

from __future__ import annotations

import enum
import uuid

from sqlalchemy import ColumnElement, or_, true
from sqlalchemy.orm import Session

from idea_catalog.core.errors import Forbidden, NotFound
from idea_catalog.models import Idea, User
from idea_catalog.schemas.idea import IdeaPayload, IdeaResponse, IdeaTeaserResponse

__all__ = [
    "AccessTier",
    "TIER_UPSELL_MESSAGE",
    "access_label",
    "get_visible_idea",
    "is_visible",
    "resolve_tier",
    "shape_idea",
    "visibility_clause",
]

TIER_UPSELL_MESSAGE = "This idea requires authentication. Please sign up or log in to access."


class AccessTier(str, enum.Enum):
    """Access level of the caller for the current request."""

    GUEST = "guest"
    AUTHENTICATED = "authenticated"


def resolve_tier(user: User | None) -> AccessTier:
    """Return the tier for an optional caller identity."""
    return AccessTier.GUEST if user is None else AccessTier.AUTHENTICATED


def is_visible(idea: Idea, tier: AccessTier) -> bool:
    """Return True if ``idea`` belongs to the visible set of ``tier``."""
    if tier is AccessTier.AUTHENTICATED:
        return True
    return bool(idea.free_tier or idea.is_teaser)


def visibility_clause(tier: AccessTier) -> ColumnElement[bool]:
    """SQL counterpart of :func:`is_visible` for list queries."""
    if tier is AccessTier.AUTHENTICATED:
        return true()
    return or_(Idea.free_tier.is_(True), Idea.is_teaser.is_(True))


def get_visible_idea(db: Session, idea_id: uuid.UUID, tier: AccessTier) -> Idea:
    """Fetch an idea the caller is allowed to see.

    Args:
        db: Database session
        idea_id: ID of the idea to fetch
        tier: Access tier of the caller

    Returns:
        The Idea row

    Raises:
        NotFound: If no idea has this id
        Forbidden: If the idea exists but is outside the caller's tier
    """
    idea = db.get(Idea, idea_id)
    if idea is None:
        raise NotFound("Idea not found")
    if not is_visible(idea, tier):
        raise Forbidden(TIER_UPSELL_MESSAGE)
    return idea


def access_label(idea: Idea, tier: AccessTier) -> str:
    """Return which field set ``tier`` receives for ``idea``."""
    if tier is AccessTier.AUTHENTICATED:
        return "full"
    if idea.free_tier:
        return "free_tier"
    return "teaser"


def shape_idea(idea: Idea, tier: AccessTier) -> IdeaPayload:
    """Project ``idea`` onto the field set disclosed to ``tier``.

    A free idea is fully disclosed to guests, so a free teaser row is too.
    """
    if access_label(idea, tier) == "teaser":
        return IdeaTeaserResponse.model_validate(idea)
    return IdeaResponse.model_validate(idea)
