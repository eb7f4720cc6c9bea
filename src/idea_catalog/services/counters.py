"""Aggregate counter maintenance for ideas.

Counters on ``ideas`` are denormalized aggregates. Every mutation is a single
atomic ``UPDATE ... SET col = col + :n`` so concurrent writers never lose an
update; no read-modify-write happens in application code. Increments that
follow an already committed primary write are best-effort, and any drift is
repaired by :func:`reconcile_counters`.
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import case, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import InstrumentedAttribute, Session

from idea_catalog.core.errors import InternalError, NotFound
from idea_catalog.models import COUNTER_COLUMNS, Comment, Idea, ProjectLink

__all__ = [
    "decrement",
    "increment",
    "reconcile_counters",
    "record_view",
    "try_decrement",
    "try_increment",
]

logger = logging.getLogger(__name__)


def _counter_column(counter: str) -> InstrumentedAttribute[int]:
    if counter not in COUNTER_COLUMNS:
        raise ValueError(f"Unknown counter {counter!r}; expected one of {COUNTER_COLUMNS}")
    column: InstrumentedAttribute[int] = getattr(Idea, counter)
    return column


def _check_amount(amount: int) -> None:
    if amount < 0:
        raise ValueError(f"Counter amount must be non-negative, got {amount}")


def _stored_value(db: Session, idea_id: uuid.UUID, column: InstrumentedAttribute[int]) -> int | None:
    value: int | None = db.query(column).filter(Idea.id == idea_id).scalar()
    return value


def increment(db: Session, idea_id: uuid.UUID, counter: str, amount: int = 1) -> int | None:
    """Atomically add ``amount`` to ``counter`` and return the stored value.

    Returns None when the idea row does not exist.
    """
    column = _counter_column(counter)
    _check_amount(amount)

    db.execute(
        update(Idea)
        .where(Idea.id == idea_id)
        .values({column: column + amount})
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return _stored_value(db, idea_id, column)


def decrement(db: Session, idea_id: uuid.UUID, counter: str, amount: int = 1) -> int | None:
    """Atomically subtract ``amount`` from ``counter``, clamping at zero."""
    column = _counter_column(counter)
    _check_amount(amount)

    db.execute(
        update(Idea)
        .where(Idea.id == idea_id)
        .values({column: case((column - amount < 0, 0), else_=column - amount)})
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return _stored_value(db, idea_id, column)


def try_increment(db: Session, idea_id: uuid.UUID, counter: str, amount: int = 1) -> int | None:
    """Best-effort :func:`increment`; store failures are logged, not raised."""
    try:
        return increment(db, idea_id, counter, amount)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "Failed to increment %s by %d for idea %s; left for reconciliation",
            counter,
            amount,
            idea_id,
        )
        return None


def try_decrement(db: Session, idea_id: uuid.UUID, counter: str, amount: int = 1) -> int | None:
    """Best-effort :func:`decrement`; store failures are logged, not raised."""
    try:
        return decrement(db, idea_id, counter, amount)
    except SQLAlchemyError:
        db.rollback()
        logger.exception(
            "Failed to decrement %s by %d for idea %s; left for reconciliation",
            counter,
            amount,
            idea_id,
        )
        return None


def record_view(db: Session, idea_id: uuid.UUID) -> int:
    """Count one view of an idea.

    Args:
        db: Database session
        idea_id: ID of the viewed idea

    Returns:
        The stored view count after the increment

    Raises:
        NotFound: If the idea does not exist
        InternalError: If the store rejects the update
    """
    if db.get(Idea, idea_id) is None:
        raise NotFound("Idea not found")

    try:
        view_count = increment(db, idea_id, "view_count")
    except SQLAlchemyError as err:
        db.rollback()
        logger.exception("Failed to record view for idea %s", idea_id)
        raise InternalError() from err

    if view_count is None:
        raise NotFound("Idea not found")
    return view_count


def reconcile_counters(db: Session, idea_id: uuid.UUID | None = None) -> int:
    """Recompute comment and project counters from the underlying rows.

    ``comment_count`` counts top-level comments only; ``project_count`` counts
    project links. Only drifted rows are written.

    Args:
        db: Database session
        idea_id: Restrict the repair to one idea; all ideas when omitted

    Returns:
        Number of idea rows whose counters were corrected
    """
    top_level_comments = (
        select(func.count(Comment.id))
        .where(Comment.idea_id == Idea.id, Comment.parent_comment_id.is_(None))
        .correlate(Idea)
        .scalar_subquery()
    )
    project_links = (
        select(func.count(ProjectLink.id))
        .where(ProjectLink.idea_id == Idea.id)
        .correlate(Idea)
        .scalar_subquery()
    )

    stmt = (
        update(Idea)
        .where(
            or_(
                Idea.comment_count != top_level_comments,
                Idea.project_count != project_links,
            )
        )
        .values(comment_count=top_level_comments, project_count=project_links)
        .execution_options(synchronize_session=False)
    )
    if idea_id is not None:
        stmt = stmt.where(Idea.id == idea_id)

    result = db.execute(stmt)
    db.commit()
    repaired = result.rowcount or 0
    if repaired:
        logger.info("Reconciled counters on %d idea(s)", repaired)
    return repaired
