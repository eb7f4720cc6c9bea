# tests/services/test_counters.py
"""Tests for atomic counter maintenance."""

import logging
import uuid
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from idea_catalog.core.errors import InternalError, NotFound
from idea_catalog.db.session import Base, enable_sqlite_foreign_keys
from idea_catalog.models import Idea
from idea_catalog.services import counters


def _stored(db_session, idea: Idea, counter: str) -> int:
    db_session.expire(idea)
    return getattr(idea, counter)


def test_increment_returns_stored_value(db_session, free_idea) -> None:
    assert counters.increment(db_session, free_idea.id, "view_count") == 1
    assert counters.increment(db_session, free_idea.id, "view_count", 4) == 5
    assert _stored(db_session, free_idea, "view_count") == 5


def test_increment_missing_idea_returns_none(db_session) -> None:
    assert counters.increment(db_session, uuid.uuid4(), "comment_count") is None


def test_decrement_clamps_at_zero(db_session, make_idea) -> None:
    idea = make_idea(project_count=2)

    assert counters.decrement(db_session, idea.id, "project_count", 5) == 0
    assert counters.decrement(db_session, idea.id, "project_count") == 0


@pytest.mark.parametrize("counter", ["title", "likes", ""])
def test_unknown_counter_rejected(db_session, free_idea, counter) -> None:
    with pytest.raises(ValueError):
        counters.increment(db_session, free_idea.id, counter)


def test_negative_amount_rejected(db_session, free_idea) -> None:
    with pytest.raises(ValueError):
        counters.increment(db_session, free_idea.id, "view_count", -1)
    with pytest.raises(ValueError):
        counters.decrement(db_session, free_idea.id, "view_count", -3)


def test_try_increment_logs_and_swallows_store_errors(caplog) -> None:
    db = MagicMock()
    db.execute.side_effect = OperationalError("UPDATE ideas", {}, Exception("database is locked"))
    idea_id = uuid.uuid4()

    with caplog.at_level(logging.ERROR, logger="idea_catalog.services.counters"):
        assert counters.try_increment(db, idea_id, "comment_count") is None

    db.rollback.assert_called_once()
    assert str(idea_id) in caplog.text


def test_try_decrement_passes_through_success(db_session, make_idea) -> None:
    idea = make_idea(comment_count=3)
    assert counters.try_decrement(db_session, idea.id, "comment_count", 2) == 1


def test_record_view(db_session, free_idea) -> None:
    assert counters.record_view(db_session, free_idea.id) == 1
    assert counters.record_view(db_session, free_idea.id) == 2


def test_record_view_missing_idea(db_session) -> None:
    with pytest.raises(NotFound):
        counters.record_view(db_session, uuid.uuid4())


def test_record_view_store_failure_is_internal(db_session, free_idea, monkeypatch) -> None:
    def _fail(*_args, **_kwargs):
        raise OperationalError("UPDATE ideas", {}, Exception("disk I/O error"))

    monkeypatch.setattr(counters, "increment", _fail)

    with pytest.raises(InternalError):
        counters.record_view(db_session, free_idea.id)


def test_reconcile_single_idea(db_session, make_idea, make_comment, make_project, test_user) -> None:
    idea = make_idea(comment_count=9, project_count=0)
    untouched = make_idea(comment_count=4)
    top = make_comment(idea, test_user)
    make_comment(idea, test_user, parent=top)
    make_comment(idea, None)
    make_project(idea, test_user)

    assert counters.reconcile_counters(db_session, idea.id) == 1

    assert _stored(db_session, idea, "comment_count") == 2
    assert _stored(db_session, idea, "project_count") == 1
    assert _stored(db_session, untouched, "comment_count") == 4


def test_reconcile_all_only_touches_drifted_rows(db_session, make_idea, make_comment, test_user) -> None:
    accurate = make_idea()
    make_comment(accurate, test_user)
    counters.increment(db_session, accurate.id, "comment_count")
    drifted = make_idea(project_count=7)

    assert counters.reconcile_counters(db_session) == 1
    assert counters.reconcile_counters(db_session) == 0

    assert _stored(db_session, accurate, "comment_count") == 1
    assert _stored(db_session, drifted, "project_count") == 0


def test_interleaved_sessions_lose_no_updates(tmp_path) -> None:
    """Two sessions holding stale copies of an idea still land every update."""
    file_engine = create_engine(f"sqlite:///{tmp_path / 'counters.db'}")
    enable_sqlite_foreign_keys(file_engine)
    Base.metadata.create_all(bind=file_engine)
    make_session = sessionmaker(bind=file_engine)

    try:
        with make_session() as setup:
            idea = Idea(title="Shared", description="Contended counters", category="Community Building")
            setup.add(idea)
            setup.commit()
            idea_id = idea.id

        with make_session() as first, make_session() as second:
            stale_first = first.get(Idea, idea_id)
            stale_second = second.get(Idea, idea_id)
            assert stale_first.comment_count == stale_second.comment_count == 0

            assert counters.increment(first, idea_id, "comment_count") == 1
            assert counters.increment(second, idea_id, "comment_count") == 2
            assert counters.decrement(first, idea_id, "comment_count", 5) == 0
            assert counters.increment(second, idea_id, "comment_count") == 1

        with make_session() as check:
            assert check.get(Idea, idea_id).comment_count == 1
    finally:
        Base.metadata.drop_all(bind=file_engine)
        file_engine.dispose()
