# tests/services/test_metrics.py
"""Tests for dashboard metric aggregation."""

from datetime import UTC, datetime, timedelta

from idea_catalog.models import Idea, User
from idea_catalog.services import metrics


def test_empty_store(db_session) -> None:
    snapshot = metrics.dashboard(db_session)

    assert snapshot.total_registrations == 0
    assert snapshot.total_idea_views == 0
    assert snapshot.most_viewed_ideas == []
    assert snapshot.projects_goal_progress.percentage == 0.0


def test_recent_registrations_window(db_session) -> None:
    now = datetime(2026, 3, 10, 12, 0, tzinfo=UTC)
    db_session.add_all(
        [
            User(display_name="new", created_at=now - timedelta(days=1)),
            User(display_name="edge", created_at=now - timedelta(days=6, hours=23)),
            User(display_name="old", created_at=now - timedelta(days=8)),
        ]
    )
    db_session.commit()

    snapshot = metrics.dashboard(db_session, now=now)

    assert snapshot.total_registrations == 3
    assert snapshot.recent_registrations == 2
    assert snapshot.updated_at == now


def test_top_ideas_ranked_and_capped(db_session, make_idea) -> None:
    for views in (5, 50, 0, 20):
        make_idea(title=f"Views {views}", view_count=views)

    ranked = metrics.top_ideas(db_session, Idea.view_count, limit=3)

    assert [idea.title for idea in ranked] == ["Views 50", "Views 20", "Views 5"]
    assert ranked[0].view_count == 50
