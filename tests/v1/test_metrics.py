# mypy: ignore-errors
# tests/v1/test_metrics.py
"""Tests for metrics endpoints."""

import pytest
from fastapi import status

DASHBOARD_URL = "/api/v1/metrics/dashboard"


def test_dashboard_requires_auth(client) -> None:
    response = client.get(DASHBOARD_URL)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_dashboard_reads_counters(client, auth_token, test_user, make_idea, make_comment, make_project) -> None:
    viewed = make_idea(title="Viewed", view_count=40, comment_count=1)
    built = make_idea(title="Built", view_count=3, project_count=2)
    make_comment(viewed, test_user)
    make_project(built, test_user)
    make_project(built, test_user)

    response = client.get(DASHBOARD_URL, headers=auth_token)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data["total_registrations"] == 1
    assert data["total_projects"] == 2
    assert data["total_comments"] == 1
    assert data["total_idea_views"] == 43
    assert data["recent_registrations"] == 1
    assert data["most_viewed_ideas"][0]["title"] == "Viewed"
    assert data["most_commented_ideas"][0]["title"] == "Viewed"
    assert data["most_built_ideas"][0]["title"] == "Built"
    assert data["projects_goal_progress"] == {"current": 2, "goal": 4000, "percentage": 0.05}


def test_projects_goal_is_public(client, free_idea, test_user, make_project) -> None:
    make_project(free_idea, test_user)

    response = client.get("/api/v1/metrics/projects-goal")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert (data["current"], data["goal"]) == (1, 4000)
    assert data["percentage"] == pytest.approx(0.025, abs=0.006)
