# mypy: ignore-errors
# tests/v1/test_ideas.py
"""Tests for catalog endpoints."""

import uuid
from datetime import UTC, datetime, timedelta

from fastapi import status

from idea_catalog.models import Category, Difficulty

IDEAS_URL = "/api/v1/ideas"


def _titles(response) -> list[str]:
    return [idea["title"] for idea in response.json()["data"]]


def test_guest_listing_only_contains_free_and_teaser(
    client, free_idea, premium_idea, teaser_idea
) -> None:
    """Guests see free-tier ideas and the teaser item, never premium ideas."""
    response = client.get(IDEAS_URL)
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["success"] is True
    ids = {idea["id"] for idea in body["data"]}
    assert ids == {str(free_idea.id), str(teaser_idea.id)}
    assert body["filters"]["tier"] == "guest"
    assert body["pagination"]["total"] == 2


def test_guest_listing_withholds_teaser_guide(client, free_idea, teaser_idea) -> None:
    """The teaser is listed for guests without its implementation details."""
    response = client.get(IDEAS_URL)
    by_id = {idea["id"]: idea for idea in response.json()["data"]}

    teaser = by_id[str(teaser_idea.id)]
    assert "build_guide" not in teaser
    assert "monetization_potential" not in teaser
    assert "estimated_build_time" not in teaser

    free = by_id[str(free_idea.id)]
    assert free["build_guide"] == "Step 1. Build it."


def test_authenticated_listing_contains_whole_catalog(
    client, auth_token, free_idea, premium_idea, teaser_idea
) -> None:
    """Authenticated callers see every idea with every field."""
    response = client.get(IDEAS_URL, headers=auth_token)
    body = response.json()
    assert body["filters"]["tier"] == "authenticated"
    assert body["pagination"]["total"] == 3
    assert all("build_guide" in idea for idea in body["data"])


def test_invalid_token_is_treated_as_guest(client, free_idea, premium_idea) -> None:
    """Listing does not fail on a bad token; the caller is simply a guest."""
    response = client.get(IDEAS_URL, headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["filters"]["tier"] == "guest"
    assert _titles(response) == [free_idea.title]


def test_pagination_second_page(client, make_idea) -> None:
    """page=2, limit=10 over 25 matches returns items 11-20."""
    for number in range(1, 26):
        make_idea(title=f"Idea {number:02d}", free_tier=True)

    response = client.get(IDEAS_URL, params={"page": 2, "limit": 10, "sort": "title"})
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert _titles(response) == [f"Idea {number:02d}" for number in range(11, 21)]
    assert body["pagination"] == {
        "total": 25,
        "page": 2,
        "limit": 10,
        "totalPages": 3,
        "hasNextPage": True,
        "hasPrevPage": True,
    }


def test_empty_result_is_not_an_error(client, free_idea) -> None:
    response = client.get(IDEAS_URL, params={"search": "nothing matches this"})
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["data"] == []
    assert body["pagination"]["total"] == 0
    assert body["pagination"]["totalPages"] == 0
    assert body["pagination"]["hasNextPage"] is False


def test_filters_narrow_guest_set(client, auth_token, make_idea) -> None:
    """Category and difficulty filters never widen the guest-visible set."""
    make_idea(
        title="Free Game",
        category=Category.GAMES_PUZZLES.value,
        difficulty=Difficulty.ADVANCED.value,
        free_tier=True,
    )
    make_idea(
        title="Premium Game",
        category=Category.GAMES_PUZZLES.value,
        difficulty=Difficulty.ADVANCED.value,
    )
    params = {"category": "Games and Puzzles", "difficulty": "Advanced"}

    assert _titles(client.get(IDEAS_URL, params=params)) == ["Free Game"]
    authed = client.get(IDEAS_URL, params={**params, "sort": "title"}, headers=auth_token)
    assert _titles(authed) == ["Free Game", "Premium Game"]


def test_free_tier_filter_for_authenticated_caller(client, auth_token, free_idea, premium_idea) -> None:
    response = client.get(IDEAS_URL, params={"free_tier": "true"}, headers=auth_token)
    assert _titles(response) == [free_idea.title]


def test_tools_filter_matches_any_tool(client, auth_token, make_idea) -> None:
    make_idea(title="Claude Only", tools=["Claude"])
    make_idea(title="Bolt Only", tools=["Bolt"])
    make_idea(title="Lovable Only", tools=["Lovable"])

    response = client.get(
        IDEAS_URL,
        params={"tools": "claude,bolt", "sort": "title"},
        headers=auth_token,
    )
    assert _titles(response) == ["Bolt Only", "Claude Only"]


def test_sort_recent_is_default(client, auth_token, make_idea) -> None:
    now = datetime.now(UTC)
    make_idea(title="Oldest", created_at=now - timedelta(days=2))
    make_idea(title="Newest", created_at=now)
    make_idea(title="Middle", created_at=now - timedelta(days=1))

    response = client.get(IDEAS_URL, headers=auth_token)
    assert _titles(response) == ["Newest", "Middle", "Oldest"]


def test_sort_popular_and_difficulty(client, auth_token, make_idea) -> None:
    make_idea(title="Hard", difficulty="Advanced", view_count=5)
    make_idea(title="Easy", difficulty="Beginner", view_count=50)
    make_idea(title="Medium", difficulty="Intermediate", view_count=10)

    popular = client.get(IDEAS_URL, params={"sort": "popular"}, headers=auth_token)
    assert _titles(popular) == ["Easy", "Medium", "Hard"]

    by_difficulty = client.get(IDEAS_URL, params={"sort": "difficulty"}, headers=auth_token)
    assert _titles(by_difficulty) == ["Easy", "Medium", "Hard"]


def test_invalid_query_parameters_are_validation_errors(client) -> None:
    """Bad enum values and out-of-range limits use the error envelope."""
    for params, field in (
        ({"limit": 101}, "limit"),
        ({"page": 0}, "page"),
        ({"sort": "random"}, "sort"),
        ({"category": "Cooking"}, "category"),
    ):
        response = client.get(IDEAS_URL, params=params)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "ValidationError"
        assert body["field"] == field


def test_free_tier_showcase(client, make_idea, premium_idea) -> None:
    """The showcase lists at most five free ideas ordered by title."""
    for letter in "GFEDCBA":
        make_idea(title=f"Free {letter}", free_tier=True)

    response = client.get(f"{IDEAS_URL}/free-tier")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["count"] == 5
    assert _titles(response) == ["Free A", "Free B", "Free C", "Free D", "Free E"]


def test_search_requires_query(client) -> None:
    response = client.get(f"{IDEAS_URL}/search")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["field"] == "q"


def test_search_matches_tags_and_respects_tier(client, auth_token, make_idea) -> None:
    make_idea(title="Tagged Free", tags=["Knitting"], free_tier=True, view_count=1)
    make_idea(title="Tagged Premium", tags=["knitting"], view_count=9)

    guest = client.get(f"{IDEAS_URL}/search", params={"q": "KNIT"})
    assert _titles(guest) == ["Tagged Free"]
    assert guest.json()["query"] == "KNIT"

    authed = client.get(f"{IDEAS_URL}/search", params={"q": "knit"}, headers=auth_token)
    assert _titles(authed) == ["Tagged Premium", "Tagged Free"]


def test_search_escapes_like_wildcards(client, auth_token, make_idea) -> None:
    make_idea(title="100% Uptime Monitor")
    make_idea(title="Plain Monitor")

    response = client.get(f"{IDEAS_URL}/search", params={"q": "%"}, headers=auth_token)
    assert _titles(response) == ["100% Uptime Monitor"]


def test_ideas_by_category(client, auth_token, make_idea) -> None:
    make_idea(title="Wellness One", category=Category.HEALTH_WELLNESS.value)
    make_idea(title="Other Category", category=Category.B2B_SAAS_TOOLS.value)

    response = client.get(f"{IDEAS_URL}/category/Health & Wellness", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    assert _titles(response) == ["Wellness One"]
    assert response.json()["category"] == "Health & Wellness"


def test_guest_cannot_fetch_premium_idea(client, premium_idea) -> None:
    """A guest gets Forbidden, not a partial record."""
    response = client.get(f"{IDEAS_URL}/{premium_idea.id}")
    assert response.status_code == status.HTTP_403_FORBIDDEN
    body = response.json()
    assert body == {
        "success": False,
        "error": "Forbidden",
        "message": "This idea requires authentication. Please sign up or log in to access.",
    }


def test_premium_idea_after_signing_in(client, premium_idea, auth_token) -> None:
    """Forbidden as a guest, full record once the caller is identified."""
    assert client.get(f"{IDEAS_URL}/{premium_idea.id}").status_code == status.HTTP_403_FORBIDDEN

    response = client.get(f"{IDEAS_URL}/{premium_idea.id}", headers=auth_token)
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["access"] == "full"
    assert body["data"]["build_guide"] == "Step 1. Build it."


def test_guest_fetches_free_idea(client, free_idea) -> None:
    response = client.get(f"{IDEAS_URL}/{free_idea.id}")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["access"] == "free_tier"
    assert body["data"]["build_guide"] == "Step 1. Build it."


def test_guest_fetches_teaser(client, teaser_idea, auth_token) -> None:
    """The teaser is visible to guests with a reduced field set."""
    response = client.get(f"{IDEAS_URL}/{teaser_idea.id}")
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["access"] == "teaser"
    assert body["data"]["title"] == teaser_idea.title
    assert "build_guide" not in body["data"]

    authed = client.get(f"{IDEAS_URL}/{teaser_idea.id}", headers=auth_token).json()
    assert authed["access"] == "full"
    assert authed["data"]["build_guide"] == "Secret implementation guide"


def test_unknown_idea_is_not_found_for_guest(client) -> None:
    """Existence is checked before tier."""
    response = client.get(f"{IDEAS_URL}/{uuid.uuid4()}")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["error"] == "NotFound"


def test_malformed_idea_id_is_validation_error(client) -> None:
    response = client.get(f"{IDEAS_URL}/not-a-uuid")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    body = response.json()
    assert body["error"] == "ValidationError"
    assert body["field"] == "idea_id"


def test_record_view_increments(client, db_session, premium_idea) -> None:
    """Views are counted for any idea, without authentication."""
    first = client.post(f"{IDEAS_URL}/{premium_idea.id}/view")
    assert first.status_code == status.HTTP_200_OK
    assert first.json()["data"] == {"id": str(premium_idea.id), "view_count": 1}

    second = client.patch(f"{IDEAS_URL}/{premium_idea.id}/view")
    assert second.json()["data"]["view_count"] == 2

    db_session.refresh(premium_idea)
    assert premium_idea.view_count == 2


def test_record_view_unknown_idea(client) -> None:
    response = client.post(f"{IDEAS_URL}/{uuid.uuid4()}/view")
    assert response.status_code == status.HTTP_404_NOT_FOUND
