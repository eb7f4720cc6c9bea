# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from idea_catalog.core.security import create_access_token
from idea_catalog.db.session import Base, enable_sqlite_foreign_keys
from idea_catalog.db.session import get_db as app_get_session
from idea_catalog.main import app as fastapi_app
from idea_catalog.models import Category, Comment, Difficulty, Idea, ProjectLink, User

TEST_DB_URL = "sqlite://"

_IDEA_COUNTER = count(1)
_USER_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    # Services commit, so each test cleans the tables afterwards instead of
    # rolling back an outer transaction.
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _create_user(db_session: Session, display_name: str | None) -> User:
    user = User(email=f"user{next(_USER_COUNTER)}@example.com", display_name=display_name)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return a persisted test user."""
    return _create_user(db_session, "Test User")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user."""
    return _create_user(db_session, "Other User")


@pytest.fixture()
def nameless_user(db_session: Session) -> User:
    """A user without a display name."""
    return _create_user(db_session, None)


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    token = create_access_token(test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    token = create_access_token(other_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_idea(db_session: Session) -> Callable[..., Idea]:
    """Factory persisting an idea; keyword arguments override the defaults."""

    def _make(**overrides: Any) -> Idea:
        number = next(_IDEA_COUNTER)
        values: dict[str, Any] = {
            "title": f"Sample Idea {number:03d}",
            "description": "A sample idea used in tests.",
            "category": Category.COMMUNITY_BUILDING.value,
            "difficulty": Difficulty.BEGINNER.value,
            "tools": ["Claude"],
            "tags": ["sample"],
            "monetization_potential": "Subscriptions",
            "estimated_build_time": "1 week",
            "build_guide": "Step 1. Build it.",
            "free_tier": False,
            "is_teaser": False,
        }
        values.update(overrides)
        idea = Idea(**values)
        db_session.add(idea)
        db_session.commit()
        db_session.refresh(idea)
        return idea

    return _make


@pytest.fixture()
def free_idea(make_idea: Callable[..., Idea]) -> Idea:
    return make_idea(title="Free Reading Tracker", free_tier=True)


@pytest.fixture()
def premium_idea(make_idea: Callable[..., Idea]) -> Idea:
    return make_idea(title="Premium Grant Radar", free_tier=False)


@pytest.fixture()
def teaser_idea(make_idea: Callable[..., Idea]) -> Idea:
    return make_idea(
        title="BuyButton: One-Click Checkout",
        free_tier=False,
        is_teaser=True,
        build_guide="Secret implementation guide",
    )


@pytest.fixture()
def make_comment(db_session: Session) -> Callable[..., Comment]:
    """Factory persisting a comment directly, bypassing counter updates."""

    def _make(
        idea: Idea,
        user: User | None,
        content: str = "Nice idea",
        parent: Comment | None = None,
        **extra: Any,
    ) -> Comment:
        comment = Comment(
            idea_id=idea.id,
            user_id=user.id if user else None,
            parent_comment_id=parent.id if parent else None,
            content=content,
            **extra,
        )
        db_session.add(comment)
        db_session.commit()
        db_session.refresh(comment)
        return comment

    return _make


@pytest.fixture()
def make_project(db_session: Session) -> Callable[..., ProjectLink]:
    """Factory persisting a project link directly, bypassing counter updates."""

    def _make(idea: Idea, user: User, **overrides: Any) -> ProjectLink:
        values: dict[str, Any] = {
            "title": "My Build",
            "url": "https://example.com/build",
            "description": None,
            "tools_used": ["Claude"],
        }
        values.update(overrides)
        project = ProjectLink(idea_id=idea.id, user_id=user.id, **values)
        db_session.add(project)
        db_session.commit()
        db_session.refresh(project)
        return project

    return _make
