# tests/v1/test_dependencies.py
"""Tests for API dependencies module."""

import uuid
from datetime import UTC, datetime, timedelta

import pytest
from fastapi import status
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from idea_catalog.api.v1.dependencies import get_access_tier, get_current_user, get_optional_user
from idea_catalog.core.errors import Unauthorized
from idea_catalog.core.security import create_access_token
from idea_catalog.core.settings import settings
from idea_catalog.services.access import AccessTier


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetCurrentUser:
    """Test the get_current_user dependency function."""

    def test_get_current_user_success(self, db_session, test_user):
        """A valid token resolves to the stored user."""
        token = create_access_token(test_user.id)

        result = get_current_user(_bearer(token), db_session)

        assert result == test_user

    def test_missing_credentials(self, db_session):
        with pytest.raises(Unauthorized) as exc_info:
            get_current_user(None, db_session)

        assert exc_info.value.status_code == status.HTTP_401_UNAUTHORIZED
        assert exc_info.value.message == "Authentication required"

    def test_invalid_jwt(self, db_session):
        with pytest.raises(Unauthorized) as exc_info:
            get_current_user(_bearer("invalid_token"), db_session)

        assert exc_info.value.message == "Could not validate credentials"

    def test_expired_token(self, db_session, test_user):
        token = create_access_token(test_user.id, expires_minutes=-1)

        with pytest.raises(Unauthorized):
            get_current_user(_bearer(token), db_session)

    def test_wrong_signing_key(self, db_session, test_user):
        token = jwt.encode(
            {"sub": str(test_user.id), "exp": datetime.now(UTC) + timedelta(minutes=5)},
            "some-other-secret",
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(Unauthorized):
            get_current_user(_bearer(token), db_session)

    def test_subject_is_not_a_uuid(self, db_session):
        token = create_access_token("not-a-uuid")

        with pytest.raises(Unauthorized):
            get_current_user(_bearer(token), db_session)

    def test_unknown_user(self, db_session):
        token = create_access_token(uuid.uuid4())

        with pytest.raises(Unauthorized):
            get_current_user(_bearer(token), db_session)


class TestGetOptionalUser:
    """Test the guest-tolerant identity dependency."""

    def test_no_credentials_is_guest(self, db_session):
        assert get_optional_user(None, db_session) is None

    def test_invalid_token_is_guest(self, db_session):
        assert get_optional_user(_bearer("garbage"), db_session) is None

    def test_valid_token(self, db_session, test_user):
        token = create_access_token(test_user.id)
        assert get_optional_user(_bearer(token), db_session) == test_user


class TestGetAccessTier:
    def test_guest(self):
        assert get_access_tier(None) is AccessTier.GUEST

    def test_authenticated(self, test_user):
        assert get_access_tier(test_user) is AccessTier.AUTHENTICATED
