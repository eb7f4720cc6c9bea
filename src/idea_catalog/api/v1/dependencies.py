"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from idea_catalog.core.errors import Unauthorized
from idea_catalog.core.security import InvalidTokenError, decode_subject
from idea_catalog.db.session import get_db
from idea_catalog.models import User
from idea_catalog.services.access import AccessTier, resolve_tier

# HTTP Bearer scheme; missing credentials are handled below so guests get through.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def _user_from_token(db: Session, token: str) -> User | None:
    try:
        user_id = decode_subject(token)
    except InvalidTokenError:
        return None
    return db.get(User, user_id)


def get_current_user(credentials: CredentialsDep, db: SessionDep) -> User:
    """Get the current authenticated user from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        Unauthorized: If the token is missing, invalid, or names an unknown user
    """
    if credentials is None:
        raise Unauthorized("Authentication required")

    user = _user_from_token(db, credentials.credentials)
    if user is None:
        raise Unauthorized("Could not validate credentials")
    return user


def get_optional_user(credentials: CredentialsDep, db: SessionDep) -> User | None:
    """Identify the caller if a valid token is present; otherwise treat as guest."""
    if credentials is None:
        return None
    return _user_from_token(db, credentials.credentials)


def get_access_tier(user: Annotated[User | None, Depends(get_optional_user)]) -> AccessTier:
    return resolve_tier(user)


# Type aliases for identity dependencies
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]
AccessTierDep = Annotated[AccessTier, Depends(get_access_tier)]
