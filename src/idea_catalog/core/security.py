"""JWT helpers for caller identity.

Token issuance belongs to the external authentication provider; this module
only mints tokens for development tooling and tests, and decodes the bearer
tokens presented on requests.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from idea_catalog.core.settings import settings


class InvalidTokenError(ValueError):
    """Raised when a bearer token cannot be turned into a caller id."""


def create_access_token(
    subject: uuid.UUID | str,
    extra_claims: dict[str, str] | None = None,
    expires_minutes: int | None = None,
) -> str:
    """Create a JWT access token whose ``sub`` claim is the user id."""
    to_encode: dict[str, object] = {"sub": str(subject)}
    if extra_claims:
        to_encode.update(extra_claims)
    minutes = settings.access_token_expire_minutes if expires_minutes is None else expires_minutes
    to_encode["exp"] = datetime.now(UTC) + timedelta(minutes=minutes)
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_subject(token: str) -> uuid.UUID:
    """Return the user id carried by ``token``.

    Raises:
        InvalidTokenError: If the signature, expiry or subject is invalid.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise InvalidTokenError("Could not validate credentials") from err

    subject = payload.get("sub")
    if not subject:
        raise InvalidTokenError("Could not validate credentials")
    try:
        return uuid.UUID(str(subject))
    except ValueError as err:
        raise InvalidTokenError("Could not validate credentials") from err
