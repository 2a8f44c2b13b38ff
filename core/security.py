"""
Password hashing and bearer token helpers.

Passwords are hashed with bcrypt; access tokens are HS256 JWTs
carrying the username and user id.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
import jwt

from core.config import settings


REQUIRED_CLAIMS = ("username", "id")


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash password using bcrypt."""
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Verify password against hashed value."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(
    username: str,
    user_id: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed access token for a user.

    Args:
        username: Username embedded in the token
        user_id: Storage id of the user
        expires_delta: Token lifetime (defaults to settings)

    Returns:
        Encoded JWT string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    payload = {
        "username": username,
        "id": user_id,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify a token and return its claims.

    Raises:
        InvalidTokenError: Bad signature, expired, or missing claims
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError("token expired") from e
    except jwt.PyJWTError as e:
        raise InvalidTokenError("token missing or invalid") from e

    if any(not payload.get(claim) for claim in REQUIRED_CLAIMS):
        raise InvalidTokenError("token missing or invalid")

    return payload


class InvalidTokenError(Exception):
    """Access token could not be verified."""
    pass
