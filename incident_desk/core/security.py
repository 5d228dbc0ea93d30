"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt
from pydantic import ValidationError

from incident_desk.core.config import settings
from incident_desk.schemas.auth import RoleName, TokenClaims

# Min/max lengths for signup input validation (mirrors the registration form).
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 20
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 40
EMAIL_MAX_LEN = 255


class InvalidTokenError(Exception):
    """Raised when a bearer token is malformed, expired, badly signed or carries invalid claims."""


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    user_id: int,
    roles: list[RoleName],
    expires_seconds: int | None = None,
) -> str:
    """Create a JWT access token carrying the user id, roles, iat and exp."""
    if not roles:
        raise ValueError("at least one role is required to issue a token")
    now = datetime.now(UTC)
    lifetime = expires_seconds if expires_seconds is not None else settings.JWT_EXPIRE_SECONDS
    payload: dict[str, Any] = {
        "id": user_id,
        "roles": [RoleName(r).value for r in roles],
        "iat": now,
        "exp": now + timedelta(seconds=lifetime),
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> TokenClaims:
    """
    Verify signature and expiry, then validate the claims.
    Raises InvalidTokenError on any failure.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError("Token has expired") from e
    except jwt.PyJWTError as e:
        raise InvalidTokenError("Invalid token") from e
    try:
        return TokenClaims.model_validate(payload)
    except ValidationError as e:
        raise InvalidTokenError("Invalid token payload") from e
