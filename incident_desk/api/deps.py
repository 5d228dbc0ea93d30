"""
Authorization dependencies: bearer-token extraction, verification and role checks.

Checks run in a fixed order (token present, token valid, role sufficient) so
a request without a token gets 401 on every protected route, whatever role
that route requires. Identity and roles come from the token alone; no
database lookup happens here.
"""

import logging
from collections.abc import Callable
from typing import Annotated

from fastapi import Cookie, Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from incident_desk.core.config import get_settings
from incident_desk.core.security import InvalidTokenError, decode_access_token
from incident_desk.schemas.auth import CurrentUser, RoleName

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

ACCESS_TOKEN_COOKIE = "accessToken"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def extract_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    x_access_token: Annotated[str | None, Header(alias="x-access-token")] = None,
    access_token_cookie: Annotated[str | None, Cookie(alias=ACCESS_TOKEN_COOKIE)] = None,
) -> str | None:
    """Return the raw token from Authorization: Bearer, then x-access-token, then the signin cookie."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    if x_access_token and x_access_token.strip():
        return x_access_token.strip()
    if access_token_cookie and access_token_cookie.strip():
        return access_token_cookie.strip()
    return None


def get_current_user(
    token: Annotated[str | None, Depends(extract_token)],
) -> CurrentUser:
    """Dependency: require a valid bearer token and return its identity. Raises 401 if missing or invalid."""
    if token is None:
        raise _unauthorized("No token provided!")
    try:
        claims = decode_access_token(token)
    except InvalidTokenError as e:
        logger.info("Rejected bearer token: %s", e)
        raise _unauthorized("Unauthorized!") from e
    return CurrentUser(id=claims.id, roles=claims.roles)


def require_roles(*allowed: RoleName) -> Callable[..., CurrentUser]:
    """Build a dependency that requires an authenticated user holding any of the given roles. Raises 403 otherwise."""
    label = " or ".join(role.value.capitalize() for role in allowed)

    def _require(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if not current_user.has_any_role(*allowed):
            logger.info(
                "User id=%s with roles=%s denied; requires %s",
                current_user.id,
                [r.value for r in current_user.roles],
                label,
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Require {label} Role!",
            )
        return current_user

    return _require


require_admin = require_roles(RoleName.ADMIN)
require_moderator = require_roles(RoleName.MODERATOR)


def stats_access(
    token: Annotated[str | None, Depends(extract_token)],
) -> CurrentUser | None:
    """Dependency for the stats endpoint: public unless STATS_REQUIRE_AUTH is set."""
    if not get_settings().STATS_REQUIRE_AUTH:
        return None
    return get_current_user(token)
