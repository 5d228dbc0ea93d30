"""Signup and signin endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from incident_desk.api.deps import ACCESS_TOKEN_COOKIE
from incident_desk.core.config import get_settings
from incident_desk.core.database import get_db
from incident_desk.core.security import create_access_token, verify_password
from incident_desk.schemas.auth import (
    LoginRequest,
    MessageResponse,
    SigninResponse,
    SignupRequest,
)
from incident_desk.services.users import (
    DuplicateUserError,
    RolesNotSeededError,
    find_by_username,
    register_user,
    role_names_of,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=MessageResponse)
def signup(
    body: SignupRequest,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """
    Register a user. Requested roles are assigned as given; without roles the
    user gets the default 'user' role.
    """
    try:
        register_user(db, body.username, body.email, body.password, body.roles)
    except DuplicateUserError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except RolesNotSeededError as e:
        logger.error("Signup failed, roles missing: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e
    return MessageResponse(message="User was registered successfully!")


@router.post("/signin", response_model=SigninResponse)
def signin(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> SigninResponse:
    """
    Authenticate with username and password; returns identity, authorities and a JWT.
    The token is also set as an httpOnly cookie. Send it back as
    Authorization: Bearer <accessToken> or in the x-access-token header.
    """
    user = find_by_username(db, body.username)
    if user is None or not verify_password(body.password, user.password_hash):
        logger.info("Failed signin for username=%s", body.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password.",
        )

    settings = get_settings()
    roles = role_names_of(user)
    if not roles:
        logger.warning("Signin refused for user id=%s: no roles assigned", user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User has no roles assigned.",
        )
    token = create_access_token(user.id, roles, settings.JWT_EXPIRE_SECONDS)
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=token,
        httponly=True,
        secure=settings.APP_ENV == "prod",
        samesite="lax",
        max_age=settings.JWT_EXPIRE_SECONDS,
    )
    return SigninResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        roles=[role.authority for role in roles],
        access_token=token,
    )
