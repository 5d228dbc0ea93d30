"""Role-gated content boards backing the frontend's user, moderator and admin pages."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from incident_desk.api.deps import get_current_user, require_admin, require_moderator
from incident_desk.schemas.auth import CurrentUser

router = APIRouter()


@router.get("/all", response_class=PlainTextResponse)
def public_content() -> str:
    return "Public Content."


@router.get("/user", response_class=PlainTextResponse)
def user_board(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> str:
    return "User Content."


@router.get("/mod", response_class=PlainTextResponse)
def moderator_board(
    _moderator: Annotated[CurrentUser, Depends(require_moderator)],
) -> str:
    return "Moderator Content."


@router.get("/admin", response_class=PlainTextResponse)
def admin_board(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> str:
    return "Admin Content."
