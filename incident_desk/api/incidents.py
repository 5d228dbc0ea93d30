"""Incident endpoints: token-protected CRUD, admin listing, and public published/stats views."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from incident_desk.api.deps import get_current_user, require_admin, stats_access
from incident_desk.core.database import get_db
from incident_desk.schemas.auth import CurrentUser, MessageResponse
from incident_desk.schemas.incident import (
    IncidentCreate,
    IncidentFilters,
    IncidentRead,
    IncidentStats,
    IncidentUpdate,
)
from incident_desk.services.incidents import (
    IncidentNotFoundError,
    create_incident,
    delete_all_incidents,
    delete_incident,
    get_incident,
    incident_stats,
    list_incidents,
    list_published,
    update_incident,
)

router = APIRouter()


def _not_found(e: IncidentNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.get("/admin/all", response_model=list[IncidentRead])
def get_all_incidents_admin(
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    title: Annotated[str | None, Query(max_length=255)] = None,
    year: int | None = None,
    incident_type: Annotated[str | None, Query(alias="type")] = None,
    incident_status: Annotated[str | None, Query(alias="status")] = None,
) -> list[IncidentRead]:
    """All incidents including unpublished ones (admin only). Filters ignore the published flag."""
    filters = IncidentFilters(title=title, year=year, type=incident_type, status=incident_status)
    return [IncidentRead.model_validate(i) for i in list_incidents(db, filters)]


@router.get("/public/published", response_model=list[IncidentRead])
def get_published_incidents(
    db: Annotated[Session, Depends(get_db)],
) -> list[IncidentRead]:
    """Published incidents; no authentication."""
    return [IncidentRead.model_validate(i) for i in list_published(db)]


@router.get("/public/stats", response_model=IncidentStats)
def get_incident_stats(
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser | None, Depends(stats_access)],
) -> IncidentStats:
    """
    Dashboard counts: total, published, unpublished, and grouped by type,
    status and year (year ascending). Public unless STATS_REQUIRE_AUTH is set.
    """
    return incident_stats(db)


@router.get("", response_model=list[IncidentRead])
def get_incidents(
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    title: Annotated[str | None, Query(max_length=255)] = None,
    year: int | None = None,
    incident_type: Annotated[str | None, Query(alias="type")] = None,
    incident_status: Annotated[str | None, Query(alias="status")] = None,
    published: bool | None = None,
) -> list[IncidentRead]:
    """List incidents, optionally filtered by title substring, year, type, status and published flag."""
    filters = IncidentFilters(
        title=title, year=year, type=incident_type, status=incident_status, published=published
    )
    return [IncidentRead.model_validate(i) for i in list_incidents(db, filters)]


@router.post("", response_model=IncidentRead, status_code=status.HTTP_201_CREATED)
def post_incident(
    body: IncidentCreate,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> IncidentRead:
    """Create an incident. Title is required; status defaults to 'open', date to now."""
    return IncidentRead.model_validate(create_incident(db, body))


@router.delete("", response_model=MessageResponse)
def delete_incidents(
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> MessageResponse:
    """Delete every incident (admin only)."""
    deleted = delete_all_incidents(db)
    return MessageResponse(message=f"{deleted} Incidents were deleted successfully!")


@router.get("/{incident_id}", response_model=IncidentRead)
def get_one_incident(
    incident_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> IncidentRead:
    try:
        return IncidentRead.model_validate(get_incident(db, incident_id))
    except IncidentNotFoundError as e:
        raise _not_found(e) from e


@router.put("/{incident_id}", response_model=IncidentRead)
def put_incident(
    incident_id: int,
    body: IncidentUpdate,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> IncidentRead:
    """Update the fields present in the body; others are left unchanged."""
    try:
        return IncidentRead.model_validate(update_incident(db, incident_id, body))
    except IncidentNotFoundError as e:
        raise _not_found(e) from e


@router.delete("/{incident_id}", response_model=MessageResponse)
def delete_one_incident(
    incident_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MessageResponse:
    try:
        delete_incident(db, incident_id)
    except IncidentNotFoundError as e:
        raise _not_found(e) from e
    return MessageResponse(message="Incident was deleted successfully!")
