"""Incident repository: CRUD, filtered listing and aggregate counts over the incidents table."""

import logging
from datetime import UTC, datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from incident_desk.models import Incident
from incident_desk.schemas.incident import (
    IncidentCreate,
    IncidentFilters,
    IncidentStats,
    IncidentUpdate,
    StatusCount,
    TypeCount,
    YearCount,
)

logger = logging.getLogger(__name__)

NOT_NULL_FIELDS = ("title", "published")


class IncidentNotFoundError(Exception):
    """Raised when no incident exists with the requested id."""

    def __init__(self, incident_id: int) -> None:
        self.incident_id = incident_id
        self.message = f"Cannot find Incident with id={incident_id}."
        super().__init__(self.message)


def create_incident(session: Session, data: IncidentCreate) -> Incident:
    """Insert an incident; date defaults to now when not supplied."""
    values = data.model_dump()
    if values.get("date") is None:
        values["date"] = datetime.now(UTC)
    incident = Incident(**values)
    session.add(incident)
    session.commit()
    session.refresh(incident)
    logger.info("Created incident id=%s title=%r", incident.id, incident.title)
    return incident


def get_incident(session: Session, incident_id: int) -> Incident:
    """Return the incident or raise IncidentNotFoundError."""
    incident = session.get(Incident, incident_id)
    if incident is None:
        raise IncidentNotFoundError(incident_id)
    return incident


def update_incident(session: Session, incident_id: int, changes: IncidentUpdate) -> Incident:
    """Apply only the fields present in the request body."""
    incident = get_incident(session, incident_id)
    updates = changes.model_dump(exclude_unset=True)
    # An explicit null on a NOT NULL column leaves it unchanged.
    for field in NOT_NULL_FIELDS:
        if field in updates and updates[field] is None:
            updates.pop(field)
    for field, value in updates.items():
        setattr(incident, field, value)
    session.commit()
    session.refresh(incident)
    logger.info("Updated incident id=%s fields=%s", incident_id, sorted(updates))
    return incident


def delete_incident(session: Session, incident_id: int) -> None:
    incident = get_incident(session, incident_id)
    session.delete(incident)
    session.commit()
    logger.info("Deleted incident id=%s", incident_id)


def delete_all_incidents(session: Session) -> int:
    """Delete every incident; returns the number of rows removed."""
    deleted_count = session.query(Incident).delete(synchronize_session=False)
    session.commit()
    logger.info("Deleted all incidents: count=%s", deleted_count)
    return deleted_count


def list_incidents(session: Session, filters: IncidentFilters | None = None) -> list[Incident]:
    """Return incidents matching every filter that is set, ordered by id."""
    query = session.query(Incident)
    if filters is not None:
        if filters.title:
            query = query.filter(Incident.title.ilike(f"%{filters.title}%"))
        if filters.year is not None:
            query = query.filter(Incident.year == filters.year)
        if filters.type:
            query = query.filter(Incident.type == filters.type)
        if filters.status:
            query = query.filter(Incident.status == filters.status)
        if filters.published is not None:
            query = query.filter(Incident.published == filters.published)
    return query.order_by(Incident.id).all()


def list_published(session: Session) -> list[Incident]:
    return list_incidents(session, IncidentFilters(published=True))


def incident_stats(session: Session) -> IncidentStats:
    """
    Totals plus counts grouped by type, status and year.

    Group rows include NULL keys (incidents with no type/status/year) so the
    grouped counts always add up to the total.
    """
    total = session.query(func.count(Incident.id)).scalar() or 0
    published = (
        session.query(func.count(Incident.id))
        .filter(Incident.published.is_(True))
        .scalar()
        or 0
    )

    by_type = (
        session.query(Incident.type, func.count(Incident.id))
        .group_by(Incident.type)
        .order_by(Incident.type)
        .all()
    )
    by_status = (
        session.query(Incident.status, func.count(Incident.id))
        .group_by(Incident.status)
        .order_by(Incident.status)
        .all()
    )
    by_year = (
        session.query(Incident.year, func.count(Incident.id))
        .group_by(Incident.year)
        .order_by(Incident.year.asc())
        .all()
    )

    return IncidentStats(
        total=total,
        published=published,
        unpublished=total - published,
        by_type=[TypeCount(type=t, count=c) for t, c in by_type],
        by_status=[StatusCount(status=s, count=c) for s, c in by_status],
        by_year=[YearCount(year=y, count=c) for y, c in by_year],
    )
