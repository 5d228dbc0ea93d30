"""Health check: database connectivity and role bootstrap state."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from incident_desk.core.config import get_settings
from incident_desk.core.database import check_db_connected, get_db
from incident_desk.schemas.health import HealthResponse
from incident_desk.services.roles import roles_seeded

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """
    Report 'ok' only when the database answers and the role rows exist;
    signup cannot assign roles before the bootstrap has run.
    """
    connected = check_db_connected(db)
    seeded = False
    if connected:
        try:
            seeded = roles_seeded(db)
        except SQLAlchemyError:
            db.rollback()
    return HealthResponse(
        status="ok" if seeded else "degraded",
        environment=get_settings().APP_ENV,
        database="connected" if connected else "disconnected",
        roles_seeded=seeded,
    )
