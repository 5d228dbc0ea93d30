"""Pydantic request/response schemas."""

from incident_desk.schemas.auth import (
    CurrentUser,
    LoginRequest,
    MessageResponse,
    RoleName,
    SigninResponse,
    SignupRequest,
    TokenClaims,
)
from incident_desk.schemas.health import HealthResponse
from incident_desk.schemas.incident import (
    IncidentCreate,
    IncidentFilters,
    IncidentRead,
    IncidentStats,
    IncidentUpdate,
)

__all__ = [
    "CurrentUser",
    "HealthResponse",
    "IncidentCreate",
    "IncidentFilters",
    "IncidentRead",
    "IncidentStats",
    "IncidentUpdate",
    "LoginRequest",
    "MessageResponse",
    "RoleName",
    "SigninResponse",
    "SignupRequest",
    "TokenClaims",
]
