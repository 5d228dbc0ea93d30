"""SQLAlchemy ORM models."""

from incident_desk.models.base import Base
from incident_desk.models.incident import Incident
from incident_desk.models.user import Role, User, user_roles

__all__ = ["Base", "Incident", "Role", "User", "user_roles"]
