"""Core app configuration, database, logging and security."""

from incident_desk.core.config import get_settings, settings
from incident_desk.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
