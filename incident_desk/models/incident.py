"""ORM model for tracked incidents."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, func

from incident_desk.models.base import Base


class Incident(Base):
    """
    Incident record. Only title is required; status defaults to 'open'
    and published to False.
    """

    __tablename__ = "incidents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    published = Column(Boolean, nullable=False, default=False, index=True)
    year = Column(Integer, nullable=True, index=True)
    type = Column(String(64), nullable=True, index=True)
    status = Column(String(32), nullable=True, default="open", index=True)
    date = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
