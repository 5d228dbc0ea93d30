"""SQLAlchemy declarative Base with constraint naming shared by the models and migrations."""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Index names match op.f("ix_<table>_<column>") in the Alembic revisions.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
