"""Alembic environment for Incident Desk: DATABASE_URL from settings, metadata from the ORM models."""

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

os.environ.setdefault("APP_ENV", "dev")
from incident_desk.core.config import settings

# Importing the package registers roles, users, user_roles and incidents on Base.metadata.
from incident_desk.models import Base

config = context.config
# alembic.ini ships without logging sections; fileConfig raises KeyError in that case.
if config.config_file_name is not None:
    try:
        fileConfig(config.config_file_name)
    except KeyError:
        pass

target_metadata = Base.metadata


def get_url() -> str:
    """Migrations always target the database the API is configured for."""
    return settings.DATABASE_URL


def _configure_kwargs() -> dict:
    # Catch column type and server default drift (e.g. status default 'open') in autogenerate.
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "compare_server_default": True,
    }


def run_migrations_offline() -> None:
    """Emit SQL to stdout without a database connection."""
    context.configure(
        url=get_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_kwargs(),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Connect with a throwaway engine (no pool) and apply migrations."""
    connectable = create_engine(get_url(), poolclass=NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, **_configure_kwargs())
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
