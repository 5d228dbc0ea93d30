"""Role bootstrap: idempotent upsert of the fixed role rows."""

import logging

from sqlalchemy.orm import Session

from incident_desk.models import Role
from incident_desk.schemas.auth import ROLE_IDS

logger = logging.getLogger(__name__)


def seed_roles(session: Session) -> list[str]:
    """
    Ensure every RoleName has its row with the fixed id. Existing rows with a
    drifted name are corrected. Returns the names of roles created or fixed.

    Idempotent: safe to run on every startup.
    """
    existing = {role.id: role for role in session.query(Role).all()}
    changed: list[str] = []
    for role_name, role_id in ROLE_IDS.items():
        row = existing.get(role_id)
        if row is None:
            session.add(Role(id=role_id, name=role_name.value))
            changed.append(role_name.value)
        elif row.name != role_name.value:
            logger.warning(
                "Role id=%s had name %r; resetting to %r",
                role_id,
                row.name,
                role_name.value,
            )
            row.name = role_name.value
            changed.append(role_name.value)
    session.commit()

    for name in changed:
        logger.info('Role "%s" created', name)
    return changed


def roles_seeded(session: Session) -> bool:
    """True when every fixed role row exists under its expected id and name."""
    rows = {role.id: role.name for role in session.query(Role).all()}
    return all(rows.get(role_id) == name.value for name, role_id in ROLE_IDS.items())
