"""Credential store: user creation, lookup and role assignment."""

import logging
from collections.abc import Iterable

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from incident_desk.core.security import hash_password
from incident_desk.models import Role, User
from incident_desk.schemas.auth import DEFAULT_ROLE, ROLE_IDS, RoleName

logger = logging.getLogger(__name__)


class DuplicateUserError(Exception):
    """
    Raised when the username or email is already registered.
    field is None when only the unique constraint caught the clash.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class RolesNotSeededError(Exception):
    """Raised when a requested role row is missing (bootstrap has not run)."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def find_by_username(session: Session, username: str) -> User | None:
    """Return the user with this username, or None."""
    return session.query(User).filter(User.username == username).first()


def _check_duplicates(session: Session, username: str, email: str) -> None:
    clash = (
        session.query(User)
        .filter(or_(User.username == username, User.email == email))
        .first()
    )
    if clash is None:
        return
    if clash.username == username:
        raise DuplicateUserError("Failed! Username is already in use!", field="username")
    raise DuplicateUserError("Failed! Email is already in use!", field="email")


def create_user(session: Session, username: str, email: str, password_hash: str) -> User:
    """
    Add a user row and flush so it gets an id. Does not commit.
    Raises DuplicateUserError when username or email is taken.
    """
    _check_duplicates(session, username, email)
    user = User(username=username, email=email, password_hash=password_hash)
    session.add(user)
    session.flush()
    return user


def assign_roles(session: Session, user: User, role_names: Iterable[RoleName] | None) -> None:
    """
    Replace the user's roles. No roles requested means the default role,
    so every user ends up with at least one.
    """
    wanted = sorted({RoleName(r) for r in role_names or []}, key=lambda r: ROLE_IDS[r])
    if not wanted:
        wanted = [DEFAULT_ROLE]
    role_ids = [ROLE_IDS[r] for r in wanted]
    roles = session.query(Role).filter(Role.id.in_(role_ids)).order_by(Role.id).all()
    if len(roles) != len(role_ids):
        found = {role.id for role in roles}
        missing = [r.value for r in wanted if ROLE_IDS[r] not in found]
        raise RolesNotSeededError(f"Roles not found in database: {', '.join(missing)}")
    user.roles = roles


def register_user(
    session: Session,
    username: str,
    email: str,
    password: str,
    roles: Iterable[RoleName] | None = None,
) -> User:
    """
    Hash the password, create the user and assign roles in one transaction.
    Rolls back and re-raises on failure; a unique-constraint race surfaces as DuplicateUserError.
    """
    try:
        user = create_user(session, username, email, hash_password(password))
        assign_roles(session, user, roles)
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise DuplicateUserError("Failed! Username or email is already in use!") from e
    except Exception:
        session.rollback()
        raise
    session.refresh(user)
    logger.info(
        "Registered user id=%s username=%s roles=%s",
        user.id,
        user.username,
        [role.name for role in user.roles],
    )
    return user


def role_names_of(user: User) -> list[RoleName]:
    """Map the user's role rows onto the closed RoleName enum, skipping unknown names."""
    names: list[RoleName] = []
    for role in user.roles:
        try:
            names.append(RoleName(role.name))
        except ValueError:
            logger.warning("User id=%s has unknown role %r; ignoring", user.id, role.name)
    return names
