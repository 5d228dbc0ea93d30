"""ORM models for application users, roles and the user/role join table."""

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from incident_desk.models.base import Base

user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base):
    """
    Named permission group. Rows are fixed (user=1, moderator=2, admin=3)
    and upserted at startup by the role bootstrap.
    """

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(32), nullable=False, unique=True)


class User(Base):
    """User account for JWT authentication and role-based access control."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    roles = relationship("Role", secondary=user_roles, lazy="selectin", order_by="Role.id")
