"""User / Role ORM — the identity store consumed through the UserStore protocol.

Invariants:
    - email is unique; role name is unique
    - user_roles is a pure association table (no extra columns)

Design Decisions:
    - Roles as rows, not a single role column: a user can hold several roles
      (Admin and Owner at once)
"""

import uuid
from datetime import date

from sqlalchemy import Column, Date, ForeignKey, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from restaurants.db.base import Base


user_roles = Table(
    "user_roles",
    Base.metadata,
    Column(
        "user_id", Uuid,
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    ),
    Column(
        "role_id", Uuid,
        ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True,
    ),
)


class Role(Base):
    """Named role (Admin, Owner, User)."""
    __tablename__ = "roles"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)


class User(Base):
    """Identity store user — profile fields editable by the user themself."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    nationality: Mapped[str | None] = mapped_column(String(100), nullable=True)

    roles: Mapped[list[Role]] = relationship(
        Role, secondary=user_roles, lazy="selectin",
    )
