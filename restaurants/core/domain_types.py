"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - RestaurantId, DishId, UserId wrap UUIDs — never use bare UUID in domain logic
    - Role names encoded as an Enum — no raw string matching in authorization
    - CurrentUser is immutable and request-scoped (never persisted)

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum for roles: serializes to JSON and compares equal to stored role names
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

RestaurantId = NewType("RestaurantId", UUID)
DishId = NewType("DishId", UUID)
UserId = NewType("UserId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class UserRole(str, Enum):
    """Role names stored in the identity store."""
    ADMIN = "Admin"
    OWNER = "Owner"
    USER = "User"


# ─── Request-scoped identity ─────────────────────────────────────

@dataclass(frozen=True)
class CurrentUser:
    """The authenticated caller, built once per request at the boundary."""
    id: str
    email: str
    roles: frozenset[str] = field(default_factory=frozenset)

    def is_in_role(self, role: str | UserRole) -> bool:
        name = role.value if isinstance(role, UserRole) else role
        return name in self.roles


@dataclass(frozen=True)
class Address:
    """Value object embedded in Restaurant (stored as address_* columns)."""
    street: str | None = None
    city: str | None = None
    zip_code: str | None = None
    country: str | None = None
