"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - The two aggregate repositories are deliberately asymmetric:
      RestaurantRepository.get_by_id returns None when absent,
      DishRepository.get_by_id raises ResourceNotFoundError
    - update/delete return bool: False covers both "never existed" and
      "changed/removed concurrently" — callers cannot and need not tell them apart
"""

from datetime import date
from decimal import Decimal
from typing import Protocol, Sequence
from uuid import UUID

from restaurants.core.domain_types import RestaurantId, DishId, UserId


class DishLike(Protocol):
    """Structural contract for Dish entities passed through handlers."""
    id: UUID
    restaurant_id: UUID
    name: str
    description: str
    price: Decimal
    kilo_calories: float | None


class RestaurantLike(Protocol):
    """Structural contract for the Restaurant aggregate root."""
    id: UUID
    name: str
    description: str
    category: str | None
    has_delivery: bool
    contact_email: str | None
    contact_phone: str | None
    dishes: Sequence[DishLike]


class UserLike(Protocol):
    """Structural contract for identity store users."""
    id: UUID
    email: str
    birth_date: date | None
    nationality: str | None


class RestaurantRepository(Protocol):
    """Contract for Restaurant aggregate persistence — implemented by shell."""
    async def create(self, restaurant: RestaurantLike) -> RestaurantId: ...
    async def get_all(self) -> list[RestaurantLike]: ...
    async def get_by_id(self, restaurant_id: RestaurantId) -> RestaurantLike | None: ...
    async def update(self, restaurant: RestaurantLike) -> bool: ...
    async def delete(self, restaurant_id: RestaurantId) -> bool: ...


class DishRepository(Protocol):
    """Contract for Dish persistence — implemented by shell."""
    async def create(self, dish: DishLike) -> DishId: ...
    async def get_all(self, restaurant_id: RestaurantId) -> list[DishLike]: ...
    async def get_by_id(
        self, dish_id: DishId, restaurant_id: RestaurantId | None = None,
    ) -> DishLike: ...
    async def update(self, dish: DishLike) -> bool: ...
    async def delete(
        self, dish_id: DishId, restaurant_id: RestaurantId | None = None,
    ) -> bool: ...


class UserStore(Protocol):
    """Contract for the identity/role store — implemented by shell."""
    async def find_by_email(self, email: str) -> UserLike | None: ...
    async def find_by_id(self, user_id: UserId) -> UserLike | None: ...
    async def add_to_role(self, user: UserLike, role_name: str) -> None: ...
    async def remove_from_role(self, user: UserLike, role_name: str) -> None: ...
    async def update(self, user: UserLike) -> None: ...
