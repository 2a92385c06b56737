"""Handler Context — per-request collaborators handed to every request handler.

Invariants:
    - Built once per request at the HTTP boundary, never inside a handler
    - current_user is resolved before dispatch; handlers never read the ambient principal
"""

from dataclasses import dataclass

from restaurants.core.domain_types import CurrentUser
from restaurants.core.repository_protocols import (
    DishRepository,
    RestaurantRepository,
    UserStore,
)


@dataclass(frozen=True)
class HandlerContext:
    restaurants: RestaurantRepository
    dishes: DishRepository
    users: UserStore
    current_user: CurrentUser | None = None
