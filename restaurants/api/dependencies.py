"""Route Dependencies — per-request wiring between FastAPI and the dispatcher.

Invariants:
    - The current user is resolved once per request and passed into HandlerContext
    - require_authenticated / require_role run before the dispatcher is reached:
      anonymous -> 401, missing role -> 403
    - unwrap() turns ValidationFailed / NotFound into RestaurantsError so the global
      handlers produce the HTTP response

Design Decisions:
    - get_current_user is async so it runs in the request task, where the
      middleware's ContextVar is visible (sync deps run in a threadpool)
"""

from typing import Any, Callable

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from restaurants.core.domain_types import CurrentUser, UserRole
from restaurants.core.errors import ForbiddenError, UnauthorizedError
from restaurants.core.outcomes import NotFound, ValidationFailed
from restaurants.infrastructure.database import get_db
from restaurants.infrastructure.dish_repository import SqlDishRepository
from restaurants.infrastructure.restaurant_repository import SqlRestaurantRepository
from restaurants.infrastructure.user_context import UserContext
from restaurants.infrastructure.user_store import SqlUserStore
from restaurants.services.handler_context import HandlerContext
from restaurants.services.request_dispatch import RequestDispatcher, dispatcher

_user_context = UserContext()


async def get_current_user() -> CurrentUser | None:
    return _user_context.get_current_user()


async def require_authenticated(
    current_user: CurrentUser | None = Depends(get_current_user),
) -> CurrentUser:
    if current_user is None:
        raise UnauthorizedError()
    return current_user


def require_role(*roles: str | UserRole) -> Callable:
    """Dependency factory: the caller must hold at least one of `roles`."""
    names = [r.value if isinstance(r, UserRole) else r for r in roles]

    async def _check(
        current_user: CurrentUser = Depends(require_authenticated),
    ) -> CurrentUser:
        if not any(current_user.is_in_role(name) for name in names):
            raise ForbiddenError(names)
        return current_user

    return _check


async def get_handler_context(
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser | None = Depends(get_current_user),
) -> HandlerContext:
    return HandlerContext(
        restaurants=SqlRestaurantRepository(db),
        dishes=SqlDishRepository(db),
        users=SqlUserStore(db),
        current_user=current_user,
    )


def get_dispatcher() -> RequestDispatcher:
    return dispatcher


def unwrap(outcome: Any) -> Any:
    """Raise the HTTP-facing error for a failure outcome, else return it unchanged."""
    if isinstance(outcome, (ValidationFailed, NotFound)):
        raise outcome.to_error()
    return outcome
