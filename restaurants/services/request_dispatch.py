"""Request Dispatch — explicit routing from request type to its one handler.

Invariants:
    - Every request type -> handler mapping is visible in _REGISTRATIONS, no auto-discovery
    - Exactly one handler per request type: duplicates and gaps fail while HANDLERS is
      built at import (process start), never at call time
    - HANDLERS and VALIDATORS are read-only after import; nothing mutates them per request
    - Validation runs before the handler; on failure the handler is never invoked and
      ValidationFailed is returned with every violated field
    - asyncio.CancelledError is never caught here: cancelling send() cancels the
      handler and whatever store call it is awaiting

Design Decisions:
    - Explicit tuple of pairs over decorators: adding a request requires editing this file
    - Handlers are plain functions taking (HandlerContext, request); per-request state
      lives in the context, so the table itself holds no state
"""

import logging
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Iterable, Mapping

from restaurants.core.errors import DispatcherConfigurationError
from restaurants.core.outcomes import ValidationFailed
from restaurants.core.validation import Validator
from restaurants.schemas.requests import (
    ALL_REQUEST_TYPES,
    AssignRole,
    CreateDish,
    CreateRestaurant,
    DeleteDish,
    DeleteRestaurant,
    GetAllRestaurants,
    GetDish,
    GetDishes,
    GetRestaurant,
    UnassignRole,
    UpdateCurrentUserDetails,
    UpdateDish,
    UpdateRestaurant,
)
from restaurants.services import handle_dishes, handle_restaurants, handle_users
from restaurants.services.handler_context import HandlerContext
from restaurants.services.validators import VALIDATORS

logger = logging.getLogger(__name__)

Handler = Callable[[HandlerContext, Any], Awaitable[Any]]


def build_handler_registry(
    registrations: Iterable[tuple[type, Handler]],
    expected_types: Iterable[type] = ALL_REQUEST_TYPES,
) -> Mapping[type, Handler]:
    """Build the read-only request type -> handler table, or fail loudly."""
    table: dict[type, Handler] = {}
    for request_type, handler in registrations:
        if request_type in table:
            raise DispatcherConfigurationError(
                f"More than one handler registered for {request_type.__name__}",
            )
        table[request_type] = handler
    missing = [t.__name__ for t in expected_types if t not in table]
    if missing:
        raise DispatcherConfigurationError(
            f"No handler registered for: {', '.join(missing)}",
        )
    return MappingProxyType(table)


_REGISTRATIONS: tuple[tuple[type, Handler], ...] = (
    # Restaurants
    (CreateRestaurant, handle_restaurants.create_restaurant),
    (GetAllRestaurants, handle_restaurants.get_all_restaurants),
    (GetRestaurant, handle_restaurants.get_restaurant),
    (UpdateRestaurant, handle_restaurants.update_restaurant),
    (DeleteRestaurant, handle_restaurants.delete_restaurant),

    # Dishes
    (CreateDish, handle_dishes.create_dish),
    (GetDish, handle_dishes.get_dish),
    (GetDishes, handle_dishes.get_dishes),
    (UpdateDish, handle_dishes.update_dish),
    (DeleteDish, handle_dishes.delete_dish),

    # Identity
    (AssignRole, handle_users.assign_role),
    (UnassignRole, handle_users.unassign_role),
    (UpdateCurrentUserDetails, handle_users.update_current_user_details),
)

HANDLERS = build_handler_registry(_REGISTRATIONS)


class RequestDispatcher:
    """Routes a request to its handler after running its validator."""

    def __init__(
        self,
        handlers: Mapping[type, Handler] = HANDLERS,
        validators: Mapping[type, Validator] = VALIDATORS,
    ):
        unknown = [t.__name__ for t in validators if t not in handlers]
        if unknown:
            raise DispatcherConfigurationError(
                f"Validators registered for unhandled request types: {', '.join(unknown)}",
            )
        self._handlers = handlers
        self._validators = validators

    async def send(self, request: Any, context: HandlerContext) -> Any:
        request_type = type(request)
        name = request_type.__name__
        handler = self._handlers.get(request_type)
        if handler is None:
            raise DispatcherConfigurationError(f"No handler registered for {name}")

        validator = self._validators.get(request_type)
        if validator is not None:
            errors = validator.validate(request)
            if errors:
                logger.warning(
                    f"{name} rejected with {len(errors)} validation error(s)",
                    extra={"request_type": name, "error_code": "VALIDATION_ERROR"},
                )
                return ValidationFailed(tuple(errors))

        logger.debug(f"Dispatching {name}", extra={"request_type": name})
        return await handler(context, request)


dispatcher = RequestDispatcher()
