"""Dish Handlers — CreateDish, GetDish, GetDishes, UpdateDish, DeleteDish.

Invariants:
    - CreateDish for a missing restaurant returns ValidationFailed on restaurant_id
    - GetDish raises ResourceNotFoundError (dish absence is always an error)
    - UpdateDish overwrites name and price; description and kilo_calories only when supplied
    - UpdateDish/DeleteDish return NotFound for missing ids, never succeed silently
"""

import logging
from uuid import UUID

from restaurants.core.domain_types import DishId, RestaurantId
from restaurants.core.errors import InvalidReferenceError
from restaurants.core.outcomes import (
    Deleted,
    FieldError,
    NotFound,
    Updated,
    ValidationFailed,
)
from restaurants.models.dish import Dish
from restaurants.schemas.requests import (
    CreateDish,
    DeleteDish,
    GetDish,
    GetDishes,
    UpdateDish,
)
from restaurants.schemas.restaurant import DishResponse
from restaurants.services.handler_context import HandlerContext

logger = logging.getLogger(__name__)


async def create_dish(
    ctx: HandlerContext, request: CreateDish,
) -> UUID | ValidationFailed:
    logger.info(
        "Creating dish",
        extra={"request_type": "CreateDish", "restaurant_id": str(request.restaurant_id)},
    )
    dish = Dish(
        restaurant_id=request.restaurant_id,
        name=request.name,
        description=request.description,
        price=request.price,
        kilo_calories=request.kilo_calories,
    )
    try:
        return await ctx.dishes.create(dish)
    except InvalidReferenceError as e:
        logger.warning(e.message, extra={"error_code": e.code})
        return ValidationFailed((FieldError(e.field, e.message),))


async def get_dish(ctx: HandlerContext, request: GetDish) -> DishResponse:
    logger.info("Getting dish", extra={"dish_id": str(request.id)})
    dish = await ctx.dishes.get_by_id(
        DishId(request.id),
        RestaurantId(request.restaurant_id) if request.restaurant_id else None,
    )
    return DishResponse.model_validate(dish)


async def get_dishes(ctx: HandlerContext, request: GetDishes) -> list[DishResponse]:
    logger.info(
        "Getting dishes", extra={"restaurant_id": str(request.restaurant_id)},
    )
    dishes = await ctx.dishes.get_all(RestaurantId(request.restaurant_id))
    return [DishResponse.model_validate(d) for d in dishes]


async def update_dish(ctx: HandlerContext, request: UpdateDish) -> Updated | NotFound:
    logger.info(
        "Updating dish",
        extra={"request_type": "UpdateDish", "dish_id": str(request.id)},
    )
    changes = {"name": request.name, "price": request.price}
    if request.description:
        changes["description"] = request.description
    if request.kilo_calories is not None:
        changes["kilo_calories"] = request.kilo_calories

    # Detached carrier: the repository loads the stored row and applies these fields
    dish = Dish(id=request.id, restaurant_id=request.restaurant_id, **changes)
    if not await ctx.dishes.update(dish):
        logger.warning("Dish not found", extra={"dish_id": str(request.id)})
        return NotFound("Dish", str(request.id))
    return Updated()


async def delete_dish(ctx: HandlerContext, request: DeleteDish) -> Deleted | NotFound:
    logger.info(
        "Deleting dish",
        extra={"request_type": "DeleteDish", "dish_id": str(request.id)},
    )
    deleted = await ctx.dishes.delete(
        DishId(request.id),
        RestaurantId(request.restaurant_id) if request.restaurant_id else None,
    )
    if not deleted:
        logger.warning("Dish not found", extra={"dish_id": str(request.id)})
        return NotFound("Dish", str(request.id))
    return Deleted()
