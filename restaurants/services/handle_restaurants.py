"""Restaurant Handlers — CreateRestaurant, GetAllRestaurants, GetRestaurant,
UpdateRestaurant, DeleteRestaurant.

Invariants:
    - Requests reaching these functions have already passed validation
    - Absence is returned as NotFound, never raised
    - UpdateRestaurant overwrites only supplied fields (None or "" mean unchanged)

Design Decisions:
    - Plain async functions, registered by type in request_dispatch.py
    - Handlers return response DTOs, never ORM rows: nothing lazy escapes the session
"""

import logging
from uuid import UUID

from restaurants.core.domain_types import Address, RestaurantId
from restaurants.core.outcomes import Deleted, NotFound, Updated
from restaurants.models.dish import Dish
from restaurants.models.restaurant import Restaurant
from restaurants.schemas.requests import (
    CreateRestaurant,
    DeleteRestaurant,
    GetAllRestaurants,
    GetRestaurant,
    UpdateRestaurant,
)
from restaurants.schemas.restaurant import RestaurantResponse
from restaurants.services.handler_context import HandlerContext

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "name", "description", "category", "has_delivery",
    "contact_email", "contact_phone",
)


async def create_restaurant(ctx: HandlerContext, request: CreateRestaurant) -> UUID:
    logger.info(
        f"Creating restaurant '{request.name}'",
        extra={"request_type": "CreateRestaurant"},
    )
    restaurant = Restaurant(
        name=request.name,
        description=request.description,
        category=request.category,
        has_delivery=request.has_delivery,
        contact_email=request.contact_email,
        contact_phone=request.contact_phone,
        address=Address(**request.address.model_dump()) if request.address else None,
        dishes=[
            Dish(
                name=d.name, description=d.description,
                price=d.price, kilo_calories=d.kilo_calories,
            )
            for d in request.dishes
        ],
    )
    return await ctx.restaurants.create(restaurant)


async def get_all_restaurants(
    ctx: HandlerContext, request: GetAllRestaurants,
) -> list[RestaurantResponse]:
    logger.info("Getting all restaurants")
    restaurants = await ctx.restaurants.get_all()
    return [RestaurantResponse.model_validate(r) for r in restaurants]


async def get_restaurant(
    ctx: HandlerContext, request: GetRestaurant,
) -> RestaurantResponse | NotFound:
    restaurant = await ctx.restaurants.get_by_id(RestaurantId(request.id))
    if restaurant is None:
        return NotFound("Restaurant", str(request.id))
    return RestaurantResponse.model_validate(restaurant)


async def update_restaurant(
    ctx: HandlerContext, request: UpdateRestaurant,
) -> Updated | NotFound:
    logger.info(
        "Updating restaurant",
        extra={"request_type": "UpdateRestaurant", "restaurant_id": str(request.id)},
    )
    restaurant = await ctx.restaurants.get_by_id(RestaurantId(request.id))
    if restaurant is None:
        logger.warning(
            "Restaurant not found", extra={"restaurant_id": str(request.id)},
        )
        return NotFound("Restaurant", str(request.id))

    for field in UPDATABLE_FIELDS:
        value = getattr(request, field)
        if value is not None and value != "":
            setattr(restaurant, field, value)

    if not await ctx.restaurants.update(restaurant):
        return NotFound("Restaurant", str(request.id))
    return Updated()


async def delete_restaurant(
    ctx: HandlerContext, request: DeleteRestaurant,
) -> Deleted | NotFound:
    logger.info(
        "Deleting restaurant",
        extra={"request_type": "DeleteRestaurant", "restaurant_id": str(request.id)},
    )
    if not await ctx.restaurants.delete(RestaurantId(request.id)):
        logger.warning(
            "Restaurant not found", extra={"restaurant_id": str(request.id)},
        )
        return NotFound("Restaurant", str(request.id))
    return Deleted()
