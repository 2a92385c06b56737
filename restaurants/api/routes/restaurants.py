"""Restaurant Routes — CRUD over /api/restaurants.

Invariants:
    - Each endpoint builds exactly one request object and sends it through the dispatcher
    - Create returns 201 with a Location header; update/delete return 204 or 404
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from restaurants.api.dependencies import get_dispatcher, get_handler_context, unwrap
from restaurants.schemas.requests import (
    CreateRestaurant,
    DeleteRestaurant,
    GetAllRestaurants,
    GetRestaurant,
    UpdateRestaurant,
)
from restaurants.schemas.restaurant import RestaurantResponse, RestaurantUpdateBody
from restaurants.services.handler_context import HandlerContext
from restaurants.services.request_dispatch import RequestDispatcher

router = APIRouter(prefix="/api/restaurants", tags=["restaurants"])


@router.get("", response_model=list[RestaurantResponse])
async def get_all_restaurants(
    ctx: HandlerContext = Depends(get_handler_context),
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    return await dispatcher.send(GetAllRestaurants(), ctx)


@router.get("/{restaurant_id}", response_model=RestaurantResponse)
async def get_restaurant(
    restaurant_id: UUID,
    ctx: HandlerContext = Depends(get_handler_context),
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    return unwrap(await dispatcher.send(GetRestaurant(id=restaurant_id), ctx))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    body: CreateRestaurant,
    response: Response,
    ctx: HandlerContext = Depends(get_handler_context),
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    restaurant_id = unwrap(await dispatcher.send(body, ctx))
    response.headers["Location"] = f"{router.prefix}/{restaurant_id}"
    return {"id": str(restaurant_id)}


@router.patch("/{restaurant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_restaurant(
    restaurant_id: UUID,
    body: RestaurantUpdateBody,
    ctx: HandlerContext = Depends(get_handler_context),
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    request = UpdateRestaurant(id=restaurant_id, **body.model_dump())
    unwrap(await dispatcher.send(request, ctx))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{restaurant_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_restaurant(
    restaurant_id: UUID,
    ctx: HandlerContext = Depends(get_handler_context),
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    unwrap(await dispatcher.send(DeleteRestaurant(id=restaurant_id), ctx))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
