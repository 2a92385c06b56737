"""Dish Routes — CRUD over /api/restaurants/{restaurant_id}/dishes.

Invariants:
    - The restaurant id always comes from the path; every dish lookup is scoped to it
    - Creating a dish for a missing restaurant returns 400 (restaurant_id field error)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from restaurants.api.dependencies import get_dispatcher, get_handler_context, unwrap
from restaurants.schemas.requests import (
    CreateDish,
    DeleteDish,
    GetDish,
    GetDishes,
    UpdateDish,
)
from restaurants.schemas.restaurant import DishCreateBody, DishResponse, DishUpdateBody
from restaurants.services.handler_context import HandlerContext
from restaurants.services.request_dispatch import RequestDispatcher

router = APIRouter(prefix="/api/restaurants/{restaurant_id}/dishes", tags=["dishes"])


@router.get("", response_model=list[DishResponse])
async def get_dishes(
    restaurant_id: UUID,
    ctx: HandlerContext = Depends(get_handler_context),
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    return await dispatcher.send(GetDishes(restaurant_id=restaurant_id), ctx)


@router.get("/{dish_id}", response_model=DishResponse)
async def get_dish(
    restaurant_id: UUID,
    dish_id: UUID,
    ctx: HandlerContext = Depends(get_handler_context),
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    request = GetDish(id=dish_id, restaurant_id=restaurant_id)
    return await dispatcher.send(request, ctx)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_dish(
    restaurant_id: UUID,
    body: DishCreateBody,
    response: Response,
    ctx: HandlerContext = Depends(get_handler_context),
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    request = CreateDish(restaurant_id=restaurant_id, **body.model_dump())
    dish_id = unwrap(await dispatcher.send(request, ctx))
    response.headers["Location"] = f"/api/restaurants/{restaurant_id}/dishes/{dish_id}"
    return {"id": str(dish_id)}


@router.patch("/{dish_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_dish(
    restaurant_id: UUID,
    dish_id: UUID,
    body: DishUpdateBody,
    ctx: HandlerContext = Depends(get_handler_context),
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    request = UpdateDish(id=dish_id, restaurant_id=restaurant_id, **body.model_dump())
    unwrap(await dispatcher.send(request, ctx))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{dish_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_dish(
    restaurant_id: UUID,
    dish_id: UUID,
    ctx: HandlerContext = Depends(get_handler_context),
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    request = DeleteDish(id=dish_id, restaurant_id=restaurant_id)
    unwrap(await dispatcher.send(request, ctx))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
