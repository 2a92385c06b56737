"""Handlers — restaurant/dish/identity handlers against the SQL gateways.

Tests cover:
    - Partial updates: None and "" leave fields unchanged
    - Missing ids yield NotFound, never a new row
    - CreateDish for an unknown restaurant yields ValidationFailed on restaurant_id
    - Identity handlers: role assignment and current-user details
"""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from restaurants.core.domain_types import CurrentUser
from restaurants.core.errors import RoleAssignmentError, UnauthorizedError
from restaurants.core.outcomes import Deleted, NotFound, Updated, ValidationFailed
from restaurants.schemas.requests import (
    AssignRole,
    CreateDish,
    CreateRestaurant,
    DeleteRestaurant,
    GetAllRestaurants,
    GetRestaurant,
    NewDish,
    UnassignRole,
    UpdateCurrentUserDetails,
    UpdateDish,
    UpdateRestaurant,
)
from restaurants.services import handle_dishes, handle_restaurants, handle_users


async def _create(ctx, **overrides):
    values = dict(
        name="Chipotle", description="Mexican grill", category="Mexican",
        contact_email="test@chipotle.com",
        dishes=[NewDish(name="Burrito", price=Decimal("9.50"))],
    )
    values.update(overrides)
    return await handle_restaurants.create_restaurant(ctx, CreateRestaurant(**values))


async def test_create_then_get(handler_context):
    restaurant_id = await _create(handler_context)

    result = await handle_restaurants.get_restaurant(
        handler_context, GetRestaurant(id=restaurant_id),
    )
    assert result.name == "Chipotle"
    assert [d.name for d in result.dishes] == ["Burrito"]
    assert result.dishes[0].price == 9.5


async def test_get_missing_is_not_found(handler_context):
    missing = uuid4()
    result = await handle_restaurants.get_restaurant(handler_context, GetRestaurant(id=missing))
    assert result == NotFound("Restaurant", str(missing))


async def test_update_with_empty_values_leaves_fields_unchanged(handler_context):
    restaurant_id = await _create(handler_context)

    result = await handle_restaurants.update_restaurant(
        handler_context,
        UpdateRestaurant(id=restaurant_id, name="Chipotle Grill", description="", category=None),
    )

    assert result == Updated()
    stored = await handle_restaurants.get_restaurant(
        handler_context, GetRestaurant(id=restaurant_id),
    )
    assert stored.name == "Chipotle Grill"
    assert stored.description == "Mexican grill"
    assert stored.category == "Mexican"


async def test_update_missing_restaurant_is_not_found(handler_context):
    result = await handle_restaurants.update_restaurant(
        handler_context, UpdateRestaurant(id=uuid4(), name="Ghost"),
    )
    assert isinstance(result, NotFound)
    remaining = await handle_restaurants.get_all_restaurants(
        handler_context, GetAllRestaurants(),
    )
    assert remaining == []


async def test_delete_twice(handler_context):
    restaurant_id = await _create(handler_context)
    request = DeleteRestaurant(id=restaurant_id)
    assert await handle_restaurants.delete_restaurant(handler_context, request) == Deleted()
    assert isinstance(
        await handle_restaurants.delete_restaurant(handler_context, request), NotFound,
    )


async def test_create_dish_for_unknown_restaurant(handler_context):
    result = await handle_dishes.create_dish(
        handler_context,
        CreateDish(restaurant_id=uuid4(), name="Taco", price=Decimal("3")),
    )
    assert isinstance(result, ValidationFailed)
    assert [e.field for e in result.errors] == ["restaurant_id"]


async def test_update_dish_keeps_description_when_not_supplied(handler_context):
    restaurant_id = await _create(handler_context, dishes=[])
    dish_id = await handle_dishes.create_dish(
        handler_context,
        CreateDish(
            restaurant_id=restaurant_id, name="Taco", description="Corn tortilla",
            price=Decimal("3"),
        ),
    )

    result = await handle_dishes.update_dish(
        handler_context,
        UpdateDish(id=dish_id, restaurant_id=restaurant_id, name="Taco XL", price=Decimal("4")),
    )

    assert result == Updated()
    dish = await handler_context.dishes.get_by_id(dish_id)
    assert dish.name == "Taco XL"
    assert dish.description == "Corn tortilla"


async def test_update_missing_dish_is_not_found(handler_context):
    restaurant_id = await _create(handler_context, dishes=[])
    result = await handle_dishes.update_dish(
        handler_context,
        UpdateDish(id=uuid4(), restaurant_id=restaurant_id, name="Ghost", price=Decimal("1")),
    )
    assert isinstance(result, NotFound)


# ─── Identity ───────────────────────────────────────────────────

async def test_assign_and_unassign_role(handler_context, seed_user):
    request = AssignRole(user_email="OWNER@chipotle.com", role_name="Owner")
    assert await handle_users.assign_role(handler_context, request) == Updated()
    user = await handler_context.users.find_by_id(seed_user.id)
    assert [r.name for r in user.roles] == ["Owner"]

    unassign = UnassignRole(user_email="owner@chipotle.com", role_name="Owner")
    assert await handle_users.unassign_role(handler_context, unassign) == Updated()
    assert user.roles == []


async def test_assign_role_unknown_user(handler_context):
    result = await handle_users.assign_role(
        handler_context, AssignRole(user_email="nobody@x.com", role_name="Owner"),
    )
    assert result == NotFound("User", "nobody@x.com")


async def test_assign_role_twice_fails(handler_context, seed_user):
    request = AssignRole(user_email=seed_user.email, role_name="Admin")
    await handle_users.assign_role(handler_context, request)
    with pytest.raises(RoleAssignmentError):
        await handle_users.assign_role(handler_context, request)


async def test_assign_unknown_role_fails(handler_context, seed_user):
    with pytest.raises(RoleAssignmentError):
        await handle_users.assign_role(
            handler_context, AssignRole(user_email=seed_user.email, role_name="Chef"),
        )


async def test_update_current_user_details(handler_context, seed_user):
    ctx = replace(
        handler_context,
        current_user=CurrentUser(id=str(seed_user.id), email=seed_user.email),
    )
    request = UpdateCurrentUserDetails(birth_date=date(1990, 5, 17), nationality="Polish")

    assert await handle_users.update_current_user_details(ctx, request) == Updated()

    user = await ctx.users.find_by_id(seed_user.id)
    assert user.birth_date == date(1990, 5, 17)
    assert user.nationality == "Polish"


async def test_update_current_user_details_requires_user(handler_context):
    with pytest.raises(UnauthorizedError):
        await handle_users.update_current_user_details(
            handler_context, UpdateCurrentUserDetails(nationality="Polish"),
        )


async def test_repeating_the_same_update_is_idempotent(handler_context):
    restaurant_id = await _create(handler_context)
    request = UpdateRestaurant(
        id=restaurant_id, name="Chipotle Grill", has_delivery=False,
        contact_phone="+1 555 0199",
    )

    assert await handle_restaurants.update_restaurant(handler_context, request) == Updated()
    once = await handle_restaurants.get_restaurant(
        handler_context, GetRestaurant(id=restaurant_id),
    )
    assert await handle_restaurants.update_restaurant(handler_context, request) == Updated()
    twice = await handle_restaurants.get_restaurant(
        handler_context, GetRestaurant(id=restaurant_id),
    )

    assert twice == once
    assert twice.name == "Chipotle Grill"
    assert twice.has_delivery is False
