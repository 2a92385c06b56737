"""Dish Repository — FK translation, raising reads and restaurant scoping."""

from decimal import Decimal
from uuid import uuid4

import pytest

from restaurants.core.domain_types import DishId, RestaurantId
from restaurants.core.errors import InvalidReferenceError, ResourceNotFoundError
from restaurants.infrastructure.dish_repository import SqlDishRepository
from restaurants.models.dish import Dish
from restaurants.models.restaurant import Restaurant


@pytest.fixture
def repo(test_db):
    return SqlDishRepository(test_db)


@pytest.fixture
async def restaurant(test_db):
    restaurant = Restaurant(name="Chipotle")
    test_db.add(restaurant)
    await test_db.commit()
    return restaurant


async def _add_dish(repo, restaurant_id, name="Burrito", **extra) -> DishId:
    return await repo.create(Dish(
        restaurant_id=restaurant_id, name=name, price=Decimal("9.50"), **extra,
    ))


async def test_create_and_get(repo, restaurant):
    dish_id = await _add_dish(repo, restaurant.id, description="Big one")

    dish = await repo.get_by_id(dish_id)
    assert dish.name == "Burrito"
    assert dish.description == "Big one"
    assert dish.restaurant_id == restaurant.id


async def test_create_for_missing_restaurant_is_invalid_reference(repo):
    with pytest.raises(InvalidReferenceError) as exc_info:
        await _add_dish(repo, uuid4())
    assert exc_info.value.field == "restaurant_id"


async def test_get_missing_raises(repo):
    with pytest.raises(ResourceNotFoundError):
        await repo.get_by_id(DishId(uuid4()))


async def test_get_scoped_to_other_restaurant_raises(repo, restaurant):
    dish_id = await _add_dish(repo, restaurant.id)
    with pytest.raises(ResourceNotFoundError):
        await repo.get_by_id(dish_id, RestaurantId(uuid4()))


async def test_get_all_filters_by_restaurant(repo, restaurant, test_db):
    other = Restaurant(name="Other place")
    test_db.add(other)
    await test_db.commit()
    await _add_dish(repo, restaurant.id, name="Burrito")
    await _add_dish(repo, other.id, name="Pizza")

    dishes = await repo.get_all(RestaurantId(restaurant.id))
    assert [d.name for d in dishes] == ["Burrito"]


async def test_update_detached_keeps_unset_fields(repo, restaurant):
    dish_id = await _add_dish(repo, restaurant.id, description="Original")

    changed = Dish(
        id=dish_id, restaurant_id=restaurant.id, name="Bowl", price=Decimal("11.00"),
    )
    assert await repo.update(changed) is True

    dish = await repo.get_by_id(dish_id)
    assert dish.name == "Bowl"
    assert dish.price == Decimal("11.00")
    assert dish.description == "Original"


async def test_update_missing_returns_false(repo, restaurant):
    ghost = Dish(id=uuid4(), restaurant_id=restaurant.id, name="Ghost", price=Decimal("1"))
    assert await repo.update(ghost) is False


async def test_delete(repo, restaurant):
    dish_id = await _add_dish(repo, restaurant.id)
    assert await repo.delete(dish_id, RestaurantId(restaurant.id)) is True
    with pytest.raises(ResourceNotFoundError):
        await repo.get_by_id(dish_id)


async def test_delete_missing_or_foreign_returns_false(repo, restaurant):
    dish_id = await _add_dish(repo, restaurant.id)
    assert await repo.delete(DishId(uuid4())) is False
    assert await repo.delete(dish_id, RestaurantId(uuid4())) is False


# ─── Concurrency ────────────────────────────────────────────────

async def _seed_dish(file_factory) -> tuple:
    async with file_factory() as setup:
        restaurant = Restaurant(name="Chipotle")
        setup.add(restaurant)
        await setup.commit()
        dish_id = await SqlDishRepository(setup).create(Dish(
            restaurant_id=restaurant.id, name="Burrito", price=Decimal("9.50"),
        ))
        return restaurant.id, dish_id


async def test_concurrent_update_loses_with_false(file_factory):
    restaurant_id, dish_id = await _seed_dish(file_factory)

    async with file_factory() as first, file_factory() as second:
        repo_a = SqlDishRepository(first)
        loaded_by_a = await repo_a.get_by_id(dish_id)

        changed_by_b = Dish(
            id=dish_id, restaurant_id=restaurant_id, name="Bowl", price=Decimal("11.00"),
        )
        assert await SqlDishRepository(second).update(changed_by_b) is True

        loaded_by_a.name = "Taco"
        assert await repo_a.update(loaded_by_a) is False

    async with file_factory() as check:
        assert (await SqlDishRepository(check).get_by_id(dish_id)).name == "Bowl"


async def test_delete_racing_a_concurrent_delete_returns_false(file_factory, monkeypatch):
    restaurant_id, dish_id = await _seed_dish(file_factory)

    async with file_factory() as first, file_factory() as second:
        repo_a = SqlDishRepository(first)
        loaded_by_a = await repo_a.get_by_id(dish_id, RestaurantId(restaurant_id))

        assert await SqlDishRepository(second).delete(dish_id) is True

        async def already_loaded(_dish_id, _restaurant_id):
            return loaded_by_a

        monkeypatch.setattr(repo_a, "_find", already_loaded)
        assert await repo_a.delete(dish_id, RestaurantId(restaurant_id)) is False
