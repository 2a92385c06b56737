"""Dish Repository — SQLAlchemy persistence for Dish rows of a Restaurant aggregate.

Invariants:
    - create() relies on the store's FK: a missing restaurant surfaces as
      InvalidReferenceError (a validation failure), never as a raw IntegrityError
    - get_by_id raises ResourceNotFoundError when absent (dish absence is always an error)
    - update/delete return False for "no such id", for a dish of another restaurant,
      and for StaleDataError — a delete of a missing id never silently succeeds
    - restaurant_id is never rewritten by update()

Design Decisions:
    - Optional restaurant_id scoping on reads/deletes: routes address dishes through
      their owning restaurant and must not reach across aggregates
"""

import logging

from sqlalchemy import inspect, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from restaurants.core.domain_types import DishId, RestaurantId
from restaurants.core.errors import InvalidReferenceError, ResourceNotFoundError
from restaurants.models.dish import Dish

logger = logging.getLogger(__name__)

MUTABLE_FIELDS = ("name", "description", "price", "kilo_calories")


class SqlDishRepository:
    """Dish gateway over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, dish: Dish) -> DishId:
        self.db.add(dish)
        try:
            await self._commit()
        except IntegrityError as e:
            # FK is the only constraint a validated dish can violate
            raise InvalidReferenceError(
                "restaurant_id", "Restaurant", str(dish.restaurant_id),
            ) from e
        logger.info(
            "Dish created",
            extra={"dish_id": str(dish.id), "restaurant_id": str(dish.restaurant_id)},
        )
        return DishId(dish.id)

    async def get_all(self, restaurant_id: RestaurantId) -> list[Dish]:
        result = await self.db.execute(
            select(Dish)
            .where(Dish.restaurant_id == restaurant_id)
            .order_by(Dish.created_at),
        )
        return list(result.scalars().all())

    async def get_by_id(
        self, dish_id: DishId, restaurant_id: RestaurantId | None = None,
    ) -> Dish:
        dish = await self._find(dish_id, restaurant_id)
        if dish is None:
            raise ResourceNotFoundError("Dish", str(dish_id))
        return dish

    async def update(self, dish: Dish) -> bool:
        if dish not in self.db:
            changes = {
                key: value for key, value in inspect(dish).dict.items()
                if key in MUTABLE_FIELDS
            }
            dish = await self._find(DishId(dish.id), RestaurantId(dish.restaurant_id))
            if dish is None:
                return False
            for key, value in changes.items():
                setattr(dish, key, value)
        try:
            await self._commit()
        except StaleDataError:
            logger.warning(
                "Dish changed or removed concurrently; update dropped",
                extra={"dish_id": str(dish.id)},
            )
            return False
        return True

    async def delete(
        self, dish_id: DishId, restaurant_id: RestaurantId | None = None,
    ) -> bool:
        dish = await self._find(dish_id, restaurant_id)
        if dish is None:
            return False
        await self.db.delete(dish)
        try:
            await self._commit()
        except StaleDataError:
            logger.warning(
                "Dish already removed concurrently",
                extra={"dish_id": str(dish_id)},
            )
            return False
        return True

    async def _find(
        self, dish_id: DishId, restaurant_id: RestaurantId | None,
    ) -> Dish | None:
        query = select(Dish).where(Dish.id == dish_id)
        if restaurant_id is not None:
            query = query.where(Dish.restaurant_id == restaurant_id)
        result = await self.db.execute(
            query.execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
