"""Restaurant Repository — SQLAlchemy persistence for the Restaurant aggregate.

Invariants:
    - Root and owned dishes are written in a single commit (create, update, delete)
    - Reads always populate dishes eagerly (selectinload) and refresh identity-mapped rows
    - get_by_id returns None when absent (never raises for absence)
    - update/delete return False both for "no such id" and for StaleDataError
      (row changed or removed since it was loaded) — no merge, no retry
    - Any failure rolls the session back before propagating

Design Decisions:
    - Optimistic concurrency via version_id_col on the model: the store detects the
      conflict, the repository only translates it
    - update() accepts either an instance loaded in this session (changes already
      applied by the caller) or a detached/transient instance carrying an id, whose
      explicitly-set fields overwrite the stored row
"""

import logging

from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import StaleDataError

from restaurants.core.domain_types import RestaurantId
from restaurants.models.restaurant import Restaurant

logger = logging.getLogger(__name__)

# Columns a caller may overwrite; id, version and created_at are store-owned
MUTABLE_FIELDS = (
    "name", "description", "category", "has_delivery",
    "contact_email", "contact_phone",
    "address_street", "address_city", "address_zip_code", "address_country",
)


class SqlRestaurantRepository:
    """Restaurant aggregate gateway over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, restaurant: Restaurant) -> RestaurantId:
        self.db.add(restaurant)
        await self._commit()
        logger.info(
            f"Restaurant created with {len(restaurant.dishes)} dish(es)",
            extra={"restaurant_id": str(restaurant.id)},
        )
        return RestaurantId(restaurant.id)

    async def get_all(self) -> list[Restaurant]:
        result = await self.db.execute(
            select(Restaurant)
            .options(selectinload(Restaurant.dishes))
            .order_by(Restaurant.created_at)
            .execution_options(populate_existing=True),
        )
        return list(result.scalars().all())

    async def get_by_id(self, restaurant_id: RestaurantId) -> Restaurant | None:
        result = await self.db.execute(
            select(Restaurant)
            .where(Restaurant.id == restaurant_id)
            .options(selectinload(Restaurant.dishes))
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def update(self, restaurant: Restaurant) -> bool:
        if restaurant not in self.db:
            changes = {
                key: value for key, value in inspect(restaurant).dict.items()
                if key in MUTABLE_FIELDS
            }
            restaurant = await self.get_by_id(RestaurantId(restaurant.id))
            if restaurant is None:
                return False
            for key, value in changes.items():
                setattr(restaurant, key, value)
        try:
            await self._commit()
        except StaleDataError:
            logger.warning(
                "Restaurant changed or removed concurrently; update dropped",
                extra={"restaurant_id": str(restaurant.id)},
            )
            return False
        return True

    async def delete(self, restaurant_id: RestaurantId) -> bool:
        restaurant = await self.get_by_id(restaurant_id)
        if restaurant is None:
            return False
        await self.db.delete(restaurant)
        try:
            await self._commit()
        except StaleDataError:
            logger.warning(
                "Restaurant already removed concurrently",
                extra={"restaurant_id": str(restaurant_id)},
            )
            return False
        return True

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
