"""Dish ORM — persists a menu item owned by exactly one Restaurant.

Invariants:
    - Always belongs to a Restaurant (restaurant_id FK, ON DELETE CASCADE)
    - restaurant_id never changes after creation (repositories never write it on update)
    - price is exact Numeric(10, 2), never float
    - version guards concurrent UPDATE/DELETE (StaleDataError on mismatch)

Design Decisions:
    - kilo_calories nullable: added after the initial menu schema, optional per dish
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import String, Text, Float, Integer, Numeric, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from restaurants.db.base import Base


class Dish(Base):
    """Dish entity — child of the Restaurant aggregate."""
    __tablename__ = "dishes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    restaurant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("restaurants.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    kilo_calories: Mapped[float | None] = mapped_column(Float, nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    restaurant: Mapped["Restaurant"] = relationship(
        "Restaurant", back_populates="dishes",
    )

    __mapper_args__ = {"version_id_col": version}
