"""Restaurant ORM — persists the aggregate root that owns all dishes.

Invariants:
    - id is UUID primary key, generated client-side at construction, never reassigned
    - Address is embedded as address_* columns; all-NULL columns mean "no address"
    - dishes cascade "all, delete-orphan": a Dish never outlives its Restaurant
    - version is SQLAlchemy's version_id_col: every UPDATE/DELETE is guarded by
      "WHERE version = <loaded version>" and raises StaleDataError on mismatch

Design Decisions:
    - Embedded columns over a separate addresses table: Address has no identity
      and no lifecycle of its own
    - lazy="selectin" on dishes: async sessions cannot lazy-load on attribute access
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Boolean, Integer, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from restaurants.core.domain_types import Address
from restaurants.db.base import Base


class Restaurant(Base):
    """Restaurant aggregate root — owns its Dish collection."""
    __tablename__ = "restaurants"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    has_delivery: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    contact_email: Mapped[str | None] = mapped_column(
        String(255), nullable=True,
    )
    contact_phone: Mapped[str | None] = mapped_column(
        String(50), nullable=True,
    )

    # Embedded Address
    address_street: Mapped[str | None] = mapped_column(String(100), nullable=True)
    address_city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    address_zip_code: Mapped[str | None] = mapped_column(String(5), nullable=True)
    address_country: Mapped[str | None] = mapped_column(String(100), nullable=True)

    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    dishes: Mapped[list["Dish"]] = relationship(
        "Dish", back_populates="restaurant",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="Dish.created_at", passive_deletes=True,
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def address(self) -> Address | None:
        values = (
            self.address_street, self.address_city,
            self.address_zip_code, self.address_country,
        )
        if all(v is None for v in values):
            return None
        return Address(*values)

    @address.setter
    def address(self, value: Address | None) -> None:
        value = value or Address()
        self.address_street = value.street
        self.address_city = value.city
        self.address_zip_code = value.zip_code
        self.address_country = value.country
