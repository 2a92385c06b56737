"""Restaurant Schemas — HTTP bodies and response DTOs for restaurants and dishes.

Invariants:
    - Responses are built from ORM rows via from_attributes (never hand-copied)
    - Bodies omit ids that come from the URL path; routes merge them into requests

Design Decisions:
    - Separate from schemas/requests.py: requests are dispatcher inputs, these are
      the REST API contract
"""

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AddressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    street: str | None = None
    city: str | None = None
    zip_code: str | None = None
    country: str | None = None


class DishResponse(BaseModel):
    """Public dish representation."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    restaurant_id: UUID
    name: str
    description: str
    price: float
    kilo_calories: float | None = None


class RestaurantResponse(BaseModel):
    """Public restaurant representation, dishes included."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str
    category: str | None = None
    has_delivery: bool
    contact_email: str | None = None
    contact_phone: str | None = None
    address: AddressResponse | None = None
    dishes: list[DishResponse] = []


class RestaurantUpdateBody(BaseModel):
    """PATCH /restaurants/{id} — every field optional, None means unchanged."""
    name: str | None = None
    description: str | None = None
    category: str | None = None
    has_delivery: bool | None = None
    contact_email: str | None = None
    contact_phone: str | None = None


class DishCreateBody(BaseModel):
    name: str
    description: str = ""
    price: Decimal
    kilo_calories: float | None = None


class DishUpdateBody(BaseModel):
    name: str
    price: Decimal
    description: str | None = None
    kilo_calories: float | None = None
