"""Request Objects — the typed inputs routed by RequestDispatcher, one handler each.

Invariants:
    - Requests are frozen: a request never changes between validation and handling
    - Pydantic enforces only types here; field rules (length, format, > 0) live in
      services/validators.py so every violation is reported at once
    - Update requests use None to mean "not supplied"

Design Decisions:
    - Pydantic models over dataclasses: routes accept them directly as JSON bodies
      where no path parameter is involved
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class _Request(BaseModel):
    model_config = ConfigDict(frozen=True)


# --- Restaurants --------------------------------------------------------------

class AddressInput(_Request):
    """Embedded address; optional as a whole on CreateRestaurant."""
    street: str | None = None
    city: str | None = None
    zip_code: str | None = None
    country: str | None = None


class NewDish(_Request):
    """Dish created together with its restaurant."""
    name: str
    description: str = ""
    price: Decimal
    kilo_calories: float | None = None


class CreateRestaurant(_Request):
    name: str
    description: str = ""
    category: str | None = None
    has_delivery: bool = False
    contact_email: str | None = None
    contact_phone: str | None = None
    address: AddressInput | None = None
    dishes: list[NewDish] = Field(default_factory=list)


class GetRestaurant(_Request):
    id: UUID


class GetAllRestaurants(_Request):
    pass


class UpdateRestaurant(_Request):
    id: UUID
    name: str | None = None
    description: str | None = None
    category: str | None = None
    has_delivery: bool | None = None
    contact_email: str | None = None
    contact_phone: str | None = None


class DeleteRestaurant(_Request):
    id: UUID


# --- Dishes -------------------------------------------------------------------

class CreateDish(_Request):
    restaurant_id: UUID | None
    name: str
    description: str = ""
    price: Decimal
    kilo_calories: float | None = None


class GetDish(_Request):
    id: UUID
    restaurant_id: UUID | None = None


class GetDishes(_Request):
    restaurant_id: UUID


class UpdateDish(_Request):
    id: UUID
    restaurant_id: UUID | None
    name: str
    price: Decimal
    description: str | None = None
    kilo_calories: float | None = None


class DeleteDish(_Request):
    id: UUID
    restaurant_id: UUID | None = None


# --- Identity -----------------------------------------------------------------

class AssignRole(_Request):
    user_email: str
    role_name: str


class UnassignRole(_Request):
    user_email: str
    role_name: str


class UpdateCurrentUserDetails(_Request):
    birth_date: date | None = None
    nationality: str | None = None


ALL_REQUEST_TYPES: tuple[type[BaseModel], ...] = (
    CreateRestaurant, GetRestaurant, GetAllRestaurants,
    UpdateRestaurant, DeleteRestaurant,
    CreateDish, GetDish, GetDishes, UpdateDish, DeleteDish,
    AssignRole, UnassignRole, UpdateCurrentUserDetails,
)
