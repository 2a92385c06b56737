"""Request Validators — per-request rules and their user-facing messages."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

from restaurants.schemas.requests import (
    AddressInput,
    AssignRole,
    CreateDish,
    CreateRestaurant,
    NewDish,
    UpdateCurrentUserDetails,
    UpdateDish,
    UpdateRestaurant,
)
from restaurants.services.validators import (
    DISH_NAME_MESSAGE,
    PRICE_MESSAGE,
    PRICE_PRECISION_MESSAGE,
    RESTAURANT_NAME_MESSAGE,
    create_dish_validator,
    create_restaurant_validator,
    role_change_validator,
    update_dish_validator,
    update_restaurant_validator,
    user_details_validator,
)


def _fields(errors):
    return {e.field: e.message for e in errors}


def test_valid_restaurant_passes():
    request = CreateRestaurant(
        name="Chipotle",
        description="Mexican grill",
        category="Mexican",
        has_delivery=True,
        contact_email="test@chipotle.com",
        contact_phone="+1 555 0100",
        address=AddressInput(street="Main Street", city="Denver", zip_code="80202"),
        dishes=[NewDish(name="Burrito", price=Decimal("9.50"), kilo_calories=900)],
    )
    assert create_restaurant_validator.validate(request) == []


def test_restaurant_name_length():
    errors = create_restaurant_validator.validate(CreateRestaurant(name="ab"))
    assert _fields(errors) == {"name": RESTAURANT_NAME_MESSAGE}


def test_restaurant_name_required():
    errors = create_restaurant_validator.validate(CreateRestaurant(name="  "))
    assert "name" in _fields(errors)


def test_restaurant_reports_every_invalid_field():
    request = CreateRestaurant(
        name="Chipotle",
        contact_email="nope",
        contact_phone="abc",
        address=AddressInput(street="Main Street", city="Denver", zip_code="1"),
        dishes=[NewDish(name="Ok dish", price=Decimal("1")), NewDish(name="x", price=Decimal("0"))],
    )
    fields = _fields(create_restaurant_validator.validate(request))
    assert set(fields) == {
        "contact_email", "contact_phone", "address.zip_code",
        "dishes[1].name", "dishes[1].price",
    }


def test_empty_email_is_allowed():
    request = CreateRestaurant(name="Chipotle", contact_email="")
    assert create_restaurant_validator.validate(request) == []


def test_update_restaurant_skips_unsupplied_fields():
    request = UpdateRestaurant(id=uuid4(), name=None, category="")
    assert update_restaurant_validator.validate(request) == []


def test_update_restaurant_checks_supplied_fields():
    request = UpdateRestaurant(id=uuid4(), name="ab", contact_email="bad")
    assert set(_fields(update_restaurant_validator.validate(request))) == {
        "name", "contact_email",
    }


def test_create_dish_empty_name_and_zero_price_reports_two_errors():
    request = CreateDish(restaurant_id=uuid4(), name="", price=Decimal("0"))
    errors = create_dish_validator.validate(request)
    assert _fields(errors) == {"name": DISH_NAME_MESSAGE, "price": PRICE_MESSAGE}


def test_create_dish_requires_restaurant_id():
    request = CreateDish(restaurant_id=None, name="Taco", price=Decimal("3"))
    assert set(_fields(create_dish_validator.validate(request))) == {"restaurant_id"}


def test_dish_kilo_calories_must_be_positive_when_given():
    ok = CreateDish(restaurant_id=uuid4(), name="Taco", price=Decimal("3"))
    bad = CreateDish(
        restaurant_id=uuid4(), name="Taco", price=Decimal("3"), kilo_calories=0,
    )
    assert create_dish_validator.validate(ok) == []
    assert set(_fields(create_dish_validator.validate(bad))) == {"kilo_calories"}


def test_update_dish_validates_name_and_price():
    request = UpdateDish(
        id=uuid4(), restaurant_id=uuid4(), name="Taco", price=Decimal("-1"),
    )
    assert set(_fields(update_dish_validator.validate(request))) == {"price"}


def test_role_change_requires_valid_email_and_role():
    errors = role_change_validator.validate(AssignRole(user_email="x", role_name=""))
    assert set(_fields(errors)) == {"user_email", "role_name"}


def test_user_details_nationality_max_length():
    ok = UpdateCurrentUserDetails(birth_date=date(1990, 1, 1), nationality="Polish")
    bad = UpdateCurrentUserDetails(nationality="x" * 101)
    assert user_details_validator.validate(ok) == []
    assert set(_fields(user_details_validator.validate(bad))) == {"nationality"}


def test_empty_zip_code_is_rejected():
    request = CreateRestaurant(
        name="Chipotle",
        address=AddressInput(street="Main St", city="Austin", zip_code="", country="US"),
    )
    assert set(_fields(create_restaurant_validator.validate(request))) == {
        "address.zip_code",
    }


def test_empty_contact_email_and_phone_are_allowed():
    request = CreateRestaurant(
        name="Chipotle",
        contact_email="",
        contact_phone="",
        address=AddressInput(street="Main St", city="Austin", zip_code="73301"),
    )
    assert create_restaurant_validator.validate(request) == []


def test_price_that_rounds_to_zero_is_rejected():
    request = CreateDish(restaurant_id=uuid4(), name="Mint", price=Decimal("0.001"))
    assert _fields(create_dish_validator.validate(request)) == {
        "price": PRICE_PRECISION_MESSAGE,
    }


def test_price_with_two_decimals_passes():
    request = CreateDish(restaurant_id=uuid4(), name="Mint", price=Decimal("0.01"))
    assert create_dish_validator.validate(request) == []
