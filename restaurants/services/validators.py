"""Request Validators — field rules registered per request type.

Invariants:
    - Create requests require every mandatory field
    - Update requests apply a field's rules only when a value is supplied
      (None or "" mean "leave unchanged"), allowing sparse updates
    - Built once at import; VALIDATORS is read-only
    - Request types without an entry here skip validation entirely
    - Only contact email and phone accept "" as valid; an empty ZIP code is rejected
    - Prices carry at most 2 decimal places (Numeric(10, 2)), so a valid price
      never rounds down to 0.00 when stored

Design Decisions:
    - Messages name the constraint in user terms, matching the REST error details
"""

from types import MappingProxyType

from restaurants.core.validation import (
    PHONE_PATTERN,
    ZIP_CODE_PATTERN,
    Validator,
    decimal_places,
    email,
    greater_than,
    length,
    matches,
    max_length,
    not_empty,
)
from restaurants.schemas.requests import (
    AssignRole,
    CreateDish,
    CreateRestaurant,
    UnassignRole,
    UpdateCurrentUserDetails,
    UpdateDish,
    UpdateRestaurant,
)

RESTAURANT_NAME_MESSAGE = "The restaurant name must be between 3 and 100 characters long"
CATEGORY_MESSAGE = "The restaurant category must be between 3 and 50 characters long"
EMAIL_MESSAGE = "The contact email is not valid"
PHONE_MESSAGE = "The contact phone is not valid"
DISH_NAME_MESSAGE = "Name must be between 3 and 100 characters"
PRICE_MESSAGE = "Price must be greater than 0.00"
KILO_CALORIES_MESSAGE = "KiloCalories must be greater than 0"
PRICE_PRECISION_MESSAGE = "Price must have at most 2 decimal places"


address_validator = (
    Validator()
    .rule_for(
        "street",
        not_empty("The street name must be between 3 and 100 characters long"),
        length(3, 100, "The street name must be between 3 and 100 characters long"),
    )
    .rule_for(
        "city",
        not_empty("The city name must be between 3 and 100 characters long"),
        length(3, 100, "The city name must be between 3 and 100 characters long"),
    )
    .rule_for("zip_code", matches(ZIP_CODE_PATTERN, "The ZIP code is not valid"))
)


def _dish_fields(validator: Validator) -> Validator:
    return (
        validator
        .rule_for(
            "name",
            not_empty(DISH_NAME_MESSAGE), length(3, 100, DISH_NAME_MESSAGE),
        )
        .rule_for(
            "price",
            greater_than(0, PRICE_MESSAGE), decimal_places(2, PRICE_PRECISION_MESSAGE),
        )
        .rule_for("kilo_calories", greater_than(0, KILO_CALORIES_MESSAGE))
    )


new_dish_validator = _dish_fields(Validator())

create_restaurant_validator = (
    Validator()
    .rule_for(
        "name",
        not_empty(RESTAURANT_NAME_MESSAGE), length(3, 100, RESTAURANT_NAME_MESSAGE),
    )
    .rule_for("category", length(3, 50, CATEGORY_MESSAGE), when_supplied=True)
    .rule_for("contact_email", email(EMAIL_MESSAGE))
    .rule_for("contact_phone", matches(PHONE_PATTERN, PHONE_MESSAGE, allow_empty=True))
    .nested("address", address_validator)
    .each("dishes", new_dish_validator)
)

update_restaurant_validator = (
    Validator()
    .rule_for("name", length(3, 100, RESTAURANT_NAME_MESSAGE), when_supplied=True)
    .rule_for("category", length(3, 50, CATEGORY_MESSAGE), when_supplied=True)
    .rule_for("contact_email", email(EMAIL_MESSAGE), when_supplied=True)
    .rule_for(
        "contact_phone", matches(PHONE_PATTERN, PHONE_MESSAGE), when_supplied=True,
    )
)

create_dish_validator = _dish_fields(
    Validator().rule_for(
        "restaurant_id", not_empty("The restaurant ID is required"),
    ),
)

update_dish_validator = _dish_fields(
    Validator().rule_for(
        "restaurant_id", not_empty("The restaurant ID is required"),
    ),
)

role_change_validator = (
    Validator()
    .rule_for(
        "user_email",
        not_empty("The user email is required"),
        email("The user email is not valid"),
    )
    .rule_for("role_name", not_empty("The role name is required"))
)

user_details_validator = Validator().rule_for(
    "nationality",
    max_length(100, "The nationality must be at most 100 characters long"),
    when_supplied=True,
)


VALIDATORS = MappingProxyType({
    CreateRestaurant: create_restaurant_validator,
    UpdateRestaurant: update_restaurant_validator,
    CreateDish: create_dish_validator,
    UpdateDish: update_dish_validator,
    AssignRole: role_change_validator,
    UnassignRole: role_change_validator,
    UpdateCurrentUserDetails: user_details_validator,
})
