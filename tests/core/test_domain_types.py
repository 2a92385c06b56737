"""Domain Types — verifies identity wrappers, roles and CurrentUser."""

from uuid import uuid4

from restaurants.core.domain_types import (
    Address, CurrentUser, DishId, RestaurantId, UserId, UserRole,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert RestaurantId(uid) == uid
    assert DishId(uid) == uid
    assert UserId(uid) == uid


def test_user_role_values():
    assert {r.value for r in UserRole} == {"Admin", "Owner", "User"}


def test_current_user_role_membership():
    user = CurrentUser(id="1", email="a@b.com", roles=frozenset({"Admin"}))
    assert user.is_in_role(UserRole.ADMIN)
    assert user.is_in_role("Admin")
    assert not user.is_in_role(UserRole.OWNER)


def test_address_defaults_to_empty():
    assert Address() == Address(None, None, None, None)
