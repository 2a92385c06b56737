"""ORM Models — SQLAlchemy declarative models for all persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Restaurant is the aggregate root; Dish rows are scoped by restaurant_id

Design Decisions:
    - One file per aggregate for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from restaurants.models.restaurant import Restaurant  # noqa: F401
from restaurants.models.dish import Dish  # noqa: F401
from restaurants.models.user import User, Role, user_roles  # noqa: F401
