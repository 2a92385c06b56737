"""Initial schema — restaurants, dishes, users, roles, user_roles.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
import uuid
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SEED_ROLES = ("Admin", "Owner", "User")


def upgrade() -> None:
    op.create_table(
        "restaurants",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("category", sa.String(50), nullable=True),
        sa.Column("has_delivery", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("contact_phone", sa.String(50), nullable=True),
        sa.Column("address_street", sa.String(100), nullable=True),
        sa.Column("address_city", sa.String(100), nullable=True),
        sa.Column("address_zip_code", sa.String(5), nullable=True),
        sa.Column("address_country", sa.String(100), nullable=True),
        sa.Column("version", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "dishes",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column(
            "restaurant_id", sa.Uuid,
            sa.ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("kilo_calories", sa.Float, nullable=True),
        sa.Column("version", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_dishes_restaurant_id", "dishes", ["restaurant_id"])

    op.create_table(
        "users",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("birth_date", sa.Date, nullable=True),
        sa.Column("nationality", sa.String(100), nullable=True),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    roles = op.create_table(
        "roles",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
    )

    op.create_table(
        "user_roles",
        sa.Column(
            "user_id", sa.Uuid,
            sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column(
            "role_id", sa.Uuid,
            sa.ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True,
        ),
    )

    op.bulk_insert(roles, [{"id": uuid.uuid4(), "name": name} for name in SEED_ROLES])


def downgrade() -> None:
    op.drop_table("user_roles")
    op.drop_table("roles")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    op.drop_index("ix_dishes_restaurant_id", table_name="dishes")
    op.drop_table("dishes")
    op.drop_table("restaurants")
