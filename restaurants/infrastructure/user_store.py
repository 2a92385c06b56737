"""User Store — SQLAlchemy identity/role store (find-by-email, add-role, remove-role).

Invariants:
    - Email lookups are case-insensitive
    - Role changes fail loudly (RoleAssignmentError) when the role does not exist,
      is already held (assign) or is not held (unassign)
    - Every mutation is a single commit; failures roll back
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from restaurants.core.domain_types import UserId
from restaurants.core.errors import RoleAssignmentError
from restaurants.models.user import Role, User

logger = logging.getLogger(__name__)


class SqlUserStore:
    """Identity store over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User)
            .where(func.lower(User.email) == email.lower())
            .options(selectinload(User.roles))
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: UserId) -> User | None:
        return await self.db.get(
            User, user_id,
            options=[selectinload(User.roles)], populate_existing=True,
        )

    async def add_to_role(self, user: User, role_name: str) -> None:
        role = await self._find_role(role_name)
        if any(r.id == role.id for r in user.roles):
            raise RoleAssignmentError(
                f"User '{user.email}' is already in role '{role_name}'",
            )
        user.roles.append(role)
        await self._commit()
        logger.info(f"Role '{role_name}' assigned to {user.email}")

    async def remove_from_role(self, user: User, role_name: str) -> None:
        role = await self._find_role(role_name)
        held = [r for r in user.roles if r.id == role.id]
        if not held:
            raise RoleAssignmentError(
                f"User '{user.email}' is not in role '{role_name}'",
            )
        user.roles.remove(held[0])
        await self._commit()
        logger.info(f"Role '{role_name}' removed from {user.email}")

    async def update(self, user: User) -> None:
        await self._commit()

    async def _find_role(self, role_name: str) -> Role:
        result = await self.db.execute(
            select(Role).where(func.lower(Role.name) == role_name.lower()),
        )
        role = result.scalar_one_or_none()
        if role is None:
            raise RoleAssignmentError(f"Role '{role_name}' does not exist")
        return role

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
