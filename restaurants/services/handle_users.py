"""Identity Handlers — AssignRole, UnassignRole, UpdateCurrentUserDetails.

Invariants:
    - Role changes address the target user by email; the Admin check happens
      before dispatch (api/dependencies.require_role)
    - UpdateCurrentUserDetails targets ctx.current_user only: no caller-supplied id,
      so a caller can never edit someone else's profile
    - Profile fields left as None are unchanged
"""

import logging
from uuid import UUID

from restaurants.core.domain_types import UserId
from restaurants.core.errors import UnauthorizedError
from restaurants.core.outcomes import NotFound, Updated
from restaurants.schemas.requests import (
    AssignRole,
    UnassignRole,
    UpdateCurrentUserDetails,
)
from restaurants.services.handler_context import HandlerContext

logger = logging.getLogger(__name__)


async def assign_role(ctx: HandlerContext, request: AssignRole) -> Updated | NotFound:
    logger.info(
        f"Assigning role '{request.role_name}' to {request.user_email}",
        extra={"request_type": "AssignRole"},
    )
    user = await ctx.users.find_by_email(request.user_email)
    if user is None:
        return NotFound("User", request.user_email)
    await ctx.users.add_to_role(user, request.role_name)
    return Updated()


async def unassign_role(ctx: HandlerContext, request: UnassignRole) -> Updated | NotFound:
    logger.info(
        f"Unassigning role '{request.role_name}' from {request.user_email}",
        extra={"request_type": "UnassignRole"},
    )
    user = await ctx.users.find_by_email(request.user_email)
    if user is None:
        return NotFound("User", request.user_email)
    await ctx.users.remove_from_role(user, request.role_name)
    return Updated()


async def update_current_user_details(
    ctx: HandlerContext, request: UpdateCurrentUserDetails,
) -> Updated | NotFound:
    current = ctx.current_user
    if current is None:
        raise UnauthorizedError()
    logger.info(
        f"Updating user details for user {current.id}",
        extra={"request_type": "UpdateCurrentUserDetails"},
    )
    try:
        user_id = UserId(UUID(current.id))
    except ValueError:
        return NotFound("User", current.id)

    user = await ctx.users.find_by_id(user_id)
    if user is None:
        return NotFound("User", current.id)

    if request.birth_date is not None:
        user.birth_date = request.birth_date
    if request.nationality:
        user.nationality = request.nationality
    await ctx.users.update(user)
    return Updated()
