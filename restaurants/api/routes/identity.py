"""Identity Routes — profile updates and role management over /api/identity.

Invariants:
    - PATCH /users requires an authenticated caller and edits only that caller
    - POST/DELETE /userrole require the Admin role (403 otherwise, 401 when anonymous)
"""

from fastapi import APIRouter, Depends, Response, status

from restaurants.api.dependencies import (
    get_dispatcher,
    get_handler_context,
    require_authenticated,
    require_role,
    unwrap,
)
from restaurants.core.domain_types import UserRole
from restaurants.schemas.requests import AssignRole, UnassignRole, UpdateCurrentUserDetails
from restaurants.services.handler_context import HandlerContext
from restaurants.services.request_dispatch import RequestDispatcher

router = APIRouter(prefix="/api/identity", tags=["identity"])


@router.patch(
    "/users", status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_authenticated)],
)
async def update_user_details(
    body: UpdateCurrentUserDetails,
    ctx: HandlerContext = Depends(get_handler_context),
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    unwrap(await dispatcher.send(body, ctx))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/userrole", status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_role(UserRole.ADMIN))],
)
async def assign_user_role(
    body: AssignRole,
    ctx: HandlerContext = Depends(get_handler_context),
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    unwrap(await dispatcher.send(body, ctx))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/userrole", status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_role(UserRole.ADMIN))],
)
async def unassign_user_role(
    body: UnassignRole,
    ctx: HandlerContext = Depends(get_handler_context),
    dispatcher: RequestDispatcher = Depends(get_dispatcher),
):
    unwrap(await dispatcher.send(body, ctx))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
