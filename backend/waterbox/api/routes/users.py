"""Caller Identity Routes — let a client see how the gateway identified it.

Invariants:
    - Every route needs an identity (401 without one) but no particular role
    - Nothing here touches the database
"""

from fastapi import APIRouter, Depends

from waterbox.api.dependencies import get_caller_context
from waterbox.core.caller_context import CallerContext
from waterbox.core.domain_types import CallerRole
from waterbox.schemas.caller import CallerResponse

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/me", response_model=CallerResponse)
async def get_me(caller: CallerContext = Depends(get_caller_context)):
    return CallerResponse.from_caller(caller)


@router.get("/me/id", response_model=str)
async def get_my_id(caller: CallerContext = Depends(get_caller_context)):
    return caller.id


@router.get("/me/username", response_model=str)
async def get_my_username(caller: CallerContext = Depends(get_caller_context)):
    return caller.username


@router.get("/me/roles", response_model=list[str])
async def get_my_roles(caller: CallerContext = Depends(get_caller_context)):
    return sorted(caller.roles)


@router.get("/me/is-admin", response_model=bool)
async def is_admin(caller: CallerContext = Depends(get_caller_context)):
    return caller.has_any_role(CallerRole.ADMIN.value)


@router.get("/me/is-super-admin", response_model=bool)
async def is_super_admin(caller: CallerContext = Depends(get_caller_context)):
    return caller.has_any_role(CallerRole.SUPER_ADMIN.value)
