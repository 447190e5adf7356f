"""Request Dependencies — caller identity and role gates for route groups.

Invariants:
    - get_caller_context() raises 401 when the gateway forwarded no subject id
    - require_roles() raises 403 when the caller holds none of the accepted roles
    - Header names come from settings, never hardcoded in routes

Design Decisions:
    - Identity arrives as gateway headers: token verification is the gateway's job,
      this service only turns the resolved claims into a CallerContext
    - Role lists resolved per request from get_settings() so tests can override them
"""

import logging
from typing import Callable

from fastapi import Depends, Request

from waterbox.config import get_settings
from waterbox.core.caller_context import CallerContext, build_caller_context
from waterbox.core.errors import (
    AuthenticationRequiredError, ErrorContext, PermissionDeniedError,
)

logger = logging.getLogger(__name__)


async def get_caller_context(request: Request) -> CallerContext:
    """Build the CallerContext from identity headers."""
    settings = get_settings()
    user_id = request.headers.get(settings.identity_user_id_header, "").strip()
    if not user_id:
        raise AuthenticationRequiredError()
    return build_caller_context(
        user_id,
        request.headers.get(settings.identity_username_header),
        request.headers.get(settings.identity_roles_header),
    )


def require_roles(group: str) -> Callable:
    """Dependency factory: 'read' or 'write' route group gate."""

    async def _check(
        caller: CallerContext = Depends(get_caller_context),
    ) -> CallerContext:
        settings = get_settings()
        accepted = settings.write_roles if group == "write" else settings.read_roles
        if not caller.has_any_role(*accepted):
            logger.warning(
                f"Caller {caller.username} denied {group} access",
                extra={"caller_id": caller.id, "error_code": "PERMISSION_DENIED"},
            )
            raise PermissionDeniedError(
                list(accepted), ErrorContext(caller_id=caller.id),
            )
        return caller

    return _check


read_access = require_roles("read")
write_access = require_roles("write")
