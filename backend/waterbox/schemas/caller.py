"""Caller Schemas — the resolved identity echoed back to the caller.

Invariants:
    - roles are sorted so the response is stable regardless of header order
"""

from pydantic import BaseModel

from waterbox.core.caller_context import CallerContext
from waterbox.core.domain_types import CallerRole


class CallerResponse(BaseModel):
    """Who the gateway says is calling, and what they may do."""
    id: str
    username: str
    roles: list[str]
    is_admin: bool
    is_super_admin: bool

    @classmethod
    def from_caller(cls, caller: CallerContext) -> "CallerResponse":
        return cls(
            id=caller.id,
            username=caller.username,
            roles=sorted(caller.roles),
            is_admin=caller.has_any_role(CallerRole.ADMIN.value),
            is_super_admin=caller.has_any_role(CallerRole.SUPER_ADMIN.value),
        )
