"""Lifecycle Helpers — shared plumbing for the box, assignment and transfer services.

Invariants:
    - reject() is the only path from a core violation dict to a raised exception
    - Every rejection is logged at WARNING with the violated rule's code

Design Decisions:
    - Extracted from the service modules so each one reads as
      load -> check -> write, with no logging boilerplate in between
"""

import logging
from typing import NoReturn

from waterbox.core.caller_context import CallerContext
from waterbox.core.errors import ErrorContext, error_from_violation

logger = logging.getLogger(__name__)


def log_extra(caller: CallerContext, **ids: int | None) -> dict:
    """Structured logging fields for one operation (None ids are dropped)."""
    extra: dict = {"caller_id": caller.id}
    extra.update({k: v for k, v in ids.items() if v is not None})
    return extra


def reject(
    violation: dict, caller: CallerContext, **ids: int | None,
) -> NoReturn:
    """Log and raise the typed error for a core rule violation."""
    context = ErrorContext(caller_id=caller.id, **ids)
    logger.warning(
        f"Rejected: {violation['message']}",
        extra={**log_extra(caller, **ids), "error_code": violation["error_code"]},
    )
    raise error_from_violation(violation, context)
