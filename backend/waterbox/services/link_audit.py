"""Link Audit — read path that recomputes a box's current assignment from storage.

Invariants:
    - Read only: never repairs, never commits
    - Result shape comes from core.assignment_link.audit_link()
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from waterbox.core.assignment_link import audit_link
from waterbox.core.caller_context import CallerContext
from waterbox.core.domain_types import BoxId
from waterbox.core.errors import ErrorContext, ResourceNotFoundError
from waterbox.infrastructure.repositories import (
    SqlAssignmentRepository, SqlBoxRepository,
)
from waterbox.services.lifecycle_helpers import log_extra

logger = logging.getLogger(__name__)


class LinkAudit:
    """Reports whether a box's pointer agrees with its ACTIVE assignments."""

    def __init__(self, db: AsyncSession, caller: CallerContext):
        self.db = db
        self.caller = caller
        self.boxes = SqlBoxRepository(db)
        self.assignments = SqlAssignmentRepository(db)

    async def inspect(self, box_id: BoxId) -> dict:
        box = await self.boxes.get(box_id)
        if box is None:
            raise ResourceNotFoundError(
                "WaterBox", box_id, ErrorContext(box_id=box_id),
            )
        pointed = None
        if box.current_assignment_id is not None:
            pointed = await self.assignments.get(box.current_assignment_id)
        active = list(await self.assignments.find_active_by_box(box.id))

        report = audit_link(box, pointed, active)
        if report["violations"]:
            logger.warning(
                f"Water box {box_id} link findings: {report['violations']}",
                extra=log_extra(self.caller, box_id=box_id),
            )
        return report
