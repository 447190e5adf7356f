"""Assignment Lifecycle — create, edit, retire and restore assignments.

Invariants:
    - Assignments are only created on, or moved to, ACTIVE boxes
    - The box pointer is claimed on create/restore only when the box has none
      (a second ACTIVE assignment waits as a transfer successor)
    - deactivate() clears the pointer of any box naming this assignment, then retires it
    - restore keeps transfer_id for audit; it only resets status and end_date
    - Every write bumps the version of each box it depends on, pointer change
      or not: a concurrent transfer or box deactivation on that box loses with 409
    - Assignment write + box writes share one transaction (all-or-nothing)

Design Decisions:
    - update() refuses to move the current assignment to another box instead of
      silently leaving the old box with a foreign pointer
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from waterbox.core.caller_context import CallerContext
from waterbox.core.domain_types import AssignmentId, RecordStatus
from waterbox.core.enforce_assignment import (
    check_assignment_creation,
    check_assignment_deactivation,
    check_assignment_move,
    check_assignment_reactivation,
    should_claim_pointer,
)
from waterbox.core.errors import ErrorContext, ResourceNotFoundError
from waterbox.infrastructure.database import transaction
from waterbox.infrastructure.repositories import (
    SqlAssignmentRepository, SqlBoxRepository,
)
from waterbox.models.assignment import Assignment
from waterbox.models.water_box import WaterBox
from waterbox.schemas.assignment import AssignmentRequest
from waterbox.services.lifecycle_helpers import log_extra, reject

logger = logging.getLogger(__name__)


class AssignmentLifecycle:
    """Assignment Lifecycle Manager."""

    def __init__(self, db: AsyncSession, caller: CallerContext):
        self.db = db
        self.caller = caller
        self.boxes = SqlBoxRepository(db)
        self.assignments = SqlAssignmentRepository(db)

    async def list_by_status(self, status: RecordStatus) -> list[Assignment]:
        logger.info(
            f"Caller {self.caller.username} listing {status.value} assignments",
            extra=log_extra(self.caller),
        )
        return list(await self.assignments.find_by_status(status))

    async def get_by_id(self, assignment_id: AssignmentId) -> Assignment:
        assignment = await self.assignments.get(assignment_id)
        if assignment is None:
            raise ResourceNotFoundError(
                "Assignment", assignment_id,
                ErrorContext(assignment_id=assignment_id),
            )
        return assignment

    async def _get_box(self, box_id: int) -> WaterBox:
        box = await self.boxes.get(box_id)
        if box is None:
            raise ResourceNotFoundError(
                "WaterBox", box_id, ErrorContext(box_id=box_id),
            )
        return box

    async def create(self, request: AssignmentRequest) -> Assignment:
        logger.info(
            f"Caller {self.caller.username} creating assignment for water box "
            f"{request.water_box_id}",
            extra=log_extra(self.caller, box_id=request.water_box_id),
        )
        async with transaction(self.db):
            box = await self._get_box(request.water_box_id)
            violation = check_assignment_creation(box)
            if violation:
                reject(violation, self.caller, box_id=box.id)

            assignment = Assignment(
                water_box_id=box.id,
                user_id=request.user_id,
                start_date=request.start_date,
                monthly_fee=request.monthly_fee,
                status=RecordStatus.ACTIVE.value,
                end_date=None,
                transfer_id=None,
            )
            await self.assignments.save(assignment)

            if should_claim_pointer(box):
                box.current_assignment_id = assignment.id
                await self.boxes.save(box)
            else:
                await self.boxes.touch(box)
                logger.info(
                    f"Water box {box.id} keeps current assignment "
                    f"{box.current_assignment_id}; {assignment.id} is a successor",
                    extra=log_extra(
                        self.caller, box_id=box.id, assignment_id=assignment.id,
                    ),
                )
        logger.info(
            f"Assignment {assignment.id} created",
            extra=log_extra(self.caller, box_id=box.id, assignment_id=assignment.id),
        )
        return assignment

    async def update(
        self, assignment_id: AssignmentId, request: AssignmentRequest,
    ) -> Assignment:
        logger.info(
            f"Caller {self.caller.username} updating assignment {assignment_id}",
            extra=log_extra(self.caller, assignment_id=assignment_id),
        )
        async with transaction(self.db):
            assignment = await self.get_by_id(assignment_id)
            target = await self._get_box(request.water_box_id)
            source = target

            if target.id != assignment.water_box_id:
                violation = check_assignment_creation(target)
                if violation:
                    reject(
                        violation, self.caller,
                        box_id=target.id, assignment_id=assignment.id,
                    )
                owning_box = await self.boxes.find_by_current_assignment(
                    assignment.id,
                )
                violation = check_assignment_move(
                    assignment, target.id, owning_box,
                )
                if violation:
                    reject(
                        violation, self.caller,
                        box_id=assignment.water_box_id, assignment_id=assignment.id,
                    )
                source = await self.boxes.get(assignment.water_box_id)

            assignment.water_box_id = target.id
            assignment.user_id = request.user_id
            assignment.start_date = request.start_date
            assignment.monthly_fee = request.monthly_fee
            await self.assignments.save(assignment)
            await self.boxes.touch(target)
            if source is not None and source is not target:
                await self.boxes.touch(source)
        return assignment

    async def deactivate(self, assignment_id: AssignmentId) -> None:
        logger.info(
            f"Caller {self.caller.username} deactivating assignment {assignment_id}",
            extra=log_extra(self.caller, assignment_id=assignment_id),
        )
        async with transaction(self.db):
            assignment = await self.get_by_id(assignment_id)
            violation = check_assignment_deactivation(assignment)
            if violation:
                reject(violation, self.caller, assignment_id=assignment_id)

            box = await self.boxes.find_by_current_assignment(assignment.id)
            if box is not None:
                box.current_assignment_id = None
                await self.boxes.save(box)
            else:
                owner = await self.boxes.get(assignment.water_box_id)
                if owner is not None:
                    await self.boxes.touch(owner)

            assignment.status = RecordStatus.INACTIVE.value
            assignment.end_date = datetime.now(timezone.utc)
            await self.assignments.save(assignment)
        logger.info(
            f"Assignment {assignment_id} deactivated",
            extra=log_extra(
                self.caller, assignment_id=assignment_id,
                box_id=box.id if box is not None else None,
            ),
        )

    async def reactivate(self, assignment_id: AssignmentId) -> Assignment:
        logger.info(
            f"Caller {self.caller.username} restoring assignment {assignment_id}",
            extra=log_extra(self.caller, assignment_id=assignment_id),
        )
        async with transaction(self.db):
            assignment = await self.get_by_id(assignment_id)
            violation = check_assignment_reactivation(assignment)
            if violation:
                reject(violation, self.caller, assignment_id=assignment_id)

            assignment.status = RecordStatus.ACTIVE.value
            assignment.end_date = None
            await self.assignments.save(assignment)

            box = await self.boxes.get(assignment.water_box_id)
            if should_claim_pointer(box):
                box.current_assignment_id = assignment.id
                await self.boxes.save(box)
            elif box is not None:
                await self.boxes.touch(box)
        return assignment
