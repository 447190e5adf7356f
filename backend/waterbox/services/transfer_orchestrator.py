"""Transfer Orchestrator — the ownership handover state machine.

Invariants:
    - Preconditions run in strict order (box, old assignment, new assignment),
      existence first at each step; the first failure aborts with no writes
    - Effects run in order inside ONE transaction:
        a. insert Transfer (flush yields its id)
        b. retire old assignment: INACTIVE, end_date = now, transfer_id = a.id
        c. re-point box: current_assignment_id = new assignment id
    - Any failure after (a) rolls back (a)-(c) together; no half-applied transfer
    - Version checks on the box, the old assignment and the successor serialize
      the transfer against any concurrent write to those rows (loser gets 409)
    - Transfers are never updated or deleted once committed

Design Decisions:
    - The box is loaded inside the same transaction as the writes so the
      current-assignment guard and the re-point see the same row version
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from waterbox.core.caller_context import CallerContext
from waterbox.core.domain_types import RecordStatus, TransferId
from waterbox.core.enforce_transfer import (
    validate_new_assignment,
    validate_old_assignment,
    validate_transfer_box,
)
from waterbox.core.errors import ErrorContext, ResourceNotFoundError
from waterbox.infrastructure.database import transaction
from waterbox.infrastructure.repositories import (
    SqlAssignmentRepository, SqlBoxRepository, SqlTransferRepository,
)
from waterbox.models.transfer import Transfer
from waterbox.schemas.transfer import TransferRequest
from waterbox.services.lifecycle_helpers import log_extra, reject

logger = logging.getLogger(__name__)


class TransferOrchestrator:
    """Validates and applies water box transfers."""

    def __init__(self, db: AsyncSession, caller: CallerContext):
        self.db = db
        self.caller = caller
        self.boxes = SqlBoxRepository(db)
        self.assignments = SqlAssignmentRepository(db)
        self.transfers = SqlTransferRepository(db)

    async def list_all(self) -> list[Transfer]:
        logger.info(
            f"Caller {self.caller.username} listing transfers",
            extra=log_extra(self.caller),
        )
        return list(await self.transfers.find_all())

    async def get_by_id(self, transfer_id: TransferId) -> Transfer:
        transfer = await self.transfers.get(transfer_id)
        if transfer is None:
            raise ResourceNotFoundError(
                "WaterBoxTransfer", transfer_id,
                ErrorContext(transfer_id=transfer_id),
            )
        return transfer

    async def transfer(self, request: TransferRequest) -> Transfer:
        box_id = request.water_box_id
        ids = {"box_id": box_id}
        logger.info(
            f"Caller {self.caller.username} transferring water box {box_id} "
            f"from assignment {request.old_assignment_id} "
            f"to {request.new_assignment_id}",
            extra=log_extra(self.caller, **ids),
        )

        async with transaction(self.db):
            # 1. box
            box = await self.boxes.get(box_id)
            if box is None:
                raise ResourceNotFoundError(
                    "WaterBox", box_id, ErrorContext(box_id=box_id),
                )
            violation = validate_transfer_box(box)
            if violation:
                reject(violation, self.caller, **ids)

            # 2. old assignment
            old = await self.assignments.get(request.old_assignment_id)
            if old is None:
                raise ResourceNotFoundError(
                    "Old assignment", request.old_assignment_id,
                    ErrorContext(box_id=box_id, assignment_id=request.old_assignment_id),
                )
            violation = validate_old_assignment(box, old)
            if violation:
                reject(violation, self.caller, assignment_id=old.id, **ids)

            # 3. new assignment
            new = await self.assignments.get(request.new_assignment_id)
            if new is None:
                raise ResourceNotFoundError(
                    "New assignment", request.new_assignment_id,
                    ErrorContext(box_id=box_id, assignment_id=request.new_assignment_id),
                )
            violation = validate_new_assignment(box, old, new)
            if violation:
                reject(violation, self.caller, assignment_id=new.id, **ids)

            # a. audit record
            transfer = Transfer(
                water_box_id=box.id,
                old_assignment_id=old.id,
                new_assignment_id=new.id,
                transfer_reason=request.transfer_reason,
                documents=list(request.documents),
            )
            await self.transfers.save(transfer)

            # b. retire old
            old.status = RecordStatus.INACTIVE.value
            old.end_date = datetime.now(timezone.utc)
            old.transfer_id = transfer.id
            await self.assignments.save(old)

            # successor must still be the row validated in step 3
            await self.assignments.touch(new)

            # c. re-point box
            box.current_assignment_id = new.id
            await self.boxes.save(box)

        logger.info(
            f"Transfer {transfer.id} committed: water box {box_id} now on "
            f"assignment {new.id}",
            extra=log_extra(self.caller, transfer_id=transfer.id, **ids),
        )
        return transfer
