"""SQLAlchemy Repositories — record stores for boxes, assignments and transfers.

Invariants:
    - Each repository wraps one AsyncSession supplied by the caller
    - save() adds and flushes (ids are assigned) but NEVER commits
    - Listings are ordered by id so responses are stable
    - touch() forces an UPDATE that only bumps the version column: a row the
      transaction read but does not change still fails the commit if another
      request changed it meanwhile

Design Decisions:
    - Thin classes satisfying core/repository_protocols.py structurally
    - TransferRepository has no update path: the transfer log is append-only
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import flag_modified

from waterbox.core.domain_types import (
    AssignmentId, BoxId, RecordStatus, TransferId,
)
from waterbox.models.assignment import Assignment
from waterbox.models.transfer import Transfer
from waterbox.models.water_box import WaterBox


class SqlBoxRepository:
    """Box store backed by the water_boxes table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, box_id: BoxId) -> WaterBox | None:
        return await self.db.get(WaterBox, box_id)

    async def save(self, box: WaterBox) -> WaterBox:
        self.db.add(box)
        await self.db.flush()
        return box

    async def touch(self, box: WaterBox) -> WaterBox:
        flag_modified(box, "status")
        return await self.save(box)

    async def find_by_status(self, status: RecordStatus) -> Sequence[WaterBox]:
        result = await self.db.execute(
            select(WaterBox)
            .where(WaterBox.status == status.value)
            .order_by(WaterBox.id),
        )
        return result.scalars().all()

    async def find_by_current_assignment(
        self, assignment_id: AssignmentId,
    ) -> WaterBox | None:
        result = await self.db.execute(
            select(WaterBox).where(
                WaterBox.current_assignment_id == assignment_id,
            ),
        )
        return result.scalars().first()


class SqlAssignmentRepository:
    """Assignment store backed by the water_box_assignments table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, assignment_id: AssignmentId) -> Assignment | None:
        return await self.db.get(Assignment, assignment_id)

    async def save(self, assignment: Assignment) -> Assignment:
        self.db.add(assignment)
        await self.db.flush()
        return assignment

    async def touch(self, assignment: Assignment) -> Assignment:
        flag_modified(assignment, "status")
        return await self.save(assignment)

    async def find_by_status(
        self, status: RecordStatus,
    ) -> Sequence[Assignment]:
        result = await self.db.execute(
            select(Assignment)
            .where(Assignment.status == status.value)
            .order_by(Assignment.id),
        )
        return result.scalars().all()

    async def find_active_by_box(self, box_id: BoxId) -> Sequence[Assignment]:
        result = await self.db.execute(
            select(Assignment)
            .where(Assignment.water_box_id == box_id)
            .where(Assignment.status == RecordStatus.ACTIVE.value)
            .order_by(Assignment.id),
        )
        return result.scalars().all()


class SqlTransferRepository:
    """Append-only transfer log backed by the water_box_transfers table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, transfer_id: TransferId) -> Transfer | None:
        return await self.db.get(Transfer, transfer_id)

    async def save(self, transfer: Transfer) -> Transfer:
        self.db.add(transfer)
        await self.db.flush()
        return transfer

    async def find_all(self) -> Sequence[Transfer]:
        result = await self.db.execute(
            select(Transfer).order_by(Transfer.id),
        )
        return result.scalars().all()
