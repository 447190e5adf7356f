"""Box Lifecycle — create, edit, soft-deactivate and restore water boxes.

Invariants:
    - New boxes start ACTIVE with no current assignment
    - update() never touches status or the assignment pointer
    - deactivate() is refused while the box still points at an assignment (409)
    - Every write runs inside transaction(): committed once or not at all
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from waterbox.core.caller_context import CallerContext
from waterbox.core.domain_types import BoxId, RecordStatus
from waterbox.core.enforce_box import (
    check_box_deactivation, check_box_reactivation,
)
from waterbox.core.errors import ErrorContext, ResourceNotFoundError
from waterbox.infrastructure.database import transaction
from waterbox.infrastructure.repositories import SqlBoxRepository
from waterbox.models.water_box import WaterBox
from waterbox.schemas.water_box import WaterBoxRequest
from waterbox.services.lifecycle_helpers import log_extra, reject

logger = logging.getLogger(__name__)


class BoxLifecycle:
    """Box Lifecycle Manager."""

    def __init__(self, db: AsyncSession, caller: CallerContext):
        self.db = db
        self.caller = caller
        self.boxes = SqlBoxRepository(db)

    async def list_by_status(self, status: RecordStatus) -> list[WaterBox]:
        logger.info(
            f"Caller {self.caller.username} listing {status.value} water boxes",
            extra=log_extra(self.caller),
        )
        return list(await self.boxes.find_by_status(status))

    async def get_by_id(self, box_id: BoxId) -> WaterBox:
        box = await self.boxes.get(box_id)
        if box is None:
            raise ResourceNotFoundError(
                "WaterBox", box_id, ErrorContext(box_id=box_id),
            )
        return box

    async def create(self, request: WaterBoxRequest) -> WaterBox:
        logger.info(
            f"Caller {self.caller.username} creating water box {request.box_code}",
            extra=log_extra(self.caller),
        )
        async with transaction(self.db):
            box = WaterBox(
                organization_id=request.organization_id,
                box_code=request.box_code,
                box_type=request.box_type.value,
                installation_date=request.installation_date,
                status=RecordStatus.ACTIVE.value,
                current_assignment_id=None,
            )
            await self.boxes.save(box)
        logger.info(
            f"Water box {box.box_code} created",
            extra=log_extra(self.caller, box_id=box.id),
        )
        return box

    async def update(self, box_id: BoxId, request: WaterBoxRequest) -> WaterBox:
        logger.info(
            f"Caller {self.caller.username} updating water box {box_id}",
            extra=log_extra(self.caller, box_id=box_id),
        )
        async with transaction(self.db):
            box = await self.get_by_id(box_id)
            box.organization_id = request.organization_id
            box.box_code = request.box_code
            box.box_type = request.box_type.value
            box.installation_date = request.installation_date
            await self.boxes.save(box)
        return box

    async def deactivate(self, box_id: BoxId) -> None:
        logger.info(
            f"Caller {self.caller.username} deactivating water box {box_id}",
            extra=log_extra(self.caller, box_id=box_id),
        )
        async with transaction(self.db):
            box = await self.get_by_id(box_id)
            violation = check_box_deactivation(box)
            if violation:
                reject(violation, self.caller, box_id=box_id)
            box.status = RecordStatus.INACTIVE.value
            await self.boxes.save(box)
        logger.info(
            f"Water box {box_id} deactivated",
            extra=log_extra(self.caller, box_id=box_id),
        )

    async def reactivate(self, box_id: BoxId) -> WaterBox:
        logger.info(
            f"Caller {self.caller.username} restoring water box {box_id}",
            extra=log_extra(self.caller, box_id=box_id),
        )
        async with transaction(self.db):
            box = await self.get_by_id(box_id)
            violation = check_box_reactivation(box)
            if violation:
                reject(violation, self.caller, box_id=box_id)
            box.status = RecordStatus.ACTIVE.value
            await self.boxes.save(box)
        return box
