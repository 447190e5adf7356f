"""Water Box Routes — list, read, create, edit, deactivate, restore, link status.

Invariants:
    - Reads require a read role; writes require a write role (see dependencies.py)
    - DELETE is a soft deactivation and returns 204 with no body
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from waterbox.api.dependencies import read_access, write_access
from waterbox.core.caller_context import CallerContext
from waterbox.core.domain_types import RecordStatus
from waterbox.infrastructure.database import get_db
from waterbox.schemas.water_box import (
    LinkStatusResponse, WaterBoxRequest, WaterBoxResponse,
)
from waterbox.services.box_lifecycle import BoxLifecycle
from waterbox.services.link_audit import LinkAudit

router = APIRouter(prefix="/api/v1/water-boxes", tags=["water-boxes"])


@router.get("/active", response_model=list[WaterBoxResponse])
async def list_active_boxes(
    caller: CallerContext = Depends(read_access),
    db: AsyncSession = Depends(get_db),
):
    """List ACTIVE water boxes."""
    boxes = await BoxLifecycle(db, caller).list_by_status(RecordStatus.ACTIVE)
    return [WaterBoxResponse.model_validate(b) for b in boxes]


@router.get("/inactive", response_model=list[WaterBoxResponse])
async def list_inactive_boxes(
    caller: CallerContext = Depends(read_access),
    db: AsyncSession = Depends(get_db),
):
    """List INACTIVE water boxes."""
    boxes = await BoxLifecycle(db, caller).list_by_status(RecordStatus.INACTIVE)
    return [WaterBoxResponse.model_validate(b) for b in boxes]


@router.get("/{box_id}", response_model=WaterBoxResponse)
async def get_box(
    box_id: int,
    caller: CallerContext = Depends(read_access),
    db: AsyncSession = Depends(get_db),
):
    box = await BoxLifecycle(db, caller).get_by_id(box_id)
    return WaterBoxResponse.model_validate(box)


@router.get("/{box_id}/link-status", response_model=LinkStatusResponse)
async def get_box_link_status(
    box_id: int,
    caller: CallerContext = Depends(read_access),
    db: AsyncSession = Depends(get_db),
):
    """Recompute the current assignment from stored rows (read only)."""
    return await LinkAudit(db, caller).inspect(box_id)


@router.post(
    "", response_model=WaterBoxResponse, status_code=status.HTTP_201_CREATED,
)
async def create_box(
    body: WaterBoxRequest,
    caller: CallerContext = Depends(write_access),
    db: AsyncSession = Depends(get_db),
):
    box = await BoxLifecycle(db, caller).create(body)
    return WaterBoxResponse.model_validate(box)


@router.put("/{box_id}", response_model=WaterBoxResponse)
async def update_box(
    box_id: int,
    body: WaterBoxRequest,
    caller: CallerContext = Depends(write_access),
    db: AsyncSession = Depends(get_db),
):
    box = await BoxLifecycle(db, caller).update(box_id, body)
    return WaterBoxResponse.model_validate(box)


@router.delete("/{box_id}", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_box(
    box_id: int,
    caller: CallerContext = Depends(write_access),
    db: AsyncSession = Depends(get_db),
):
    """Soft-deactivate. 409 while the box still has a current assignment."""
    await BoxLifecycle(db, caller).deactivate(box_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{box_id}/restore", response_model=WaterBoxResponse)
async def restore_box(
    box_id: int,
    caller: CallerContext = Depends(write_access),
    db: AsyncSession = Depends(get_db),
):
    box = await BoxLifecycle(db, caller).reactivate(box_id)
    return WaterBoxResponse.model_validate(box)
