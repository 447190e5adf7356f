"""Assignment Routes — list, read, create, edit, deactivate, restore.

Invariants:
    - Reads require a read role; writes require a write role
    - DELETE retires the assignment (and unlinks its box) and returns 204
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from waterbox.api.dependencies import read_access, write_access
from waterbox.core.caller_context import CallerContext
from waterbox.core.domain_types import RecordStatus
from waterbox.infrastructure.database import get_db
from waterbox.schemas.assignment import AssignmentRequest, AssignmentResponse
from waterbox.services.assignment_lifecycle import AssignmentLifecycle

router = APIRouter(
    prefix="/api/v1/water-box-assignments", tags=["water-box-assignments"],
)


@router.get("/active", response_model=list[AssignmentResponse])
async def list_active_assignments(
    caller: CallerContext = Depends(read_access),
    db: AsyncSession = Depends(get_db),
):
    assignments = await AssignmentLifecycle(db, caller).list_by_status(
        RecordStatus.ACTIVE,
    )
    return [AssignmentResponse.model_validate(a) for a in assignments]


@router.get("/inactive", response_model=list[AssignmentResponse])
async def list_inactive_assignments(
    caller: CallerContext = Depends(read_access),
    db: AsyncSession = Depends(get_db),
):
    assignments = await AssignmentLifecycle(db, caller).list_by_status(
        RecordStatus.INACTIVE,
    )
    return [AssignmentResponse.model_validate(a) for a in assignments]


@router.get("/{assignment_id}", response_model=AssignmentResponse)
async def get_assignment(
    assignment_id: int,
    caller: CallerContext = Depends(read_access),
    db: AsyncSession = Depends(get_db),
):
    assignment = await AssignmentLifecycle(db, caller).get_by_id(assignment_id)
    return AssignmentResponse.model_validate(assignment)


@router.post(
    "", response_model=AssignmentResponse, status_code=status.HTTP_201_CREATED,
)
async def create_assignment(
    body: AssignmentRequest,
    caller: CallerContext = Depends(write_access),
    db: AsyncSession = Depends(get_db),
):
    """Create an ACTIVE assignment; it becomes current if the box has none."""
    assignment = await AssignmentLifecycle(db, caller).create(body)
    return AssignmentResponse.model_validate(assignment)


@router.put("/{assignment_id}", response_model=AssignmentResponse)
async def update_assignment(
    assignment_id: int,
    body: AssignmentRequest,
    caller: CallerContext = Depends(write_access),
    db: AsyncSession = Depends(get_db),
):
    assignment = await AssignmentLifecycle(db, caller).update(assignment_id, body)
    return AssignmentResponse.model_validate(assignment)


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_assignment(
    assignment_id: int,
    caller: CallerContext = Depends(write_access),
    db: AsyncSession = Depends(get_db),
):
    await AssignmentLifecycle(db, caller).deactivate(assignment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{assignment_id}/restore", response_model=AssignmentResponse)
async def restore_assignment(
    assignment_id: int,
    caller: CallerContext = Depends(write_access),
    db: AsyncSession = Depends(get_db),
):
    assignment = await AssignmentLifecycle(db, caller).reactivate(assignment_id)
    return AssignmentResponse.model_validate(assignment)
